"""
Employee model — one onboarding record per passport / national ID number.

The full camelCase document submitted through the form (plus any admin
edits and custom fields) lives in ``document``; the columns duplicate the
handful of fields the admin list needs for sorting and display.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from onboarding.db.models.base import Base, DocumentType, generate_uuid, utcnow


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=generate_uuid)
    passport_no: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True
    )

    # ── Submitter profile ─────────────────────
    profile_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    profile_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)

    # ── Display fields ────────────────────────
    passport_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    calling_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    document: Mapped[dict[str, Any]] = mapped_column(DocumentType, nullable=False, default=dict)

    # Timestamps
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    def to_dict(self) -> dict[str, Any]:
        """Document merged with identity and timestamps, as the admin API returns it."""
        data = dict(self.document or {})
        data.update(
            {
                "id": str(self.id),
                "passportNo": self.passport_no,
                "profileName": self.profile_name,
                "profileEmail": self.profile_email,
                "passportName": self.passport_name,
                "callingName": self.calling_name,
                "submittedAt": _iso(self.submitted_at),
                "createdAt": _iso(self.created_at),
                "updatedAt": _iso(self.updated_at),
            }
        )
        return data

    def __repr__(self) -> str:
        return f"<Employee {self.passport_no} name={self.passport_name!r}>"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
