"""Pytest configuration.

Ensures the backend package can be imported during test collection and
provides shared onboarding form fixtures.
"""

import sys
from pathlib import Path
from typing import Any

import pytest


def _prepend_sys_path(path: Path) -> None:
    resolved = str(path.resolve())
    if resolved not in sys.path:
        sys.path.insert(0, resolved)


REPO_ROOT = Path(__file__).resolve().parent

# Allow importing `onboarding` and `scripts` as top-level packages.
_prepend_sys_path(REPO_ROOT / "backend")


def valid_form_payload(**overrides: Any) -> dict[str, Any]:
    """A complete standard-variant form in wire (camelCase) shape."""
    payload: dict[str, Any] = {
        "passportName": "Nimal Perera",
        "callingName": "Nimal",
        "gender": "Male",
        "dobDay": "5",
        "dobMonth": "06",
        "dobYear": "1990",
        "nationality": "Sri Lankan",
        "religion": "Buddhist",
        "passportNo": "N1234567",
        "maritalStatus": "Single",
        "contactNumber": "+94 77 123 4567",
        "residentialAddress": "12 Galle Road\nColombo 03",
        "homeCountry": "Sri Lanka",
        "personalEmail": "nimal@example.com",
        "emergencyName": "Kamala Perera",
        "emergencyRelationship": "Sister",
        "emergencyContact": "0771234567",
        "emergencyAddress": "4 Lake Drive, Kandy",
        "birthPlace": "Kandy",
        "spouseName": "",
        "motherName": "Sita Perera",
        "fatherName": "Sunil Perera",
        "nominees": [
            {"id": "n1", "name": "Sita Perera", "passportId": "N7654321", "relationship": "Mother", "portion": "70"},
            {"id": "n2", "name": "Sunil Perera", "passportId": "N1111111", "relationship": "Father", "portion": "30"},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def form_payload():
    """Factory for complete form payloads with per-test overrides."""
    return valid_form_payload


@pytest.fixture
def valid_form():
    from onboarding.forms.submission import FormSubmission

    return FormSubmission.model_validate(valid_form_payload())


@pytest.fixture
def profile():
    from onboarding.forms.submission import SubmitterProfile

    return SubmitterProfile(name="Nimal Perera", email="nimal.perera@hts.asia")


@pytest.fixture
async def session_factory():
    """In-memory SQLite store with the employees table created."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from onboarding.db.models import Base

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
