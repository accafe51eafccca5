"""
Employee repository containing all data-access operations for the employees table.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.db.models.base import generate_uuid, utcnow
from onboarding.db.models.employee import Employee
from onboarding.forms.custom_fields import CUSTOM_FIELDS_KEY, normalize_custom_fields

# Keys the store manages itself; never copied from a document into edits
_MANAGED_KEYS = {"id", "_id", "createdAt", "updatedAt"}

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _columns_from_document(document: dict[str, Any]) -> dict[str, Any]:
    return {
        "profile_name": document.get("profileName") or None,
        "profile_email": document.get("profileEmail") or None,
        "passport_name": document.get("passportName") or None,
        "calling_name": document.get("callingName") or None,
    }


def _clean_document(document: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in document.items() if key not in _MANAGED_KEYS}


async def upsert_employee(db: AsyncSession, record: dict[str, Any]) -> Employee:
    """Insert or replace the record keyed by ``passportNo`` (last write wins)."""
    passport_no = str(record.get("passportNo", "")).strip()
    if not passport_no:
        raise ValueError("passportNo is required to store an employee record")

    document = _clean_document(record)
    document["passportNo"] = passport_no
    now = utcnow()
    values = {
        "passport_no": passport_no,
        "document": document,
        "updated_at": now,
        **_columns_from_document(document),
    }

    dialect = db.get_bind().dialect.name
    insert = _INSERT_BY_DIALECT.get(dialect)
    if insert is None:
        raise NotImplementedError(f"Upsert is not supported for dialect '{dialect}'")

    stmt = insert(Employee).values(
        id=generate_uuid(),
        submitted_at=now,
        created_at=now,
        **values,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Employee.passport_no],
        set_={**values, "submitted_at": now},
    )
    await db.execute(stmt)
    await db.flush()

    result = await db.execute(
        select(Employee)
        .where(Employee.passport_no == passport_no)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def get_employee_by_passport_no(db: AsyncSession, passport_no: str) -> Employee | None:
    """Fetch one employee by business key."""
    stmt = (
        select(Employee)
        .where(Employee.passport_no == passport_no.strip())
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_employees(
    db: AsyncSession,
    *,
    offset: int = 0,
    limit: int | None = None,
) -> list[Employee]:
    """List employees, newest first. No ``limit`` returns every record."""
    stmt = (
        select(Employee)
        .order_by(Employee.created_at.desc(), Employee.passport_no)
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_employees(db: AsyncSession) -> int:
    """Number of stored records, independent of any page window."""
    result = await db.execute(select(func.count()).select_from(Employee))
    return result.scalar_one()


async def update_employee(
    db: AsyncSession,
    passport_no: str,
    edits: dict[str, Any],
) -> Employee | None:
    """Merge ``edits`` into the stored document and return the updated row."""
    employee = await get_employee_by_passport_no(db, passport_no)
    if employee is None:
        return None

    changes = _clean_document(edits)
    new_key = changes.get("passportNo")
    if new_key is not None and str(new_key).strip() != employee.passport_no:
        raise ValueError("passportNo cannot be changed")
    if CUSTOM_FIELDS_KEY in changes:
        changes[CUSTOM_FIELDS_KEY] = normalize_custom_fields(changes[CUSTOM_FIELDS_KEY])

    # Assign a new dict so the JSON column is marked dirty
    document = {**(employee.document or {}), **changes}
    document["passportNo"] = employee.passport_no
    employee.document = document
    for column, value in _columns_from_document(document).items():
        setattr(employee, column, value)
    employee.updated_at = utcnow()

    await db.flush()
    return employee


async def add_custom_fields(
    db: AsyncSession,
    passport_no: str,
    fields: list[dict[str, Any]],
) -> Employee | None:
    """Append ``{category, label, value}`` entries to the record's custom fields."""
    employee = await get_employee_by_passport_no(db, passport_no)
    if employee is None:
        return None

    existing = (employee.document or {}).get(CUSTOM_FIELDS_KEY) or []
    return await update_employee(db, passport_no, {CUSTOM_FIELDS_KEY: [*existing, *fields]})
