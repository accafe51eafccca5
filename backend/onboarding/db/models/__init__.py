"""
Models package — re-exports Base and all models.

Import models here so `Base.metadata.create_all` picks up every table.

When adding a new model:
    1. Create `onboarding/db/models/<table_name>.py`
    2. Import it here
"""

from onboarding.db.models.base import Base
from onboarding.db.models.employee import Employee

__all__ = [
    "Base",
    "Employee",
]
