#!/usr/bin/env python3
"""
HTS Onboarding — Admin Console

Command-line admin tool for the onboarding records store: sign in with the
HR credentials, list records, view one, and save edits or custom fields.
Usage: python manage.py <command> [options]

Record output (tables, JSON) goes to stdout; progress and failures are
structlog events, rendered the same way as the API's logs.
"""

import asyncio
import getpass
import json
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

BACKEND_DIR = Path(__file__).resolve().parent / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from onboarding.core.config import settings  # noqa: E402
from onboarding.core.logging import get_logger, setup_logging  # noqa: E402
from onboarding.forms.custom_fields import parse_custom_field  # noqa: E402

logger = get_logger("manage")

CUSTOM_OPTION = "--custom="


def parse_assignments(items: List[str]) -> Dict[str, str]:
    """Turn ``key=value`` arguments into an edits dict."""
    edits: Dict[str, str] = {}
    for item in items:
        if item.startswith("--"):
            continue
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected key=value, got '{item}'")
        edits[key.strip()] = value
    return edits


def parse_custom_options(opts: List[str]) -> List[Dict[str, str]]:
    """Collect every ``--custom=category:label:value`` option, in order."""
    return [parse_custom_field(o[len(CUSTOM_OPTION):]) for o in opts if o.startswith(CUSTOM_OPTION)]


def parse_credentials(opts: List[str]) -> Tuple[Optional[str], Optional[str]]:
    username = password = None
    for o in opts:
        if o.startswith("--username="):
            username = o.split("=", 1)[1]
        elif o.startswith("--password="):
            password = o.split("=", 1)[1]
    return username, password


# ═══════════════════════════════════════════════════════════
#  Admin Console
# ═══════════════════════════════════════════════════════════

class AdminConsole:
    """Record operations for HR, gated on the fixed admin credential pair."""

    LIST_COLUMNS = (
        ("passportNo", 14),
        ("passportName", 28),
        ("profileEmail", 30),
        ("createdAt", 26),
    )

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None):
        self.username = username
        self.password = password
        self._signed_in = False

    # ─── Auth ─────────────────────────────────────────────
    def login(self) -> bool:
        from onboarding.validation.access_gate import check_admin_credentials

        username = self.username if self.username is not None else input("Username: ")
        password = self.password if self.password is not None else getpass.getpass("Password: ")
        decision = check_admin_credentials(username, password)
        if not decision.allowed:
            logger.error("Admin sign-in rejected", username=username, reason=decision.message)
            return False

        self._signed_in = True
        logger.info("Admin signed in", username=username)
        return True

    def _require_login(self) -> None:
        if not self._signed_in and not self.login():
            raise PermissionError("Admin sign-in required")

    # ─── Database ─────────────────────────────────────────
    def init_db(self) -> None:
        """Create the employees table if it is missing."""
        from onboarding.db.session import dispose_engine, init_db

        async def run() -> bool:
            try:
                return await init_db()
            finally:
                await dispose_engine()

        self._require_login()
        if asyncio.run(run()):
            logger.info("Database tables ensured")
        else:
            logger.warning("Nothing to initialise", missing=["DATABASE_URL"])

    def seed(self) -> None:
        """Run the seed script with the current interpreter."""
        self._require_login()
        logger.info("Seeding development records")
        result = subprocess.run(
            [sys.executable, "-m", "scripts.seed_employees"],
            cwd=BACKEND_DIR,
            check=True,
            text=True,
            capture_output=True,
        )
        print(result.stdout.strip())

    # ─── Records ──────────────────────────────────────────
    def _with_session(self, operation):
        """Run ``operation(session)`` in one committed unit of work."""
        from onboarding.db.session import dispose_engine, get_session_factory

        settings.require_database()

        async def run():
            try:
                async with get_session_factory()() as session:
                    result = await operation(session)
                    await session.commit()
                    return result
            finally:
                await dispose_engine()

        return asyncio.run(run())

    def list_records(self) -> int:
        """Print every record as a table, newest first; returns the count."""
        from onboarding.repositories.employees import list_employees

        self._require_login()

        async def fetch(session):
            return [employee.to_dict() for employee in await list_employees(session)]

        records = self._with_session(fetch)
        if not records:
            print("No employee records yet")
            return 0

        print("  ".join(name.ljust(width) for name, width in self.LIST_COLUMNS).rstrip())
        for record in records:
            print("  ".join(
                str(record.get(name) or "-")[:width].ljust(width)
                for name, width in self.LIST_COLUMNS
            ).rstrip())
        logger.info("Listed employee records", count=len(records))
        return len(records)

    def show(self, passport_no: str) -> bool:
        """Print one record as JSON; False when there is no such record."""
        from onboarding.repositories.employees import get_employee_by_passport_no

        self._require_login()

        async def fetch(session):
            employee = await get_employee_by_passport_no(session, passport_no)
            return employee.to_dict() if employee else None

        record = self._with_session(fetch)
        if record is None:
            logger.error("Employee not found", passport_no=passport_no)
            return False
        print(json.dumps(record, indent=2, ensure_ascii=False))
        return True

    def save(
        self,
        passport_no: str,
        edits: Dict[str, str],
        custom_fields: Optional[List[Dict[str, str]]] = None,
    ) -> bool:
        """Merge edits and append custom fields; False when there is no such record."""
        from onboarding.repositories.employees import add_custom_fields, update_employee

        custom_fields = custom_fields or []
        if not edits and not custom_fields:
            raise ValueError("Nothing to save: pass key=value pairs or --custom=category:label:value")
        self._require_login()

        async def apply(session):
            employee = None
            if edits:
                employee = await update_employee(session, passport_no, edits)
                if employee is None:
                    return False
            if custom_fields:
                employee = await add_custom_fields(session, passport_no, custom_fields)
            return employee is not None

        if not self._with_session(apply):
            logger.error("Employee not found", passport_no=passport_no)
            return False
        logger.info(
            "Employee record saved",
            passport_no=passport_no,
            fields=sorted(edits),
            custom_fields=[field["label"] for field in custom_fields],
        )
        return True

    # ─── URLs ─────────────────────────────────────────────
    def urls(self) -> None:
        """Print access URLs for the API."""
        print("Backend API:   http://localhost:8000/api/v1")
        print("Onboarding:    POST http://localhost:8000/api/v1/onboarding")
        print("Admin login:   POST http://localhost:8000/api/v1/admin/login")
        print("Swagger Docs:  http://localhost:8000/docs")
        print("Health Check:  http://localhost:8000/health")


# ═══════════════════════════════════════════════════════════
#  CLI
# ═══════════════════════════════════════════════════════════

USAGE = f"""
HTS Onboarding — Admin Console
{'═' * 50}

Usage: python manage.py <command> [options]

Commands:
    init-db                     Create missing tables
    login                       Check the admin credentials
    list                        List employee records (newest first)
    show PASSPORT               Show one record
    save PASSPORT [k=v …]       Save edits and/or custom fields
    seed                        Insert development seed records
    urls                        Show access URLs

Options:
    --username=NAME             Admin username (prompted when omitted)
    --password=PASS             Admin password (prompted when omitted)
    --custom=CATEGORY:LABEL:VALUE
                                Append a custom field (save; repeatable)

Examples:
    python manage.py list
    python manage.py show N1234567
    python manage.py save N1234567 callingName=Nimo --custom="Medical:Blood Group:O+"
"""


def main() -> None:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(USAGE)
        sys.exit(0)

    setup_logging(settings.effective_log_level)

    command = sys.argv[1]
    opts = sys.argv[2:]
    args = [o for o in opts if not o.startswith("--")]

    username, password = parse_credentials(opts)
    console = AdminConsole(username=username, password=password)

    ok = True
    try:
        if command == "login":
            ok = console.login()
        elif command == "init-db":
            console.init_db()
        elif command == "list":
            console.list_records()
        elif command == "show":
            if not args:
                raise ValueError("show needs a passport number")
            ok = console.show(args[0])
        elif command == "save":
            if not args:
                raise ValueError("save needs a passport number")
            ok = console.save(args[0], parse_assignments(args[1:]), parse_custom_options(opts))
        elif command == "seed":
            console.seed()
        elif command == "urls":
            console.urls()
        else:
            logger.error("Unknown command", command=command)
            print(USAGE)
            sys.exit(1)
    except Exception as exc:
        logger.error("Operation failed", command=command, error=str(exc))
        sys.exit(1)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
