"""
Seed sample onboarding records for development.
Run: python -m scripts.seed_employees  (from backend/)
"""

import asyncio

from onboarding.db.session import get_session_factory, init_db
from onboarding.forms.submission import FormSubmission, Nominee, SubmitterProfile
from onboarding.processing.normalizer import normalize_submission
from onboarding.repositories.employees import upsert_employee


SEED_SUBMISSIONS = [
    (
        SubmitterProfile(name="Nimal Perera", email="nimal.perera@hts.asia"),
        FormSubmission(
            passport_name="Nimal Perera",
            calling_name="Nimal",
            gender="Male",
            dob_day="5",
            dob_month="06",
            dob_year="1990",
            nationality="Sri Lankan",
            religion="Buddhist",
            passport_no="N1234567",
            marital_status="Married",
            contact_number="+94 77 123 4567",
            residential_address="12 Galle Road\nColombo 03",
            personal_email="nimal@example.com",
            emergency_name="Kamala Perera",
            emergency_relationship="Spouse",
            emergency_contact="+94 77 765 4321",
            emergency_address="12 Galle Road\nColombo 03",
            birth_place="Kandy",
            spouse_name="Kamala Perera",
            mother_name="Sita Perera",
            father_name="Sunil Perera",
            nominees=[
                Nominee(name="Kamala Perera", passport_id="N7654321", relationship="Spouse", portion="70"),
                Nominee(name="Sita Perera", passport_id="N1111111", relationship="Mother", portion="30"),
            ],
        ),
    ),
    (
        SubmitterProfile(name="Ayesha Khan", email="ayesha.khan@hts.asia"),
        FormSubmission(
            passport_name="Ayesha Khan",
            calling_name="Ayesha",
            gender="Female",
            dob_day="29",
            dob_month="02",
            dob_year="1992",
            nationality="Pakistani",
            religion="Islam",
            passport_no="P9876543",
            marital_status="Single",
            contact_number="+92 300 1234567",
            residential_address="Flat 4, Union Place, Colombo 02",
            personal_email="ayesha@example.com",
            emergency_name="Imran Khan",
            emergency_relationship="Brother",
            emergency_contact="+92 300 7654321",
            emergency_address="House 7, Gulberg, Lahore",
            birth_place="Lahore",
            mother_name="Fatima Khan",
            father_name="Tariq Khan",
            nominees=[
                Nominee(name="Fatima Khan", passport_id="P2222222", relationship="Mother", portion="100"),
            ],
        ),
    ),
]


async def seed():
    """Upsert the sample records."""
    if not await init_db():
        print("DATABASE_URL is not set; nothing seeded.")
        return

    factory = get_session_factory()
    async with factory() as session:
        for profile, form in SEED_SUBMISSIONS:
            employee = await upsert_employee(session, normalize_submission(form, profile))
            print(f"  Stored employee: {employee.passport_no} ({employee.passport_name})")
        await session.commit()
    print(f"Seeded {len(SEED_SUBMISSIONS)} employees.")


if __name__ == "__main__":
    asyncio.run(seed())
