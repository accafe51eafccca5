from __future__ import annotations

import httpx
import pytest

from onboarding.api.deps import get_db
from onboarding.core.security import create_access_token
from onboarding.forms.submission import FormSubmission
from onboarding.main import app
from onboarding.processing.normalizer import normalize_submission
from onboarding.repositories.employees import upsert_employee


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http

    app.dependency_overrides.clear()


@pytest.fixture
async def stored_employee(session_factory, valid_form, profile):
    async with session_factory() as session:
        employee = await upsert_employee(session, normalize_submission(valid_form, profile))
        await session.commit()
        return employee.passport_no


async def _auth_headers(client) -> dict[str, str]:
    response = await client.post("/api/v1/admin/login", json={"username": "htsHR", "password": "HTS"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def test_login_issues_token(client) -> None:
    response = await client.post("/api/v1/admin/login", json={"username": "htsHR", "password": "HTS"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["token_type"] == "bearer"
    assert data["expires_in"] > 0


async def test_login_rejects_wrong_credentials(client) -> None:
    response = await client.post("/api/v1/admin/login", json={"username": "htsHR", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}


async def test_employee_routes_require_token(client) -> None:
    assert (await client.get("/api/v1/admin/employees")).status_code == 401

    bad = {"Authorization": "Bearer not-a-token"}
    assert (await client.get("/api/v1/admin/employees", headers=bad)).status_code == 401

    wrong_role = {"Authorization": f"Bearer {create_access_token({'sub': 'htsHR', 'role': 'viewer'})}"}
    assert (await client.get("/api/v1/admin/employees", headers=wrong_role)).status_code == 401


async def test_list_and_get_employee(client, stored_employee) -> None:
    headers = await _auth_headers(client)

    listing = await client.get("/api/v1/admin/employees", headers=headers)
    assert listing.status_code == 200
    data = listing.json()
    assert data["total"] == 1
    assert data["data"][0]["passportNo"] == stored_employee

    detail = await client.get(f"/api/v1/admin/employees/{stored_employee}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["passportName"] == "Nimal Perera"

    missing = await client.get("/api/v1/admin/employees/UNKNOWN", headers=headers)
    assert missing.status_code == 404


async def test_save_employee_edits_and_custom_fields(client, stored_employee) -> None:
    headers = await _auth_headers(client)

    response = await client.put(
        f"/api/v1/admin/employees/{stored_employee}",
        json={"data": {"callingName": "Nimo", "Employee Code": "HTS-042"}},
        headers=headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["callingName"] == "Nimo"
    assert body["data"]["Employee Code"] == "HTS-042"

    detail = await client.get(f"/api/v1/admin/employees/{stored_employee}", headers=headers)
    assert detail.json()["Employee Code"] == "HTS-042"


async def test_save_rejects_passport_change_and_unknown_record(client, stored_employee) -> None:
    headers = await _auth_headers(client)

    changed = await client.put(
        f"/api/v1/admin/employees/{stored_employee}",
        json={"data": {"passportNo": "OTHER"}},
        headers=headers,
    )
    assert changed.status_code == 400

    missing = await client.put(
        "/api/v1/admin/employees/UNKNOWN",
        json={"data": {"callingName": "x"}},
        headers=headers,
    )
    assert missing.status_code == 404


async def test_list_total_counts_every_record_not_the_page(client, session_factory, form_payload, profile) -> None:
    async with session_factory() as session:
        for passport_no in ("N0000001", "N0000002", "N0000003"):
            form = FormSubmission.model_validate(form_payload(passportNo=passport_no))
            await upsert_employee(session, normalize_submission(form, profile))
        await session.commit()
    headers = await _auth_headers(client)

    page = await client.get("/api/v1/admin/employees", params={"limit": 1}, headers=headers)
    assert page.status_code == 200
    assert len(page.json()["data"]) == 1
    assert page.json()["total"] == 3

    everything = await client.get("/api/v1/admin/employees", headers=headers)
    assert len(everything.json()["data"]) == 3


async def test_save_custom_fields(client, stored_employee) -> None:
    headers = await _auth_headers(client)
    custom = [{"category": "Medical", "label": "Blood Group", "value": " O+ "}]

    response = await client.put(
        f"/api/v1/admin/employees/{stored_employee}",
        json={"data": {"customFields": custom}},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["customFields"] == [
        {"category": "Medical", "label": "Blood Group", "value": "O+"}
    ]


async def test_save_rejects_incomplete_custom_field(client, stored_employee) -> None:
    headers = await _auth_headers(client)

    response = await client.put(
        f"/api/v1/admin/employees/{stored_employee}",
        json={"data": {"customFields": [{"category": "Medical", "label": "Blood Group"}]}},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body."

    detail = await client.get(f"/api/v1/admin/employees/{stored_employee}", headers=headers)
    assert "customFields" not in detail.json()


async def test_missing_record_uses_error_envelope(client) -> None:
    headers = await _auth_headers(client)
    response = await client.get("/api/v1/admin/employees/UNKNOWN", headers=headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Employee not found"}
