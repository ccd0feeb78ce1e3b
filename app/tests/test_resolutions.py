"""
Tests for resolution endpoints
"""
import pytest
from fastapi import status

from app.models.audit_log import EntityType
from app.models.user import Role


@pytest.fixture
def resolution_payload():
    return {
        "resolution_number": "BOR-2025-014",
        "effectivity": "2025-01-01",
        "expiration": "2027-12-31",
        "contact_person": "Atty. Lim",
        "contact_number_email": "lim@example.com",
        "partner_agency": "Provincial Government",
    }


def test_admin_creates_and_lists(client, admin_user, auth_headers, resolution_payload, audit_entries):
    response = client.post("/api/v1/resolutions", json=resolution_payload, headers=auth_headers(admin_user))

    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["owner_id"] == admin_user.id
    assert "status" not in created

    listing = client.get("/api/v1/resolutions", headers=auth_headers(admin_user)).json()
    assert [r["id"] for r in listing] == [created["id"]]

    entries = audit_entries(EntityType.RESOLUTION, created["id"])
    assert [e.action for e in entries] == ["created"]
    assert entries[0].after_values["resolution_number"] == "BOR-2025-014"


def test_listing_is_admin_only(client, user_a, auth_headers):
    response = client.get("/api/v1/resolutions", headers=auth_headers(user_a))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_duplicate_number_rejected(client, admin_user, auth_headers, resolution_payload):
    client.post("/api/v1/resolutions", json=resolution_payload, headers=auth_headers(admin_user))

    response = client.post("/api/v1/resolutions", json=resolution_payload, headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_expiration_before_effectivity_rejected(client, admin_user, auth_headers, resolution_payload):
    payload = {**resolution_payload, "expiration": "2024-01-01"}

    response = client.post("/api/v1/resolutions", json=payload, headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_update_records_change(client, admin_user, auth_headers, resolution_payload, audit_entries):
    created = client.post("/api/v1/resolutions", json=resolution_payload, headers=auth_headers(admin_user)).json()

    response = client.put(
        f"/api/v1/resolutions/{created['id']}",
        json={"partner_agency": "City Government"},
        headers=auth_headers(admin_user),
    )

    assert response.status_code == status.HTTP_200_OK
    last = audit_entries(EntityType.RESOLUTION, created["id"])[-1]
    assert last.before_values == {"partner_agency": "Provincial Government"}
    assert last.after_values == {"partner_agency": "City Government"}


def test_archive_requires_owning_admin(
    client, make_user, admin_user, auth_headers, resolution_payload, password
):
    other_admin = make_user("second-admin@example.com", role=Role.ADMIN)
    created = client.post("/api/v1/resolutions", json=resolution_payload, headers=auth_headers(admin_user)).json()
    url = f"/api/v1/resolutions/{created['id']}/archive"

    response = client.post(url, json={"password": password}, headers=auth_headers(other_admin))
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.post(url, json={"password": password}, headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["is_archived"] is True

    listing = client.get("/api/v1/resolutions", headers=auth_headers(admin_user)).json()
    assert listing == []


def test_partial_update_checks_stored_effectivity(client, admin_user, auth_headers, resolution_payload):
    created = client.post("/api/v1/resolutions", json=resolution_payload, headers=auth_headers(admin_user)).json()

    response = client.put(
        f"/api/v1/resolutions/{created['id']}",
        json={"expiration": "2024-06-30"},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = client.put(
        f"/api/v1/resolutions/{created['id']}",
        json={"partner_agency": None},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
