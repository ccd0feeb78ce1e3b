"""
Tests for submission create/update/archive/delete endpoints
"""
from fastapi import status

from app.models import Award, ReviewStatus, TechTransfer
from app.models.audit_log import EntityType


def test_create_sets_owner_college_and_pending(client, user_a, college, auth_headers, tech_transfer_payload):
    response = client.post(
        "/api/v1/tech-transfers",
        json=tech_transfer_payload(status="approved"),
        headers=auth_headers(user_a),
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["owner_id"] == user_a.id
    assert data["owner"]["name"] == "Alice Owner"
    assert data["college_id"] == college.id
    assert data["status"] == "pending"
    assert data["remarks"] is None
    assert data["is_archived"] is False
    assert data["created_at"].endswith("Z")


def test_create_rejects_inverted_dates(client, user_a, auth_headers, tech_transfer_payload):
    response = client.post(
        "/api/v1/tech-transfers",
        json=tech_transfer_payload(start_date="2025-06-30", end_date="2025-01-10"),
        headers=auth_headers(user_a),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_create_requires_authentication(client, tech_transfer_payload):
    response = client.post("/api/v1/tech-transfers", json=tech_transfer_payload())
    assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


def test_engagement_round_trip(client, user_a, auth_headers):
    payload = {
        "agency_partner": "Barangay Council",
        "location": "Barangay San Jose",
        "activity_conducted": "Composting workshop",
        "start_date": "2025-02-01",
        "end_date": "2025-02-02",
        "number_of_participants": 40,
        "faculty_involved": "Prof. Cruz",
        "narrative": "Hands-on composting training",
    }
    created = client.post("/api/v1/engagements", json=payload, headers=auth_headers(user_a))
    assert created.status_code == status.HTTP_201_CREATED

    response = client.get(f"/api/v1/engagements/{created.json()['id']}", headers=auth_headers(user_a))
    assert response.json()["number_of_participants"] == 40


def test_modality_requires_visible_parent(client, user_a, user_b, auth_headers, make_submission):
    tt = make_submission(EntityType.TECH_TRANSFER, user_a)
    payload = {"tech_transfer_id": tt.id, "modality": "TV", "tv_channel": "Channel 5"}

    response = client.post("/api/v1/modalities", json=payload, headers=auth_headers(user_b))
    assert response.status_code == status.HTTP_404_NOT_FOUND

    response = client.post("/api/v1/modalities", json={**payload, "tech_transfer_id": 999999}, headers=auth_headers(user_a))
    assert response.status_code == status.HTTP_404_NOT_FOUND

    response = client.post("/api/v1/modalities", json=payload, headers=auth_headers(user_a))
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["tech_transfer_id"] == tt.id


def test_other_user_cannot_update(client, user_a, user_b, auth_headers, make_submission):
    award = make_submission(EntityType.AWARD, user_a)

    response = client.put(
        f"/api/v1/awards/{award.id}", json={"location": "Elsewhere"}, headers=auth_headers(user_b)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_rejects_unknown_fields(client, user_a, auth_headers, make_submission):
    award = make_submission(EntityType.AWARD, user_a)

    for field in ("owner_id", "is_archived", "remarks"):
        response = client.put(
            f"/api/v1/awards/{award.id}", json={field: 1}, headers=auth_headers(user_a)
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_owner_archives_with_password(client, db, user_a, auth_headers, make_submission, password):
    award = make_submission(EntityType.AWARD, user_a)

    response = client.post(
        f"/api/v1/awards/{award.id}/archive", json={"password": password}, headers=auth_headers(user_a)
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["is_archived"] is True
    db.expire_all()
    assert db.get(Award, award.id).is_archived is True


def test_archive_with_wrong_password(client, db, user_a, auth_headers, make_submission):
    award = make_submission(EntityType.AWARD, user_a)

    response = client.post(
        f"/api/v1/awards/{award.id}/archive", json={"password": "not-my-password"}, headers=auth_headers(user_a)
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Invalid password"
    db.expire_all()
    assert db.get(Award, award.id).is_archived is False


def test_archive_without_password(client, user_a, auth_headers, make_submission):
    award = make_submission(EntityType.AWARD, user_a)

    response = client.post(f"/api/v1/awards/{award.id}/archive", json={}, headers=auth_headers(user_a))
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_non_owner_cannot_archive(client, user_a, user_b, auth_headers, make_submission, password):
    award = make_submission(EntityType.AWARD, user_a)

    response = client.post(
        f"/api/v1/awards/{award.id}/archive", json={"password": password}, headers=auth_headers(user_b)
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_can_archive_any(client, admin_user, user_a, auth_headers, make_submission, password):
    award = make_submission(EntityType.AWARD, user_a)

    response = client.post(
        f"/api/v1/awards/{award.id}/archive", json={"password": password}, headers=auth_headers(admin_user)
    )
    assert response.status_code == status.HTTP_200_OK


def test_archive_twice_is_not_found(client, user_a, auth_headers, make_submission, password):
    award = make_submission(EntityType.AWARD, user_a, is_archived=True)

    response = client.post(
        f"/api/v1/awards/{award.id}/archive", json={"password": password}, headers=auth_headers(user_a)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_only_admin_can_delete(client, db, user_a, auth_headers, make_submission, password):
    tt = make_submission(EntityType.TECH_TRANSFER, user_a)

    response = client.request(
        "DELETE", f"/api/v1/tech-transfers/{tt.id}", json={"password": password}, headers=auth_headers(user_a)
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert db.get(TechTransfer, tt.id) is not None


def test_delete_missing_is_not_found(client, admin_user, auth_headers, password):
    response = client.request(
        "DELETE", "/api/v1/awards/999999", json={"password": password}, headers=auth_headers(admin_user)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_my_submissions_stats(client, user_a, auth_headers, make_submission):
    make_submission(EntityType.AWARD, user_a, status=ReviewStatus.APPROVED)
    make_submission(EntityType.AWARD, user_a, status=ReviewStatus.APPROVED)
    make_submission(EntityType.AWARD, user_a, status=ReviewStatus.REJECTED)

    data = client.get("/api/v1/awards/my", headers=auth_headers(user_a)).json()

    assert data["stats"] == {"total": 3, "pending": 0, "approved": 2, "rejected": 1}


def test_update_rejects_null_for_required_field(client, db, user_a, auth_headers, make_submission, audit_entries):
    award = make_submission(EntityType.AWARD, user_a)

    response = client.put(
        f"/api/v1/awards/{award.id}", json={"award_name": None}, headers=auth_headers(user_a)
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["category"] == "validation_error"
    db.expire_all()
    assert db.get(Award, award.id).award_name == "Outstanding Extension Program"
    assert [e.action for e in audit_entries(EntityType.AWARD, award.id)] == ["created"]


def test_update_allows_null_for_optional_field(client, user_a, auth_headers, make_submission):
    award = make_submission(EntityType.AWARD, user_a, attachment_link="https://example.com/a")

    response = client.put(
        f"/api/v1/awards/{award.id}", json={"attachment_link": None}, headers=auth_headers(user_a)
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["attachment_link"] is None


def test_unknown_college_is_not_found(client, user_a, auth_headers, make_submission, award_payload):
    response = client.post(
        "/api/v1/awards", json=award_payload(college_id=999999), headers=auth_headers(user_a)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND

    award = make_submission(EntityType.AWARD, user_a)
    response = client.put(
        f"/api/v1/awards/{award.id}", json={"college_id": 999999}, headers=auth_headers(user_a)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_partial_update_checks_stored_start_date(client, db, user_a, auth_headers, make_submission):
    tt = make_submission(EntityType.TECH_TRANSFER, user_a)

    response = client.put(
        f"/api/v1/tech-transfers/{tt.id}", json={"end_date": "1990-01-01"}, headers=auth_headers(user_a)
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == "end_date must not be before start_date"
    db.expire_all()
    assert db.get(TechTransfer, tt.id).end_date.isoformat() == "2025-06-30"

    response = client.put(
        f"/api/v1/tech-transfers/{tt.id}", json={"start_date": "2025-07-01"}, headers=auth_headers(user_a)
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = client.put(
        f"/api/v1/tech-transfers/{tt.id}", json={"end_date": "2025-12-31"}, headers=auth_headers(user_a)
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["end_date"] == "2025-12-31"
