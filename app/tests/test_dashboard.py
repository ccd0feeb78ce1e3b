"""
Tests for admin and user dashboards
"""
from datetime import datetime, timezone

import pytest
from fastapi import status

from app.models import Campus, College, ReviewStatus
from app.models.audit_log import EntityType


def _at(year, month, day):
    return datetime(year, month, day, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def north(db):
    campus = Campus(name="North Campus")
    db.add(campus)
    db.commit()
    college = College(code="CEN", name="College of Engineering", campus_id=campus.id)
    db.add(college)
    db.commit()
    db.refresh(campus)
    db.refresh(college)
    return campus, college


@pytest.fixture
def dashboard_data(make_submission, make_user, user_a, north):
    _, engineering = north
    carol = make_user("carol@example.com", college_id=engineering.id, first_name="Carol", last_name="Cruz")

    approved = ReviewStatus.APPROVED
    make_submission(EntityType.TECH_TRANSFER, user_a, status=approved, created_at=_at(2026, 3, 5))
    make_submission(EntityType.AWARD, user_a, status=approved, created_at=_at(2026, 3, 20))
    make_submission(EntityType.ENGAGEMENT, carol, status=approved, created_at=_at(2026, 7, 1))
    make_submission(EntityType.TECH_TRANSFER, user_a, name="Rice Huller", created_at=_at(2026, 4, 1))
    make_submission(EntityType.AWARD, carol, status=ReviewStatus.REJECTED, created_at=_at(2026, 5, 1))
    make_submission(EntityType.AWARD, user_a, status=approved, is_archived=True, created_at=_at(2026, 3, 1))
    make_submission(EntityType.TECH_TRANSFER, user_a, status=approved, created_at=_at(2025, 11, 11))
    return carol


def test_admin_dashboard_counts_approved_for_year(client, admin_user, auth_headers, dashboard_data):
    response = client.get("/api/v1/dashboard/admin", params={"year": 2026}, headers=auth_headers(admin_user))

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["selected_year"] == 2026
    assert data["overall_stats"] == {
        "counts": {"TechTransfer": 1, "Award": 1, "Engagement": 1},
        "total": 3,
    }
    assert data["available_years"] == [2026, 2025]


def test_admin_dashboard_monthly_series(client, admin_user, auth_headers, dashboard_data):
    monthly = client.get(
        "/api/v1/dashboard/admin", params={"year": 2026}, headers=auth_headers(admin_user)
    ).json()["monthly_stats"]

    assert [m["month"] for m in monthly] == [
        "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
    ]
    assert monthly[2] == {"month": "Mar", "TechTransfer": 1, "Award": 1, "Engagement": 0}
    assert monthly[6]["Engagement"] == 1
    assert sum(m["TechTransfer"] for m in monthly) == 1


def test_admin_dashboard_campus_breakdown(client, admin_user, auth_headers, dashboard_data, north):
    north_campus, _ = north
    data = client.get(
        "/api/v1/dashboard/admin", params={"year": 2026}, headers=auth_headers(admin_user)
    ).json()

    stats = {c["name"]: c for c in data["campus_stats"]}
    assert stats["Main Campus"]["total"] == 2
    assert stats["Main Campus"]["total_colleges"] == 1
    assert stats["North Campus"]["counts"] == {"TechTransfer": 0, "Award": 0, "Engagement": 1}

    filtered = client.get(
        "/api/v1/dashboard/admin",
        params={"year": 2026, "campus_id": north_campus.id},
        headers=auth_headers(admin_user),
    ).json()
    assert filtered["overall_stats"]["total"] == 1
    assert filtered["monthly_stats"][2]["TechTransfer"] == 0


def test_admin_dashboard_other_year(client, admin_user, auth_headers, dashboard_data):
    data = client.get(
        "/api/v1/dashboard/admin", params={"year": 2025}, headers=auth_headers(admin_user)
    ).json()
    assert data["overall_stats"]["counts"]["TechTransfer"] == 1
    assert data["overall_stats"]["total"] == 1


def test_admin_dashboard_review_stats(client, admin_user, auth_headers, dashboard_data):
    review = client.get(
        "/api/v1/dashboard/admin", params={"year": 2026}, headers=auth_headers(admin_user)
    ).json()["review_stats"]

    assert review["total"] == 1
    assert review["counts"]["TechTransfer"] == 1
    assert review["counts"]["Modality"] == 0


def test_admin_dashboard_without_data_offers_current_year(client, admin_user, auth_headers):
    data = client.get("/api/v1/dashboard/admin", headers=auth_headers(admin_user)).json()

    assert data["overall_stats"]["total"] == 0
    assert data["available_years"] == [data["selected_year"]]


def test_admin_dashboard_unknown_campus(client, admin_user, auth_headers):
    response = client.get(
        "/api/v1/dashboard/admin", params={"campus_id": 999999}, headers=auth_headers(admin_user)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_admin_dashboards_are_admin_only(client, user_a, auth_headers, campus):
    assert client.get("/api/v1/dashboard/admin", headers=auth_headers(user_a)).status_code == status.HTTP_403_FORBIDDEN
    response = client.get(
        "/api/v1/dashboard/admin/colleges", params={"campus_id": campus.id}, headers=auth_headers(user_a)
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_college_dashboard(client, admin_user, auth_headers, dashboard_data, campus):
    response = client.get(
        "/api/v1/dashboard/admin/colleges",
        params={"campus_id": campus.id, "year": 2026},
        headers=auth_headers(admin_user),
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["campus_name"] == "Main Campus"
    assert [(c["code"], c["total"]) for c in data["college_stats"]] == [("CAS", 2)]


def test_college_dashboard_requires_campus(client, admin_user, auth_headers):
    response = client.get("/api/v1/dashboard/admin/colleges", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = client.get(
        "/api/v1/dashboard/admin/colleges", params={"campus_id": 999999}, headers=auth_headers(admin_user)
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_user_dashboard_shows_own_records(client, user_a, auth_headers, dashboard_data):
    data = client.get("/api/v1/dashboard/me", headers=auth_headers(user_a)).json()

    assert data["stats"]["TechTransfer"] == {"total": 3, "pending": 1, "approved": 2, "rejected": 0}
    assert data["stats"]["Award"] == {"total": 1, "pending": 0, "approved": 1, "rejected": 0}
    assert data["stats"]["Engagement"]["total"] == 0

    recent = data["recent"]
    assert [(r["type"], r["title"]) for r in recent[:2]] == [
        ("TechTransfer", "Rice Huller"),
        ("Award", "Outstanding Extension Program"),
    ]
    assert recent[0]["status"] == "pending"
    assert recent[0]["created_at"] == "2026-04-01T09:00:00Z"
    assert len(recent) == 4


def test_user_dashboard_excludes_other_users(client, user_b, auth_headers, dashboard_data):
    data = client.get("/api/v1/dashboard/me", headers=auth_headers(user_b)).json()

    assert all(s["total"] == 0 for s in data["stats"].values())
    assert data["recent"] == []
