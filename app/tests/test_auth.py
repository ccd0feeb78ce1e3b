"""
Tests for authentication endpoints and their audit events
"""
from fastapi import status

from app.core.security import verify_password
from app.models.audit_log import EntityType


def _login(client, email, password):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


def test_login_returns_token_and_records_event(client, user_a, password, audit_entries):
    response = _login(client, "  Alice@Example.com ", password)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["email"] == "alice@example.com"
    assert "password_hash" not in data["user"]

    login = audit_entries(EntityType.USER, user_a.id)[-1]
    assert login.action == "login"
    assert login.actor_id == user_a.id
    assert login.after_values == {"email": "alice@example.com"}
    assert login.origin_address == "testclient"


def test_token_authenticates_requests(client, user_a, password):
    token = _login(client, user_a.email, password).json()["access_token"]

    response = client.get("/api/v1/auth/user", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == user_a.id


def test_login_wrong_password(client, user_a, audit_entries):
    response = _login(client, user_a.email, "wrong-password")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert [e.action for e in audit_entries(EntityType.USER, user_a.id)] == ["created"]


def test_login_unknown_email(client):
    response = _login(client, "nobody@example.com", "whatever-pass")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_inactive_user(client, make_user, password):
    make_user("idle@example.com", is_active=False)

    response = _login(client, "idle@example.com", password)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_inactive_user_token_rejected(client, make_user, auth_headers):
    idle = make_user("idle@example.com", is_active=False)

    response = client.get("/api/v1/auth/user", headers=auth_headers(idle))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_invalid_token_rejected(client):
    response = client.get("/api/v1/auth/user", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_logout_records_event(client, user_a, auth_headers, audit_entries):
    response = client.post("/api/v1/auth/logout", headers=auth_headers(user_a))

    assert response.status_code == status.HTTP_200_OK
    logout = audit_entries(EntityType.USER, user_a.id)[-1]
    assert logout.action == "logout"
    assert logout.actor_id == user_a.id
    assert logout.before_values == {}
    assert logout.after_values == {}


def test_password_change_records_single_event(client, db, user_a, auth_headers, audit_entries, password):
    response = client.put(
        "/api/v1/auth/password",
        json={
            "current_password": password,
            "password": "N3w-Passw0rd!",
            "password_confirmation": "N3w-Passw0rd!",
        },
        headers=auth_headers(user_a),
    )

    assert response.status_code == status.HTTP_200_OK
    entries = audit_entries(EntityType.USER, user_a.id)
    assert [e.action for e in entries] == ["created", "update_password"]
    assert entries[-1].after_values == {"password_changed": True}
    assert "N3w-Passw0rd!" not in str(entries[-1].after_values)
    db.refresh(user_a)
    assert verify_password("N3w-Passw0rd!", user_a.password_hash)


def test_password_change_wrong_current(client, user_a, auth_headers):
    response = client.put(
        "/api/v1/auth/password",
        json={
            "current_password": "not-it-at-all",
            "password": "N3w-Passw0rd!",
            "password_confirmation": "N3w-Passw0rd!",
        },
        headers=auth_headers(user_a),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_password_confirmation_mismatch(client, user_a, auth_headers, password):
    response = client.put(
        "/api/v1/auth/password",
        json={
            "current_password": password,
            "password": "N3w-Passw0rd!",
            "password_confirmation": "Different-1!",
        },
        headers=auth_headers(user_a),
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_profile_update_records_profile_event(client, user_a, auth_headers, audit_entries):
    response = client.put(
        "/api/v1/auth/profile",
        json={"first_name": "Alicia", "email": "Alicia@Example.com"},
        headers=auth_headers(user_a),
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["email"] == "alicia@example.com"

    entries = audit_entries(EntityType.USER, user_a.id)
    assert [e.action for e in entries] == ["created", "update_profile"]
    profile = entries[-1]
    assert profile.before_values["first_name"] == "Alice"
    assert profile.after_values["first_name"] == "Alicia"
    assert profile.after_values["email"] == "alicia@example.com"
    assert profile.actor_id == user_a.id


def test_profile_email_must_be_unique(client, user_a, user_b, auth_headers):
    response = client.put(
        "/api/v1/auth/profile", json={"email": user_b.email}, headers=auth_headers(user_a)
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_profile_event_lists_only_changed_fields(client, user_a, auth_headers, audit_entries):
    response = client.put(
        "/api/v1/auth/profile",
        json={"first_name": "Alice", "last_name": "Santos"},
        headers=auth_headers(user_a),
    )

    assert response.status_code == status.HTTP_200_OK
    profile = audit_entries(EntityType.USER, user_a.id)[-1]
    assert profile.action == "update_profile"
    assert profile.before_values == {"last_name": "Owner"}
    assert profile.after_values == {"last_name": "Santos"}


def test_unchanged_profile_records_nothing(client, user_a, auth_headers, audit_entries):
    response = client.put(
        "/api/v1/auth/profile",
        json={"first_name": "Alice", "email": "alice@example.com"},
        headers=auth_headers(user_a),
    )

    assert response.status_code == status.HTTP_200_OK
    assert [e.action for e in audit_entries(EntityType.USER, user_a.id)] == ["created"]
