"""Tests for the admin user management endpoints."""

from conftest import TEST_PASSWORD, bearer, login, make_user

from app.models.user import User

USERS = "/api/v1/users"


def test_requires_admin(client, tech_headers):
    response = client.get(f"{USERS}/", headers=tech_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "INSUFFICIENT_PERMISSIONS"


def test_requires_authentication(client):
    response = client.get(f"{USERS}/")
    assert response.status_code == 401
    assert response.json()["code"] == "MISSING_TOKEN"


def test_create_and_get_user(client, admin_headers):
    response = client.post(
        f"{USERS}/",
        json={"email": "new.tech@company.com", "password": "secret123", "name": "New Tech"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    created = response.json()
    assert created["role"] == "technician"
    assert created["is_active"] is True

    fetched = client.get(f"{USERS}/{created['id']}", headers=admin_headers)
    assert fetched.status_code == 200
    assert fetched.json()["email"] == "new.tech@company.com"

    login(client, "new.tech@company.com", "secret123")


def test_create_duplicate_email(client, admin_headers, tech_user):
    response = client.post(
        f"{USERS}/",
        json={"email": tech_user.email, "password": "secret123", "name": "Dup"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "USER_EXISTS"


def test_get_missing_user(client, admin_headers):
    response = client.get(f"{USERS}/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "USER_NOT_FOUND"


def test_list_with_filters_and_pagination(client, db, admin_headers, admin_user):
    make_user(db, "alice@company.com", name="Alice")
    make_user(db, "bob@company.com", name="Bob", is_active=False)
    make_user(db, "carol@company.com", name="Carol", role="admin")

    page = client.get(f"{USERS}/", params={"limit": 2, "page": 1}, headers=admin_headers).json()
    assert len(page["users"]) == 2
    assert page["pagination"] == {"page": 1, "limit": 2, "total": 4, "pages": 2}

    techs = client.get(f"{USERS}/", params={"role": "technician"}, headers=admin_headers).json()
    assert {u["email"] for u in techs["users"]} == {"alice@company.com", "bob@company.com"}

    inactive = client.get(f"{USERS}/", params={"is_active": "false"}, headers=admin_headers).json()
    assert [u["email"] for u in inactive["users"]] == ["bob@company.com"]

    search = client.get(f"{USERS}/", params={"search": "ALI"}, headers=admin_headers).json()
    assert [u["name"] for u in search["users"]] == ["Alice"]

    by_name = client.get(f"{USERS}/", params={"sort": "name"}, headers=admin_headers).json()
    assert [u["name"] for u in by_name["users"]] == ["Admin User", "Alice", "Bob", "Carol"]


def test_update_allow_list(client, admin_headers, tech_user):
    response = client.put(
        f"{USERS}/{tech_user.id}",
        json={"role": "admin", "name": "Promoted"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    assert response.json()["name"] == "Promoted"


def test_update_without_valid_fields(client, admin_headers, tech_user):
    response = client.put(f"{USERS}/{tech_user.id}", json={"email": "x@company.com"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "NO_UPDATES"


def test_delete_is_soft(client, db, admin_headers, tech_user):
    response = client.delete(f"{USERS}/{tech_user.id}", headers=admin_headers)
    assert response.status_code == 200

    db.expire_all()
    assert db.get(User, tech_user.id).is_active is False
    denied = client.post("/api/v1/auth/login", json={"email": tech_user.email, "password": TEST_PASSWORD})
    assert denied.json()["code"] == "ACCOUNT_DEACTIVATED"


def test_cannot_delete_self(client, admin_headers, admin_user):
    response = client.delete(f"{USERS}/{admin_user.id}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "CANNOT_DELETE_SELF"


def test_cannot_deactivate_self_through_update(client, db, admin_headers, admin_user):
    response = client.put(f"{USERS}/{admin_user.id}", json={"is_active": False}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "CANNOT_DEACTIVATE_SELF"

    db.expire_all()
    assert db.get(User, admin_user.id).is_active is True
    renamed = client.put(f"{USERS}/{admin_user.id}", json={"name": "Still Admin"}, headers=admin_headers)
    assert renamed.status_code == 200


def test_reset_password_clears_sessions(client, admin_headers, tech_user):
    tokens = login(client, tech_user.email)

    short = client.put(f"{USERS}/{tech_user.id}/reset-password", json={"new_password": "123"}, headers=admin_headers)
    assert short.status_code == 400
    assert short.json()["code"] == "INVALID_PASSWORD"

    response = client.put(
        f"{USERS}/{tech_user.id}/reset-password", json={"new_password": "reset-pass-1"}, headers=admin_headers
    )
    assert response.status_code == 200

    replay = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert replay.status_code == 401
    assert replay.json()["code"] == "INVALID_TOKEN"
    login(client, tech_user.email, "reset-pass-1")


def test_stats(client, db, admin_headers, tech_user):
    make_user(db, "idle@company.com", is_active=False)

    stats = client.get(f"{USERS}/stats", headers=admin_headers).json()

    assert stats["overview"] == {
        "total_users": 3,
        "active_users": 2,
        "inactive_users": 1,
        "admin_users": 1,
        "technician_users": 2,
    }
    assert {r["role"]: r["count"] for r in stats["role_distribution"]} == {"admin": 1, "technician": 2}
    assert len(stats["recent_users"]) == 3


def test_tech_token_after_promotion_still_reads_role_from_store(client, db, tech_user, admin_headers):
    tech_headers = bearer(login(client, tech_user.email)["access_token"])
    assert client.get(f"{USERS}/", headers=tech_headers).status_code == 403

    client.put(f"{USERS}/{tech_user.id}", json={"role": "admin"}, headers=admin_headers)

    assert client.get(f"{USERS}/", headers=tech_headers).status_code == 200
