"""Tests for the authentication endpoints and the bearer token pipeline."""

from conftest import TEST_PASSWORD, bearer, login, make_user

from app.core.tokens import TokenService, get_token_service
from app.main import api
from app.models.user import User
from app.services.auth import AuthService

AUTH = "/api/v1/auth"


def assert_auth_error(response, code: str):
    assert response.status_code == 401, response.text
    assert response.json()["code"] == code
    assert response.headers["WWW-Authenticate"] == "Bearer"


class TestLogin:
    def test_login_returns_sanitized_user_and_tokens(self, client, tech_user, db):
        response = client.post(f"{AUTH}/login", json={"email": "TECH@company.com", "password": TEST_PASSWORD})

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["user"]["email"] == "tech@company.com"
        assert body["user"]["role"] == "technician"
        assert "password_hash" not in body["user"]
        assert "refresh_tokens" not in body["user"]
        assert body["tokens"]["token_type"] == "bearer"
        assert body["tokens"]["expires_in"] == "15m"

        db.expire_all()
        user = db.get(User, tech_user.id)
        assert user.has_refresh_token(body["tokens"]["refresh_token"])
        assert user.last_login_at is not None

    def test_unknown_email(self, client):
        response = client.post(f"{AUTH}/login", json={"email": "ghost@company.com", "password": TEST_PASSWORD})
        assert_auth_error(response, "INVALID_CREDENTIALS")

    def test_wrong_password(self, client, tech_user):
        response = client.post(f"{AUTH}/login", json={"email": tech_user.email, "password": "wrong-password"})
        assert_auth_error(response, "INVALID_CREDENTIALS")

    def test_deactivated_account(self, client, db):
        make_user(db, "old@company.com", is_active=False)
        response = client.post(f"{AUTH}/login", json={"email": "old@company.com", "password": TEST_PASSWORD})
        assert_auth_error(response, "ACCOUNT_DEACTIVATED")


class TestBearerPipeline:
    def test_me_with_valid_token(self, client, tech_user):
        tokens = login(client, tech_user.email)
        response = client.get(f"{AUTH}/me", headers=bearer(tokens["access_token"]))
        assert response.status_code == 200
        assert response.json()["id"] == tech_user.id

    def test_missing_header(self, client):
        assert_auth_error(client.get(f"{AUTH}/me"), "MISSING_TOKEN")

    def test_wrong_scheme(self, client):
        response = client.get(f"{AUTH}/me", headers={"Authorization": "Token abc123"})
        assert_auth_error(response, "MISSING_TOKEN")

    def test_scheme_is_case_sensitive(self, client, tech_user):
        tokens = login(client, tech_user.email)
        response = client.get(f"{AUTH}/me", headers={"Authorization": f"bearer {tokens['access_token']}"})
        assert_auth_error(response, "MISSING_TOKEN")

    def test_extra_parts(self, client):
        response = client.get(f"{AUTH}/me", headers={"Authorization": "Bearer abc def"})
        assert_auth_error(response, "MISSING_TOKEN")

    def test_malformed_token(self, client):
        response = client.get(f"{AUTH}/me", headers=bearer("abc123"))
        assert_auth_error(response, "MALFORMED_TOKEN")

    def test_refresh_token_is_not_an_access_token(self, client, tech_user):
        tokens = login(client, tech_user.email)
        response = client.get(f"{AUTH}/me", headers=bearer(tokens["refresh_token"]))
        assert_auth_error(response, "INVALID_TOKEN")

    def test_expired_token(self, client, tech_user):
        api.dependency_overrides[get_token_service] = lambda: TokenService(
            access_secret="test-access-secret", refresh_secret="test-refresh-secret", access_ttl="0s"
        )
        tokens = login(client, tech_user.email)
        response = client.get(f"{AUTH}/me", headers=bearer(tokens["access_token"]))
        assert_auth_error(response, "TOKEN_EXPIRED")

    def test_deleted_user(self, client, db):
        user = make_user(db, "gone@company.com")
        tokens = login(client, user.email)
        db.delete(user)
        db.commit()

        response = client.get(f"{AUTH}/me", headers=bearer(tokens["access_token"]))
        assert_auth_error(response, "USER_NOT_FOUND")

    def test_deactivated_after_login(self, client, db, tech_user):
        tokens = login(client, tech_user.email)
        tech_user.is_active = False
        db.commit()

        response = client.get(f"{AUTH}/me", headers=bearer(tokens["access_token"]))
        assert_auth_error(response, "ACCOUNT_DEACTIVATED")


class TestRefresh:
    def test_refresh_rotates_token(self, client, tech_user, db):
        old = login(client, tech_user.email)

        response = client.post(f"{AUTH}/refresh", json={"refresh_token": old["refresh_token"]})

        assert response.status_code == 200, response.text
        new = response.json()["tokens"]
        assert new["refresh_token"] != old["refresh_token"]
        assert client.get(f"{AUTH}/me", headers=bearer(new["access_token"])).status_code == 200

        db.expire_all()
        user = db.get(User, tech_user.id)
        assert user.has_refresh_token(new["refresh_token"])
        assert not user.has_refresh_token(old["refresh_token"])

        replay = client.post(f"{AUTH}/refresh", json={"refresh_token": old["refresh_token"]})
        assert_auth_error(replay, "INVALID_TOKEN")

    def test_missing_refresh_token(self, client):
        response = client.post(f"{AUTH}/refresh", json={})
        assert response.status_code == 400
        assert response.json()["code"] == "REFRESH_TOKEN_REQUIRED"

    def test_access_token_cannot_refresh(self, client, tech_user):
        tokens = login(client, tech_user.email)
        response = client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["access_token"]})
        assert_auth_error(response, "INVALID_TOKEN")

    def test_refresh_for_deactivated_user(self, client, db, tech_user):
        tokens = login(client, tech_user.email)
        tech_user.is_active = False
        db.commit()

        response = client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert_auth_error(response, "ACCOUNT_DEACTIVATED")


class TestLogout:
    def test_logout_revokes_access_and_refresh(self, client, tech_user, blacklist):
        tokens = login(client, tech_user.email)
        headers = bearer(tokens["access_token"])

        response = client.post(f"{AUTH}/logout", json={"refresh_token": tokens["refresh_token"]}, headers=headers)
        assert response.status_code == 200
        assert blacklist.contains(tokens["access_token"])

        assert_auth_error(client.get(f"{AUTH}/me", headers=headers), "TOKEN_REVOKED")
        replay = client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert_auth_error(replay, "INVALID_TOKEN")

        # as assinaturas continuam válidas: quem rejeita é a blacklist e a lista de sessões
        service = get_token_service()
        assert service.verify_access(tokens["access_token"])["userId"] == tech_user.id
        assert service.verify_refresh(tokens["refresh_token"])["userId"] == tech_user.id

    def test_logout_without_refresh_token_keeps_session(self, client, tech_user):
        tokens = login(client, tech_user.email)

        response = client.post(f"{AUTH}/logout", headers=bearer(tokens["access_token"]))
        assert response.status_code == 200

        refreshed = client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert refreshed.status_code == 200

    def test_logout_requires_authentication(self, client):
        assert_auth_error(client.post(f"{AUTH}/logout", json={}), "MISSING_TOKEN")

    def test_logout_all_clears_every_session(self, client, tech_user, db):
        first = login(client, tech_user.email)
        second = login(client, tech_user.email)

        response = client.post(f"{AUTH}/logout-all", headers=bearer(first["access_token"]))
        assert response.status_code == 200

        db.expire_all()
        assert db.get(User, tech_user.id).refresh_tokens == []
        for tokens in (first, second):
            replay = client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
            assert_auth_error(replay, "INVALID_TOKEN")

        assert_auth_error(client.get(f"{AUTH}/me", headers=bearer(first["access_token"])), "TOKEN_REVOKED")
        # só o access token da chamada é revogado; os outros expiram naturalmente
        assert client.get(f"{AUTH}/me", headers=bearer(second["access_token"])).status_code == 200


class TestProfileAndPassword:
    def test_update_me_allow_list(self, client, tech_user, tech_headers):
        response = client.put(
            f"{AUTH}/me",
            json={"name": "Renamed Tech", "role": "admin", "profile": {"phone": "(555) 000-0000"}},
            headers=tech_headers,
        )
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["name"] == "Renamed Tech"
        assert body["role"] == "technician"
        assert body["profile"]["phone"] == "(555) 000-0000"

    def test_update_me_without_valid_fields(self, client, tech_headers):
        response = client.put(f"{AUTH}/me", json={"role": "admin"}, headers=tech_headers)
        assert response.status_code == 400
        assert response.json()["code"] == "NO_UPDATES"

    def test_change_password_validation(self, client, tech_headers):
        cases = [
            ({"current_password": TEST_PASSWORD}, "MISSING_PASSWORDS"),
            ({"current_password": TEST_PASSWORD, "new_password": "123"}, "PASSWORD_TOO_SHORT"),
            ({"current_password": "not-my-password", "new_password": "brand-new-pass"}, "INCORRECT_PASSWORD"),
        ]
        for body, code in cases:
            response = client.put(f"{AUTH}/change-password", json=body, headers=tech_headers)
            assert response.status_code == 400
            assert response.json()["code"] == code

    def test_change_password_clears_sessions(self, client, tech_user):
        tokens = login(client, tech_user.email)

        response = client.put(
            f"{AUTH}/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "brand-new-pass"},
            headers=bearer(tokens["access_token"]),
        )
        assert response.status_code == 200

        replay = client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert_auth_error(replay, "INVALID_TOKEN")
        old_login = client.post(f"{AUTH}/login", json={"email": tech_user.email, "password": TEST_PASSWORD})
        assert_auth_error(old_login, "INVALID_CREDENTIALS")
        login(client, tech_user.email, "brand-new-pass")


class TestOptionalAuthentication:
    def test_pipeline_without_user(self, db, blacklist):
        auth = AuthService(db, get_token_service(), blacklist)

        assert auth.optional_authenticate(None) is None
        assert auth.optional_authenticate("Token abc123") is None
        assert auth.optional_authenticate("Bearer not-a-jwt") is None

    def test_pipeline_with_valid_token(self, client, db, blacklist, tech_user):
        tokens = login(client, tech_user.email)
        auth = AuthService(db, get_token_service(), blacklist)

        ctx = auth.optional_authenticate(f"Bearer {tokens['access_token']}")
        assert ctx.user.id == tech_user.id
        assert ctx.token == tokens["access_token"]

        blacklist.add(tokens["access_token"])
        assert auth.optional_authenticate(f"Bearer {tokens['access_token']}") is None

    def test_public_route_accepts_bad_token(self, client):
        response = client.post("/api/seed/init", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 201
