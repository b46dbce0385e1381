"""Tests for token issuance and verification."""

from datetime import timedelta
from types import SimpleNamespace

import pytest

from app.core.errors import InvalidTokenError, MalformedTokenError, TokenConfigError, TokenExpiredError
from app.core.tokens import TokenService, build_payload, parse_duration

PAYLOAD = {"userId": 7, "email": "tech@company.com", "name": "Tech User", "role": "technician", "isActive": True}


def make_service(**overrides) -> TokenService:
    options = {"access_secret": "access-secret", "refresh_secret": "refresh-secret"}
    options.update(overrides)
    return TokenService(**options)


class TestParseDuration:
    def test_units(self):
        assert parse_duration("15m") == timedelta(minutes=15)
        assert parse_duration("7d") == timedelta(days=7)
        assert parse_duration("2h") == timedelta(hours=2)
        assert parse_duration("0s") == timedelta(0)
        assert parse_duration("30") == timedelta(seconds=30)
        assert parse_duration(45) == timedelta(seconds=45)

    def test_invalid_value(self):
        with pytest.raises(TokenConfigError):
            parse_duration("fifteen minutes")


class TestIssueAndVerify:
    def test_access_round_trip(self):
        service = make_service()
        pair = service.issue_tokens(PAYLOAD)

        claims = service.verify_access(pair.access_token)

        for key, value in PAYLOAD.items():
            assert claims[key] == value
        assert claims["iss"] == "field-maintenance-api"
        assert claims["aud"] == "field-maintenance-app"
        assert claims["exp"] > claims["iat"]

    def test_refresh_carries_only_user_id(self):
        service = make_service()
        pair = service.issue_tokens(PAYLOAD)

        claims = service.verify_refresh(pair.refresh_token)

        assert claims["userId"] == 7
        assert "email" not in claims
        assert "role" not in claims

    def test_each_issuance_is_unique(self):
        service = make_service()
        first = service.issue_tokens(PAYLOAD)
        second = service.issue_tokens(PAYLOAD)
        assert first.access_token != second.access_token
        assert first.refresh_token != second.refresh_token

    def test_secrets_are_not_interchangeable(self):
        service = make_service()
        pair = service.issue_tokens(PAYLOAD)

        with pytest.raises(InvalidTokenError):
            service.verify_refresh(pair.access_token)
        with pytest.raises(InvalidTokenError):
            service.verify_access(pair.refresh_token)

    def test_zero_ttl_is_always_expired(self):
        service = make_service(access_ttl="0s", refresh_ttl="0s")
        pair = service.issue_tokens(PAYLOAD)

        with pytest.raises(TokenExpiredError) as exc:
            service.verify_access(pair.access_token)
        assert exc.value.code == "TOKEN_EXPIRED"
        with pytest.raises(TokenExpiredError):
            service.verify_refresh(pair.refresh_token)

    def test_wrong_audience_is_invalid(self):
        issuer = make_service(audience="another-app")
        verifier = make_service()
        token = issuer.issue_tokens(PAYLOAD).access_token

        with pytest.raises(InvalidTokenError):
            verifier.verify_access(token)

    def test_wrong_issuer_is_invalid(self):
        issuer = make_service(issuer="someone-else")
        token = issuer.issue_tokens(PAYLOAD).access_token

        with pytest.raises(InvalidTokenError):
            make_service().verify_access(token)

    def test_signature_checked_before_expiry(self):
        # expirado E assinado com outra chave: reporta assinatura inválida
        forged = make_service(access_secret="other-secret", access_ttl="0s")
        token = forged.issue_tokens(PAYLOAD).access_token

        with pytest.raises(InvalidTokenError):
            make_service().verify_access(token)

    @pytest.mark.parametrize("token", ["not-a-jwt", "abc.def.ghi", ""])
    def test_malformed(self, token):
        with pytest.raises(MalformedTokenError) as exc:
            make_service().verify_access(token)
        assert exc.value.code == "MALFORMED_TOKEN"
        assert exc.value.status_code == 401


class TestDecodeUnverified:
    def test_decodes_without_signature(self):
        token = make_service(access_secret="unknown").issue_tokens(PAYLOAD).access_token

        decoded = TokenService.decode_unverified(token)

        assert decoded["header"]["alg"] == "HS256"
        assert decoded["payload"]["email"] == "tech@company.com"

    def test_garbage_returns_none(self):
        assert TokenService.decode_unverified("garbage") is None


class TestConfiguration:
    def test_missing_secret_fails_validation(self):
        with pytest.raises(TokenConfigError):
            make_service(access_secret="").validate()

    def test_identical_secrets_fail_validation(self):
        with pytest.raises(TokenConfigError):
            make_service(access_secret="same", refresh_secret="same").validate()

    def test_signing_without_secret_is_fatal(self):
        with pytest.raises(TokenConfigError):
            make_service(refresh_secret="").issue_tokens(PAYLOAD)

    def test_build_payload_from_user(self):
        user = SimpleNamespace(id=3, email="a@company.com", name="A", role="admin", is_active=1)
        assert build_payload(user) == {
            "userId": 3, "email": "a@company.com", "name": "A", "role": "admin", "isActive": True,
        }
