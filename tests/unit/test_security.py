"""
Unit tests for bearer token verification and lazy user creation

Tests:
- Valid HS256 token yields claims
- Expired, tampered, and incomplete tokens are rejected
- Unconfigured verifier rejects everything
- get_or_create_user is idempotent
"""

import pytest
from datetime import datetime, timedelta, timezone

import jwt

from analyst.core.exceptions import AuthenticationError
from analyst.core.security import IdentityVerifier
from analyst.models.user import User
from analyst.services.user_service import UNKNOWN_EMAIL, get_or_create_user

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


def _token(secret=SECRET, algorithm="HS256", **claims):
    payload = {
        "sub": "user-1",
        "email": "analyst@example.com",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    payload.update(claims)
    return jwt.encode({k: v for k, v in payload.items() if v is not None}, secret, algorithm=algorithm)


@pytest.mark.unit
class TestIdentityVerifier:
    """Test suite for IdentityVerifier"""

    def test_valid_token(self):
        claims = IdentityVerifier(secret=SECRET).verify_token(_token())

        assert claims.sub == "user-1"
        assert claims.email == "analyst@example.com"

    def test_expired_token(self):
        token = _token(exp=datetime.now(timezone.utc) - timedelta(minutes=1))

        with pytest.raises(AuthenticationError):
            IdentityVerifier(secret=SECRET).verify_token(token)

    def test_wrong_secret(self):
        token = _token(secret="some-other-secret-that-is-also-long-enough")

        with pytest.raises(AuthenticationError):
            IdentityVerifier(secret=SECRET).verify_token(token)

    def test_missing_sub(self):
        with pytest.raises(AuthenticationError):
            IdentityVerifier(secret=SECRET).verify_token(_token(sub=None))

    def test_missing_exp(self):
        with pytest.raises(AuthenticationError):
            IdentityVerifier(secret=SECRET).verify_token(_token(exp=None))

    def test_disallowed_algorithm(self):
        token = _token(algorithm="HS512")

        with pytest.raises(AuthenticationError, match="Unsupported token algorithm"):
            IdentityVerifier(secret=SECRET).verify_token(token)

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            IdentityVerifier(secret=SECRET).verify_token("not.a.jwt")

    def test_audience_checked_when_configured(self):
        verifier = IdentityVerifier(secret=SECRET, audience="analyst-api")

        assert verifier.verify_token(_token(aud="analyst-api")).sub == "user-1"
        with pytest.raises(AuthenticationError):
            verifier.verify_token(_token(aud="someone-else"))

    def test_unconfigured_verifier(self):
        verifier = IdentityVerifier()

        assert verifier.is_configured() is False
        with pytest.raises(AuthenticationError):
            verifier.verify_token(_token())


@pytest.mark.unit
class TestGetOrCreateUser:
    """Test suite for get_or_create_user"""

    def test_creates_once(self, db_session):
        first = get_or_create_user(db_session, "new-user", "new@example.com")
        second = get_or_create_user(db_session, "new-user", "changed@example.com")

        assert first.id == second.id == "new-user"
        assert second.email == "new@example.com"
        assert db_session.query(User).filter(User.id == "new-user").count() == 1

    def test_missing_email_gets_placeholder(self, db_session):
        user = get_or_create_user(db_session, "no-email", None)

        assert user.email == UNKNOWN_EMAIL

    def test_existing_user_untouched(self, db_session, test_user):
        user = get_or_create_user(db_session, test_user.id, "other@example.com")

        assert user.email == "analyst@example.com"
