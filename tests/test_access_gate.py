from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from portal.core.auth import AccessGate, AuthenticationError, AuthorizationError, Identity

SECRET = "unit-test-secret"


@pytest.fixture
def gate():
    return AccessGate(secret_key=SECRET)


class TestAuthenticate:
    def test_round_trip(self, gate):
        token = gate.issue_token("user-1", "student")
        assert gate.authenticate(token) == Identity(user_id="user-1", role="student")

    def test_expires_after_seven_days(self, gate):
        issued = datetime.now(timezone.utc) - timedelta(days=7, minutes=1)
        token = gate.issue_token("user-1", "admin", now=issued)
        with pytest.raises(AuthenticationError):
            gate.authenticate(token)

    def test_still_valid_within_seven_days(self, gate):
        issued = datetime.now(timezone.utc) - timedelta(days=6)
        token = gate.issue_token("user-1", "admin", now=issued)
        assert gate.authenticate(token).role == "admin"

    def test_expiry_claim(self, gate):
        issued = datetime(2030, 1, 1, tzinfo=timezone.utc)
        token = gate.issue_token("user-1", "student", now=issued)
        claims = jwt.get_unverified_claims(token)
        assert claims["exp"] == int((issued + timedelta(days=7)).timestamp())

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
    def test_missing_or_malformed(self, gate, token):
        with pytest.raises(AuthenticationError):
            gate.authenticate(token)

    def test_wrong_secret(self, gate):
        token = AccessGate(secret_key="other-secret").issue_token("user-1", "student")
        with pytest.raises(AuthenticationError):
            gate.authenticate(token)

    def test_unknown_role_rejected(self, gate):
        token = gate.issue_token("user-1", "superuser")
        with pytest.raises(AuthenticationError):
            gate.authenticate(token)

    def test_same_message_for_every_cause(self, gate):
        expired = gate.issue_token("u", "student", now=datetime.now(timezone.utc) - timedelta(days=8))
        messages = set()
        for token in (None, "garbage", expired):
            with pytest.raises(AuthenticationError) as exc_info:
                gate.authenticate(token)
            messages.add(str(exc_info.value))
        assert messages == {"Authentication required"}

    def test_empty_secret_not_allowed(self):
        with pytest.raises(ValueError):
            AccessGate(secret_key="")


class TestAuthorize:
    def test_matching_role(self, gate):
        identity = Identity(user_id="u", role="admin")
        assert gate.authorize(identity, "admin") is identity

    def test_mismatched_role(self, gate):
        with pytest.raises(AuthorizationError) as exc_info:
            gate.authorize(Identity(user_id="u", role="student"), "admin")
        assert str(exc_info.value) == "Access forbidden"
