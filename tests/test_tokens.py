"""
Tests for bearer token issuing and identity resolution.
"""
import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.core.security.tokens import IdentityResolver
from tests.conftest import TEST_SECRET


class TestResolveIdentity:
    def test_valid_token_yields_user_id(self, resolver):
        user_id = uuid.uuid4()
        token = resolver.issue_token(user_id, username="alice")
        assert resolver.resolve_identity(token) == user_id

    def test_idempotent(self, resolver):
        user_id = uuid.uuid4()
        token = resolver.issue_token(user_id)
        assert resolver.resolve_identity(token) == resolver.resolve_identity(token) == user_id

    @pytest.mark.parametrize("credential", [None, ""])
    def test_absent_credential_is_anonymous(self, resolver, credential):
        assert resolver.resolve_identity(credential) is None

    def test_expired_token(self, resolver):
        token = resolver.issue_token(uuid.uuid4(), expires_delta=timedelta(seconds=-5))
        assert resolver.resolve_identity(token) is None
        assert resolver.resolve_identity(token) is None

    def test_tampered_token(self, resolver):
        token = resolver.issue_token(uuid.uuid4())
        header, payload, signature = token.split(".")
        forged_sig = ("A" if signature[0] != "A" else "B") + signature[1:]
        assert resolver.resolve_identity(f"{header}.{payload}.{forged_sig}") is None

    def test_signed_with_other_secret(self, resolver):
        other = IdentityResolver(secret="another-secret-that-is-long-enough-000")
        token = other.issue_token(uuid.uuid4())
        assert resolver.resolve_identity(token) is None

    @pytest.mark.parametrize("garbage", ["not-a-token", "a.b.c", "Bearer xyz"])
    def test_malformed_token(self, resolver, garbage):
        assert resolver.resolve_identity(garbage) is None

    def test_subject_must_be_uuid(self, resolver):
        token = jwt.encode(
            {"sub": "42", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            TEST_SECRET,
            algorithm="HS256",
        )
        assert resolver.resolve_identity(token) is None

    def test_expiry_claim_required(self, resolver):
        token = jwt.encode({"sub": str(uuid.uuid4())}, TEST_SECRET, algorithm="HS256")
        assert resolver.resolve_identity(token) is None

    def test_other_algorithm_rejected(self, resolver):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            TEST_SECRET,
            algorithm="HS512",
        )
        assert resolver.resolve_identity(token) is None


class TestIssueToken:
    def test_claims(self, resolver):
        user_id = uuid.uuid4()
        token = resolver.issue_token(user_id, username="alice")
        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert payload["sub"] == str(user_id)
        assert payload["username"] == "alice"
        assert payload["exp"] - payload["iat"] == 60 * 60

    def test_secret_required(self):
        with pytest.raises(ValueError):
            IdentityResolver(secret="")
