"""
Tests for token handling and the request guards.

Tests:
- JWT creation and decoding
- Principal extraction from token payloads
- Password hashing
- Invalid/expired tokens treated as anonymous
"""

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from app.core.config import settings
from app.core.permissions import Principal
from app.core.security import (
    create_access_token,
    create_token_for_user,
    decode_token,
    get_password_hash,
    principal_from_payload,
    verify_password,
)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestTokens:
    """Test JWT helpers"""

    def test_token_round_trip(self):
        token = create_token_for_user("test", is_admin=False)
        payload = decode_token(token)

        assert payload["sub"] == "test"
        assert payload["is_admin"] is False
        assert "exp" in payload

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "test"}, expires_delta=timedelta(minutes=-1))

        with pytest.raises(JWTError):
            decode_token(token)

    def test_wrong_key_rejected(self):
        token = jwt.encode({"sub": "test"}, "wrong", algorithm=settings.ALGORITHM)

        with pytest.raises(JWTError):
            decode_token(token)

    def test_principal_from_payload(self):
        assert principal_from_payload({"sub": "test", "is_admin": True}) == Principal("test", True)
        assert principal_from_payload({"sub": "test"}) == Principal("test", False)

    def test_principal_requires_sub(self):
        assert principal_from_payload({"is_admin": True}) is None
        assert principal_from_payload({"sub": ""}) is None

    def test_truthy_non_bool_admin_flag_is_not_admin(self):
        assert principal_from_payload({"sub": "test", "is_admin": "yes"}).is_admin is False


class TestPasswords:
    """Test password hashing"""

    def test_hash_and_verify(self):
        hashed = get_password_hash("password1")

        assert hashed != "password1"
        assert verify_password("password1", hashed)
        assert not verify_password("password2", hashed)


class TestGuards:
    """Test the authentication/authorization dependencies through the API"""

    def test_public_route_ignores_invalid_token(self, client, sample_companies):
        response = client.get("/api/v1/companies/", headers=bearer("not-a-token"))

        assert response.status_code == 200

    def test_admin_route_requires_token(self, client):
        response = client.post("/api/v1/companies/", json={"handle": "new", "name": "New"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_admin_route_invalid_token(self, client):
        bad = jwt.encode({"sub": "admin", "is_admin": True}, "wrong", algorithm=settings.ALGORITHM)
        response = client.post("/api/v1/companies/", json={"handle": "new", "name": "New"}, headers=bearer(bad))

        assert response.status_code == 401

    def test_admin_route_expired_token(self, client):
        expired = create_access_token({"sub": "admin", "is_admin": True}, expires_delta=timedelta(minutes=-5))
        response = client.delete("/api/v1/companies/c1", headers=bearer(expired))

        assert response.status_code == 401

    def test_admin_route_rejects_regular_user(self, client, user_headers):
        response = client.post("/api/v1/companies/", json={"handle": "new", "name": "New"}, headers=user_headers)

        assert response.status_code == 403

    def test_owner_route_rejects_other_user(self, client, db_session, user_headers):
        response = client.get("/api/v1/users/someone-else", headers=user_headers)

        assert response.status_code == 403

    def test_owner_route_anonymous(self, client):
        response = client.get("/api/v1/users/u1")

        assert response.status_code == 401
