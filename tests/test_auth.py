"""인증 API 테스트 — 로그인, 현재 사용자 조회, 액세스 토큰, 비밀번호 한도."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import User
from app.utils.jwt import create_access_token, decode_access_token
from app.utils.password import hash_password, verify_password
from tests.conftest import auth_header, client_payload

URL = "/api/v1/auth"


class TestLogin:
    """로그인 테스트."""

    async def test_login_success(self, client: AsyncClient, admin_user: User):
        res = await client.post(f"{URL}/login", json={"username": "admin", "password": "admin-pass123"})
        assert res.status_code == 200
        data = res.json()
        assert data["token_type"] == "bearer"

        me = await client.get(f"{URL}/me", headers=auth_header(data["access_token"]))
        assert me.status_code == 200
        assert me.json()["authorities"] == ["ADMIN"]

    async def test_login_wrong_password(self, client: AsyncClient, admin_user: User):
        res = await client.post(f"{URL}/login", json={"username": "admin", "password": "wrong"})
        assert res.status_code == 401

    async def test_login_unknown_user(self, client: AsyncClient):
        res = await client.post(f"{URL}/login", json={"username": "ghost", "password": "x"})
        assert res.status_code == 401

    async def test_login_inactive(self, client: AsyncClient, db: AsyncSession, admin_user: User):
        admin_user.is_active = False
        await db.flush()
        res = await client.post(f"{URL}/login", json={"username": "admin", "password": "admin-pass123"})
        assert res.status_code == 401


class TestMe:
    async def test_me_requires_token(self, client: AsyncClient):
        res = await client.get(f"{URL}/me")
        assert res.status_code == 401

    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.json() == {"status": "ok"}


class TestAccessToken:
    """액세스 토큰 유틸리티 테스트."""

    def test_round_trip_subject(self):
        token = create_access_token(7, "ADMIN")
        assert decode_access_token(token) == 7

    def test_wrong_type_rejected(self):
        token = jwt.encode(
            {"sub": "7", "type": "refresh"}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
        )
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token(token)

    def test_expired_rejected(self):
        token = jwt.encode(
            {"sub": "7", "type": "access", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    async def test_token_for_deleted_user(self, client: AsyncClient):
        res = await client.get(f"{URL}/me", headers=auth_header(create_access_token(9999, "ADMIN")))
        assert res.status_code == 401


class TestPasswordLimit:
    def test_long_password_never_verifies(self):
        hashed = hash_password("a" * 72)
        assert verify_password("a" * 72, hashed)
        assert not verify_password("a" * 73, hashed)

    async def test_create_rejects_password_over_bcrypt_limit(self, client: AsyncClient):
        # 한글 25자 = 75바이트
        payload = client_payload(1, user={"password": "가" * 25})
        res = await client.post("/api/v1/clients/", json=payload)
        assert res.status_code == 422
