"""테스트 인프라 — 테스트 DB 엔진, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Database engine, session, and httpx client fixtures.
Uses an in-memory SQLite database (aiosqlite) by default; set
TEST_DATABASE_URL to run the same suite against PostgreSQL.
Schema is created fresh for every test.
"""

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, create_tables, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.user import Role, User
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 생성/삭제합니다."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        # 인메모리 DB는 연결마다 별개 — 단일 연결 공유
        eng = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        eng = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    await create_tables(eng)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 계정 생성
# ---------------------------------------------------------------------------
async def _make_user(db: AsyncSession, username: str, role: Role) -> User:
    user = User(
        username=username,
        email=f"{username}@test.com",
        password_hash=hash_password(f"{username}-pass123"),
        role=role,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def super_admin_user(db: AsyncSession) -> User:
    """SUPER_ADMIN 계정을 생성합니다."""
    return await _make_user(db, "root", Role.SUPER_ADMIN)


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """ADMIN 계정을 생성합니다."""
    return await _make_user(db, "admin", Role.ADMIN)


@pytest_asyncio.fixture
async def plain_user(db: AsyncSession) -> User:
    """CLIENT 역할 계정을 생성합니다 (고객 레코드 없음)."""
    return await _make_user(db, "viewer", Role.CLIENT)


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token(user.id, user.role.value)


@pytest.fixture
def super_admin_token(super_admin_user: User) -> str:
    return make_token(super_admin_user)


@pytest.fixture
def admin_token(admin_user: User) -> str:
    return make_token(admin_user)


@pytest.fixture
def user_token(plain_user: User) -> str:
    return make_token(plain_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def client_payload(n: int, **overrides: Any) -> dict[str, Any]:
    """고객 생성 요청 본문을 만듭니다. n으로 고유 값을 구분합니다."""
    payload: dict[str, Any] = {
        "vat": f"EL{n:09d}",
        "user": {
            "username": f"client{n}",
            "password": "secret-pass-1",
            "email": f"client{n}@example.com",
            "role": "CLIENT",
        },
        "personal_info": {
            "first_name": f"First{n}",
            "last_name": f"Last{n}",
            "email": f"contact{n}@example.com",
            "phone": f"69{n:08d}",
            "city": "Athens",
        },
    }
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(payload.get(key), dict):
            payload[key] = {**payload[key], **value}
        else:
            payload[key] = value
    return payload
