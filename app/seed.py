"""초기 데이터 시드 스크립트 — 테이블 생성 및 최고 관리자 계정 생성.

Seed script — Creates tables and the bootstrap SUPER_ADMIN account.
SUPER_ADMIN accounts can only be created by another SUPER_ADMIN through the
API, so the first one has to come from here.

Usage:
    python -m app.seed

Creates:
    - SUPER_ADMIN 계정: SUPERADMIN_USERNAME / SUPERADMIN_PASSWORD 설정값
      (one SUPER_ADMIN user from the SUPERADMIN_* settings)
"""

import asyncio
import logging

from app.config import settings
from app.database import async_session, create_tables
from app.models import Role, User
from app.repositories.user_repository import user_repository
from app.utils.password import hash_password

logger = logging.getLogger(__name__)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Idempotent: 같은 사용자명이 이미 있으면 건너뜁니다 (Skips if already seeded).
    """
    await create_tables()

    async with async_session() as db:
        existing: User | None = await user_repository.get_by_username(db, settings.SUPERADMIN_USERNAME)
        if existing is not None:
            logger.info("Already seeded. Skipping.")
            return

        admin: User = await user_repository.create(
            db,
            {
                "username": settings.SUPERADMIN_USERNAME,
                "email": settings.SUPERADMIN_EMAIL,
                "password_hash": hash_password(settings.SUPERADMIN_PASSWORD),
                "role": Role.SUPER_ADMIN,
            },
        )
        await db.commit()
        logger.info("Seeded SUPER_ADMIN user=%s id=%s", admin.username, admin.id)


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    asyncio.run(seed())
