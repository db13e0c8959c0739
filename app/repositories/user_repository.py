"""사용자 레포지토리 — 로그인 계정 조회 쿼리.

User Repository — Lookups on login accounts by unique columns.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(self, db: AsyncSession, username: str) -> User | None:
        """사용자명으로 사용자를 조회합니다 (Find a user by username)."""
        return await self.get_one_by(db, "username", username)

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        """이메일로 사용자를 조회합니다 (Find a user by account email)."""
        return await self.get_one_by(db, "email", email)


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
