"""개인정보 레포지토리 — 연락처 고유성 확인 쿼리.

PersonalInfo Repository — Lookups used to enforce phone/email uniqueness.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import PersonalInfo
from app.repositories.base import BaseRepository


class PersonalInfoRepository(BaseRepository[PersonalInfo]):
    """개인정보 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(PersonalInfo)

    async def get_by_phone(self, db: AsyncSession, phone: str) -> PersonalInfo | None:
        return await self.get_one_by(db, "phone", phone)

    async def get_by_email(self, db: AsyncSession, email: str) -> PersonalInfo | None:
        return await self.get_one_by(db, "email", email)

    async def phone_taken(
        self,
        db: AsyncSession,
        phone: str,
        exclude_client_id: int | None = None,
    ) -> bool:
        """다른 고객이 이 전화번호를 사용 중인지 확인합니다.

        Whether another client's personal info already holds ``phone``.
        """
        info: PersonalInfo | None = await self.get_by_phone(db, phone)
        return info is not None and info.client_id != exclude_client_id

    async def email_taken(
        self,
        db: AsyncSession,
        email: str,
        exclude_client_id: int | None = None,
    ) -> bool:
        """다른 고객이 이 연락처 이메일을 사용 중인지 확인합니다."""
        info: PersonalInfo | None = await self.get_by_email(db, email)
        return info is not None and info.client_id != exclude_client_id


# 싱글턴 인스턴스 — Singleton instance
personal_info_repository: PersonalInfoRepository = PersonalInfoRepository()
