"""고객 레포지토리 — 고객 조회, 검색, 페이지네이션 쿼리.

Client Repository — Lookup, search, and paginated list queries for clients.
Every query eagerly loads the user and personal info so that responses can
be built without lazy loading on the async session.
"""

from typing import Any, Sequence

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from app.models.client import Client, PersonalInfo
from app.models.user import User
from app.repositories.base import BaseRepository
from app.utils.pagination import paginate

# 정렬 허용 컬럼 — Sortable client columns
SORTABLE_COLUMNS: dict[str, InstrumentedAttribute[Any]] = {
    "id": Client.id,
    "uuid": Client.uuid,
    "vat": Client.vat,
    "created_at": Client.created_at,
    "updated_at": Client.updated_at,
}


class ClientRepository(BaseRepository[Client]):
    """고객 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the clients table.
    """

    def __init__(self) -> None:
        super().__init__(Client)

    def base_query(self) -> Select:
        """사용자/개인정보가 조인되고 즉시 로드되는 기본 쿼리.

        Base SELECT joining User (inner) and PersonalInfo (outer) so that
        filter conditions on either table apply, with both relationships
        eagerly loaded.
        """
        return (
            select(Client)
            .join(User, Client.user_id == User.id)
            .outerjoin(PersonalInfo, PersonalInfo.client_id == Client.id)
            .options(selectinload(Client.user), selectinload(Client.personal_info))
            .execution_options(populate_existing=True)
        )

    async def _one(self, db: AsyncSession, condition: ColumnElement[bool]) -> Client | None:
        result = await db.execute(self.base_query().where(condition))
        return result.scalar_one_or_none()

    async def get_detail(self, db: AsyncSession, client_id: int) -> Client | None:
        """ID로 고객을 조회합니다 (사용자/개인정보 로드)."""
        return await self._one(db, Client.id == client_id)

    async def get_by_uuid(self, db: AsyncSession, client_uuid: str) -> Client | None:
        return await self._one(db, Client.uuid == client_uuid)

    async def get_by_username(self, db: AsyncSession, username: str) -> Client | None:
        """연결된 사용자명으로 고객을 조회합니다 (Find by linked user's username)."""
        return await self._one(db, User.username == username)

    async def get_by_vat(self, db: AsyncSession, vat: str) -> Client | None:
        return await self.get_one_by(db, "vat", vat)

    async def find(
        self,
        db: AsyncSession,
        condition: ColumnElement[bool],
        order_by: Any,
    ) -> list[Client]:
        """조건에 맞는 모든 고객을 조회합니다 (Unpaginated filtered list)."""
        query: Select = self.base_query().where(condition).order_by(order_by)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_page(
        self,
        db: AsyncSession,
        condition: ColumnElement[bool],
        order_by: Any,
        page: int,
        per_page: int,
    ) -> tuple[Sequence[Client], int]:
        """조건에 맞는 고객을 페이지 단위로 조회합니다.

        Retrieve one page of clients matching ``condition``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: WHERE 조건 (Filter condition)
            order_by: 정렬 절 (ORDER BY clause)
            page: 페이지 번호, 1부터 시작 (Page number, 1-based)
            per_page: 페이지당 항목 수 (Items per page)

        Returns:
            tuple[Sequence[Client], int]: (고객 목록, 전체 개수)
        """
        query: Select = self.base_query().where(condition).order_by(order_by)
        return await paginate(db, query, page, per_page)

    async def search_by_full_name(self, db: AsyncSession, name: str) -> list[Client]:
        """"이름 성" 전체 이름에 대한 대소문자 무시 부분 일치 검색.

        Case-insensitive substring search over "first_name last_name".
        """
        full_name = PersonalInfo.first_name + " " + PersonalInfo.last_name
        return await self.find(db, full_name.icontains(name, autoescape=True), Client.id.asc())

    async def search_by_last_name(self, db: AsyncSession, last_name: str) -> list[Client]:
        """성에 대한 대소문자 무시 부분 일치 검색."""
        return await self.find(
            db, PersonalInfo.last_name.icontains(last_name, autoescape=True), Client.id.asc()
        )


# 싱글턴 인스턴스 — Singleton instance
client_repository: ClientRepository = ClientRepository()
