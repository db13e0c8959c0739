"""고객 서비스 — 고객 CRUD, 고유성 검증, 권한 검사, 필터 조회 비즈니스 로직.

Client Service — Business rules enforced before delegating to the
repositories: uniqueness of usernames, emails, VAT numbers and phones,
SUPER_ADMIN creation guard, partial updates, paginated and filtered lists,
and name search.

Services only flush. The route commits, and the request session rolls back
when any of these methods raises.
"""

import logging
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import Client, PersonalInfo
from app.models.user import Role, User
from app.repositories import client_specification
from app.repositories.client_repository import SORTABLE_COLUMNS, client_repository
from app.repositories.personal_info_repository import personal_info_repository
from app.repositories.user_repository import user_repository
from app.schemas.client import (
    ClientCreate,
    ClientFilters,
    ClientResponse,
    ClientUpdate,
    PersonalInfoResponse,
)
from app.schemas.user import UserResponse
from app.utils.exceptions import BadRequestError, DuplicateError, ForbiddenError, NotFoundError
from app.utils.pagination import Page, check_page_bounds, resolve_order_by
from app.utils.password import hash_password

logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD: str = "id"


class ClientService:
    """고객 관련 비즈니스 로직을 처리하는 서비스.

    Service handling client business logic.
    """

    def _to_response(self, client: Client) -> ClientResponse:
        """고객 모델을 읽기 전용 응답 스키마로 변환합니다.

        Convert a Client (user and personal info loaded) to its read-only DTO.
        """
        user: User = client.user
        info: PersonalInfo | None = client.personal_info
        return ClientResponse(
            id=client.id,
            uuid=client.uuid,
            vat=client.vat,
            user=UserResponse(
                id=user.id,
                uuid=user.uuid,
                username=user.username,
                email=user.email,
                role=user.role,
                is_active=user.is_active,
                created_at=user.created_at,
            ),
            personal_info=PersonalInfoResponse(
                first_name=info.first_name,
                last_name=info.last_name,
                email=info.email,
                phone=info.phone,
                address=info.address,
                city=info.city,
                postal_code=info.postal_code,
            ) if info is not None else None,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )

    def _to_page(
        self,
        clients: Sequence[Client],
        total: int,
        page: int,
        per_page: int,
    ) -> Page[ClientResponse]:
        return Page[ClientResponse].build(
            [self._to_response(c) for c in clients], total, page, per_page
        )

    async def _get_or_404(self, db: AsyncSession, client_id: int) -> Client:
        client: Client | None = await client_repository.get_detail(db, client_id)
        if client is None:
            raise NotFoundError(f"Client with id: {client_id} not found", entity="Client")
        return client

    def _check_can_grant(self, role: Role, caller: User | None) -> None:
        """역할 부여 권한을 확인합니다.

        Only an authenticated SUPER_ADMIN may create another SUPER_ADMIN.

        Raises:
            ForbiddenError: 익명 요청이거나 호출자가 SUPER_ADMIN이 아닐 때
                            (Anonymous caller, or caller lacking SUPER_ADMIN)
        """
        if role != Role.SUPER_ADMIN:
            return

        if caller is None or not caller.is_active:
            raise ForbiddenError(
                "Authentication required to create SUPER_ADMIN users", entity="User"
            )

        if Role.SUPER_ADMIN.value not in caller.authorities:
            raise ForbiddenError(
                "Only SUPER_ADMIN can create SUPER_ADMIN users", entity="User"
            )

    async def create_client(
        self,
        db: AsyncSession,
        data: ClientCreate,
        caller: User | None = None,
    ) -> ClientResponse:
        """새 고객을 생성합니다 (사용자 -> 고객 -> 개인정보 순).

        Create a client together with its user account and personal info.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 고객 생성 데이터 (Client creation data)
            caller: 현재 인증 주체, 익명이면 None (Current principal, None when anonymous)

        Returns:
            ClientResponse: 생성된 고객 응답 (Created client)

        Raises:
            DuplicateError: 사용자명/이메일/VAT/전화번호/연락처 이메일 중복
                            (Username, email, VAT, phone or personal email taken)
            ForbiddenError: 권한 없이 SUPER_ADMIN 생성 시도
                            (SUPER_ADMIN creation without a SUPER_ADMIN principal)
        """
        user_data = data.user
        info_data = data.personal_info

        if await user_repository.get_by_username(db, user_data.username) is not None:
            raise DuplicateError(
                f"User with username: {user_data.username} already exists", entity="User"
            )

        if await user_repository.get_by_email(db, user_data.email) is not None:
            raise DuplicateError(
                f"User with email: {user_data.email} already exists", entity="User"
            )

        if data.vat is not None and await client_repository.get_by_vat(db, data.vat) is not None:
            raise DuplicateError(
                f"Client with VAT: {data.vat} already exists", entity="Client"
            )

        if info_data.phone is not None and await personal_info_repository.phone_taken(db, info_data.phone):
            raise DuplicateError(
                f"Personal info with phone: {info_data.phone} already exists",
                entity="PersonalInfo",
            )

        if info_data.email is not None and await personal_info_repository.email_taken(db, info_data.email):
            raise DuplicateError(
                f"Personal info with email: {info_data.email} already exists",
                entity="PersonalInfo",
            )

        self._check_can_grant(user_data.role, caller)

        user: User = await user_repository.create(
            db,
            {
                "username": user_data.username,
                "email": user_data.email,
                "password_hash": hash_password(user_data.password),
                "role": user_data.role,
            },
        )

        client: Client = await client_repository.create(
            db, {"vat": data.vat, "user_id": user.id}
        )
        await personal_info_repository.create(
            db, {"client_id": client.id, **info_data.model_dump()}
        )

        # 관계 로드를 위해 다시 조회 — Re-fetch with relationships loaded
        loaded: Client = await self._get_or_404(db, client.id)
        logger.info("Created client id=%s username=%s role=%s", loaded.id, user.username, user.role.value)
        return self._to_response(loaded)

    async def update_client(
        self,
        db: AsyncSession,
        client_id: int,
        data: ClientUpdate,
    ) -> ClientResponse:
        """고객 정보를 부분 수정합니다.

        Apply a partial update to an existing client. A VAT equal to the
        client's own VAT is accepted; a VAT held by another client is not.

        Raises:
            NotFoundError: 고객을 찾을 수 없을 때 (Client not found)
            DuplicateError: VAT/전화번호/이메일이 다른 고객과 충돌할 때
                            (VAT, phone or personal email held by another client)
        """
        client: Client = await self._get_or_404(db, client_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)

        new_vat: str | None = update_data.get("vat")
        if new_vat is not None and new_vat != client.vat:
            if await client_repository.get_by_vat(db, new_vat) is not None:
                raise DuplicateError(
                    f"Client with VAT: {new_vat} already exists", entity="Client"
                )

        info_changes: dict[str, Any] = update_data.get("personal_info") or {}
        phone: str | None = info_changes.get("phone")
        if phone is not None and await personal_info_repository.phone_taken(db, phone, client.id):
            raise DuplicateError(
                f"Personal info with phone: {phone} already exists", entity="PersonalInfo"
            )
        email: str | None = info_changes.get("email")
        if email is not None and await personal_info_repository.email_taken(db, email, client.id):
            raise DuplicateError(
                f"Personal info with email: {email} already exists", entity="PersonalInfo"
            )

        if "vat" in update_data:
            client.vat = new_vat
        if update_data.get("is_active") is not None:
            client.user.is_active = update_data["is_active"]
        # 필수 항목은 null로 덮어쓰지 않음 — required names are never cleared
        for required in ("first_name", "last_name"):
            if info_changes.get(required, "") is None:
                info_changes.pop(required)
        if info_changes:
            if client.personal_info is None:
                if not {"first_name", "last_name"} <= info_changes.keys():
                    raise BadRequestError(
                        "first_name and last_name are required to add personal info",
                        entity="PersonalInfo",
                    )
                client.personal_info = PersonalInfo(**info_changes)
            else:
                for field, value in info_changes.items():
                    setattr(client.personal_info, field, value)

        await db.flush()

        loaded: Client = await self._get_or_404(db, client_id)
        return self._to_response(loaded)

    async def get_client(self, db: AsyncSession, client_id: int) -> ClientResponse:
        """ID로 고객을 조회합니다.

        Raises:
            NotFoundError: 고객을 찾을 수 없을 때 (Client not found)
        """
        return self._to_response(await self._get_or_404(db, client_id))

    async def get_client_by_uuid(self, db: AsyncSession, client_uuid: str) -> ClientResponse:
        """외부 식별자(UUID)로 고객을 조회합니다."""
        client: Client | None = await client_repository.get_by_uuid(db, client_uuid)
        if client is None:
            raise NotFoundError(f"Client with uuid: {client_uuid} not found", entity="Client")
        return self._to_response(client)

    async def get_client_by_username(self, db: AsyncSession, username: str) -> ClientResponse:
        """연결된 사용자명으로 고객을 조회합니다."""
        client: Client | None = await client_repository.get_by_username(db, username)
        if client is None:
            raise NotFoundError(f"Client with username: {username} not found", entity="Client")
        return self._to_response(client)

    async def delete_client(self, db: AsyncSession, client_id: int) -> None:
        """고객을 삭제합니다 (개인정보는 함께 삭제, 사용자 계정은 유지).

        Delete a client. Its personal info is removed by cascade; the linked
        user account is kept.

        Raises:
            NotFoundError: 고객을 찾을 수 없을 때 (Client not found)
        """
        client: Client = await self._get_or_404(db, client_id)
        await client_repository.delete(db, client)
        logger.info("Deleted client id=%s", client_id)

    async def list_clients(
        self,
        db: AsyncSession,
        page: int,
        size: int,
    ) -> Page[ClientResponse]:
        """고객 목록을 ID 오름차순으로 페이지 조회합니다."""
        return await self.list_clients_sorted(db, page, size, DEFAULT_SORT_FIELD, "asc")

    async def list_clients_sorted(
        self,
        db: AsyncSession,
        page: int,
        size: int,
        sort_by: str,
        sort_direction: str,
    ) -> Page[ClientResponse]:
        """지정한 정렬 기준으로 고객 목록을 페이지 조회합니다.

        Raises:
            BadRequestError: 알 수 없는 정렬 필드/방향, 범위를 벗어난 페이지 크기
                             (Unknown sort field or direction, out-of-range page or size)
        """
        check_page_bounds(page, size, entity="Client")
        order_by = resolve_order_by(SORTABLE_COLUMNS, sort_by, sort_direction, entity="Client")
        clients, total = await client_repository.find_page(
            db, client_specification.combine([]), order_by, page, size
        )
        return self._to_page(clients, total, page, size)

    async def list_clients_filtered(
        self,
        db: AsyncSession,
        filters: ClientFilters,
    ) -> Page[ClientResponse]:
        """필터 조건에 맞는 고객을 페이지 조회합니다.

        List one page of clients matching every present filter value.
        """
        check_page_bounds(filters.page, filters.size, entity="Client")
        order_by = resolve_order_by(
            SORTABLE_COLUMNS, filters.sort_by, filters.sort_direction, entity="Client"
        )
        condition = client_specification.combine(client_specification.build_conditions(filters))
        clients, total = await client_repository.find_page(
            db, condition, order_by, filters.page, filters.size
        )
        return self._to_page(clients, total, filters.page, filters.size)

    async def list_clients_filtered_all(
        self,
        db: AsyncSession,
        filters: ClientFilters,
    ) -> list[ClientResponse]:
        """필터 조건에 맞는 모든 고객을 조회합니다 (페이지 미적용).

        Paging fields of ``filters`` are ignored; sorting still applies.
        """
        order_by = resolve_order_by(
            SORTABLE_COLUMNS, filters.sort_by, filters.sort_direction, entity="Client"
        )
        condition = client_specification.combine(client_specification.build_conditions(filters))
        clients: list[Client] = await client_repository.find(db, condition, order_by)
        return [self._to_response(c) for c in clients]

    async def search_clients_by_name(self, db: AsyncSession, name: str) -> list[ClientResponse]:
        """전체 이름 부분 일치로 고객을 검색합니다 (대소문자 무시)."""
        clients: list[Client] = await client_repository.search_by_full_name(db, name)
        return [self._to_response(c) for c in clients]

    async def get_clients_by_last_name(self, db: AsyncSession, last_name: str) -> list[ClientResponse]:
        """성 부분 일치로 고객을 검색합니다 (대소문자 무시)."""
        clients: list[Client] = await client_repository.search_by_last_name(db, last_name)
        return [self._to_response(c) for c in clients]


# 싱글턴 인스턴스 — Singleton instance
client_service: ClientService = ClientService()
