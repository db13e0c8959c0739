"""고객 라우터 — 고객 CRUD, 목록, 필터, 이름 검색 엔드포인트.

Client Router — CRUD, paginated list, filtered list, and name search.
Reads require an authenticated user; update and delete require ADMIN or
SUPER_ADMIN. Creation accepts anonymous callers, but creating a
SUPER_ADMIN account requires a SUPER_ADMIN principal (checked in the service).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_optional_user, require_admin
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.client import ClientCreate, ClientFilters, ClientResponse, ClientUpdate
from app.schemas.common import MessageResponse
from app.services.client_service import client_service
from app.utils.pagination import Page

router: APIRouter = APIRouter()


@router.post("/", response_model=ClientResponse, status_code=201)
async def create_client(
    data: ClientCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: Annotated[User | None, Depends(get_optional_user)],
) -> ClientResponse:
    """새 고객을 생성합니다 (사용자 계정 포함).

    Create a client together with its user account and personal info.
    """
    result: ClientResponse = await client_service.create_client(db, data, caller)
    await db.commit()
    return result


@router.get("/", response_model=Page[ClientResponse])
async def list_clients(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: Annotated[int, Query(ge=1, description="페이지 번호 (1부터)")] = 1,
    size: Annotated[int, Query(ge=1, le=settings.MAX_PAGE_SIZE, description="페이지 크기")] = settings.DEFAULT_PAGE_SIZE,
    sort_by: Annotated[str | None, Query(description="정렬 필드")] = None,
    sort_direction: Annotated[str, Query(description="asc | desc")] = "asc",
) -> Page[ClientResponse]:
    """고객 목록을 페이지 조회합니다.

    Without ``sort_by`` the list is sorted by ascending id.
    """
    if sort_by is None:
        return await client_service.list_clients(db, page, size)
    return await client_service.list_clients_sorted(db, page, size, sort_by, sort_direction)


@router.post("/filter", response_model=Page[ClientResponse])
async def filter_clients(
    filters: ClientFilters,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> Page[ClientResponse]:
    """필터 조건으로 고객을 페이지 조회합니다."""
    return await client_service.list_clients_filtered(db, filters)


@router.post("/filter/all", response_model=list[ClientResponse])
async def filter_clients_all(
    filters: ClientFilters,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[ClientResponse]:
    """필터 조건에 맞는 모든 고객을 조회합니다 (페이지 미적용)."""
    return await client_service.list_clients_filtered_all(db, filters)


@router.get("/search", response_model=list[ClientResponse])
async def search_clients(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    name: Annotated[str, Query(min_length=1, description="이름 또는 성 일부")],
) -> list[ClientResponse]:
    """전체 이름 부분 일치 검색 (대소문자 무시)."""
    return await client_service.search_clients_by_name(db, name)


@router.get("/by-last-name", response_model=list[ClientResponse])
async def clients_by_last_name(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    last_name: Annotated[str, Query(min_length=1)],
) -> list[ClientResponse]:
    """성 부분 일치 검색 (대소문자 무시)."""
    return await client_service.get_clients_by_last_name(db, last_name)


@router.get("/uuid/{client_uuid}", response_model=ClientResponse)
async def get_client_by_uuid(
    client_uuid: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ClientResponse:
    return await client_service.get_client_by_uuid(db, client_uuid)


@router.get("/username/{username}", response_model=ClientResponse)
async def get_client_by_username(
    username: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ClientResponse:
    return await client_service.get_client_by_username(db, username)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ClientResponse:
    """ID로 고객을 조회합니다."""
    return await client_service.get_client(db, client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ClientResponse:
    """고객 정보를 부분 수정합니다 (ADMIN 이상).

    Partially update a client. ADMIN or SUPER_ADMIN only.
    """
    result: ClientResponse = await client_service.update_client(db, client_id, data)
    await db.commit()
    return result


@router.delete("/{client_id}", response_model=MessageResponse)
async def delete_client(
    client_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> dict[str, str]:
    """고객을 삭제합니다 (ADMIN 이상).

    Delete a client and its personal info. ADMIN or SUPER_ADMIN only.
    """
    await client_service.delete_client(db, client_id)
    await db.commit()
    return {"message": "Client deleted successfully"}
