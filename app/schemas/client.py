"""고객 관련 Pydantic 요청/응답 스키마 정의.

Client Pydantic request/response schema definitions.
Covers client creation (with nested user and personal info), partial
update, the read-only client representation, and list filters.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.config import settings
from app.schemas.user import UserCreate, UserResponse


# === 개인정보 (PersonalInfo) 스키마 ===

class PersonalInfoCreate(BaseModel):
    """개인정보 생성 요청 스키마.

    Contact details supplied when a client is created.
    Phone and email are optional but must be unique when present.
    """

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None


class PersonalInfoUpdate(BaseModel):
    """개인정보 수정 요청 스키마 (부분 업데이트)."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None


class PersonalInfoResponse(BaseModel):
    """개인정보 응답 스키마."""

    first_name: str
    last_name: str
    email: str | None
    phone: str | None
    address: str | None
    city: str | None
    postal_code: str | None


# === 고객 (Client) 스키마 ===

class ClientCreate(BaseModel):
    """고객 생성 요청 스키마.

    Client creation request. The user account and personal info are
    created together with the client in one transaction.

    Attributes:
        vat: 사업자 세금 번호 (VAT number, optional, unique)
        user: 로그인 계정 정보 (Owning user account data)
        personal_info: 연락처 정보 (Contact details)
    """

    vat: str | None = Field(default=None, max_length=20)
    user: UserCreate
    personal_info: PersonalInfoCreate


class ClientUpdate(BaseModel):
    """고객 수정 요청 스키마 (부분 업데이트).

    Client update request schema. Only provided fields are updated;
    omitted fields remain unchanged.

    Attributes:
        vat: 변경할 VAT (New VAT, must not belong to another client)
        is_active: 연결 계정 활성 상태 (Active flag of the linked user)
        personal_info: 변경할 연락처 항목 (Partial contact details)
    """

    vat: str | None = Field(default=None, max_length=20)
    is_active: bool | None = None
    personal_info: PersonalInfoUpdate | None = None


class ClientResponse(BaseModel):
    """고객 읽기 전용 응답 스키마.

    Read-only client representation returned by every client endpoint.
    """

    id: int
    uuid: str
    vat: str | None
    user: UserResponse
    personal_info: PersonalInfoResponse | None
    created_at: datetime
    updated_at: datetime


class ClientFilters(BaseModel):
    """고객 목록 필터 및 페이지 요청 스키마.

    Filter criteria plus paging/sorting for the filtered client list.
    Every criterion is optional; absent or blank values are ignored and
    present ones are combined with AND.

    Attributes:
        uuid: UUID 부분 일치 (Case-insensitive substring of the client UUID)
        vat: VAT 일치 (Exact VAT)
        username: 사용자명 일치 (Exact username of the linked user)
        first_name: 이름 일치 (Exact first name)
        last_name: 성 일치 (Exact last name)
        email: 연락처 이메일 일치 (Exact personal email)
        phone: 전화번호 일치 (Exact phone)
        active: 계정 활성 상태 (Linked user active flag)
    """

    uuid: str | None = None
    vat: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    active: bool | None = None

    # 페이지/정렬 — Paging and sorting
    page: int = Field(default=1, ge=1)
    size: int = Field(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)
    sort_by: str = "id"
    sort_direction: str = "asc"
