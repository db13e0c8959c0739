"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
User accounts are created as part of a client (see app.schemas.client).
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.models.user import Role
from app.utils.password import BCRYPT_MAX_BYTES, fits_bcrypt


class UserCreate(BaseModel):
    """사용자 생성 요청 스키마 (고객 생성 요청에 포함).

    User creation payload nested in a client creation request.

    Attributes:
        username: 로그인 아이디 (Login username, globally unique)
        password: 비밀번호 (Plain text, will be bcrypt-hashed)
        email: 이메일 (Account email, globally unique)
        role: 역할 (Role; SUPER_ADMIN requires a SUPER_ADMIN caller)
    """

    username: str = Field(min_length=2, max_length=100)
    password: str = Field(min_length=8, max_length=72)  # 평문, 서버에서 해싱 (Plain text, hashed server-side)
    email: str = Field(min_length=3, max_length=255)
    role: Role = Role.CLIENT

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if not fits_bcrypt(value):
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value


class UserResponse(BaseModel):
    """사용자 응답 스키마 — 비밀번호 해시는 노출하지 않음."""

    id: int
    uuid: str
    username: str
    email: str
    role: Role
    is_active: bool
    created_at: datetime
