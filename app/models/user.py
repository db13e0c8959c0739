"""사용자 및 역할 관련 SQLAlchemy ORM 모델 정의.

User account and Role definitions.

Tables:
    - users: 로그인 계정 (Login accounts; every client owns exactly one)
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Role(str, enum.Enum):
    """사용자 역할 — 부여된 권한(authority) 이름과 동일.

    User role. The enum value doubles as the granted authority name.
    SUPER_ADMIN is the highest-privilege role.
    """

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    CLIENT = "CLIENT"


class User(Base):
    """사용자 모델 — 시스템 로그인 계정.

    User model — Credentials, role, and account metadata.
    Username and email are globally unique.

    Attributes:
        id: 정수 기본키 (Integer primary key)
        uuid: 외부 식별자 (External identifier, random UUID4)
        username: 로그인 아이디 (Login username, unique)
        email: 이메일 (Account email, unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        role: 역할 (Role, default CLIENT)
        is_active: 활성 상태 (Active status)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        client: 연결된 고객 (Linked client, 1:1, may be absent for staff accounts)
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uuid: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4()))
    # 로그인 아이디 — 전역 고유 (Login ID, globally unique)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 비밀번호 해시 — 평문 저장 금지 (never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role, name="user_role"), nullable=False, default=Role.CLIENT)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    client = relationship("Client", back_populates="user", uselist=False)

    @property
    def authorities(self) -> list[str]:
        """부여된 권한 목록 (Granted authority names)."""
        return [self.role.value]
