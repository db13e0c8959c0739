"""고객 및 개인정보 관련 SQLAlchemy ORM 모델 정의.

Client and PersonalInfo SQLAlchemy ORM model definitions.

Tables:
    - clients: 고객 (Business client, VAT, linked 1:1 to a user)
    - personal_infos: 고객 연락처 (Contact details of a client)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Client(Base):
    """고객 모델.

    Client model — business identifier (VAT) plus the owning user account.
    A client always has exactly one user; the user row is not removed
    together with the client.

    Attributes:
        id: 정수 기본키 (Integer primary key)
        uuid: 외부 식별자 (External identifier)
        vat: 사업자 세금 번호 (VAT number, unique when present)
        user_id: 사용자 FK (Owning user, unique)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        user: 로그인 계정 (Owning user account)
        personal_info: 연락처 (Contact details, deleted with the client)
    """

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uuid: Mapped[str] = mapped_column(String(36), unique=True, nullable=False, default=lambda: str(uuid.uuid4()))
    vat: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    user = relationship("User", back_populates="client")
    personal_info = relationship(
        "PersonalInfo",
        back_populates="client",
        uselist=False,
        cascade="all, delete-orphan",
    )


class PersonalInfo(Base):
    """고객 연락처 모델.

    Contact details of a client. Phone and email are unique when present.
    """

    __tablename__ = "personal_infos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 소속 고객 FK — CASCADE: 고객 삭제 시 함께 삭제
    client_id: Mapped[int] = mapped_column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), unique=True, nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(20), nullable=True)

    client = relationship("Client", back_populates="personal_info")
