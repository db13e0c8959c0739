"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata, which
relationship resolution and ``Base.metadata.create_all`` rely on.

Modules:
    user: 역할 및 사용자 (Role and User)
    client: 고객 및 개인정보 (Client and PersonalInfo)
"""

from app.models.user import Role, User
from app.models.client import Client, PersonalInfo

__all__ = [
    "Role", "User",
    "Client", "PersonalInfo",
]
