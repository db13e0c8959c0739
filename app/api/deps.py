"""FastAPI 의존성 주입 모듈 — 인증 주체 조회 및 역할 검사.

FastAPI dependency injection module — Security context and authorization.
Resolves the bearer token into the current principal and enforces
role-based access on write endpoints.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_access_token()이 JWT를 검증하고 사용자 ID를 반환
       (decode_access_token verifies the JWT and returns the user id)
    3. 해당 ID로 DB에서 사용자를 조회하고 활성 상태 확인
       (User is fetched by that id and must be active)

Anonymous requests:
    get_optional_user는 헤더가 없으면 None을 반환합니다. 고객 생성처럼
    익명 호출을 허용하는 엔드포인트에서 사용합니다.
    (get_optional_user returns None without a header; used where anonymous
    callers are allowed, e.g. client creation.)
"""

from typing import Annotated, Callable, Awaitable

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import Role, User
from app.repositories.user_repository import user_repository
from app.utils.exceptions import ForbiddenError, UnauthorizedError
from app.utils.jwt import decode_access_token

# auto_error=False: 헤더 누락 시 401 대신 None 전달 (yield None instead of failing)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def _resolve_user(db: AsyncSession, token: str) -> User:
    """토큰을 검증하고 활성 사용자를 반환합니다.

    Raises:
        UnauthorizedError: 토큰이 유효하지 않거나 사용자가 없거나 비활성일 때
    """
    try:
        user_id: int = decode_access_token(token)
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid or expired token")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")
    return user


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """현재 인증 주체를 반환합니다. 익명 요청이면 None.

    Return the authenticated principal, or None for anonymous requests.
    A token that is present but invalid is still rejected with 401.
    """
    if credentials is None:
        return None
    return await _resolve_user(db, credentials.credentials)


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """인증된 사용자를 요구합니다.

    Raises:
        UnauthorizedError: 익명 요청일 때 (Anonymous request)
    """
    if user is None:
        raise UnauthorizedError("Authentication required")
    return user


def require_roles(*roles: Role) -> Callable[..., Awaitable[User]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory that only lets principals holding one of ``roles``
    through.

    Args:
        roles: 허용된 역할 목록 (Allowed roles)

    Returns:
        FastAPI 의존성 함수 — 인증된 사용자 반환 또는 403 발생
        (FastAPI dependency returning the User or raising 403)
    """
    allowed: set[str] = {r.value for r in roles}

    async def _check(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if not allowed.intersection(current_user.authorities):
            raise ForbiddenError("Insufficient permissions", entity="User")
        return current_user
    return _check


# 편의 의존성 — Pre-configured role dependencies
require_admin = require_roles(Role.ADMIN, Role.SUPER_ADMIN)
