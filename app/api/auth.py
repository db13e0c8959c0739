"""인증 라우터 — 로그인 및 현재 사용자 조회.

Auth Router — Login and current principal endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.auth import LoginRequest, PrincipalResponse, TokenResponse
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """로그인 — 액세스 토큰 발급.

    Verify credentials and issue an access token.
    """
    return await auth_service.login(db, data)


@router.get("/me", response_model=PrincipalResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> PrincipalResponse:
    """현재 인증 주체와 권한 조회."""
    return auth_service.get_me(current_user)
