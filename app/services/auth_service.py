"""인증 서비스 — 로그인 및 현재 인증 주체 조회.

Auth Service — Credential check and access token issuance.
The token subject is the principal later resolved by app.api.deps.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.auth import LoginRequest, PrincipalResponse, TokenResponse
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import create_access_token
from app.utils.password import verify_password


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스."""

    async def login(self, db: AsyncSession, data: LoginRequest) -> TokenResponse:
        """로그인을 처리하고 액세스 토큰을 발급합니다.

        Verify username and password and issue an access token.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 로그인 요청 데이터 (Login request data)

        Returns:
            TokenResponse: 액세스 토큰 응답 (Access token response)

        Raises:
            UnauthorizedError: 잘못된 인증 정보 또는 비활성 계정
                               (Invalid credentials or deactivated account)
        """
        user: User | None = await user_repository.get_by_username(db, data.username)
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid username or password", entity="User")

        if not user.is_active:
            raise UnauthorizedError("Account is deactivated", entity="User")

        return TokenResponse(access_token=create_access_token(user.id, user.role.value))

    def get_me(self, user: User) -> PrincipalResponse:
        """현재 인증 주체와 부여된 권한을 반환합니다."""
        return PrincipalResponse(
            id=user.id,
            username=user.username,
            role=user.role,
            authorities=user.authorities,
        )


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
