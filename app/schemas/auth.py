"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
"""

from pydantic import BaseModel

from app.models.user import Role


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Attributes:
        username: 사용자 로그인 아이디 (User login identifier)
        password: 비밀번호 (Plain text, compared against the bcrypt hash)
    """

    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마."""

    access_token: str
    token_type: str = "bearer"  # Authorization 헤더용 (Authorization header scheme)


class PrincipalResponse(BaseModel):
    """현재 인증 주체 응답 스키마.

    Current principal with its granted authorities.
    """

    id: int
    username: str
    role: Role
    authorities: list[str]
