"""JWT 액세스 토큰 발급 및 검증 유틸리티 모듈.

Access token helpers. The token identifies the principal by user id and
carries the granted role for clients that want to render it; authorization
always re-reads the role from the database.

JWT Payload Structure:
    {
        "sub": "42",              # 사용자 ID (User primary key as string)
        "role": "SUPER_ADMIN",    # 역할 이름 (Granted authority)
        "exp": 1234567890,        # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"          # 토큰 유형 (Token type discriminator)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from app.config import settings

TOKEN_TYPE: str = "access"


def create_access_token(user_id: int, role: str) -> str:
    """사용자 ID와 역할로 액세스 토큰을 발급합니다.

    Issue an HS256 access token for ``user_id`` that expires after
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "exp": expire,
        "type": TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """액세스 토큰을 검증하고 사용자 ID를 반환합니다.

    Verify signature, expiry and token type, and return the subject id.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 서명 오류, 유형 불일치 또는 subject 누락
                               (Bad signature, wrong type, or missing subject)
    """
    payload: dict[str, Any] = jwt.decode(
        token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
    )
    if payload.get("type") != TOKEN_TYPE:
        raise jwt.InvalidTokenError("Invalid token type")
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise jwt.InvalidTokenError("Invalid token subject")
