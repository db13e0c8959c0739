"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification helpers backed by bcrypt.
Client accounts never store plain text passwords.

bcrypt only reads the first 72 bytes of its input and current releases
reject anything longer, so callers validate the encoded length up front
with ``fits_bcrypt``.
"""

import bcrypt

BCRYPT_MAX_BYTES: int = 72


def fits_bcrypt(password: str) -> bool:
    """UTF-8 인코딩 길이가 bcrypt 한도(72바이트) 이내인지 확인합니다."""
    return len(password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt with a fresh salt.

    Args:
        password: 평문 비밀번호, 최대 72바이트 (Plain text password, at most 72 bytes)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    A password longer than the bcrypt limit can never match a stored hash.
    """
    if not fits_bcrypt(plain_password):
        return False
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )
