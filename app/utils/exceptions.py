"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error kinds the
service layer raises. Each error carries a machine-readable ``code`` built
from the entity name and the error kind (e.g. ``ClientNotFound``), which the
application exception handler renders next to ``detail``.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Client with id: 5 not found", entity="Client")
    raise DuplicateError("User with username: bob already exists", entity="User")
"""

from fastapi import HTTPException, status


class AppError(HTTPException):
    """애플리케이션 공통 예외 — 상태 코드와 오류 코드를 함께 보유.

    Base class of all typed application errors.

    Args:
        status_code: HTTP 상태 코드 (HTTP status code)
        detail: 오류 메시지 (Human-readable error message)
        entity: 오류 대상 엔티티 이름 (Entity name used as code prefix)
    """

    kind: str = "Error"

    def __init__(self, status_code: int, detail: str, entity: str = "") -> None:
        super().__init__(status_code=status_code, detail=detail)
        self.code: str = f"{entity}{self.kind}"


class NotFoundError(AppError):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a requested client or user does not exist.
    """

    kind = "NotFound"

    def __init__(self, detail: str = "Resource not found", entity: str = "") -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail, entity)


class DuplicateError(AppError):
    """409 Conflict 예외 — 고유성 제약 위반 시 사용.

    Raised when a create or update would violate a uniqueness rule
    (username, email, VAT, phone).
    """

    kind = "AlreadyExists"

    def __init__(self, detail: str = "Resource already exists", entity: str = "") -> None:
        super().__init__(status.HTTP_409_CONFLICT, detail, entity)


class ForbiddenError(AppError):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    Raised when the principal lacks the authority for an operation
    (e.g. creating a SUPER_ADMIN account without being one).
    """

    kind = "NotAuthorized"

    def __init__(self, detail: str = "Insufficient permissions", entity: str = "") -> None:
        super().__init__(status.HTTP_403_FORBIDDEN, detail, entity)


class UnauthorizedError(AppError):
    """401 Unauthorized 예외 — 인증 실패 시 사용."""

    kind = "Unauthenticated"

    def __init__(self, detail: str = "Authentication required", entity: str = "") -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail, entity)


class BadRequestError(AppError):
    """400 Bad Request 예외 — 잘못된 인자 (e.g. unknown sort field)."""

    kind = "InvalidArgument"

    def __init__(self, detail: str = "Bad request", entity: str = "") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, entity)
