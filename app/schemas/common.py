"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schemas shared across API domains.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """단순 메시지 응답 스키마 (Generic message response)."""

    message: str


class ErrorResponse(BaseModel):
    """오류 응답 스키마.

    Error body rendered for every typed application error.

    Attributes:
        code: 오류 코드 (Machine code, e.g. "ClientNotFound")
        detail: 오류 메시지 (Human-readable message)
    """

    code: str
    detail: str
