"""고객 동적 필터 조건 — ClientFilters를 WHERE 절 조건으로 변환.

Client filter predicates. Each builder returns a SQL condition, or None
when its filter value is absent or blank, so callers can skip it.
``build_conditions`` gathers the present ones for AND composition.

The conditions reference ``User`` and ``PersonalInfo`` columns, so the
query they are applied to must join both (see ClientRepository.base_query).
"""

from typing import Any

from sqlalchemy import ColumnElement, and_, true

from app.models.client import Client, PersonalInfo
from app.models.user import User
from app.schemas.client import ClientFilters


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def string_field_like(column: Any, value: str | None) -> ColumnElement[bool] | None:
    """대소문자 무시 부분 일치 (Case-insensitive literal substring match; % and _ are escaped)."""
    if _blank(value):
        return None
    return column.icontains(value.strip(), autoescape=True)


def field_equals(column: Any, value: Any) -> ColumnElement[bool] | None:
    """값 일치 — 빈 문자열은 필터 없음으로 취급 (blank strings are ignored)."""
    if value is None:
        return None
    if isinstance(value, str):
        if _blank(value):
            return None
        value = value.strip()
    return column == value


def client_vat_is(vat: str | None) -> ColumnElement[bool] | None:
    return field_equals(Client.vat, vat)


def user_username_is(username: str | None) -> ColumnElement[bool] | None:
    return field_equals(User.username, username)


def user_is_active(active: bool | None) -> ColumnElement[bool] | None:
    return field_equals(User.is_active, active)


def personal_info_first_name_is(first_name: str | None) -> ColumnElement[bool] | None:
    return field_equals(PersonalInfo.first_name, first_name)


def personal_info_last_name_is(last_name: str | None) -> ColumnElement[bool] | None:
    return field_equals(PersonalInfo.last_name, last_name)


def personal_info_email_is(email: str | None) -> ColumnElement[bool] | None:
    return field_equals(PersonalInfo.email, email)


def personal_info_phone_is(phone: str | None) -> ColumnElement[bool] | None:
    return field_equals(PersonalInfo.phone, phone)


def build_conditions(filters: ClientFilters) -> list[ColumnElement[bool]]:
    """필터 객체에서 존재하는 조건만 모읍니다.

    Collect the conditions for every filter value that is present.

    Args:
        filters: 고객 필터 (Client filter criteria)

    Returns:
        list: 적용할 조건 목록, 비어 있으면 전체 조회 (Empty means no filtering)
    """
    candidates: list[ColumnElement[bool] | None] = [
        string_field_like(Client.uuid, filters.uuid),
        client_vat_is(filters.vat),
        user_username_is(filters.username),
        personal_info_first_name_is(filters.first_name),
        personal_info_last_name_is(filters.last_name),
        personal_info_email_is(filters.email),
        personal_info_phone_is(filters.phone),
        user_is_active(filters.active),
    ]
    return [c for c in candidates if c is not None]


def combine(conditions: list[ColumnElement[bool]]) -> ColumnElement[bool]:
    """조건들을 AND로 결합합니다. 조건이 없으면 항상 참."""
    if not conditions:
        return true()
    return and_(*conditions)
