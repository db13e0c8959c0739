"""고객 서비스 단위 테스트.

ClientService tests run directly against the session — uniqueness checks,
SUPER_ADMIN guard, partial update, lookups and delete.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import PersonalInfo
from app.models.user import Role, User
from app.schemas.client import ClientCreate, ClientUpdate, PersonalInfoUpdate
from app.services.client_service import client_service
from app.utils.exceptions import BadRequestError, DuplicateError, ForbiddenError, NotFoundError
from app.utils.password import verify_password
from tests.conftest import client_payload


def _create(n: int, **overrides) -> ClientCreate:
    return ClientCreate.model_validate(client_payload(n, **overrides))


class TestCreateClient:
    """고객 생성 테스트."""

    async def test_create_client(self, db: AsyncSession):
        """사용자 -> 고객 -> 개인정보가 함께 생성된다."""
        result = await client_service.create_client(db, _create(1))

        assert result.id is not None
        assert result.vat == "EL000000001"
        assert result.user.username == "client1"
        assert result.user.role == Role.CLIENT
        assert result.personal_info is not None
        assert result.personal_info.phone == "6900000001"
        assert len(result.uuid) == 36
        assert result.uuid != result.user.uuid

    async def test_password_is_hashed(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        user = (await db.execute(select(User).where(User.username == "client1"))).scalar_one()
        assert user.password_hash != "secret-pass-1"
        assert verify_password("secret-pass-1", user.password_hash)

    async def test_duplicate_username(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        with pytest.raises(DuplicateError) as exc:
            await client_service.create_client(db, _create(2, user={"username": "client1"}))
        assert exc.value.status_code == 409
        assert exc.value.code == "UserAlreadyExists"

    async def test_duplicate_user_email(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        with pytest.raises(DuplicateError):
            await client_service.create_client(db, _create(2, user={"email": "client1@example.com"}))

    async def test_duplicate_vat(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        with pytest.raises(DuplicateError) as exc:
            await client_service.create_client(db, _create(2, vat="EL000000001"))
        assert exc.value.code == "ClientAlreadyExists"

    async def test_duplicate_phone(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        with pytest.raises(DuplicateError) as exc:
            await client_service.create_client(db, _create(2, personal_info={"phone": "6900000001"}))
        assert exc.value.code == "PersonalInfoAlreadyExists"

    async def test_duplicate_personal_email(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        with pytest.raises(DuplicateError):
            await client_service.create_client(
                db, _create(2, personal_info={"email": "contact1@example.com"})
            )

    async def test_missing_vat_and_phone_allowed_twice(self, db: AsyncSession):
        """VAT/전화번호가 없는 고객은 여러 명 생성 가능."""
        await client_service.create_client(db, _create(1, vat=None, personal_info={"phone": None, "email": None}))
        result = await client_service.create_client(
            db, _create(2, vat=None, personal_info={"phone": None, "email": None})
        )
        assert result.vat is None

    async def test_super_admin_requires_authentication(self, db: AsyncSession):
        with pytest.raises(ForbiddenError) as exc:
            await client_service.create_client(db, _create(1, user={"role": "SUPER_ADMIN"}), caller=None)
        assert exc.value.status_code == 403
        assert exc.value.code == "UserNotAuthorized"
        assert "Authentication required" in exc.value.detail

    async def test_super_admin_requires_super_admin_caller(self, db: AsyncSession, admin_user: User):
        with pytest.raises(ForbiddenError) as exc:
            await client_service.create_client(db, _create(1, user={"role": "SUPER_ADMIN"}), caller=admin_user)
        assert "Only SUPER_ADMIN" in exc.value.detail

    async def test_super_admin_created_by_super_admin(self, db: AsyncSession, super_admin_user: User):
        result = await client_service.create_client(
            db, _create(1, user={"role": "SUPER_ADMIN"}), caller=super_admin_user
        )
        assert result.user.role == Role.SUPER_ADMIN

    async def test_uniqueness_checked_before_role(self, db: AsyncSession):
        """중복 검사가 권한 검사보다 먼저 수행된다."""
        await client_service.create_client(db, _create(1))
        with pytest.raises(DuplicateError):
            await client_service.create_client(
                db, _create(2, user={"username": "client1", "role": "SUPER_ADMIN"})
            )


class TestUpdateClient:
    """고객 수정 테스트."""

    async def test_update_vat(self, db: AsyncSession):
        created = await client_service.create_client(db, _create(1))
        updated = await client_service.update_client(db, created.id, ClientUpdate(vat="EL999999999"))
        assert updated.vat == "EL999999999"

    async def test_update_same_vat_succeeds(self, db: AsyncSession):
        created = await client_service.create_client(db, _create(1))
        updated = await client_service.update_client(db, created.id, ClientUpdate(vat=created.vat))
        assert updated.vat == created.vat

    async def test_update_vat_collision(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        second = await client_service.create_client(db, _create(2))
        with pytest.raises(DuplicateError):
            await client_service.update_client(db, second.id, ClientUpdate(vat="EL000000001"))

    async def test_partial_update_keeps_other_fields(self, db: AsyncSession):
        created = await client_service.create_client(db, _create(1))
        updated = await client_service.update_client(
            db, created.id, ClientUpdate(personal_info=PersonalInfoUpdate(city="Patras"))
        )
        assert updated.personal_info.city == "Patras"
        assert updated.personal_info.first_name == "First1"
        assert updated.vat == created.vat

    async def test_update_phone_collision(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        second = await client_service.create_client(db, _create(2))
        with pytest.raises(DuplicateError):
            await client_service.update_client(
                db, second.id, ClientUpdate(personal_info=PersonalInfoUpdate(phone="6900000001"))
            )

    async def test_update_own_phone_succeeds(self, db: AsyncSession):
        created = await client_service.create_client(db, _create(1))
        updated = await client_service.update_client(
            db, created.id, ClientUpdate(personal_info=PersonalInfoUpdate(phone="6900000001"))
        )
        assert updated.personal_info.phone == "6900000001"

    async def test_deactivate_linked_user(self, db: AsyncSession):
        created = await client_service.create_client(db, _create(1))
        updated = await client_service.update_client(db, created.id, ClientUpdate(is_active=False))
        assert updated.user.is_active is False

    async def test_update_personal_email_collision(self, db: AsyncSession):
        await client_service.create_client(db, _create(1))
        second = await client_service.create_client(db, _create(2))
        with pytest.raises(DuplicateError) as exc:
            await client_service.update_client(
                db, second.id, ClientUpdate(personal_info=PersonalInfoUpdate(email="contact1@example.com"))
            )
        assert exc.value.code == "PersonalInfoAlreadyExists"

    async def test_explicit_null_vat_clears_it(self, db: AsyncSession):
        created = await client_service.create_client(db, _create(1))
        updated = await client_service.update_client(
            db, created.id, ClientUpdate.model_validate({"vat": None, "personal_info": {"city": "Volos"}})
        )
        assert updated.vat is None
        assert updated.personal_info.city == "Volos"

    async def test_adding_personal_info_requires_names(self, db: AsyncSession):
        """개인정보가 없는 고객에 추가할 때 이름/성이 필요하다."""
        created = await client_service.create_client(db, _create(1))
        info = (await db.execute(select(PersonalInfo))).scalar_one()
        await db.delete(info)
        await db.flush()

        with pytest.raises(BadRequestError) as exc:
            await client_service.update_client(
                db, created.id, ClientUpdate(personal_info=PersonalInfoUpdate(city="Volos"))
            )
        assert exc.value.code == "PersonalInfoInvalidArgument"

        updated = await client_service.update_client(
            db,
            created.id,
            ClientUpdate(personal_info=PersonalInfoUpdate(first_name="Maria", last_name="Ioannou")),
        )
        assert updated.personal_info.last_name == "Ioannou"
        assert updated.personal_info.phone is None

    async def test_update_missing_client(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await client_service.update_client(db, 999, ClientUpdate(vat="X"))


class TestReadAndDelete:
    """고객 조회/삭제 테스트."""

    async def test_get_by_id_uuid_username(self, db: AsyncSession):
        created = await client_service.create_client(db, _create(1))

        assert (await client_service.get_client(db, created.id)).id == created.id
        assert (await client_service.get_client_by_uuid(db, created.uuid)).id == created.id
        assert (await client_service.get_client_by_username(db, "client1")).id == created.id

    async def test_get_missing(self, db: AsyncSession):
        with pytest.raises(NotFoundError) as exc:
            await client_service.get_client(db, 12345)
        assert exc.value.detail == "Client with id: 12345 not found"
        assert exc.value.code == "ClientNotFound"

        with pytest.raises(NotFoundError):
            await client_service.get_client_by_uuid(db, "nope")
        with pytest.raises(NotFoundError):
            await client_service.get_client_by_username(db, "ghost")

    async def test_delete_removes_client_and_personal_info(self, db: AsyncSession):
        created = await client_service.create_client(db, _create(1))
        await client_service.delete_client(db, created.id)

        with pytest.raises(NotFoundError):
            await client_service.get_client(db, created.id)
        infos = (await db.execute(select(PersonalInfo))).scalars().all()
        assert infos == []
        # 사용자 계정은 유지 — the user account is kept
        user = (await db.execute(select(User).where(User.username == "client1"))).scalar_one_or_none()
        assert user is not None

    async def test_delete_missing(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await client_service.delete_client(db, 404)


class TestSorting:
    async def test_invalid_sort_field(self, db: AsyncSession):
        with pytest.raises(BadRequestError) as exc:
            await client_service.list_clients_sorted(db, 1, 10, "password_hash", "asc")
        assert exc.value.status_code == 400

    async def test_invalid_sort_direction(self, db: AsyncSession):
        with pytest.raises(BadRequestError):
            await client_service.list_clients_sorted(db, 1, 10, "id", "sideways")

    async def test_page_size_bounds(self, db: AsyncSession):
        with pytest.raises(BadRequestError):
            await client_service.list_clients(db, page=1, size=0)
        with pytest.raises(BadRequestError):
            await client_service.list_clients(db, page=1, size=10_000)
        with pytest.raises(BadRequestError):
            await client_service.list_clients(db, page=0, size=10)
