"""Login, session restore and logout against a real database."""

import pytest
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.cache import is_session_blacklisted
from src.hotel.core.exceptions import AuthenticationError, ConflictError
from src.hotel.core.realtime import ChangeEvent, ChangeNotifier
from src.hotel.core.security import hash_token
from src.hotel.models import User, UserRole
from src.hotel.services import AuthService
from tests.factories import DEFAULT_TEST_PASSWORD

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestLogin:
    async def test_login_opens_session(self, auth_service: AuthService, guest: User):
        result = await auth_service.login("bob", DEFAULT_TEST_PASSWORD)

        assert result.user.id == guest.id
        assert result.token
        assert result.user.last_login_at is not None

    async def test_username_is_case_insensitive(self, auth_service: AuthService, guest: User):
        result = await auth_service.login("BoB", DEFAULT_TEST_PASSWORD)
        assert result.user.id == guest.id

    @pytest.mark.parametrize(
        ("username", "password"),
        [("bob", "wrong-password"), ("nobody", DEFAULT_TEST_PASSWORD)],
    )
    async def test_bad_credentials(
        self, auth_service: AuthService, guest: User, username: str, password: str
    ):
        with pytest.raises(AuthenticationError, match="Invalid username or password"):
            await auth_service.login(username, password)

    async def test_inactive_user_cannot_log_in(self, auth_service: AuthService, make_user):
        await make_user("inactive", username="sleepy")

        with pytest.raises(AuthenticationError):
            await auth_service.login("sleepy", DEFAULT_TEST_PASSWORD)


class TestSessions:
    async def test_restore_session(self, auth_service: AuthService, guest: User):
        result = await auth_service.login("bob", DEFAULT_TEST_PASSWORD)

        user = await auth_service.restore_session(result.token)

        assert user.id == guest.id

    async def test_logout_revokes_session(self, auth_service: AuthService, guest: User):
        result = await auth_service.login("bob", DEFAULT_TEST_PASSWORD)

        assert await auth_service.logout(result.token) is True

        with pytest.raises(AuthenticationError):
            await auth_service.restore_session(result.token)

    async def test_logout_only_ends_that_session(self, auth_service: AuthService, guest: User):
        phone = await auth_service.login("bob", DEFAULT_TEST_PASSWORD)
        laptop = await auth_service.login("bob", DEFAULT_TEST_PASSWORD)

        await auth_service.logout(phone.token)

        assert (await auth_service.restore_session(laptop.token)).id == guest.id

    async def test_logout_announces_the_revoked_session(
        self, auth_service: AuthService, guest: User, notifier: ChangeNotifier
    ):
        result = await auth_service.login("bob", DEFAULT_TEST_PASSWORD)
        events: list[ChangeEvent] = []

        async def record(event: ChangeEvent) -> None:
            events.append(event)

        notifier.subscribe("user_sessions", record, {"user_id": guest.id})
        await auth_service.logout(result.token)

        assert [e.row["token_hash"] for e in events] == [hash_token(result.token)]

    async def test_logout_unknown_token(self, auth_service: AuthService):
        assert await auth_service.logout("never-issued") is False

    async def test_logout_blacklists_in_redis(
        self, auth_service: AuthService, guest: User, mock_redis: Redis
    ):
        result = await auth_service.login("bob", DEFAULT_TEST_PASSWORD)

        await auth_service.logout(result.token)

        assert await is_session_blacklisted(hash_token(result.token)) is True

    async def test_garbage_token(self, auth_service: AuthService):
        with pytest.raises(AuthenticationError):
            await auth_service.restore_session("not-a-token")

    async def test_deactivated_user_loses_session(
        self, auth_service: AuthService, db_session: AsyncSession, guest: User
    ):
        result = await auth_service.login("bob", DEFAULT_TEST_PASSWORD)
        guest.is_active = False
        db_session.add(guest)
        await db_session.commit()

        with pytest.raises(AuthenticationError):
            await auth_service.restore_session(result.token)


class TestRegister:
    async def test_register_creates_guest(self, auth_service: AuthService):
        user = await auth_service.register("Carol", " Carol ", DEFAULT_TEST_PASSWORD)

        assert user.username == "carol"
        assert user.display_name == "Carol"
        assert user.role == UserRole.GUEST.value
        assert (await auth_service.login("carol", DEFAULT_TEST_PASSWORD)).user.id == user.id

    async def test_duplicate_username(self, auth_service: AuthService, guest: User):
        with pytest.raises(ConflictError):
            await auth_service.register("BOB", "Another Bob", DEFAULT_TEST_PASSWORD)

    async def test_ensure_admin_is_idempotent(self, auth_service: AuthService):
        created = await auth_service.ensure_admin("admin", DEFAULT_TEST_PASSWORD, "Admin")

        assert created is not None and created.role == "admin"
        assert await auth_service.ensure_admin("admin", DEFAULT_TEST_PASSWORD, "Admin") is None
