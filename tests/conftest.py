"""Pytest configuration and fixtures for neo-identity tests."""

import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from neo_identity.config.options import IdentityOptions
from neo_identity.features.passwords.services import BcryptPasswordHasher
from neo_identity.features.users.entities import IdentityUser
from neo_identity.features.roles.entities import IdentityRole
from neo_identity.infrastructure import IdentityServiceFactory


VALID_PASSWORD = "Passw0rd!"


class FakeClock:
    """Controllable clock for lockout tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
def mock_database_repository():
    """Mock asyncpg pool for repository tests."""
    mock_db = AsyncMock()
    mock_db.fetchrow = AsyncMock()
    mock_db.fetch = AsyncMock()
    mock_db.execute = AsyncMock(return_value="INSERT 0 1")

    conn = AsyncMock()
    conn.execute = AsyncMock(return_value="UPDATE 1")
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=None)
    transaction.__aexit__ = AsyncMock(return_value=False)
    conn.transaction = MagicMock(return_value=transaction)

    acquire = MagicMock()
    acquire.__aenter__ = AsyncMock(return_value=conn)
    acquire.__aexit__ = AsyncMock(return_value=False)
    mock_db.acquire = MagicMock(return_value=acquire)
    mock_db.connection = conn
    return mock_db


@pytest.fixture
def fake_clock():
    """Clock frozen at a fixed instant."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def identity_options():
    """Default identity options."""
    return IdentityOptions()


@pytest.fixture
def password_hasher():
    """Fast bcrypt hasher."""
    return BcryptPasswordHasher(work_factor=4)


@pytest.fixture
def services(identity_options, password_hasher, fake_clock):
    """In-memory identity services."""
    factory = IdentityServiceFactory(
        options=identity_options,
        password_hasher=password_hasher,
        clock=fake_clock,
    )
    return factory.create_in_memory()


@pytest.fixture
def user_manager(services):
    return services.user_manager


@pytest.fixture
def role_manager(services):
    return services.role_manager


@pytest.fixture
def principal_factory(services):
    return services.principal_factory


@pytest.fixture
def sign_in_manager(services):
    return services.sign_in_manager


@pytest.fixture
def sample_user():
    """Unsaved sample user."""
    return IdentityUser(user_name="alice", email="alice@contoso.com")


@pytest_asyncio.fixture
async def created_user(user_manager, sample_user):
    """Sample user stored with VALID_PASSWORD."""
    result = await user_manager.create(sample_user, VALID_PASSWORD)
    assert result.succeeded
    return sample_user


@pytest_asyncio.fixture
async def created_role(role_manager):
    """Stored sample role."""
    role = IdentityRole(name="Administrator")
    result = await role_manager.create(role)
    assert result.succeeded
    return role
