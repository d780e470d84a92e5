"""
Pytest configuration and fixtures for SEO Meta Auditor tests
"""

import os
import sys
from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.future import select
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Import Base first, before importing the app
from meta_auditor.database import Base, get_db
from meta_auditor.models.post_type import PostType
from meta_auditor.models.user import Role, User
from utils.mocks import DIRECTORY_URL, FakePluginHost

# In-memory SQLite shared by every session of a test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=StaticPool,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

# Now import and patch the app's database components
import meta_auditor.database as database_module  # noqa: E402
from main import app  # noqa: E402

database_module.engine = test_engine
database_module.AsyncSessionLocal = TestSessionLocal


def override_get_db():
    """Override database dependency for testing"""

    async def _override():
        async with TestSessionLocal() as session:
            yield session

    return _override


app.dependency_overrides[get_db] = override_get_db()


@pytest.fixture(scope="function")
async def setup_test_database():
    """
    Create a fresh database for each test function that needs it.
    Seeds the host roles and the registered post types.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        for name in ("user", "editor", "manager", "admin", "superadmin"):
            session.add(Role(name=name, permissions=[]))

        session.add_all(
            [
                PostType(name="page", label="Pages", public=True),
                PostType(name="post", label="Posts", public=True),
                PostType(name="product", label="Products", public=True),
                PostType(name="revision", label="Revisions", public=False),
            ]
        )
        await session.commit()

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def test_db(setup_test_database) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests that need it."""
    async with TestSessionLocal() as session:
        yield session


async def _create_user(db: AsyncSession, username: str, role_name: str) -> User:
    result = await db.execute(select(Role).where(Role.name == role_name))
    role = result.scalars().first()

    user = User(username=username, email=f"{username}@example.com", role_id=role.id)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
async def test_editor(test_db: AsyncSession) -> User:
    """User without manage_options"""
    return await _create_user(test_db, "testeditor", "editor")


@pytest.fixture
async def test_manager(test_db: AsyncSession) -> User:
    """User with manage_options but not install_plugins"""
    return await _create_user(test_db, "testmanager", "manager")


@pytest.fixture
async def test_admin(test_db: AsyncSession) -> User:
    """User with manage_options and install_plugins"""
    return await _create_user(test_db, "testadmin", "admin")


def auth_headers_for(user: User) -> dict:
    """Generate authentication headers for a user"""
    from meta_auditor.auth import create_access_token

    access_token = create_access_token(data={"sub": user.email}, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def manager_auth_headers(test_manager: User) -> dict:
    return auth_headers_for(test_manager)


@pytest.fixture
def admin_auth_headers(test_admin: User) -> dict:
    return auth_headers_for(test_admin)


@pytest.fixture
def editor_auth_headers(test_editor: User) -> dict:
    return auth_headers_for(test_editor)


@pytest.fixture
def settings_store(tmp_path):
    """Option storage in a temporary file, wired into the app"""
    from meta_auditor.dependencies import get_settings_store
    from meta_auditor.services.settings_store import JsonFileSettingsStore

    store = JsonFileSettingsStore(tmp_path / "site_options.json")
    app.dependency_overrides[get_settings_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_settings_store, None)


@pytest.fixture
def plugin_host() -> FakePluginHost:
    return FakePluginHost()


@pytest.fixture
def plugin_manager(tmp_path, plugin_host: FakePluginHost):
    """Plugin manager with temporary storage and a fake download server, wired into the app"""
    from meta_auditor.dependencies import get_plugin_directory, get_plugin_manager
    from meta_auditor.plugins.directory import PluginDirectory
    from meta_auditor.plugins.manager import PluginManager
    from meta_auditor.plugins.registry import PluginRegistry

    manager = PluginManager(
        registry=PluginRegistry(),
        config_path=tmp_path / "plugins_config.json",
        plugins_dir=tmp_path / "plugins",
        transport=plugin_host.transport,
    )
    directory = PluginDirectory(base_url=DIRECTORY_URL, transport=plugin_host.transport)

    app.dependency_overrides[get_plugin_manager] = lambda: manager
    app.dependency_overrides[get_plugin_directory] = lambda: directory
    yield manager
    app.dependency_overrides.pop(get_plugin_manager, None)
    app.dependency_overrides.pop(get_plugin_directory, None)


@pytest.fixture
async def async_client(settings_store, plugin_manager) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with isolated option and plugin storage"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
