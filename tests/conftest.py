"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh database; the schema is created from ORM metadata.
The application lifespan does not run under ASGITransport, so no admin is
seeded automatically; tests create the users they need.
"""

import os

# 앱 임포트 전에 설정 — Settings must be in place before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SEED_ADMIN_ON_STARTUP", "false")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from usermgmt.database import Base, get_db  # noqa: E402
from usermgmt.main import app  # noqa: E402
from usermgmt.models import Role, User  # noqa: E402
from usermgmt.utils.jwt import create_access_token  # noqa: E402
from usermgmt.utils.password import hash_password  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_PASSWORD = "Admin@123"
USER_PASSWORD = "User@123"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 새 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    # 500 응답 검증을 위해 앱 예외를 다시 던지지 않음
    # (Return 500 responses instead of re-raising unhandled app errors)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_user(
    db: AsyncSession,
    username: str,
    password: str = USER_PASSWORD,
    role: Role = Role.USER,
    email: str | None = None,
    phone: str | None = None,
) -> User:
    """테스트 사용자를 직접 DB에 생성합니다."""
    user = User(
        username=username,
        password=hash_password(password),
        email=email,
        phone=phone,
        role=role.value,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """관리자 사용자를 생성합니다."""
    return await create_user(db, "admin", ADMIN_PASSWORD, Role.ADMIN, email="admin@test.com")


@pytest_asyncio.fixture
async def normal_user(db: AsyncSession) -> User:
    """일반 사용자를 생성합니다."""
    return await create_user(
        db, "alice01", USER_PASSWORD, Role.USER,
        email="alice@example.com", phone="0901234567",
    )


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
    })


@pytest.fixture
def admin_token(admin_user: User) -> str:
    return make_token(admin_user)


@pytest.fixture
def user_token(normal_user: User) -> str:
    return make_token(normal_user)


def auth_header(token: str, language: str | None = None) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {token}"}
    if language is not None:
        headers["Accept-Language"] = language
    return headers
