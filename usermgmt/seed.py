"""초기 데이터 시드 스크립트 — 테이블 생성 및 관리자 계정 생성.

Seed script — Creates tables and the admin account for local runs.
The running application seeds the admin itself on startup; this script
is for preparing a database without starting the server.

Usage:
    python -m usermgmt.seed

Creates:
    - users 테이블 (users table, if missing)
    - 1개 관리자 계정: ADMIN_USERNAME / ADMIN_PASSWORD (1 ADMIN user)
"""

import asyncio
import logging

from usermgmt.database import Base, async_session, engine
from usermgmt.logging_config import setup_logging
from usermgmt.models import User  # noqa: F401  (메타데이터 등록 — registers the table)
from usermgmt.services.auth_service import auth_service

logger = logging.getLogger(__name__)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database. Re-running replaces the admin account.
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        admin: User = await auth_service.seed_admin(db)
        await db.commit()

    logger.info("Seed complete: admin=%s", admin.username)
    await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
