"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 처리기, 라우터 등록.

FastAPI application entry point — Middleware, exception handler and
router registration. The lifespan seeds the admin account on startup and
removes it on shutdown.

Usage:
    uvicorn usermgmt.main:app --reload
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from usermgmt.api import auth, users
from usermgmt.api.deps import get_language
from usermgmt.api.exception_handlers import register_exception_handlers
from usermgmt.config import settings
from usermgmt.constants import MessageCode
from usermgmt.database import async_session
from usermgmt.logging_config import setup_logging
from usermgmt.middleware.axiom_logging import AxiomLoggingMiddleware
from usermgmt.schemas.common import ResponseGeneral
from usermgmt.services.auth_service import auth_service
from usermgmt.services.message_service import message_service

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """시작 시 관리자 계정 생성, 종료 시 삭제.

    Seed the admin account on startup and remove it on shutdown
    when SEED_ADMIN_ON_STARTUP is enabled.
    """
    if settings.SEED_ADMIN_ON_STARTUP:
        async with async_session() as db:
            await auth_service.seed_admin(db)
            await db.commit()
    logger.info("%s started", settings.APP_NAME)

    yield

    if settings.SEED_ADMIN_ON_STARTUP:
        async with async_session() as db:
            await auth_service.remove_admin(db)
            await db.commit()
    logger.info("%s stopped", settings.APP_NAME)


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
# (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", response_model=ResponseGeneral[dict[str, str]])
async def health_check(
    language: Annotated[str, Depends(get_language)],
) -> ResponseGeneral[dict[str, str]]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return ResponseGeneral.of_success(
        message_service.get_message(MessageCode.HEALTH, language), {"status": "ok"}
    )


app.include_router(auth.router)
app.include_router(users.router)
