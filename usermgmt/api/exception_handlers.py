"""전역 예외 처리기 — 예외를 응답 봉투로 변환.

Global exception handlers mapping exceptions to the ResponseGeneral envelope.

Mapping:
    AppError               -> 자체 상태 코드, 지역화된 메시지 (Own status, localized code)
    RequestValidationError -> 400, exception.bad_request, data=[{field, message}]
    HTTPException          -> 자체 상태 코드, detail 메시지 (Own status, detail as message)
    Exception              -> 500, exception.generic (traceback logged)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from usermgmt.config import settings
from usermgmt.constants import LANGUAGE_HEADER, ExceptionCode
from usermgmt.schemas.common import ResponseGeneral
from usermgmt.services.message_service import message_service
from usermgmt.utils.exceptions import AppError

logger = logging.getLogger(__name__)


def _language(request: Request) -> str:
    return request.headers.get(LANGUAGE_HEADER) or settings.DEFAULT_LANGUAGE


def _envelope(
    status_code: int,
    message: str,
    data: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body: ResponseGeneral[Any] = ResponseGeneral.of(status_code, message, data)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """도메인 예외 처리 — Localize the exception code with its params."""
    message: str = message_service.get_message(exc.code, _language(request), exc.params)
    logger.info(
        "%s %s -> %s %s",
        request.method, request.url.path, exc.status_code, exc.code,
    )
    return _envelope(exc.status_code, message, headers=exc.headers)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """요청 검증 실패 처리 — Report each invalid field with its reason."""
    errors: list[dict[str, str]] = []
    for error in exc.errors():
        # loc의 첫 요소는 위치(body/query/path) — First loc item names the source
        loc: list[str] = [str(part) for part in error.get("loc", ())]
        field: str = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        errors.append({"field": field, "message": error.get("msg", "")})

    logger.info("%s %s -> 400 validation: %s", request.method, request.url.path, errors)
    message: str = message_service.get_message(ExceptionCode.BAD_REQUEST, _language(request))
    return _envelope(status.HTTP_400_BAD_REQUEST, message, errors)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """프레임워크 HTTP 예외 처리 (404 라우트 없음, 405 등).

    Framework-raised HTTP errors such as unknown routes or wrong methods.
    """
    if isinstance(exc, AppError):
        return await app_error_handler(request, exc)
    return _envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외 — Log the traceback and answer with a generic 500."""
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method, request.url.path, exc,
        exc_info=exc,
    )
    message: str = message_service.get_message(ExceptionCode.GENERIC, _language(request))
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def register_exception_handlers(app: FastAPI) -> None:
    """예외 처리기를 애플리케이션에 등록합니다.

    Register all exception handlers on the FastAPI application.
    """
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered")
