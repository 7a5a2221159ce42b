"""인증 라우터 — 회원가입 및 로그인.

Auth Router — Self-registration and credential authentication.
Both endpoints are public and return a JWT access token in the envelope.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.api.deps import get_language
from usermgmt.constants import MessageCode
from usermgmt.database import get_db
from usermgmt.schemas.auth import (
    AuthenticationRequest,
    AuthenticationResponse,
    RegisterRequest,
)
from usermgmt.schemas.common import ResponseGeneral
from usermgmt.services.auth_service import auth_service
from usermgmt.services.message_service import message_service

router: APIRouter = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=ResponseGeneral[AuthenticationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    language: Annotated[str, Depends(get_language)],
) -> ResponseGeneral[AuthenticationResponse]:
    """회원가입 — USER 계정 생성 후 토큰 발급.

    Register a USER account and return an access token.
    """
    result: AuthenticationResponse = await auth_service.register(db, data)
    await db.commit()
    return ResponseGeneral.of_created(
        message_service.get_message(MessageCode.REGISTER, language), result
    )


@router.post(
    "/authenticate",
    response_model=ResponseGeneral[AuthenticationResponse],
)
async def authenticate(
    data: AuthenticationRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    language: Annotated[str, Depends(get_language)],
) -> ResponseGeneral[AuthenticationResponse]:
    """로그인 — 사용자명/비밀번호 검증 후 토큰 발급.

    Verify username and password and return an access token.
    """
    result: AuthenticationResponse = await auth_service.authenticate(db, data)
    return ResponseGeneral.of_success(
        message_service.get_message(MessageCode.AUTHENTICATE, language), result
    )
