"""FastAPI 의존성 주입 모듈 — 인증, 권한 검사, 언어 선택.

FastAPI dependency injection module — Authentication, authorization and
message language selection.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출, 없으면 401 (HTTPBearer extracts the token; missing -> 401)
    3. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    4. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)

Authorization Flow (require_admin):
    get_current_user로 인증 후 역할이 ADMIN이 아니면 403
    (Authenticated via get_current_user; non-ADMIN role -> 403)
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.config import settings
from usermgmt.constants import LANGUAGE_HEADER
from usermgmt.database import get_db
from usermgmt.models.user import Role, User
from usermgmt.repositories.user_repository import user_repository
from usermgmt.utils.exceptions import ForbiddenError, UnauthorizedError
from usermgmt.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — 헤더가 없어도 None을 반환하여 401로 처리
# (Extracts JWT token; returns None when absent so we answer 401 ourselves)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode JWT from the Authorization header and return the authenticated user.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        User: 인증된 사용자 ORM 인스턴스 (Authenticated user ORM instance)

    Raises:
        UnauthorizedError: 토큰 없음, 유효하지 않음, 만료, 또는 사용자 없음
            (Missing, invalid or expired token, or user no longer exists)
    """
    if credentials is None:
        raise UnauthorizedError()

    try:
        payload: dict = decode_token(credentials.credentials)
        if payload.get("type") != "access":
            raise UnauthorizedError()
        user_id: UUID = UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise UnauthorizedError()

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError()
    return user


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """ADMIN 역할만 허용하는 의존성 (Allow ADMIN role only, else 403)."""
    if current_user.role != Role.ADMIN.value:
        raise ForbiddenError()
    return current_user


async def get_language(
    accept_language: Annotated[str | None, Header(alias=LANGUAGE_HEADER)] = None,
) -> str:
    """Accept-Language 헤더 값을 반환합니다. 없으면 기본 언어.

    Return the raw Accept-Language header, or the default language.
    Parsing into a bundle name happens in the message service.
    """
    return accept_language or settings.DEFAULT_LANGUAGE
