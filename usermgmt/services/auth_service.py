"""인증 서비스 — 회원가입, 로그인, 관리자 계정 시드 비즈니스 로직.

Auth Service — Business logic for registration, credential authentication
and the admin account seeded on startup and removed on shutdown.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.config import settings
from usermgmt.constants import ExceptionCode
from usermgmt.models.user import Role, User
from usermgmt.repositories.user_repository import user_repository
from usermgmt.schemas.auth import AuthenticationRequest, AuthenticationResponse
from usermgmt.utils.exceptions import DuplicateNameError, UnauthorizedError
from usermgmt.utils.jwt import create_access_token
from usermgmt.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    """

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        """JWT 토큰 페이로드를 생성합니다.

        Build the JWT token payload from user data.

        Args:
            user: 사용자 모델 (User model instance)

        Returns:
            dict[str, str]: JWT 페이로드 딕셔너리 (JWT payload dictionary)
        """
        return {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role,
        }

    def _issue_token(self, user: User) -> AuthenticationResponse:
        return AuthenticationResponse(token=create_access_token(self._build_jwt_payload(user)))

    async def register(
        self,
        db: AsyncSession,
        data: AuthenticationRequest,
    ) -> AuthenticationResponse:
        """회원가입을 처리합니다.

        Create a USER account and issue an access token.
        A role supplied in the request is ignored.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Registration request data)

        Returns:
            AuthenticationResponse: 토큰 응답 (Token response)

        Raises:
            DuplicateNameError: 사용자명이 이미 존재할 때 (Username already taken)
        """
        logger.info("(request) register: username=%s", data.username)
        if await user_repository.exists(db, {"username": data.username}):
            raise DuplicateNameError(data.username)

        try:
            user: User = await user_repository.create(db, {
                "username": data.username,
                "password": hash_password(data.password),
                "email": data.email,
                "phone": data.phone,
                "role": Role.USER.value,
            })
        except IntegrityError:
            # 동시 가입 요청이 먼저 저장된 경우 (Lost a race on the unique username)
            await db.rollback()
            raise DuplicateNameError(data.username)
        logger.info("User registered: id=%s", user.id)
        return self._issue_token(user)

    async def authenticate(
        self,
        db: AsyncSession,
        data: AuthenticationRequest,
    ) -> AuthenticationResponse:
        """사용자명/비밀번호로 로그인을 처리합니다.

        Verify credentials and issue an access token.

        Raises:
            UnauthorizedError: 사용자명 또는 비밀번호 불일치 (Bad credentials)
        """
        logger.info("(request) authenticate: username=%s", data.username)
        user: User | None = await user_repository.get_by_username(db, data.username)
        if user is None or not verify_password(data.password, user.password):
            logger.warning("Authentication failed for username=%s", data.username)
            raise UnauthorizedError(ExceptionCode.BAD_CREDENTIALS)
        return self._issue_token(user)

    async def seed_admin(self, db: AsyncSession) -> User:
        """관리자 계정을 새로 생성합니다 (기존 계정은 교체).

        Replace any existing admin account with a fresh ADMIN user using
        the configured credentials. The caller commits.
        """
        removed: int = await user_repository.delete_by_username(db, settings.ADMIN_USERNAME)
        if removed:
            logger.info("Removed stale admin account: %s", settings.ADMIN_USERNAME)

        admin: User = await user_repository.create(db, {
            "username": settings.ADMIN_USERNAME,
            "password": hash_password(settings.ADMIN_PASSWORD),
            "role": Role.ADMIN.value,
        })
        logger.info("Admin account seeded: username=%s id=%s", admin.username, admin.id)
        return admin

    async def remove_admin(self, db: AsyncSession) -> int:
        """시드된 관리자 계정을 삭제합니다 (Delete the seeded admin account)."""
        removed: int = await user_repository.delete_by_username(db, settings.ADMIN_USERNAME)
        logger.info("Admin account removed: username=%s rows=%s", settings.ADMIN_USERNAME, removed)
        return removed


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
