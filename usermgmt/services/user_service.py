"""사용자 서비스 — 사용자 CRUD 및 검색 비즈니스 로직.

User Service — Business logic for user CRUD, listing and keyword search.
Validates existence and uniqueness, delegates to the repository,
and maps User entities to UserResponse schemas.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.models.user import User
from usermgmt.repositories.user_repository import user_repository
from usermgmt.schemas.common import PageResponse
from usermgmt.schemas.user import UserRequest, UserResponse, UserUpdate
from usermgmt.utils.exceptions import DuplicateNameError, UserNotFoundError
from usermgmt.utils.password import hash_password

logger = logging.getLogger(__name__)


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.
    """

    def _to_response(self, user: User) -> UserResponse:
        """사용자 모델을 응답 스키마로 변환합니다.

        Convert a User model instance to a UserResponse schema.
        """
        return UserResponse(
            id=str(user.id),
            username=user.username,
            email=user.email,
            phone=user.phone,
            role=user.role,
        )

    def _to_page(self, users: Any, total: int) -> PageResponse[UserResponse]:
        return PageResponse.of([self._to_response(u) for u in users], total)

    def _parse_id(self, user_id: str) -> UUID:
        """문자열 ID를 UUID로 변환합니다. 형식 오류는 404로 처리.

        Parse a path id. A malformed id cannot name an existing user,
        so it is reported as not found.
        """
        try:
            return UUID(user_id)
        except (ValueError, AttributeError, TypeError):
            raise UserNotFoundError()

    async def _check_user_exist(self, db: AsyncSession, user_id: str) -> User:
        user: User | None = await user_repository.get_by_id(db, self._parse_id(user_id))
        if user is None:
            raise UserNotFoundError()
        return user

    async def get_by_id(self, db: AsyncSession, user_id: str) -> UserResponse:
        """ID로 사용자를 조회합니다.

        Retrieve a user by id.

        Raises:
            UserNotFoundError: 사용자를 찾을 수 없을 때 (Unknown or malformed id)
        """
        logger.info("(request) get_by_id: %s", user_id)
        user: User = await self._check_user_exist(db, user_id)
        return self._to_response(user)

    async def create(self, db: AsyncSession, request: UserRequest) -> UserResponse:
        """새 사용자를 생성합니다.

        Create a new user with a bcrypt-hashed password.

        Raises:
            DuplicateNameError: 같은 사용자명이 이미 존재할 때 (Username already taken)
        """
        logger.info("(request) create: username=%s role=%s", request.username, request.role.value)
        if await user_repository.exists(db, {"username": request.username}):
            raise DuplicateNameError(request.username)

        try:
            user: User = await user_repository.create(db, {
                "username": request.username,
                "password": hash_password(request.password),
                "email": request.email,
                "phone": request.phone,
                "role": request.role.value,
            })
        except IntegrityError:
            # 동시 요청이 먼저 같은 사용자명을 저장한 경우 (Lost a race on the unique username)
            await db.rollback()
            raise DuplicateNameError(request.username)
        logger.info("User created: id=%s", user.id)
        return self._to_response(user)

    async def update(
        self,
        db: AsyncSession,
        user_id: str,
        request: UserUpdate,
    ) -> UserResponse:
        """사용자 정보를 수정합니다 (부분 업데이트).

        Update the fields present in the request. A new password is re-hashed.

        Raises:
            UserNotFoundError: 사용자를 찾을 수 없을 때 (Unknown id)
            DuplicateNameError: 변경할 사용자명이 이미 존재할 때 (Username already taken)
        """
        logger.info("(request) update id: %s fields=%s", user_id, sorted(request.model_fields_set))
        user: User = await self._check_user_exist(db, user_id)

        update_data: dict[str, Any] = request.model_dump(exclude_unset=True)
        new_username: str | None = update_data.get("username")
        if new_username is not None and new_username != user.username:
            if await user_repository.exists(db, {"username": new_username}):
                raise DuplicateNameError(new_username)
        if update_data.get("password") is not None:
            update_data["password"] = hash_password(update_data["password"])
        if update_data.get("role") is not None:
            update_data["role"] = update_data["role"].value

        # username/password/role은 null로 지울 수 없음 (Required columns cannot be nulled)
        for field in ("username", "password", "role"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        try:
            updated: User | None = await user_repository.update(db, user.id, update_data)
        except IntegrityError:
            await db.rollback()
            raise DuplicateNameError(new_username)
        if updated is None:
            raise UserNotFoundError()
        return self._to_response(updated)

    async def delete(self, db: AsyncSession, user_id: str) -> None:
        """사용자를 삭제합니다.

        Delete a user by id.

        Raises:
            UserNotFoundError: 사용자를 찾을 수 없을 때 (Unknown id)
        """
        logger.info("(request) delete id: %s", user_id)
        user: User = await self._check_user_exist(db, user_id)
        await user_repository.delete(db, user.id)

    async def get_all_user(
        self,
        db: AsyncSession,
        size: int,
        page: int,
    ) -> PageResponse[UserResponse]:
        """전체 사용자 목록을 페이지 단위로 조회합니다.

        Retrieve a page of all users.
        """
        logger.info("(request) list_all_user size: %s, page: %s", size, page)
        users, total = await user_repository.find_all(db, page, size)
        return self._to_page(users, total)

    async def get_user_by_search(
        self,
        db: AsyncSession,
        keyword: str | None,
        size: int,
        page: int,
    ) -> PageResponse[UserResponse]:
        """키워드로 사용자를 검색합니다.

        Retrieve a page of users matching the keyword on username,
        phone, email or role. No keyword lists all users.
        """
        logger.info("(request) list_search_user keyword: %s, size: %s, page: %s", keyword, size, page)
        users, total = await user_repository.search(db, keyword, page, size)
        return self._to_page(users, total)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
