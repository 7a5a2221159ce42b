"""사용자 라우터 — 사용자 CRUD, 목록, 키워드 검색 엔드포인트.

User Router — CRUD, paginated listing and keyword search endpoints.
Every response is wrapped in the ResponseGeneral envelope with a message
localized from the Accept-Language header.

Endpoints:
    GET    /api/v1/users/search  — 키워드 검색 (Keyword search)
    GET    /api/v1/users/all     — 전체 목록 (List all)
    GET    /api/v1/users/{id}    — 상세 조회 (Detail)
    POST   /api/v1/users         — 생성, ADMIN (Create, admin only)
    PUT    /api/v1/users/{id}    — 수정, ADMIN (Update, admin only)
    DELETE /api/v1/users/{id}    — 삭제, ADMIN (Delete, admin only)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.api.deps import get_current_user, get_language, require_admin
from usermgmt.config import settings
from usermgmt.constants import MessageCode
from usermgmt.database import get_db
from usermgmt.models.user import User
from usermgmt.schemas.common import PageResponse, ResponseGeneral
from usermgmt.schemas.user import UserRequest, UserResponse, UserUpdate
from usermgmt.services.message_service import message_service
from usermgmt.services.user_service import user_service

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter(prefix="/api/v1/users", tags=["Users"])

# 페이지 파라미터 — Zero-based page and bounded page size
# OFFSET(page * size)이 64비트 정수 범위를 넘지 않도록 제한
# (Keeps the OFFSET within a signed 64-bit integer)
MAX_PAGE: int = (2**63 - 1) // settings.MAX_PAGE_SIZE
PageQuery = Annotated[
    int,
    Query(ge=0, le=MAX_PAGE, description="페이지 번호, 0부터 시작 (0-based page)"),
]
SizeQuery = Annotated[
    int,
    Query(ge=1, le=settings.MAX_PAGE_SIZE, description="페이지 크기 (Page size)"),
]


@router.get("/search", response_model=ResponseGeneral[PageResponse[UserResponse]])
async def search_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    language: Annotated[str, Depends(get_language)],
    keyword: Annotated[str | None, Query(description="검색어 (Search keyword)")] = None,
    size: SizeQuery = settings.DEFAULT_PAGE_SIZE,
    page: PageQuery = 0,
) -> ResponseGeneral[PageResponse[UserResponse]]:
    """키워드로 사용자를 검색합니다.

    Search users by keyword on username, phone, email or role.
    """
    result: PageResponse[UserResponse] = await user_service.get_user_by_search(
        db, keyword, size, page
    )
    return ResponseGeneral.of_success(
        message_service.get_message(MessageCode.LIST_USER, language), result
    )


@router.get("/all", response_model=ResponseGeneral[PageResponse[UserResponse]])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    language: Annotated[str, Depends(get_language)],
    size: SizeQuery = settings.DEFAULT_PAGE_SIZE,
    page: PageQuery = 0,
) -> ResponseGeneral[PageResponse[UserResponse]]:
    """전체 사용자 목록을 페이지 단위로 조회합니다.

    List all users, one page at a time.
    """
    result: PageResponse[UserResponse] = await user_service.get_all_user(db, size, page)
    return ResponseGeneral.of_success(
        message_service.get_message(MessageCode.LIST_USER, language), result
    )


@router.get("/{user_id}", response_model=ResponseGeneral[UserResponse])
async def get_user(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    language: Annotated[str, Depends(get_language)],
) -> ResponseGeneral[UserResponse]:
    """사용자 상세 정보를 조회합니다.

    Retrieve a user by id.
    """
    result: UserResponse = await user_service.get_by_id(db, user_id)
    return ResponseGeneral.of_success(
        message_service.get_message(MessageCode.GET_USER_BY_ID, language), result
    )


@router.post(
    "",
    response_model=ResponseGeneral[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    data: UserRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    language: Annotated[str, Depends(get_language)],
) -> ResponseGeneral[UserResponse]:
    """새 사용자를 생성합니다.

    Create a new user. Admin only.
    """
    result: UserResponse = await user_service.create(db, data)
    await db.commit()
    return ResponseGeneral.of_created(
        message_service.get_message(MessageCode.CREATE_USER, language), result
    )


@router.put("/{user_id}", response_model=ResponseGeneral[UserResponse])
async def update_user(
    user_id: str,
    data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    language: Annotated[str, Depends(get_language)],
) -> ResponseGeneral[UserResponse]:
    """사용자 정보를 수정합니다.

    Partially update a user. Admin only.
    """
    result: UserResponse = await user_service.update(db, user_id, data)
    await db.commit()
    return ResponseGeneral.of_success(
        message_service.get_message(MessageCode.UPDATE_USER, language), result
    )


@router.delete("/{user_id}", response_model=ResponseGeneral[None])
async def delete_user(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    language: Annotated[str, Depends(get_language)],
) -> ResponseGeneral[None]:
    """사용자를 삭제합니다.

    Delete a user by id. Admin only.

    Args:
        user_id: 삭제할 사용자 UUID (User UUID to delete)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 관리자 사용자 (Authenticated admin user)
        language: Accept-Language 헤더 값 (Accept-Language header value)

    Returns:
        ResponseGeneral[None]: data가 null인 봉투 (Envelope with null data)
    """
    await user_service.delete(db, user_id)
    await db.commit()
    logger.info("User deleted by %s: %s", current_user.username, user_id)
    return ResponseGeneral.of_success(
        message_service.get_message(MessageCode.DELETE_USER, language)
    )
