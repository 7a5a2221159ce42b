"""사용자 레포지토리 — 사용자 조회, 검색, 페이지네이션 쿼리.

User Repository — Lookup, keyword search and paginated listing for users.
"""

from typing import Sequence

from sqlalchemy import Select, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.models.user import User
from usermgmt.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    def _ordered(self) -> Select:
        # 안정적인 페이지 순서 — Stable page order
        return select(User).order_by(User.created_at, User.id)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> User | None:
        """사용자명으로 사용자를 조회합니다.

        Retrieve a user by exact username.
        """
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def find_all(
        self,
        db: AsyncSession,
        page: int,
        size: int,
    ) -> tuple[Sequence[User], int]:
        """전체 사용자 목록을 페이지 단위로 조회합니다.

        Retrieve one page of all users and the total user count.
        """
        return await self.get_paginated(db, self._ordered(), page, size)

    async def search(
        self,
        db: AsyncSession,
        keyword: str | None,
        page: int,
        size: int,
    ) -> tuple[Sequence[User], int]:
        """키워드로 사용자를 검색합니다.

        Search users whose username, phone, email or role contains the
        keyword, case-insensitively. A None keyword matches every user.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            keyword: 검색어, None이면 전체 조회 (Search keyword; None lists all)
            page: 페이지 번호, 0부터 시작 (Page number, 0-based)
            size: 페이지 크기 (Page size)

        Returns:
            tuple[Sequence[User], int]: (현재 페이지 사용자, 전체 일치 건수)
                (Users on the page, total match count)
        """
        query: Select = self._ordered()
        if keyword is not None:
            # % 와 _ 는 와일드카드가 아닌 문자로 검색 (autoescape treats % and _ literally)
            query = query.where(
                or_(
                    User.username.icontains(keyword, autoescape=True),
                    User.phone.icontains(keyword, autoescape=True),
                    User.email.icontains(keyword, autoescape=True),
                    User.role.icontains(keyword, autoescape=True),
                )
            )
        return await self.get_paginated(db, query, page, size)

    async def delete_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> int:
        """사용자명으로 사용자를 삭제합니다 (Delete users by username).

        Returns:
            int: 삭제된 행 수 (Number of deleted rows)
        """
        result = await db.execute(delete(User).where(User.username == username))
        await db.flush()
        return result.rowcount or 0


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
