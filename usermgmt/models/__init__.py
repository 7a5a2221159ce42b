"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations.

Modules:
    user: 사용자 및 역할 (User and Role)
"""

from usermgmt.models.user import Role, User

__all__ = ["Role", "User"]
