"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definitions.

Tables:
    - users: 사용자 계정 (User accounts, username unique)
"""

import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from usermgmt.database import Base


class Role(str, enum.Enum):
    """사용자 역할 (User role).

    USER = 일반 사용자, 회원가입 기본값 (Regular user, registration default)
    ADMIN = 관리자, 시작 시 시드됨 (Administrator, seeded on startup)
    """

    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    A flat record; the only invariant is a globally unique username.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        username: 로그인 아이디 (Login username, unique)
        password: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        email: 이메일 (Email address, optional)
        phone: 전화번호 (Phone number, optional)
        role: 역할 (Role value, see Role)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 아이디 — Login username (전역 고유, globally unique)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # 역할 — Role value stored as plain string ("USER" | "ADMIN")
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.USER.value)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
