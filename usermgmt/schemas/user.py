"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
"""

from pydantic import BaseModel, Field, field_validator

from usermgmt.models.user import Role
from usermgmt.utils.password import check_password_length

# 컬럼 길이와 동일 — Same limits as the users table columns
EMAIL_MAX_LENGTH: int = 255
PHONE_MAX_LENGTH: int = 50


class UserRequest(BaseModel):
    """사용자 생성 요청 스키마 (관리자용).

    User creation request schema (admin-only operation).

    Attributes:
        username: 로그인 아이디 (Login username, unique)
        password: 비밀번호 (Plain text, will be bcrypt-hashed)
        email: 이메일 (Email address, optional)
        phone: 전화번호 (Phone number, optional)
        role: 역할 (Role, default USER)
    """

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)  # 평문, 서버에서 해싱 (Plain text, hashed server-side)
    email: str | None = Field(None, max_length=EMAIL_MAX_LENGTH)
    phone: str | None = Field(None, max_length=PHONE_MAX_LENGTH)
    role: Role = Role.USER

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_length(value)


class UserUpdate(BaseModel):
    """사용자 수정 요청 스키마 (부분 업데이트).

    User update request schema (partial update).
    Only provided fields are updated; omitted fields remain unchanged.
    """

    username: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=1)
    email: str | None = Field(None, max_length=EMAIL_MAX_LENGTH)
    phone: str | None = Field(None, max_length=PHONE_MAX_LENGTH)
    role: Role | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str | None) -> str | None:
        return value if value is None else check_password_length(value)


class UserResponse(BaseModel):
    """사용자 응답 스키마.

    User response schema. The password hash is never exposed.

    Attributes:
        id: 사용자 UUID (User unique identifier)
        username: 로그인 아이디 (Login username)
        email: 이메일 (Email, nullable)
        phone: 전화번호 (Phone, nullable)
        role: 역할 (Role value)
    """

    id: str  # 사용자 UUID 문자열 (User UUID as string)
    username: str
    email: str | None
    phone: str | None
    role: str
