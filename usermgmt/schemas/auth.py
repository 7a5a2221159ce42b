"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers registration, credential authentication and token issuance.
"""

import re

from pydantic import BaseModel, Field, field_validator

from usermgmt.schemas.user import EMAIL_MAX_LENGTH, PHONE_MAX_LENGTH
from usermgmt.utils.password import check_password_length

# 비밀번호 규칙 — 대문자 1개, 숫자 1개, 특수문자 1개 이상, 최소 6자
# Password rule: at least one uppercase letter, one digit, one special character, 6+ chars
PASSWORD_PATTERN: re.Pattern[str] = re.compile(
    r"^(?=.*[!@#$%^&*()\-_+=])(?=.*[A-Z])(?=.*[0-9]).{6,}$"
)
PASSWORD_RULE_MESSAGE: str = (
    "Password must contain at least 1 uppercase character, 1 number, "
    "1 special character and have at least 6 characters"
)


class AuthenticationRequest(BaseModel):
    """로그인 요청 스키마.

    Credentials for authentication. Only presence is checked here;
    registration applies the stricter RegisterRequest rules.

    Attributes:
        username: 로그인 아이디 (Login username)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    email: str | None = Field(None, max_length=EMAIL_MAX_LENGTH)
    phone: str | None = Field(None, max_length=PHONE_MAX_LENGTH)
    role: str | None = None  # 무시됨 (Accepted but ignored)


class RegisterRequest(AuthenticationRequest):
    """회원가입 요청 스키마.

    Self-registration request. Always creates a USER; a supplied role is ignored.

    Attributes:
        username: 6~15자, 공백 불가 (6 to 15 characters, not blank)
        password: PASSWORD_PATTERN 규칙 적용 (Must satisfy PASSWORD_PATTERN)
    """

    username: str = Field(..., min_length=6, max_length=15)
    password: str

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Username must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not PASSWORD_PATTERN.match(value):
            raise ValueError(PASSWORD_RULE_MESSAGE)
        return check_password_length(value)


class AuthenticationResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Returned after successful registration or authentication.

    Attributes:
        token: JWT 액세스 토큰 (Signed access token)
    """

    token: str
