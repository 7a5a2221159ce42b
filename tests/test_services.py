"""서비스 및 유틸리티 단위 테스트.

Service and utility unit tests — Message resolution, admin seeding,
password hashing and JWT helpers.
"""

import jwt
import pytest
from sqlalchemy import func, select

from tests.conftest import create_user
from usermgmt.config import settings
from usermgmt.constants import ExceptionCode, MessageCode
from usermgmt.models import Role, User
from usermgmt.services.auth_service import auth_service
from usermgmt.services.message_service import message_service, parse_language
from usermgmt.utils.exceptions import ConflictError, DuplicateNameError
from usermgmt.utils.jwt import create_access_token, decode_token
from usermgmt.utils.password import (
    PASSWORD_MAX_BYTES,
    check_password_length,
    hash_password,
    verify_password,
)


class TestMessageService:
    """메시지 코드 해석 테스트."""

    def test_parse_language(self):
        assert parse_language("vi") == "vi"
        assert parse_language("vi-VN,vi;q=0.9") == "vi"
        assert parse_language("EN_us") == "en"
        assert parse_language(None) == settings.DEFAULT_LANGUAGE
        assert parse_language("") == settings.DEFAULT_LANGUAGE
        assert parse_language("*") == settings.DEFAULT_LANGUAGE

    def test_resolve_message(self):
        assert message_service.get_message(MessageCode.DELETE_USER, "en") == "Delete user successfully"
        assert message_service.get_message(MessageCode.DELETE_USER, "vi") == "Xóa người dùng thành công"

    def test_fallback_to_default_language(self):
        assert message_service.get_message(MessageCode.REGISTER, "de") == "Register successfully"

    def test_unknown_code_returns_code(self):
        assert message_service.get_message("user.unknown", "vi") == "user.unknown"

    def test_params_substituted(self):
        exc = ConflictError(record_id="42", object_name="user")
        message = message_service.get_message(exc.code, "en", exc.params)
        assert message == "Conflict on user with id 42"

    def test_missing_params_return_code(self):
        """템플릿 파라미터 누락 — 코드 그대로."""
        exc = DuplicateNameError()
        assert message_service.get_message(exc.code, "en", exc.params) == ExceptionCode.DUPLICATE_NAME


class TestAdminSeed:
    """관리자 계정 시드/삭제 테스트."""

    async def test_seed_admin(self, db):
        admin = await auth_service.seed_admin(db)
        assert admin.username == settings.ADMIN_USERNAME
        assert admin.role == Role.ADMIN.value
        assert verify_password(settings.ADMIN_PASSWORD, admin.password)

    async def test_seed_admin_replaces_existing(self, db):
        """기존 관리자 계정은 교체됨."""
        old = await create_user(db, settings.ADMIN_USERNAME, "Old@1234", Role.USER)
        old_id = old.id
        db.expunge(old)

        admin = await auth_service.seed_admin(db)
        assert admin.id != old_id
        count = (await db.execute(
            select(func.count()).select_from(User).where(User.username == settings.ADMIN_USERNAME)
        )).scalar()
        assert count == 1

    async def test_remove_admin(self, db):
        await auth_service.seed_admin(db)
        assert await auth_service.remove_admin(db) == 1
        assert await auth_service.remove_admin(db) == 0


class TestSecurityUtils:
    """비밀번호 및 JWT 유틸리티 테스트."""

    def test_hash_and_verify(self):
        hashed = hash_password("Secret@1")
        assert hashed != "Secret@1"
        assert verify_password("Secret@1", hashed)
        assert not verify_password("secret@1", hashed)

    def test_verify_malformed_hash(self):
        assert not verify_password("Secret@1", "not-a-bcrypt-hash")

    def test_password_byte_limit(self):
        """bcrypt 한도 — 문자 수가 아닌 UTF-8 바이트 수로 계산."""
        assert check_password_length("a" * PASSWORD_MAX_BYTES) == "a" * PASSWORD_MAX_BYTES
        with pytest.raises(ValueError):
            check_password_length("a" * (PASSWORD_MAX_BYTES + 1))
        # 3바이트 문자 25개 = 75바이트 (25 three-byte characters are 75 bytes)
        with pytest.raises(ValueError):
            check_password_length("가" * 25)

    def test_verify_oversized_password(self):
        hashed = hash_password("a" * PASSWORD_MAX_BYTES)
        assert not verify_password("a" * 100, hashed)

    def test_token_round_trip(self):
        token = create_access_token({"sub": "abc", "username": "alice01", "role": "USER"})
        payload = decode_token(token)
        assert payload["sub"] == "abc"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_tampered_token_rejected(self):
        token = create_access_token({"sub": "abc"})
        with pytest.raises(jwt.InvalidTokenError):
            decode_token(token + "x")


class TestRequestLogging:
    """요청 로깅 마스킹 테스트."""

    def test_mask_sensitive(self):
        from usermgmt.middleware.axiom_logging import mask_sensitive

        masked = mask_sensitive({
            "username": "alice01",
            "password": "Secret@1",
            "nested": {"token": "abc", "items": [{"api_key": "k"}]},
        })
        assert masked == {
            "username": "alice01",
            "password": "***",
            "nested": {"token": "***", "items": [{"api_key": "***"}]},
        }


class TestExceptions:
    """예외 클래스 상태 코드 테스트."""

    def test_status_and_codes(self):
        from usermgmt.utils.exceptions import (
            BadRequestError,
            ForbiddenError,
            NotFoundError,
            UnauthorizedError,
            UserNotFoundError,
        )

        assert (BadRequestError().status_code, BadRequestError().code) == (400, ExceptionCode.BAD_REQUEST)
        assert UnauthorizedError(ExceptionCode.BAD_CREDENTIALS).status_code == 401
        assert ForbiddenError().status_code == 403
        assert NotFoundError().code == ExceptionCode.NOT_FOUND
        assert UserNotFoundError().code == ExceptionCode.USER_NOT_FOUND
        assert DuplicateNameError("bob").params == {"object_name": "bob"}
        assert ConflictError(record_id="1").params == {"id": "1"}

    def test_unauthorized_challenge_header(self):
        from usermgmt.utils.exceptions import UnauthorizedError

        assert UnauthorizedError().headers == {"WWW-Authenticate": "Bearer"}
