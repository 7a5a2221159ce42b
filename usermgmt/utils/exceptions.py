"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Each exception pre-binds an HTTP status and a message code. The code is
resolved to a localized message by the exception handlers, with optional
params substituted into the message template.

Usage:
    from usermgmt.utils.exceptions import UserNotFoundError, DuplicateNameError
    raise UserNotFoundError()
    raise DuplicateNameError()
"""

from typing import Any

from fastapi import HTTPException, status

from usermgmt.constants import ExceptionCode


class AppError(HTTPException):
    """애플리케이션 예외 베이스 — 상태 코드 + 메시지 코드 + 파라미터.

    Base application exception carrying an HTTP status, a message code
    and template params. The code doubles as the HTTPException detail so
    the raw code is still visible if no handler localizes it.

    Args:
        status_code: HTTP 상태 코드 (HTTP status code)
        code: 메시지 코드 (Dotted message code)
        params: 메시지 템플릿 파라미터 (Message template params)
        headers: 응답 헤더 (Extra response headers)
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=code, headers=headers)
        self.code: str = code
        self.params: dict[str, Any] = dict(params or {})

    def add_param(self, key: str, value: Any) -> None:
        """메시지 파라미터 추가 — Add a message template param."""
        self.params[key] = value


class BadRequestError(AppError):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when request data is invalid beyond what Pydantic validation catches.
    """

    def __init__(self, code: str = ExceptionCode.BAD_REQUEST) -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, code)


class UnauthorizedError(AppError):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when authentication is missing, invalid, or expired,
    or when credentials do not match.
    """

    def __init__(self, code: str = ExceptionCode.UNAUTHORIZED) -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, code, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AppError):
    """403 Forbidden 예외 — 권한 부족 시 사용."""

    def __init__(self, code: str = ExceptionCode.FORBIDDEN) -> None:
        super().__init__(status.HTTP_403_FORBIDDEN, code)


class NotFoundError(AppError):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용."""

    def __init__(self, code: str = ExceptionCode.NOT_FOUND) -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, code)


class UserNotFoundError(NotFoundError):
    """사용자를 찾을 수 없음 (User does not exist)."""

    def __init__(self) -> None:
        super().__init__(ExceptionCode.USER_NOT_FOUND)


class ConflictError(AppError):
    """409 Conflict 예외 — 고유성 제약 위반 시 사용.

    409 Conflict exception.
    Optionally names the conflicting object so the message can mention it.

    Args:
        record_id: 충돌 대상 식별자 (Identifier involved in the conflict)
        object_name: 충돌 대상 이름 (Name of the conflicting object)
        code: 메시지 코드 (Message code)
    """

    def __init__(
        self,
        record_id: str | None = None,
        object_name: str | None = None,
        code: str = ExceptionCode.CONFLICT,
    ) -> None:
        super().__init__(status.HTTP_409_CONFLICT, code)
        if record_id is not None:
            self.add_param("id", record_id)
        if object_name is not None:
            self.add_param("object_name", object_name)


class DuplicateNameError(ConflictError):
    """사용자명 중복 (Username already taken)."""

    def __init__(self, username: str | None = None) -> None:
        super().__init__(object_name=username, code=ExceptionCode.DUPLICATE_NAME)
