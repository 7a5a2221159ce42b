"""메시지 코드 및 공통 상수.

Message codes and shared constants.
Message codes are dotted keys resolved against the i18n bundles
by MessageService. Unresolvable codes are returned verbatim.
"""

# 언어 선택 헤더 — Header used to pick the message bundle
LANGUAGE_HEADER: str = "Accept-Language"


class MessageCode:
    """성공 응답 메시지 코드 (Success message codes)."""

    GET_USER_BY_ID = "user.detail"
    CREATE_USER = "user.create"
    UPDATE_USER = "user.update"
    LIST_USER = "user.list"
    DELETE_USER = "user.delete"
    REGISTER = "auth.register"
    AUTHENTICATE = "auth.authenticate"
    HEALTH = "app.health"


class ExceptionCode:
    """오류 응답 메시지 코드 (Error message codes)."""

    BAD_REQUEST = "exception.bad_request"
    UNAUTHORIZED = "exception.unauthorized"
    BAD_CREDENTIALS = "exception.bad_credentials"
    FORBIDDEN = "exception.forbidden"
    NOT_FOUND = "exception.not_found"
    USER_NOT_FOUND = "exception.user_not_found"
    CONFLICT = "exception.conflict"
    DUPLICATE_NAME = "exception.duplicate_name"
    GENERIC = "exception.generic"
