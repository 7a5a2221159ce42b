"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification utility module.
Uses bcrypt directly; passwords are never stored in plain text.
"""

import bcrypt

# bcrypt 입력 한도 — bcrypt only accepts up to 72 bytes of input
PASSWORD_MAX_BYTES: int = 72


def check_password_length(password: str) -> str:
    """비밀번호가 bcrypt 입력 한도(72바이트) 이내인지 검사합니다.

    Reject passwords longer than 72 UTF-8 bytes. Used by schema validators
    so oversized passwords fail validation instead of hashing.

    Raises:
        ValueError: 72바이트 초과 시 (Password longer than 72 bytes)
    """
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return password


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt with a random salt.

    Args:
        password: 평문 비밀번호, 72바이트 이하 (Plain text password, at most 72 bytes)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a plain text password against a bcrypt hash.
    A malformed stored hash, or a password over 72 bytes, counts as a mismatch.

    Args:
        plain_password: 검증할 평문 비밀번호 (Plain text password to verify)
        hashed_password: 저장된 bcrypt 해시 (Stored bcrypt hash)

    Returns:
        bool: 일치하면 True (True if password matches hash)
    """
    plain_bytes: bytes = plain_password.encode("utf-8")
    if len(plain_bytes) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(plain_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        return False
