"""공통 응답 봉투(envelope) 및 페이지 스키마 정의.

Common response envelope and page schema definitions.
Every endpoint, including error responses, returns a ResponseGeneral:

    {"status": 200, "message": "...", "data": ..., "timestamp": "2024-01-06"}

Paginated payloads put a PageResponse ({"content": [...], "amount": N}) in data.
"""

from datetime import date
from typing import Any, Generic, TypeVar

from fastapi import status as http_status
from pydantic import BaseModel, Field

T = TypeVar("T")


def current_date_string() -> str:
    """오늘 날짜 ISO 문자열 (Current date as YYYY-MM-DD)."""
    return date.today().isoformat()


class ResponseGeneral(BaseModel, Generic[T]):
    """공통 응답 봉투 스키마.

    Uniform response envelope applied to all responses.

    Attributes:
        status: HTTP 상태 코드 (Mirrors the HTTP status code)
        message: 지역화된 메시지 (Localized message)
        data: 응답 데이터 (Payload, null for deletes and errors)
        timestamp: 응답 날짜 (Response date, YYYY-MM-DD)
    """

    status: int
    message: str
    data: T | None = None
    timestamp: str = Field(default_factory=current_date_string)

    @classmethod
    def of(cls, status: int, message: str, data: Any = None) -> "ResponseGeneral[Any]":
        """상태/메시지/데이터로 봉투를 생성합니다 (Build an envelope)."""
        return cls(status=status, message=message, data=data)

    @classmethod
    def of_created(cls, message: str, data: Any = None) -> "ResponseGeneral[Any]":
        """201 Created 봉투 — Resource created successfully."""
        return cls.of(http_status.HTTP_201_CREATED, message, data)

    @classmethod
    def of_success(cls, message: str, data: Any = None) -> "ResponseGeneral[Any]":
        """200 OK 봉투 — Successful read, update or removal."""
        return cls.of(http_status.HTTP_200_OK, message, data)


class PageResponse(BaseModel, Generic[T]):
    """페이지 응답 스키마.

    Paged content wrapper.

    Attributes:
        content: 현재 페이지 항목 (Items on the requested page)
        amount: 전체 일치 건수 (Total number of matching records, across all pages)
    """

    content: list[T] = []
    amount: int = 0

    @classmethod
    def of(cls, data: list[Any] | None, amount: int | None) -> "PageResponse[Any]":
        return cls(content=list(data or []), amount=amount or 0)
