"""메시지 서비스 — 메시지 코드를 지역화된 문자열로 변환.

Message Service — Resolves dotted message codes to localized strings.
Bundles are JSON files under usermgmt/i18n named <language>.json.

Lookup order:
    1. 요청 언어 번들 (Requested language bundle)
    2. 기본 언어 번들 (settings.DEFAULT_LANGUAGE bundle)
    3. 메시지 코드 그대로 (The raw code)
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from usermgmt.config import settings

logger = logging.getLogger(__name__)

_BUNDLE_DIR: Path = Path(__file__).resolve().parent.parent / "i18n"


@lru_cache(maxsize=None)
def _load_bundle(language: str) -> dict[str, str]:
    """언어 번들을 로드합니다. 없으면 빈 딕셔너리 (Empty dict when absent)."""
    path: Path = _BUNDLE_DIR / f"{language}.json"
    if not path.is_file():
        return {}
    with path.open(encoding="utf-8") as fp:
        return json.load(fp)


def parse_language(header_value: str | None) -> str:
    """Accept-Language 헤더에서 주 언어 태그를 추출합니다.

    Extract the primary subtag of the first language range,
    e.g. "vi-VN,vi;q=0.9,en;q=0.8" -> "vi". Empty or "*" yields the default.
    """
    if not header_value:
        return settings.DEFAULT_LANGUAGE
    first: str = header_value.split(",")[0].split(";")[0].strip()
    primary: str = first.replace("_", "-").split("-")[0].lower()
    if not primary or primary == "*" or not primary.isalpha():
        return settings.DEFAULT_LANGUAGE
    return primary


class MessageService:
    """메시지 코드 해석 서비스.

    Service resolving message codes against the i18n bundles.
    """

    def get_message(
        self,
        code: str,
        language: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> str:
        """메시지 코드를 지역화된 메시지로 변환합니다.

        Resolve a message code for the given Accept-Language value.
        Falls back to the default language and finally to the raw code,
        including when params do not fit the message template.

        Args:
            code: 메시지 코드 (Dotted message code)
            language: Accept-Language 헤더 값 또는 언어 태그 (Header value or language tag)
            params: 템플릿 파라미터 (Template params for {name} placeholders)

        Returns:
            str: 지역화된 메시지 또는 코드 (Localized message, or the code itself)
        """
        lang: str = parse_language(language)
        template: str | None = _load_bundle(lang).get(code)
        if template is None:
            template = _load_bundle(settings.DEFAULT_LANGUAGE).get(code)
        if template is None:
            logger.debug("No message for code=%s language=%s", code, lang)
            return code

        try:
            return template.format(**(params or {}))
        except (KeyError, IndexError, ValueError):
            logger.debug("Message params mismatch for code=%s params=%s", code, params)
            return code


# 싱글턴 인스턴스 — Singleton instance
message_service: MessageService = MessageService()
