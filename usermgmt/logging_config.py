"""로깅 설정 모듈.

Logging configuration module.
Configures a console handler on the root logger and lowers the level of
noisy third-party loggers. Modules obtain loggers via logging.getLogger(__name__).
"""

import logging

from usermgmt.config import settings

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

# 외부 라이브러리 로그 레벨 — Third-party libraries (reduce noise)
MODULE_LOG_LEVELS: dict[str, str] = {
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def setup_logging(log_level: str | None = None) -> None:
    """애플리케이션 로깅을 구성합니다.

    Configure logging for the application.
    Safe to call more than once: existing root handlers are replaced.

    Args:
        log_level: 로그 레벨 오버라이드 (Override for settings.LOG_LEVEL)
    """
    level: str = (log_level or settings.LOG_LEVEL).upper()
    formatter = logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 중복 핸들러 제거 — Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info("Logging configured: level=%s", level)
