# todoapp/core/config.py
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_ASSETS_DIR = PACKAGE_DIR / "assets"

# DB_DEBUG 값: 0 = 끔, 1 = 실패한 쿼리만, 2 = 전부
QUERY_LOG_OFF = 0
QUERY_LOG_FAILED = 1
QUERY_LOG_ALL = 2


def _debug_level(raw: Optional[str]) -> int:
    raw = (raw or "").strip().lower()
    if raw in ("", "0", "false", "off"):
        return QUERY_LOG_OFF
    if raw in ("2", "all", "verbose"):
        return QUERY_LOG_ALL
    return QUERY_LOG_FAILED


class Settings(BaseModel):
    """환경변수 기반 설정"""

    database_url: str = ""
    host: str = "0.0.0.0"
    port: int = 8989
    log_level: str = "INFO"

    # 쿼리 로깅
    db_debug: int = QUERY_LOG_OFF
    slow_query_seconds: float = 3.0

    assets_dir: Path = DEFAULT_ASSETS_DIR

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", ""),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8989")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            db_debug=_debug_level(os.getenv("DB_DEBUG", os.getenv("BUNDEBUG"))),
            slow_query_seconds=float(os.getenv("DB_SLOW_QUERY_SECONDS", "3.0")),
            assets_dir=Path(os.getenv("ASSETS_DIR") or DEFAULT_ASSETS_DIR),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
