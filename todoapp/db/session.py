# todoapp/db/session.py
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError
from sqlmodel import Session, SQLModel, create_engine

from todoapp.core.query_log import QueryLogger

log = logging.getLogger(__name__)

# Heroku/Render 식 postgres:// 는 SQLAlchemy 가 모름
_DRIVER_ALIASES = {"postgres": "postgresql+psycopg2", "postgresql": "postgresql+psycopg2"}


def mask_url(url: str) -> str:
    """로그 출력용 (비밀번호 숨김)"""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable url>"


def build_db_url(raw: Optional[str]) -> str:
    """DATABASE_URL 정리: 앞뒤 따옴표 제거, 드라이버 지정, 파싱 검증."""
    url = (raw or "").strip().strip("'\"`").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is required")

    try:
        parsed = make_url(url)
    except ArgumentError as e:
        raise RuntimeError(f"invalid DATABASE_URL: {e}") from e

    if parsed.drivername in _DRIVER_ALIASES:
        parsed = parsed.set(drivername=_DRIVER_ALIASES[parsed.drivername])
    return parsed.render_as_string(hide_password=False)


class Database:
    """엔진 + 세션 팩토리. 앱 하나당 하나, app.state.db 에 붙는다."""

    def __init__(self, url: str, query_log: Optional[QueryLogger] = None):
        self.url = build_db_url(url)
        log.info("DB URL 적용: %s", mask_url(self.url))

        if self.url.startswith("sqlite"):
            # TestClient/threadpool 에서 같은 파일 DB 를 여러 스레드가 씀
            self.engine: Engine = create_engine(
                self.url, connect_args={"check_same_thread": False}
            )
        else:
            self.engine = create_engine(
                self.url,
                pool_pre_ping=True,
                pool_recycle=1800,         # 30분마다 재활성화
                pool_size=5,
                max_overflow=5,
            )

        self.query_log = query_log
        if query_log is not None:
            query_log.attach(self.engine)

    def create_all(self) -> None:
        """task 테이블이 없으면 생성 (몇 번 돌려도 안전)"""
        # 모델 등록용 import
        from todoapp.models.task import Task  # noqa: F401

        SQLModel.metadata.create_all(self.engine)

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    @contextmanager
    def session(self) -> Iterator[Session]:
        s = Session(self.engine)
        try:
            yield s
        finally:
            s.close()

    def close(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_session(request: Request) -> Iterator[Session]:
    """FastAPI Depends(get_session)에서 쓰는 generator."""
    with get_database(request).session() as s:
        yield s
