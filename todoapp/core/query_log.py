# todoapp/core/query_log.py
"""
SQL 쿼리 로깅.

엔진에 이벤트로 붙여서 실행된 쿼리를 남긴다.
  - 모든 쿼리: DEBUG (DB_DEBUG=2 면 INFO + 파라미터)
  - 느린 쿼리(slow_threshold 초 이상): WARNING
  - 실패한 쿼리: ERROR (DB_DEBUG>=1 이면 SQL/파라미터 포함)
"""
import logging
import time
from typing import Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine

from todoapp.core.config import QUERY_LOG_ALL, QUERY_LOG_FAILED, QUERY_LOG_OFF

_START_KEY = "todoapp_query_start"


def _one_line(statement: str) -> str:
    return " ".join((statement or "").split())


class QueryLogger:
    def __init__(
        self,
        debug: int = QUERY_LOG_OFF,
        slow_threshold: float = 3.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.debug = debug
        self.slow_threshold = slow_threshold
        self.logger = logger or logging.getLogger("todoapp.sql")

    @classmethod
    def from_settings(cls, settings) -> "QueryLogger":
        return cls(debug=settings.db_debug, slow_threshold=settings.slow_query_seconds)

    def attach(self, engine: Engine) -> None:
        event.listen(engine, "before_cursor_execute", self._before_execute)
        event.listen(engine, "after_cursor_execute", self._after_execute)
        event.listen(engine, "handle_error", self._on_error)

    def detach(self, engine: Engine) -> None:
        event.remove(engine, "before_cursor_execute", self._before_execute)
        event.remove(engine, "after_cursor_execute", self._after_execute)
        event.remove(engine, "handle_error", self._on_error)

    # ── 이벤트 핸들러 ─────────────────────────────────────────
    def _before_execute(self, conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault(_START_KEY, []).append(time.perf_counter())

    def _after_execute(self, conn, cursor, statement, parameters, context, executemany):
        elapsed = self._elapsed(conn)
        sql = _one_line(statement)

        if elapsed is not None and elapsed >= self.slow_threshold:
            self.logger.warning("slow query (%.3fs): %s", elapsed, sql)
            return

        if self.debug >= QUERY_LOG_ALL:
            self.logger.info("query (%.3fs): %s %r", elapsed or 0.0, sql, parameters)
        else:
            self.logger.debug("query (%.3fs): %s", elapsed or 0.0, sql)

    def _on_error(self, context) -> None:
        if context.connection is not None:
            self._elapsed(context.connection)

        if self.debug >= QUERY_LOG_FAILED:
            self.logger.error(
                "query failed: %s %r: %s",
                _one_line(context.statement),
                context.parameters,
                context.original_exception,
            )
        else:
            self.logger.error("query failed: %s", context.original_exception)

    @staticmethod
    def _elapsed(conn) -> Optional[float]:
        stack = conn.info.get(_START_KEY)
        if not stack:
            return None
        return time.perf_counter() - stack.pop()
