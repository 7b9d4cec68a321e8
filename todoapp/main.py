# todoapp/main.py
"""
앱 팩토리 + 엔트리포인트.

전역 엔진/앱 싱글톤 없이 create_app() 이 설정/DB/쿼리로거를 받아서 조립한다.
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todoapp.core.config import Settings, configure_logging
from todoapp.core.query_log import QueryLogger
from todoapp.db.session import Database
from todoapp.routers import health, task
from todoapp.web.assets import mount_assets

logger = logging.getLogger(__name__)

NAME = "todoapp"
VERSION = "0.0.0"


def open_database(settings: Settings, query_log: Optional[QueryLogger] = None) -> Database:
    if query_log is None:
        query_log = QueryLogger.from_settings(settings)
    return Database(settings.database_url, query_log=query_log)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    query_log: Optional[QueryLogger] = None,
    init_schema: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application"""
    settings = settings or Settings.from_env()
    db = database or open_database(settings, query_log)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_schema:
            try:
                db.create_all()
            except Exception as e:
                logger.exception("Schema initialization failed")
                raise RuntimeError(f"Schema initialization failed: {e}") from e
        yield
        db.close()
        logger.info("Database connection closed")

    app = FastAPI(title=NAME, version=VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db

    @app.exception_handler(RequestValidationError)
    async def bind_error_handler(request: Request, exc: RequestValidationError):
        """요청 바디/경로 파라미터 바인딩 실패 → 400"""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            errors.append({"field": loc, "message": error["msg"]})
        message = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        logger.warning("Bind: %s", message)
        return JSONResponse(
            status_code=400,
            content={"detail": f"Bind: {message}", "errors": errors},
        )

    app.include_router(task.router)
    app.include_router(health.router)

    # 매칭 안 된 나머지 경로는 전부 정적 파일
    mount_assets(app, settings.assets_dir)
    return app


def run() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    # DB 열기/스키마 생성 실패는 치명적 → 바로 종료
    try:
        db = open_database(settings)
        db.create_all()
    except Exception:
        logger.exception("Cannot open database or create schema")
        sys.exit(1)

    import uvicorn

    app = create_app(settings, database=db, init_schema=False)
    logger.info("%s %s listening on %s:%d", NAME, VERSION, settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
