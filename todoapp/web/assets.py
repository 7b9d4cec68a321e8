# todoapp/web/assets.py
import logging
import mimetypes
from pathlib import Path
from typing import Union

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

logger = logging.getLogger(__name__)


def register_mime_types() -> None:
    # 호스트 OS 의 mime 설정과 상관없이 .js 는 항상 이 타입
    mimetypes.add_type("application/javascript", ".js")


def mount_assets(app: FastAPI, directory: Union[str, Path]) -> None:
    """
    정적 파일 트리를 "/" 에 마운트.
    라우터 등록이 끝난 뒤에 호출해야 API 경로가 먼저 매칭된다.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise RuntimeError(f"assets directory not found: {directory}")

    register_mime_types()
    app.mount("/", StaticFiles(directory=directory, html=True), name="assets")
    logger.info("Serving assets from %s", directory)
