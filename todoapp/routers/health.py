import logging

from fastapi import APIRouter, Depends, HTTPException

from todoapp.db.session import Database, get_database

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/db")
def health_db(db: Database = Depends(get_database)):
    try:
        db.ping()
        return {"ok": True}
    except Exception as e:
        # 상세는 로그에만, 외부엔 일반화된 메시지
        logger.error("DB health check failed: %s", e)
        raise HTTPException(status_code=500, detail="Database connection failed")
