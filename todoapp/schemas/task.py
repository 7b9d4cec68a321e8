# todoapp/schemas/task.py
from typing import Optional

from pydantic import BaseModel, ConfigDict


# ── 생성 요청 ─────────────────────────────────────────────────
class TaskCreate(BaseModel):
    # id 가 와도 무시 (DB 가 발급)
    id: Optional[int] = None
    text: str
    completed: bool = False


# ── 완료 토글 요청 ────────────────────────────────────────────
class TaskUpdate(BaseModel):
    """completed 만 반영된다. 나머지 필드는 받아만 두고 버림."""
    id: Optional[int] = None
    text: Optional[str] = None
    completed: bool = False


# ── 조회 응답 ────────────────────────────────────────────────
class TaskRead(BaseModel):
    id: int
    text: str
    completed: bool

    model_config = ConfigDict(from_attributes=True)
