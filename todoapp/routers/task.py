# todoapp/routers/task.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from todoapp.db.session import get_session
from todoapp.schemas.task import TaskCreate, TaskRead, TaskUpdate
from todoapp.services.task_store import TaskStore, TaskStoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])

# 저장소 실패는 전부 원문 메시지 그대로 내려줌 (not found 도 500)
STORE_ERRORS = (TaskStoreError, SQLAlchemyError)


def get_task_store(db: Session = Depends(get_session)) -> TaskStore:
    return TaskStore(db)


@router.post("", response_model=TaskRead)
def create_task(payload: TaskCreate, store: TaskStore = Depends(get_task_store)):
    try:
        return store.insert(text=payload.text, completed=payload.completed)
    except STORE_ERRORS as e:
        logger.error("insert failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=list[TaskRead])
def list_tasks(store: TaskStore = Depends(get_task_store)):
    try:
        return store.list_all()
    except STORE_ERRORS as e:
        logger.error("list failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    try:
        return store.get(task_id)
    except STORE_ERRORS as e:
        logger.error("get %s failed: %s", task_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: str,
    payload: Optional[TaskUpdate] = None,
    store: TaskStore = Depends(get_task_store),
):
    # completed 만 반영 (text 등은 무시). 빈 바디면 completed=false
    completed = (payload or TaskUpdate()).completed
    try:
        return store.set_completed(task_id, completed)
    except STORE_ERRORS as e:
        logger.error("update %s failed: %s", task_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{task_id}", response_model=int)
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    try:
        return store.delete(task_id)
    except STORE_ERRORS as e:
        logger.error("delete %s failed: %s", task_id, e)
        raise HTTPException(status_code=400, detail=str(e))
