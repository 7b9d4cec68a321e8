# todoapp/services/task_store.py
import re
from typing import List, Union

from sqlalchemy import delete, update
from sqlmodel import Session, select

from todoapp.models.task import Task


class TaskStoreError(Exception):
    """저장소 레벨 실패. 라우터에서 500 으로 변환."""


class TaskNotFoundError(TaskStoreError):
    template = "no task with id {!r}"

    def __init__(self, task_id):
        super().__init__(self.template.format(task_id))
        self.task_id = task_id


class InvalidTaskIdError(TaskNotFoundError):
    """숫자가 아니거나 범위를 벗어난 id. 어차피 그런 행은 없음."""

    template = "invalid task id {!r}"


class NoRecordsUpdatedError(TaskStoreError):
    def __init__(self):
        super().__init__("No records updated")


# 경로에서 온 id 는 숫자만 (int() 가 받아주는 "1_0", " 1", "+1" 은 거부)
_ID_PATTERN = re.compile(r"-?[0-9]+")
# SQLite/Postgres bigint 범위. 넘으면 드라이버가 OverflowError 를 던짐
_ID_MIN, _ID_MAX = -(2 ** 63), 2 ** 63 - 1


def _parse_id(task_id: Union[int, str]) -> int:
    if isinstance(task_id, bool):
        raise InvalidTaskIdError(task_id)
    if isinstance(task_id, int):
        pk = task_id
    elif isinstance(task_id, str) and _ID_PATTERN.fullmatch(task_id):
        pk = int(task_id)
    else:
        raise InvalidTaskIdError(task_id)
    if not _ID_MIN <= pk <= _ID_MAX:
        raise InvalidTaskIdError(task_id)
    return pk


class TaskStore:
    """Task 테이블 CRUD. 요청 하나당 세션 하나."""

    def __init__(self, session: Session):
        self.session = session

    def insert(self, text: str, completed: bool = False) -> Task:
        task = Task(text=text, completed=completed)
        self.session.add(task)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(task)
        return task

    def list_all(self) -> List[Task]:
        return list(self.session.exec(select(Task).order_by(Task.id)).all())

    def get(self, task_id: Union[int, str]) -> Task:
        task = self.session.get(Task, _parse_id(task_id))
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def set_completed(self, task_id: Union[int, str], completed: bool) -> Task:
        """
        completed 만 덮어쓴다 (id/text 는 그대로).
        읽기 → 수정 → 쓰기를 한 트랜잭션 안에서, 읽을 때 행 잠금(FOR UPDATE).
        """
        pk = _parse_id(task_id)
        try:
            task = self.session.exec(
                select(Task).where(Task.id == pk).with_for_update()
            ).first()
            if task is None:
                raise TaskNotFoundError(task_id)

            result = self.session.exec(
                update(Task).where(Task.id == pk).values(completed=completed)
            )
            if not result.rowcount:
                raise NoRecordsUpdatedError()

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(task)
        return task

    def delete(self, task_id: Union[int, str]) -> int:
        """없는 id 여도 에러 아님."""
        pk = _parse_id(task_id)
        try:
            self.session.exec(delete(Task).where(Task.id == pk))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return pk
