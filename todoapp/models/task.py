# todoapp/models/task.py
from typing import Optional

from sqlalchemy import false
from sqlmodel import SQLModel, Field


class Task(SQLModel, table=True):
    __tablename__ = "task"

    id: Optional[int] = Field(default=None, primary_key=True)
    text: str = Field(nullable=False)
    # DB 기본값도 false 로 둬서 completed 는 절대 NULL 이 되지 않음
    completed: bool = Field(
        default=False,
        nullable=False,
        sa_column_kwargs={"server_default": false()},
    )
