# peertutor/models.py

from typing import Optional, List
from datetime import datetime

from sqlalchemy.types import JSON, DateTime
from sqlmodel import SQLModel, Field, Column


class Tutor(SQLModel, table=True):
    # One row per tutor; the slot list lives inside it as a JSON document.
    id: str = Field(primary_key=True)
    name: str
    password_hash: str
    bio: str = ""
    grade_level: str = ""
    is_admin: bool = False
    subjects: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    slots: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    version: int = 0  # bumped on every write, compared on every write
    # naive local time, like every other timestamp in the service
    created_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime(timezone=False), nullable=False),
    )


class Subject(SQLModel, table=True):
    id: str = Field(primary_key=True)
    name: str = Field(index=True, unique=True)
    category: str
    icon: str = "book-open"
    badge: Optional[str] = None
