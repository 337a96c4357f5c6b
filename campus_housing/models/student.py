"""
Student model.

``username`` is the natural key used by external callers; ``id`` is the
internal key every foreign key points at.
"""

from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_housing.models.base import BaseModel


class Student(BaseModel):
    """
    Student living in (or waiting for) a dorm room.

    ``room_id`` is null until the student is assigned and is cleared on
    release. Many students may share a room up to its capacity.
    """

    __tablename__ = "students"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )
    room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Current room assignment (null if not assigned)",
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, username={self.username}, room_id={self.room_id})>"
