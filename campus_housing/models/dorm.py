"""
Dorm model.

A dorm is a housing building that owns a set of rooms.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_housing.models.base import BaseModel

if TYPE_CHECKING:
    from campus_housing.models.room import Room


class Dorm(BaseModel):
    """Housing building; deleting a dorm cascades to its rooms."""

    __tablename__ = "dorms"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Display name of the dorm",
    )
    address: Mapped[str] = mapped_column(
        String(300),
        nullable=False,
    )

    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="dorm",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Room.number",
    )

    def __repr__(self) -> str:
        return f"<Dorm(id={self.id}, name={self.name})>"
