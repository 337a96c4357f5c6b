"""
Room model.

A room belongs to exactly one dorm and holds up to ``capacity`` students.
The ``is_free`` flag is a denormalized cache of
``occupant_count < capacity`` and is only written by the room
assignment service inside a locked transaction.
"""

from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_housing.models.base import BaseModel

if TYPE_CHECKING:
    from campus_housing.models.dorm import Dorm


class Room(BaseModel):
    """
    Room within a dorm with a fixed occupant capacity.

    Occupancy is not stored; it is the number of students whose
    ``room_id`` points at this room.
    """

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("dorm_id", "number", name="uq_rooms_dorm_number"),
        CheckConstraint("capacity >= 1", name="ck_rooms_capacity_positive"),
    )

    dorm_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("dorms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Room number, unique within the dorm",
    )
    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )
    is_free: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="True while occupant count is below capacity",
    )

    dorm: Mapped["Dorm"] = relationship("Dorm", back_populates="rooms")

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.number}, capacity={self.capacity}, is_free={self.is_free})>"
