"""
Student repository.
"""

from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from campus_housing.models.student import Student
from campus_housing.repositories.base_repository import BaseRepository


class StudentRepository(BaseRepository[Student]):
    """Repository for students and their room assignments."""

    def __init__(self, session: Session):
        super().__init__(Student, session)

    def create_student(self, first_name: str, last_name: str, username: str) -> Student:
        """
        Create a student without a room.

        Raises:
            IntegrityError: If the username is taken
        """
        return self.create({
            "first_name": first_name,
            "last_name": last_name,
            "username": username,
            "room_id": None,
        })

    def get_by_username(self, username: str, lock_for_update: bool = False) -> Optional[Student]:
        stmt = select(Student).where(Student.username == username)
        if lock_for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.session.execute(stmt).scalar_one_or_none()

    def username_exists(self, username: str) -> bool:
        stmt = select(Student.id).where(Student.username == username)
        return self.session.execute(stmt).first() is not None

    def assign_to_room(self, student_id: str, room_id: str) -> bool:
        """
        Point the student at ``room_id``.

        Capacity is not checked here; callers hold the room lock.

        Returns:
            False if the student does not exist
        """
        return self._set_room(student_id, room_id)

    def unassign_room(self, student_id: str) -> bool:
        """Clear the student's room. Returns False if the student does not exist."""
        return self._set_room(student_id, None)

    def _set_room(self, student_id: str, room_id: Optional[str]) -> bool:
        result = self.session.execute(
            update(Student)
            .where(Student.id == str(student_id))
            .values(room_id=room_id)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount > 0

    def list_by_room(self, room_id: str) -> List[Student]:
        stmt = (
            select(Student)
            .where(Student.room_id == str(room_id))
            .order_by(Student.last_name, Student.first_name, Student.username)
        )
        return list(self.session.execute(stmt).scalars().all())

    def count_by_room(self, room_id: str) -> int:
        """Current number of occupants of a room."""
        stmt = select(func.count(Student.id)).where(Student.room_id == str(room_id))
        return self.session.execute(stmt).scalar_one()
