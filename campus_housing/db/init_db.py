"""Database initialization utilities."""
import logging
from decimal import Decimal
from typing import Callable

from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

# Importing the models registers every table on Base.metadata
from campus_housing.models import Base, Dorm, Room, Student, StudentCard

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Create all tables that do not exist yet.

    Note: This is suitable for development/testing only.
    """
    existing_tables = inspect(engine).get_table_names()
    Base.metadata.create_all(bind=engine)
    logger.info(
        "Database schema ready",
        extra={"existing_tables": len(existing_tables), "tables": len(Base.metadata.tables)},
    )


def drop_db(engine: Engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def seed_demo_data(session_factory: Callable[[], Session]) -> bool:
    """
    Insert demo dorms, rooms, students and cards into an empty database.

    Room free flags agree with the seeded occupancy. Returns False when
    dorms already exist and nothing was inserted.
    """
    with session_factory() as session:
        if session.execute(select(Dorm.id).limit(1)).first() is not None:
            logger.info("Demo data already present, skipping seed")
            return False

        dorm_1 = Dorm(name="Dom Studenata 1", address="Bulevar Oslobodjenja 12")
        dorm_2 = Dorm(name="Dom Studenata 2", address="Cara Dusana 45")
        session.add_all([dorm_1, dorm_2])
        session.flush()

        room_101 = Room(dorm_id=dorm_1.id, number="101", capacity=3, is_free=True)
        room_102 = Room(dorm_id=dorm_1.id, number="102", capacity=2, is_free=False)
        room_201 = Room(dorm_id=dorm_2.id, number="201", capacity=2, is_free=True)
        session.add_all([room_101, room_102, room_201])
        session.flush()

        nikola = Student(first_name="Nikola", last_name="Nikolic", username="nikola123", room_id=room_102.id)
        jovana = Student(first_name="Jovana", last_name="Petrovic", username="jovana123", room_id=None)
        marko = Student(first_name="Marko", last_name="Ilic", username="marko123", room_id=room_102.id)
        session.add_all([nikola, jovana, marko])
        session.flush()

        session.add_all([
            StudentCard(student_id=nikola.id, balance=Decimal("1500.00")),
            StudentCard(student_id=jovana.id, balance=Decimal("800.00")),
            StudentCard(student_id=marko.id, balance=Decimal("0.00")),
        ])
        session.commit()

    logger.info("Demo data seeded", extra={"dorms": 2, "rooms": 3, "students": 3})
    return True
