"""
Shared test configuration.

Every test gets its own file-backed SQLite database so that threads in
concurrency tests use independent connections.
"""

from __future__ import annotations

import os

# Settings are read once at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("TX_RETRY_BACKOFF_SECONDS", "0.01")

from dataclasses import dataclass
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select

from campus_housing.db.init_db import init_db, seed_demo_data
from campus_housing.db.session import build_engine, build_session_factory
from campus_housing.main import create_app
from campus_housing.models import Dorm, Room, Student


class FakeDiningClient:
    def __init__(self, upstream=None, error=None):
        self.upstream = upstream
        self.error = error
        self.calls = []

    def get_today_menus(self, student_id=None):
        self.calls.append(student_id)
        if self.error is not None:
            raise self.error
        return self.upstream


@dataclass
class Seeded:
    dorm_1_id: str
    dorm_2_id: str
    room_101_id: str
    room_102_id: str
    nikola_id: str
    jovana_id: str
    marko_id: str


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'housing.db'}", lock_timeout=10.0, echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def make_room(session_factory):
    """Create a dorm with one room and return the (dorm_id, room_id) pair."""

    def _make(number: str = "101", capacity: int = 2, is_free: bool = True):
        with session_factory() as session:
            dorm = Dorm(name=f"Dorm {number}", address="Test Street 1")
            session.add(dorm)
            session.flush()
            room = Room(dorm_id=dorm.id, number=number, capacity=capacity, is_free=is_free)
            session.add(room)
            session.commit()
            return dorm.id, room.id

    return _make


@pytest.fixture
def seeded(session_factory) -> Seeded:
    seed_demo_data(session_factory)
    with session_factory() as session:
        dorms = {d.name: d.id for d in session.execute(select(Dorm)).scalars()}
        rooms = {r.number: r.id for r in session.execute(select(Room)).scalars()}
        students = {s.username: s.id for s in session.execute(select(Student)).scalars()}
    return Seeded(
        dorm_1_id=dorms["Dom Studenata 1"],
        dorm_2_id=dorms["Dom Studenata 2"],
        room_101_id=rooms["101"],
        room_102_id=rooms["102"],
        nikola_id=students["nikola123"],
        jovana_id=students["jovana123"],
        marko_id=students["marko123"],
    )


@pytest.fixture
def dining_client() -> FakeDiningClient:
    return FakeDiningClient()


@pytest.fixture
def client(session_factory, dining_client) -> Iterator[TestClient]:
    app = create_app(session_factory=session_factory, dining_client=dining_client)
    with TestClient(app) as test_client:
        yield test_client
