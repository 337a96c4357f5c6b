"""Assignments against a database whose write lock is held elsewhere."""

from __future__ import annotations

import sqlite3
import time

import pytest
from fastapi.testclient import TestClient

from campus_housing.db.session import build_engine, build_session_factory
from campus_housing.main import create_app
from campus_housing.repositories import StudentRepository
from campus_housing.services.common import TransactionConflictError
from campus_housing.services.housing import RoomAssignmentService
from tests.conftest import FakeDiningClient


@pytest.fixture
def short_lock_factory(tmp_path, engine):
    """Session factory on the per-test database with a 0.2s lock wait."""
    short_engine = build_engine(f"sqlite:///{tmp_path / 'housing.db'}", lock_timeout=0.2, echo=False)
    yield build_session_factory(short_engine)
    short_engine.dispose()


@pytest.fixture
def locked_room(tmp_path, make_room):
    """Create a room, then hold the database write lock on a raw connection."""
    dorm_id, room_id = make_room("101", capacity=2)
    connection = sqlite3.connect(str(tmp_path / "housing.db"), isolation_level=None)
    connection.execute("BEGIN IMMEDIATE")
    try:
        yield dorm_id, room_id
    finally:
        connection.execute("ROLLBACK")
        connection.close()


def test_assign_gives_up_while_lock_is_held(locked_room, short_lock_factory):
    dorm_id, _ = locked_room
    service = RoomAssignmentService(short_lock_factory, max_attempts=2, backoff=0)

    started = time.monotonic()
    with pytest.raises(TransactionConflictError):
        service.assign_student(dorm_id, "101", first_name="Ana", last_name="Anic")
    assert time.monotonic() - started < 5


def test_assign_succeeds_once_lock_is_released(tmp_path, make_room, short_lock_factory, session_factory):
    dorm_id, room_id = make_room("101", capacity=2)
    connection = sqlite3.connect(str(tmp_path / "housing.db"), isolation_level=None)
    connection.execute("BEGIN IMMEDIATE")
    service = RoomAssignmentService(short_lock_factory, max_attempts=2, backoff=0)
    with pytest.raises(TransactionConflictError):
        service.assign_student(dorm_id, "101", first_name="Ana", last_name="Anic")
    connection.execute("ROLLBACK")
    connection.close()

    student = service.assign_student(dorm_id, "101", first_name="Ana", last_name="Anic")
    assert student.room_id == room_id
    with session_factory() as session:
        assert StudentRepository(session).count_by_room(room_id) == 1


def test_api_reports_conflict_while_lock_is_held(locked_room, short_lock_factory):
    dorm_id, _ = locked_room
    app = create_app(session_factory=short_lock_factory, dining_client=FakeDiningClient())

    with TestClient(app) as client:
        response = client.post(
            "/api/housing/rooms/assign",
            json={"domId": dorm_id, "roomNumber": "101", "firstName": "Ana", "lastName": "Anic"},
        )

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "TRANSACTION_CONFLICT"
