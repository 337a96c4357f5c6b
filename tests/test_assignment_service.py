"""Room assignment and release scenarios."""

from __future__ import annotations

import pytest

from campus_housing.models import Room, Student
from campus_housing.repositories import StudentRepository
from campus_housing.services.common import (
    AlreadyExistsError,
    RoomFullError,
    RoomNotFoundError,
    StudentAlreadyAssignedError,
    StudentNotFoundError,
)
from campus_housing.services.housing import RoomAssignmentService


def room_state(session_factory, room_id):
    """Return (occupant_count, capacity, is_free) read outside any service."""
    with session_factory() as session:
        room = session.get(Room, room_id)
        count = StudentRepository(session).count_by_room(room_id)
        return count, room.capacity, room.is_free


def assert_consistent(session_factory, room_id):
    count, capacity, is_free = room_state(session_factory, room_id)
    assert count <= capacity
    assert is_free == (count < capacity)


@pytest.fixture
def service(session_factory):
    return RoomAssignmentService(session_factory, backoff=0)


def test_capacity_two_scenario(service, session_factory, make_room):
    dorm_id, room_id = make_room("101", capacity=2)

    a = service.assign_student(dorm_id, "101", first_name="Ana", last_name="Anic", username="a")
    assert a.room_id == room_id
    assert room_state(session_factory, room_id) == (1, 2, True)

    service.assign_student(dorm_id, "101", first_name="Bojan", last_name="Bojic", username="b")
    assert room_state(session_factory, room_id) == (2, 2, False)

    with pytest.raises(RoomFullError):
        service.assign_student(dorm_id, "101", first_name="Cica", last_name="Cicic", username="c")
    with session_factory() as session:
        assert StudentRepository(session).get_by_username("c") is None

    assert service.release_student(a.id) == room_id
    assert room_state(session_factory, room_id) == (1, 2, True)

    c = service.assign_student(dorm_id, "101", first_name="Cica", last_name="Cicic", username="c")
    assert c.room_id == room_id
    assert room_state(session_factory, room_id) == (2, 2, False)


def test_assign_existing_student_by_username(service, session_factory, seeded):
    student = service.assign_student(seeded.dorm_1_id, "101", username="jovana123")
    assert student.id == seeded.jovana_id
    assert student.room_id == seeded.room_101_id
    assert_consistent(session_factory, seeded.room_101_id)


def test_capacity_one_room_becomes_full(service, session_factory, make_room):
    dorm_id, room_id = make_room("single", capacity=1)
    service.assign_student(dorm_id, "single", first_name="Ana", last_name="Anic")
    assert room_state(session_factory, room_id) == (1, 1, False)


def test_generated_usernames_are_unique(service, make_room):
    dorm_id, _ = make_room(capacity=3)
    first = service.assign_student(dorm_id, "101", first_name="Ana", last_name="Anic")
    second = service.assign_student(dorm_id, "101", first_name="Ana", last_name="Anic")
    assert first.username == "ana.anic"
    assert second.username == "ana.anic1"


def test_taken_username_is_rejected(service, seeded):
    with pytest.raises(AlreadyExistsError):
        service.assign_student(seeded.dorm_1_id, "101", first_name="Novi", last_name="Student",
                               username="jovana123")


def test_double_assignment_changes_nothing(service, session_factory, seeded):
    before = room_state(session_factory, seeded.room_101_id)
    with pytest.raises(StudentAlreadyAssignedError):
        service.assign_student(seeded.dorm_1_id, "101", username="nikola123")
    assert room_state(session_factory, seeded.room_101_id) == before
    with session_factory() as session:
        assert session.get(Student, seeded.nikola_id).room_id == seeded.room_102_id


def test_unknown_room_and_student(service, seeded):
    with pytest.raises(RoomNotFoundError):
        service.assign_student(seeded.dorm_1_id, "999", username="jovana123")
    with pytest.raises(RoomNotFoundError):
        service.assign_student(seeded.dorm_2_id, "101", username="jovana123")
    with pytest.raises(StudentNotFoundError):
        service.assign_student(seeded.dorm_1_id, "101", username="nobody")


def test_full_room_rejects_before_student_lookup(service, seeded):
    with pytest.raises(RoomFullError):
        service.assign_student(seeded.dorm_1_id, "102", username="nobody")


def test_release_is_idempotent(service, session_factory, seeded):
    assert service.release_student(seeded.marko_id) == seeded.room_102_id
    state = room_state(session_factory, seeded.room_102_id)
    assert state == (1, 2, True)

    assert service.release_student(seeded.marko_id) is None
    assert room_state(session_factory, seeded.room_102_id) == state


def test_release_never_assigned_student_is_noop(service, seeded):
    assert service.release_student(seeded.jovana_id) is None


def test_release_unknown_student(service, seeded):
    with pytest.raises(StudentNotFoundError):
        service.release_student("00000000-0000-0000-0000-000000000000")


def test_assign_repairs_stale_full_flag(service, session_factory, make_room):
    dorm_id, room_id = make_room("stale", capacity=3, is_free=False)
    service.assign_student(dorm_id, "stale", first_name="Ana", last_name="Anic")
    assert room_state(session_factory, room_id) == (1, 3, True)


def test_invariant_holds_over_mixed_sequence(service, session_factory, make_room):
    dorm_id, room_id = make_room("mix", capacity=3)
    ids = []
    for i in range(3):
        ids.append(service.assign_student(dorm_id, "mix", first_name="S", last_name=str(i)).id)
        assert_consistent(session_factory, room_id)
    for student_id in ids[:2]:
        service.release_student(student_id)
        assert_consistent(session_factory, room_id)
    service.assign_student(dorm_id, "mix", first_name="T", last_name="New")
    assert_consistent(session_factory, room_id)
    assert room_state(session_factory, room_id)[0] == 2
