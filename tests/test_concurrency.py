"""Concurrent assignment against a single room."""

from __future__ import annotations

import threading

from campus_housing.models import Room
from campus_housing.repositories import StudentRepository
from campus_housing.services.common import RoomFullError
from campus_housing.services.housing import RoomAssignmentService


def test_concurrent_assigns_respect_capacity(session_factory, make_room):
    capacity, workers = 3, 8
    dorm_id, room_id = make_room("303", capacity=capacity)
    service = RoomAssignmentService(session_factory, max_attempts=5, backoff=0.01)

    barrier = threading.Barrier(workers)
    lock = threading.Lock()
    outcomes = {"ok": 0, "full": 0, "other": []}

    def assign(i):
        barrier.wait()
        try:
            service.assign_student(dorm_id, "303", first_name="Student", last_name=str(i), username=f"s{i}")
        except RoomFullError:
            with lock:
                outcomes["full"] += 1
        except Exception as exc:  # recorded for the assertion below
            with lock:
                outcomes["other"].append(exc)
        else:
            with lock:
                outcomes["ok"] += 1

    threads = [threading.Thread(target=assign, args=(i,)) for i in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes["other"] == []
    assert outcomes["ok"] == capacity
    assert outcomes["full"] == workers - capacity

    with session_factory() as session:
        assert StudentRepository(session).count_by_room(room_id) == capacity
        assert session.get(Room, room_id).is_free is False


def test_concurrent_release_and_assign_stay_consistent(session_factory, make_room):
    dorm_id, room_id = make_room("404", capacity=2)
    service = RoomAssignmentService(session_factory, max_attempts=5, backoff=0.01)
    first = service.assign_student(dorm_id, "404", first_name="A", last_name="A", username="a")
    service.assign_student(dorm_id, "404", first_name="B", last_name="B", username="b")

    barrier = threading.Barrier(3)
    errors = []

    def release():
        barrier.wait()
        service.release_student(first.id)

    def assign(username):
        barrier.wait()
        try:
            service.assign_student(dorm_id, "404", first_name="C", last_name="C", username=username)
        except RoomFullError:
            pass
        except Exception as exc:  # recorded for the assertion below
            errors.append(exc)

    threads = [
        threading.Thread(target=release),
        threading.Thread(target=assign, args=("c",)),
        threading.Thread(target=assign, args=("d",)),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    with session_factory() as session:
        count = StudentRepository(session).count_by_room(room_id)
        room = session.get(Room, room_id)
        assert count <= room.capacity
        assert room.is_free == (count < room.capacity)
