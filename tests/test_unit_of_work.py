"""Unit of work transaction boundaries and error translation."""

from __future__ import annotations

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from campus_housing.db.session import build_engine, build_session_factory
from campus_housing.models import Student
from campus_housing.repositories import StudentRepository
from campus_housing.services.common import (
    AlreadyExistsError,
    StoreUnavailableError,
    TransactionConflictError,
    UnitOfWork,
    run_in_transaction,
)
from campus_housing.services.common.unit_of_work import translate_db_error


class FakePgError(Exception):
    def __init__(self, pgcode):
        super().__init__(f"pg error {pgcode}")
        self.pgcode = pgcode


def test_commits_on_clean_exit(session_factory):
    with UnitOfWork(session_factory) as uow:
        uow.get_repo(StudentRepository).create_student("Ana", "Anic", "ana")

    with session_factory() as session:
        assert StudentRepository(session).get_by_username("ana") is not None


def test_rolls_back_on_exception(session_factory):
    with pytest.raises(RuntimeError):
        with UnitOfWork(session_factory) as uow:
            uow.get_repo(StudentRepository).create_student("Ana", "Anic", "ana")
            raise RuntimeError("boom")

    with session_factory() as session:
        assert StudentRepository(session).get_by_username("ana") is None


def test_unique_violation_becomes_already_exists(session_factory):
    with UnitOfWork(session_factory) as uow:
        uow.get_repo(StudentRepository).create_student("Ana", "Anic", "ana")

    with pytest.raises(AlreadyExistsError) as exc_info:
        with UnitOfWork(session_factory) as uow:
            uow.get_repo(StudentRepository).create_student("Ana", "Other", "ana")
    assert isinstance(exc_info.value.__cause__, IntegrityError)


def test_missing_schema_is_store_unavailable(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    try:
        with pytest.raises(StoreUnavailableError):
            with UnitOfWork(build_session_factory(engine)) as uow:
                uow.get_repo(StudentRepository).get_by_username("ana")
    finally:
        engine.dispose()


def test_nested_rollback_keeps_outer_work(session_factory):
    with UnitOfWork(session_factory) as uow:
        students = uow.get_repo(StudentRepository)
        students.create_student("Ana", "Anic", "ana")
        with pytest.raises(IntegrityError):
            with uow.nested() as nested:
                nested.get_repo(StudentRepository).create_student("Ana", "Other", "ana")
        students.create_student("Ivo", "Ivic", "ivo")

    with session_factory() as session:
        repo = StudentRepository(session)
        assert repo.count() == 2


@pytest.mark.parametrize("pgcode", ["40001", "40P01", "55P03"])
def test_lock_failures_are_retryable(pgcode):
    error = OperationalError("SELECT 1", {}, FakePgError(pgcode))
    assert isinstance(translate_db_error(error), TransactionConflictError)


def test_sqlite_busy_is_retryable():
    error = OperationalError("BEGIN IMMEDIATE", {}, sqlite3.OperationalError("database is locked"))
    assert isinstance(translate_db_error(error), TransactionConflictError)


def test_other_driver_errors_are_fatal():
    error = OperationalError("SELECT 1", {}, FakePgError("08006"))
    assert isinstance(translate_db_error(error), StoreUnavailableError)


def test_run_in_transaction_retries_conflicts(session_factory):
    attempts = []

    def work(uow):
        attempts.append(1)
        if len(attempts) < 3:
            raise TransactionConflictError()
        return "done"

    result = run_in_transaction(session_factory, work, max_attempts=3, backoff=0, sleep=lambda _: None)
    assert result == "done"
    assert len(attempts) == 3


def test_run_in_transaction_gives_up(session_factory):
    delays = []

    def work(uow):
        raise TransactionConflictError()

    with pytest.raises(TransactionConflictError):
        run_in_transaction(session_factory, work, max_attempts=2, backoff=0.1, sleep=delays.append)
    assert len(delays) == 1


def test_run_in_transaction_does_not_retry_business_errors(session_factory):
    attempts = []

    def work(uow):
        attempts.append(1)
        raise AlreadyExistsError("Student", "username", "ana")

    with pytest.raises(AlreadyExistsError):
        run_in_transaction(session_factory, work, max_attempts=3, sleep=lambda _: None)
    assert len(attempts) == 1


def test_explicit_rollback_skips_commit_on_exit(session_factory):
    with UnitOfWork(session_factory) as uow:
        uow.get_repo(StudentRepository).create_student("Ana", "Anic", "ana")
        uow.rollback()
        with pytest.raises(RuntimeError):
            uow.commit()

    with session_factory() as session:
        assert StudentRepository(session).get_by_username("ana") is None


def test_pending_objects_are_flushed_before_queries(session_factory):
    with UnitOfWork(session_factory) as uow:
        uow.session.add(Student(first_name="Ana", last_name="Anic", username="ana"))
        assert uow.get_repo(StudentRepository).get_by_username("ana") is not None
