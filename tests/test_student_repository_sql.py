import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from student_api.application.ports.student_repo import NewStudent
from student_api.database import build_engine, create_db_and_tables
from student_api.exceptions import StoreError
from student_api.infrastructure.persistence.sqlalchemy.repositories.student_repository_sql import SqlStudentRepository


@pytest.fixture
def session():
    engine = build_engine("sqlite://")
    create_db_and_tables(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


def new_student(phone="+15551234567", email="a@example.com"):
    return NewStudent(name="A", phone=phone, email=email, class_name="X", section="Y")


def test_insert_generates_id(session):
    repo = SqlStudentRepository(session)
    student = repo.insert(new_student())
    assert student.id
    assert student.class_name == "X"


def test_find_by_phone_or_email(session):
    repo = SqlStudentRepository(session)
    stored = repo.insert(new_student())
    assert repo.find_by_phone_or_email("+15551234567", None).id == stored.id
    assert repo.find_by_phone_or_email("+19999999999", "a@example.com").id == stored.id
    assert repo.find_by_phone_or_email("+19999999999", "b@example.com") is None


def test_missing_email_does_not_match_null_emails(session):
    repo = SqlStudentRepository(session)
    repo.insert(new_student(email=None))
    assert repo.find_by_phone_or_email("+19999999999", None) is None


def test_lookup_failure_raises_store_error():
    engine = build_engine("sqlite://")
    # tables never created
    with Session(engine) as s:
        repo = SqlStudentRepository(s)
        with pytest.raises(StoreError):
            repo.find_by_phone_or_email("+1", None)


def test_insert_failure_raises_store_error_with_details():
    engine = build_engine("sqlite://")
    with Session(engine) as s:
        repo = SqlStudentRepository(s)
        with pytest.raises(StoreError) as exc_info:
            repo.insert(new_student())
    assert "students" in exc_info.value.details
