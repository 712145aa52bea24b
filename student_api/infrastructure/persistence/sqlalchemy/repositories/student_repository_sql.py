import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .....db.models import Student
from .....application.ports.student_repo import StudentRepository, StudentDto, NewStudent
from .....exceptions import StoreError

logger = logging.getLogger(__name__)


class SqlStudentRepository(StudentRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, student: Student) -> StudentDto:
        return StudentDto(
            id=str(student.id),
            name=student.name,
            phone=student.phone,
            email=student.email,
            class_name=student.class_name,
            section=student.section,
        )

    def find_by_phone_or_email(self, phone: str, email: Optional[str]) -> Optional[StudentDto]:
        clauses = [Student.phone == phone]
        if email:
            clauses.append(Student.email == email)
        try:
            student = self.session.exec(select(Student).where(or_(*clauses))).first()
        except SQLAlchemyError as e:
            logger.error(f"Error checking existing student: {e}")
            raise StoreError()
        return self._to_dto(student) if student else None

    def insert(self, student: NewStudent) -> StudentDto:
        row = Student(
            name=student.name,
            phone=student.phone,
            email=student.email,
            class_name=student.class_name,
            section=student.section,
        )
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error adding student: {e}")
            raise StoreError(details=str(e))
        return self._to_dto(row)
