import logging
from dataclasses import dataclass
from typing import Optional

from ..ports.student_repo import StudentRepository, StudentDto, NewStudent
from ...exceptions import ValidationError, Conflict
from ...utils import mask_phone

logger = logging.getLogger(__name__)


@dataclass
class StudentService:
    student_repo: StudentRepository

    def register(self, name: Optional[str], phone: Optional[str], email: Optional[str],
                 class_name: Optional[str], section: Optional[str]) -> StudentDto:
        """Validate, check phone/email uniqueness, then insert.

        Errors surface in that order: ValidationError, then Conflict or
        StoreError from the existence check, then StoreError from the insert.
        """
        if not name or not phone or not class_name or not section:
            raise ValidationError("All required fields must be provided.")

        existing = self.student_repo.find_by_phone_or_email(phone, email or None)
        if existing is not None:
            logger.info(f"Rejected duplicate student for {mask_phone(phone)}")
            raise Conflict()

        student = self.student_repo.insert(
            NewStudent(name=name, phone=phone, email=email or None, class_name=class_name, section=section)
        )
        logger.info(f"Student {student.id} added")
        return student
