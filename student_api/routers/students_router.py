# student_api/routers/students_router.py
import logging

from fastapi import APIRouter, Depends

from ..application.services.student_service import StudentService
from ..application.services.token_issuer import TokenClaims
from ..dependencies import get_current_claims, get_student_service
from ..schemas import AddStudentRequest, AddStudentResponse, StudentResponse
from ..utils import mask_phone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["Students"])


@router.post("/add-student", response_model=AddStudentResponse)
def add_student(
    payload: AddStudentRequest,
    claims: TokenClaims = Depends(get_current_claims),
    student_service: StudentService = Depends(get_student_service),
):
    logger.info(f"Add student request from {mask_phone(claims.phone)}")
    student = student_service.register(
        name=payload.name,
        phone=payload.phone,
        email=payload.email,
        class_name=payload.class_name,
        section=payload.section,
    )
    return AddStudentResponse(
        message="Student added successfully",
        data=StudentResponse(**student.to_dict()),
    )
