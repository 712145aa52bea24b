# student_api/schemas/students/student.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from ..common.common import number_to_str

class AddStudentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    # Accepts both "className" and "class_name"
    class_name: Optional[str] = Field(None, alias="className")
    section: Optional[str] = None

    @field_validator('phone', mode='before')
    @classmethod
    def phone_as_text(cls, v):
        return number_to_str(v)

class StudentResponse(BaseModel):
    id: str
    name: str
    phone: str
    email: Optional[str] = None
    class_name: str
    section: str

class AddStudentResponse(BaseModel):
    success: bool = True
    message: str
    data: StudentResponse
