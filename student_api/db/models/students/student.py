# student_api/db/models/students/student.py
from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
import uuid

class Student(SQLModel, table=True):
    __tablename__ = "students"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(max_length=100)
    phone: str = Field(max_length=20, index=True)
    email: Optional[str] = Field(max_length=100, default=None, index=True)
    class_name: str = Field(max_length=50)
    section: str = Field(max_length=20)
    created_at: datetime = Field(default_factory=datetime.utcnow)
