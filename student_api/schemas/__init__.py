# Schemas package
from .auth.auth import SendOTPRequest, VerifyOTPRequest, SendOTPResponse, VerifyOTPResponse
from .students.student import AddStudentRequest, AddStudentResponse, StudentResponse

__all__ = [
    "SendOTPRequest",
    "VerifyOTPRequest",
    "SendOTPResponse",
    "VerifyOTPResponse",
    "AddStudentRequest",
    "AddStudentResponse",
    "StudentResponse",
]
