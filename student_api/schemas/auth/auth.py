# student_api/schemas/auth/auth.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union

from ..common.common import number_to_str

# Required-field checks live in AuthService so that a missing field gets the
# same 400 envelope as an empty one.

class SendOTPRequest(BaseModel):
    phone: Optional[str] = Field(None, description="Phone number with country code")

    @field_validator('phone', mode='before')
    @classmethod
    def phone_as_text(cls, v):
        return number_to_str(v)

class SendOTPResponse(BaseModel):
    success: bool = True
    message: str

class VerifyOTPRequest(BaseModel):
    phone: Optional[str] = Field(None, description="Phone number the OTP was sent to")
    otp: Optional[Union[int, str]] = Field(None, description="6-digit code, as a number or a string")

    @field_validator('phone', mode='before')
    @classmethod
    def phone_as_text(cls, v):
        return number_to_str(v)

class VerifyOTPResponse(BaseModel):
    success: bool = True
    message: str
    token: str
