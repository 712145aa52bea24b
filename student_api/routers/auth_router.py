# student_api/routers/auth_router.py
from fastapi import APIRouter, Depends

from ..application.services.auth_service import AuthService
from ..dependencies import get_auth_service
from ..schemas import SendOTPRequest, SendOTPResponse, VerifyOTPRequest, VerifyOTPResponse

router = APIRouter(prefix="", tags=["Authentication"])


@router.post("/send-otp", response_model=SendOTPResponse)
def send_otp(payload: SendOTPRequest, auth_service: AuthService = Depends(get_auth_service)):
    auth_service.send_login_otp(payload.phone)
    return SendOTPResponse(message="OTP sent successfully")


@router.post("/verify-otp", response_model=VerifyOTPResponse)
def verify_otp(payload: VerifyOTPRequest, auth_service: AuthService = Depends(get_auth_service)):
    token = auth_service.verify_otp_and_issue(payload.phone, payload.otp)
    return VerifyOTPResponse(message="OTP verified successfully", token=token)
