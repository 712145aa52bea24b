import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..ports.notification_sender import NotificationSender
from .otp_registry import OTPRegistry
from .token_issuer import TokenIssuer
from ...exceptions import ValidationError, InvalidOTP
from ...utils import mask_phone

logger = logging.getLogger(__name__)

OTP_MESSAGE_TEMPLATE = "Your verification code is: {code}"


@dataclass
class AuthService:
    otp_registry: OTPRegistry
    notification_sender: NotificationSender
    token_issuer: TokenIssuer

    def send_login_otp(self, phone: Optional[str]) -> None:
        if not phone:
            raise ValidationError("Phone number is required")
        code = self.otp_registry.issue(phone)
        # The code stays pending even if delivery fails; a resend replaces it.
        self.notification_sender.send_message(phone, OTP_MESSAGE_TEMPLATE.format(code=code))
        logger.info(f"OTP sent to {mask_phone(phone)}")

    def verify_otp_and_issue(self, phone: Optional[str], otp: Any) -> str:
        if not phone or not otp:
            raise ValidationError("Phone and OTP are required")
        if not self.otp_registry.verify(phone, otp):
            logger.warning(f"OTP verification failed for {mask_phone(phone)}")
            raise InvalidOTP()
        logger.info(f"OTP verified for {mask_phone(phone)}")
        return self.token_issuer.issue(phone)
