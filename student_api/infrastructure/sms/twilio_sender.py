import logging
from typing import Optional

from requests import RequestException
from twilio.base.exceptions import TwilioException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from ...application.ports.notification_sender import NotificationSender
from ...exceptions import DeliveryError
from ...utils import mask_phone

logger = logging.getLogger(__name__)


class TwilioNotificationSender(NotificationSender):
    """Sends SMS through the Twilio Messages API, one attempt per message."""

    def __init__(self, account_sid: str, auth_token: str, from_number: str,
                 timeout: float = 10.0, client: Optional[Client] = None):
        self.from_number = from_number
        self.client = client or Client(
            account_sid,
            auth_token,
            http_client=TwilioHttpClient(timeout=timeout, max_retries=None),
        )

    def send_message(self, destination: str, body: str) -> None:
        try:
            message = self.client.messages.create(body=body, from_=self.from_number, to=destination)
        except (TwilioException, RequestException) as e:
            logger.error(f"Error sending SMS to {mask_phone(destination)}: {e}")
            raise DeliveryError()
        logger.debug(f"Twilio accepted message {getattr(message, 'sid', None)}")
