from typing import Protocol


class NotificationSender(Protocol):
    def send_message(self, destination: str, body: str) -> None:
        """Deliver ``body`` to ``destination``; raise DeliveryError on provider failure."""
        ...
