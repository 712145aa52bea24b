import re
import secrets
import threading
from typing import Any, Callable, Dict, Optional

OTP_MIN = 100000
OTP_MAX = 999999

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+(\.[0-9]*)?")


def generate_otp() -> int:
    """Generate a uniformly random 6-digit OTP."""
    return OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1)


def coerce_code(value: Any) -> Optional[int]:
    """Normalise a submitted OTP to an int, or None when it can never match.

    Clients send the code either as a JSON number or as a string, so
    ``123456``, ``"123456.0"`` and ``" 123456 "`` all compare equal to a
    stored ``123456``. Strings must be plain ASCII decimals.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.fullmatch(text):
            return None
        value = float(text)
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    return None


class OTPRegistry:
    """Pending OTP codes keyed by phone number.

    One code per phone: issuing again replaces the previous code, and a code
    is removed only by a successful verify. Entries never expire and live
    only as long as the process.
    """

    def __init__(self, code_generator: Callable[[], int] = generate_otp):
        self._codes: Dict[str, int] = {}
        self._lock = threading.Lock()
        self._generate = code_generator

    def issue(self, phone_key: str) -> int:
        code = self._generate()
        with self._lock:
            self._codes[phone_key] = code
        return code

    def verify(self, phone_key: str, submitted_code: Any) -> bool:
        candidate = coerce_code(submitted_code)
        with self._lock:
            stored = self._codes.get(phone_key)
            if stored is None or candidate is None or stored != candidate:
                return False
            del self._codes[phone_key]
            return True

    def pending(self, phone_key: str) -> Optional[int]:
        with self._lock:
            return self._codes.get(phone_key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._codes)
