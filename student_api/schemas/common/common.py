# student_api/schemas/common/common.py
from typing import Any


def number_to_str(v: Any) -> Any:
    """Accept a phone sent as a JSON number the way clients key it: 15551234567 -> "15551234567"."""
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        return str(v)
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return v
