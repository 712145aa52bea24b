def mask_phone(phone: str) -> str:
    """Hide all but the last four digits of a phone number for log output."""
    if not phone:
        return ""
    if len(phone) <= 4:
        return "*" * len(phone)
    return "*" * (len(phone) - 4) + phone[-4:]
