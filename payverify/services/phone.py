"""
Canonical Nigerian (+234) phone form used as the uniqueness key.
"""

import re

COUNTRY_CODE = "+234"

_WHITESPACE = re.compile(r"\s+")


def normalize_phone(phone: str) -> str:
    """
    "0803 123 4567"  -> "+2348031234567"
    "2348031234567"  -> "+2348031234567"
    "+2348031234567" -> unchanged
    Anything else is returned with whitespace removed.
    """
    phone = _WHITESPACE.sub("", phone)
    if phone.startswith(COUNTRY_CODE):
        return phone
    if phone.startswith(COUNTRY_CODE[1:]):
        return f"+{phone}"
    if phone.startswith("0"):
        return f"{COUNTRY_CODE}{phone[1:]}"
    return phone
