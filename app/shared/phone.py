"""
Phone number validation utilities
"""
import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberType

MOBILE_TYPES = (PhoneNumberType.MOBILE, PhoneNumberType.FIXED_LINE_OR_MOBILE)


def _is_mobile_in(phone: str, region) -> bool:
    try:
        parsed = phonenumbers.parse(phone, region)
    except NumberParseException:
        return False
    if not phonenumbers.is_valid_number(parsed):
        return False
    return phonenumbers.number_type(parsed) in MOBILE_TYPES


def is_mobile_phone(phone: str, default_region: str = "US") -> bool:
    """
    Check that a string is a valid mobile number.

    Args:
        phone: Phone number string, E.164 or national format
        default_region: Region tried first when the number has no leading "+"

    Returns:
        True if the number parses, is valid and can be a mobile line.
        A national number that fails in default_region is accepted if it
        is a mobile number in any other supported region.
    """
    if not isinstance(phone, str) or not phone.strip():
        return False
    if _is_mobile_in(phone, default_region):
        return True
    if phone.strip().startswith("+"):
        return False
    return any(
        _is_mobile_in(phone, region)
        for region in sorted(phonenumbers.SUPPORTED_REGIONS)
        if region != default_region
    )


def mask_phone(phone: str) -> str:
    """Keep the last 4 digits for log lines."""
    digits = "".join(filter(str.isdigit, phone or ""))
    return f"***{digits[-4:]}" if len(digits) >= 4 else "***"
