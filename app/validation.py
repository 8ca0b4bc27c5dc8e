"""
Field validators for the login and registration forms.

Each validator returns None when the value is acceptable, or the error
message to show under the field.
"""

import re

MIN_PASSWORD_LENGTH = 6

_SYMBOL = re.compile(r"[^A-Za-z0-9]")
_NEW_NIC = re.compile(r"[0-9]{12}")
_OLD_NIC = re.compile(r"[0-9]{9}[A-Za-z]")
_ALL_DIGITS = re.compile(r"[0-9]+")
# nine or more digits then letters only, e.g. 123456789VX
_OLD_NIC_ATTEMPT = re.compile(r"[0-9]{9,}[A-Za-z]+")

NIC_REQUIRED = "NIC Number is required"
NIC_SYMBOLS = "NIC cannot contain symbols or special characters"
NIC_NEW_FORMAT = "New NIC format must contain exactly 12 digits"
NIC_OLD_FORMAT = "Old NIC format must be 9 digits followed by 1 letter (e.g., 123456789V)"
NIC_INVALID = "Invalid NIC format. Use 12 digits (new) or 9 digits + 1 letter (old)"

PASSWORDS_DO_NOT_MATCH = "Passwords do not match"
PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
EMAIL_INVALID = "Please enter a valid email address"


def validate_nic(raw: str) -> str | None:
    """
    Check a national identity card number.

    Accepts the new format (12 digits) and the old format (9 digits and a
    letter, e.g. 123456789V). Checks run in order and the first failing one
    decides the message.
    """
    nic = (raw or "").strip()

    if not nic:
        return NIC_REQUIRED
    if _SYMBOL.search(nic):
        return NIC_SYMBOLS
    if _NEW_NIC.fullmatch(nic) or _OLD_NIC.fullmatch(nic):
        return None
    if _ALL_DIGITS.fullmatch(nic):
        return NIC_NEW_FORMAT
    if _OLD_NIC_ATTEMPT.fullmatch(nic):
        return NIC_OLD_FORMAT
    return NIC_INVALID


def validate_password_match(password: str, confirm_password: str) -> str | None:
    if password != confirm_password:
        return PASSWORDS_DO_NOT_MATCH
    return None


def validate_password_length(password: str) -> str | None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        return PASSWORD_TOO_SHORT
    return None


def validate_required(value: str, label: str) -> str | None:
    if not (value or "").strip():
        return f"{label} is required"
    return None


def validate_email(value: str) -> str | None:
    """Loose shape check: something@domain.tld."""
    value = (value or "").strip()
    local, at, domain = value.partition("@")
    if not at or not local or "." not in domain:
        return EMAIL_INVALID
    if domain.startswith(".") or domain.endswith("."):
        return EMAIL_INVALID
    return None
