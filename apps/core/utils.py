"""
Utility functions for input validation and sanitization
"""
import html
import re
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
# Accepts 03001234567, +923001234567, 0300-1234567
PHONE_RE = re.compile(r'^(\+92|0)?3[0-9]{2}[-\s]?[0-9]{7}$')
POSTAL_CODE_RE = re.compile(r'^\d{5,6}$')
TRANSACTION_ID_RE = re.compile(r'^[A-Za-z0-9]{8,20}$')
PRODUCT_NAME_RE = re.compile(r"^[A-Za-z0-9\s\-'&.()]+$")
SPECIAL_CHAR_RE = re.compile(r'[!@#$%^&*()_+\-=\[\]{};\':"\\|,.<>/?]')

DANGEROUS_PATTERNS = [
    re.compile(r'<script[\s\S]*?>[\s\S]*?</script>', re.IGNORECASE),
    re.compile(r'<iframe[\s\S]*?>[\s\S]*?</iframe>', re.IGNORECASE),
    re.compile(r'javascript:', re.IGNORECASE),
    re.compile(r'on\w+\s*=', re.IGNORECASE),
    re.compile(r'<object[\s\S]*?>[\s\S]*?</object>', re.IGNORECASE),
    re.compile(r'<embed[\s\S]*?>', re.IGNORECASE),
]


def sanitize_input(value: Any) -> str:
    """
    Strip HTML tags and escape what is left.
    Non-string input sanitizes to an empty string.
    """
    if not value or not isinstance(value, str):
        return ''

    stripped = re.sub(r'<[^>]*>', '', value)
    escaped = html.escape(stripped, quote=True).replace('/', '&#x2F;')
    return escaped.strip()


def contains_dangerous_content(value: Optional[str]) -> bool:
    """Check for script tags, inline handlers and similar payloads."""
    if not value:
        return False
    return any(pattern.search(value) for pattern in DANGEROUS_PATTERNS)


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and bool(EMAIL_RE.match(email))


def is_valid_phone(phone: Optional[str]) -> bool:
    """Pakistan mobile format."""
    if not isinstance(phone, str):
        return False
    return bool(PHONE_RE.match(re.sub(r'\s+', '', phone)))


def is_valid_postal_code(postal_code: Optional[str]) -> bool:
    if not isinstance(postal_code, str):
        return False
    return bool(POSTAL_CODE_RE.match(re.sub(r'\s+', '', postal_code)))


def is_valid_transaction_id(transaction_id: Optional[str]) -> bool:
    """Wallet transaction ids are 8-20 alphanumerics."""
    if not transaction_id:
        return False
    return bool(TRANSACTION_ID_RE.match(transaction_id.strip()))


def is_valid_product_name(name: Optional[str]) -> bool:
    if not name or len(name) < 3 or len(name) > 100:
        return False
    return bool(PRODUCT_NAME_RE.match(name))


@dataclass
class PasswordValidation:
    """Result of a password policy check."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    strength: str = "weak"


def validate_password(password: Optional[str]) -> PasswordValidation:
    """
    Check a password against the storefront policy.
    Strength: 4+ criteria met is strong, 3 is medium, otherwise weak.
    """
    if not password:
        return PasswordValidation(is_valid=False, errors=["Password is required"])

    errors = []
    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")
    if len(password) > 128:
        errors.append("Password is too long (max 128 characters)")

    has_upper = bool(re.search(r'[A-Z]', password))
    has_lower = bool(re.search(r'[a-z]', password))
    has_number = bool(re.search(r'[0-9]', password))
    has_special = bool(SPECIAL_CHAR_RE.search(password))

    if not has_upper:
        errors.append("Password must contain at least one uppercase letter")
    if not has_lower:
        errors.append("Password must contain at least one lowercase letter")
    if not has_number:
        errors.append("Password must contain at least one number")
    if not has_special:
        errors.append("Password must contain at least one special character")

    score = sum([has_upper, has_lower, has_number, has_special, len(password) >= 12])
    if score >= 4:
        strength = "strong"
    elif score >= 3:
        strength = "medium"
    else:
        strength = "weak"

    return PasswordValidation(is_valid=not errors, errors=errors, strength=strength)


def get_client_ip(request) -> str:
    """
    Client identifier for a request: first X-Forwarded-For entry, then REMOTE_ADDR.
    """
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        first = forwarded.split(',')[0].strip()
        if first:
            return first
    return request.META.get('REMOTE_ADDR') or 'unknown'
