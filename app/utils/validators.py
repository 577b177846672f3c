"""
Validation utilities for the Urban Listings API.
Email format, password policy, slug generation and pagination normalisation.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple
from email_validator import validate_email as check_email_address, EmailNotValidError

from app.config import settings


UUID_PATTERN = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.IGNORECASE)

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*"
PHONE_MIN_LENGTH = 10

# (rule, message) pairs, checked in order and reported together
PASSWORD_RULES = [
    (lambda p: len(p) >= PASSWORD_MIN_LENGTH,
     f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"),
    (lambda p: re.search(r'[a-z]', p) is not None,
     "Password must contain at least one lowercase letter"),
    (lambda p: re.search(r'[A-Z]', p) is not None,
     "Password must contain at least one uppercase letter"),
    (lambda p: re.search(r'[0-9]', p) is not None,
     "Password must contain at least one number"),
    (lambda p: any(c in PASSWORD_SPECIAL_CHARACTERS for c in p),
     f"Password must contain at least one special character ({PASSWORD_SPECIAL_CHARACTERS})"),
]


@dataclass
class PasswordValidationResult:
    valid: bool
    errors: List[str]


def validate_email(email: Optional[str]) -> bool:
    """Syntax check only; the domain is not looked up."""
    if not email:
        return False
    try:
        check_email_address(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_password_strength(password: Optional[str]) -> PasswordValidationResult:
    """
    Check a password against every rule of the policy.

    All violations are collected, so a password failing three rules yields
    three messages.
    """
    password = password or ""
    errors = [message for rule, message in PASSWORD_RULES if not rule(password)]
    return PasswordValidationResult(valid=not errors, errors=errors)


def validate_phone(phone: Optional[str]) -> bool:
    """Length heuristic only; no numbering-plan validation."""
    return bool(phone) and len(phone) >= PHONE_MIN_LENGTH


def generate_slug(text: str) -> str:
    """
    Derive a URL slug from a title or name.

    Lowercases, collapses whitespace runs into hyphens, strips anything that
    is not an ASCII word character or hyphen, then collapses repeated hyphens.
    """
    slug = text.lower().strip()
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'[^\w-]', '', slug, flags=re.ASCII)
    slug = re.sub(r'--+', '-', slug)
    return slug


def is_uuid(value: Optional[str]) -> bool:
    """True when the value has the canonical 8-4-4-4-12 hex shape."""
    return bool(value) and UUID_PATTERN.match(value) is not None


def _to_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_pagination_params(page: Any = None, limit: Any = None) -> Tuple[int, int]:
    """
    Normalise page/limit query values.

    page is clamped to >= 1 and limit to 1..MAX_PAGE_SIZE; missing or
    unparseable values fall back to the defaults.
    """
    page_number = max(1, _to_int(page, 1))
    page_size = min(settings.max_page_size, max(1, _to_int(limit, settings.default_page_size)))
    return page_number, page_size


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for total items; no empty trailing page."""
    return math.ceil(total / limit)
