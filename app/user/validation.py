"""Field rules for incoming user records.

Rules run against the raw request values; sanitization happens only after a
record passes. Every field is checked so the caller gets all messages at once.
"""

import re
from typing import Callable, List, Optional, Tuple

from app.user.models import UserIn


USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100

# Exactly one "@", with something on both sides and no line breaks
_EMAIL_RE = re.compile(r"[^@\r\n]+@[^@\r\n]+")

Rule = Tuple[Callable[[str], bool], str]


def _is_present(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def is_valid_email(value: str) -> bool:
    return _EMAIL_RE.fullmatch(value) is not None


USERNAME_RULES: List[Rule] = [
    (lambda v: len(v) >= USERNAME_MIN_LENGTH,
     f"Username must be at least {USERNAME_MIN_LENGTH} characters."),
    (lambda v: len(v) <= USERNAME_MAX_LENGTH,
     f"Username must be at most {USERNAME_MAX_LENGTH} characters."),
]

EMAIL_RULES: List[Rule] = [
    (is_valid_email, "Email must be a valid email address."),
    (lambda v: len(v) <= EMAIL_MAX_LENGTH,
     f"Email must be at most {EMAIL_MAX_LENGTH} characters."),
]

FIELD_RULES = [
    ("username", "Username is required.", USERNAME_RULES),
    ("email", "Email is required.", EMAIL_RULES),
]


def validate_user(candidate: UserIn) -> List[str]:
    """Return every violated rule's message; an empty list means valid."""
    errors: List[str] = []
    for field, required_message, rules in FIELD_RULES:
        value = getattr(candidate, field)
        if not _is_present(value):
            # Remaining rules only apply to a value that is present
            errors.append(required_message)
            continue
        for check, message in rules:
            if not check(value):
                errors.append(message)
    return errors
