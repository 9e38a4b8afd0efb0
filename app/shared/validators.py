# app/shared/validators.py
import re
from typing import Optional

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

def is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""

def is_valid_email(value: str) -> bool:
    return bool(EMAIL_REGEX.match(value))
