from __future__ import annotations

import re
from datetime import time
from typing import Optional
from urllib.parse import urlparse

from ..core.exceptions import ValidationError
from .datetime_utils import parse_clock

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} måste fyllas i")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} måste vara minst {min_len} tecken")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_email(value: str) -> str:
    value = require_non_empty(value, "E-post")
    if not _EMAIL_RE.match(value):
        raise ValidationError("Ogiltig e-postadress")
    return value


def require_http_url(value: str, field_name: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValidationError(f"{field_name} måste vara en giltig länk")
    return value


def require_clock(value: str, field_name: str) -> time:
    value = require_non_empty(value, field_name)
    try:
        return parse_clock(value)
    except ValueError:
        raise ValidationError(f"{field_name} har fel format (HH:MM)")
