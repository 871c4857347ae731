from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import httpx
from postgrest.exceptions import APIError

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def backend_call(action: str) -> Iterator[None]:
    """Run one backend request, converting client errors into StorageError.

    ``action`` is a short description used in logs ("insert attendance_records").
    """

    try:
        yield
    except APIError as exc:
        logger.error("Backend rejected %s: %s (code=%s)", action, exc.message, exc.code)
        raise StorageError(exc.message or f"{action} failed", code=exc.code) from exc
    except httpx.HTTPError as exc:
        logger.exception("Backend unreachable during %s", action)
        raise StorageError(f"{action} failed: {exc}") from exc


def rows(response) -> List[Dict[str, Any]]:
    return list(response.data or [])


def first(response) -> Optional[Dict[str, Any]]:
    data = rows(response)
    return data[0] if data else None


def count(response) -> int:
    return int(response.count or 0)


def iso(value) -> str:
    """Serialize date/time values for PostgREST filters and payloads."""
    return value.isoformat()
