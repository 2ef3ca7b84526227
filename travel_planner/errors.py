"""Failure kinds surfaced to callers of the itinerary store."""
from __future__ import annotations

import functools
import logging
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


class ItineraryError(Exception):
    kind = "error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind


class NotFoundError(ItineraryError):
    kind = "not_found"


class ValidationError(ItineraryError, ValueError):
    kind = "validation"


class ConflictError(ItineraryError):
    kind = "conflict"


class StorageError(ItineraryError):
    kind = "storage"


def translate_errors(fn: F) -> F:
    """Let taxonomy errors through, funnel everything else into StorageError."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ItineraryError:
            raise
        except Exception as e:
            logger.error(f"{fn.__name__} failed: {e}")
            raise StorageError(f"{fn.__name__}: {e}") from e

    return wrapper  # type: ignore[return-value]
