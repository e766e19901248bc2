"""Todo priority levels."""
from __future__ import annotations

import enum


class Priority(enum.IntEnum):
    """Serialized by integer value on the wire and in the database."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


__all__ = ["Priority"]
