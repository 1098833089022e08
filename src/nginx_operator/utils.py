"""Utility helpers shared across the Nginx operator package."""
from __future__ import annotations

from typing import Optional


def value_or_default(value: Optional[str], default: str) -> str:
    """Return ``value`` unless it is empty, in which case return ``default``."""

    if value:
        return value
    return default
