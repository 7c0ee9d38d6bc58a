"""Timestamp helpers for record stamping and output directory naming."""

from datetime import datetime


def now() -> str:
    """Compact timestamp for directory names (e.g., "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 timestamp with microseconds, used for createdAt/updatedAt stamps."""
    return datetime.now().isoformat()


def today() -> str:
    """Date stamp for dated results directories (e.g., "2025-11-14")."""
    return datetime.now().strftime("%Y-%m-%d")
