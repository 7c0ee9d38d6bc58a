"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Logger setup
- LLM providers and response parsing
- PDF helpers
- Timestamps
"""

from vitae.utils.timestamp import now, now_exact, today

__all__ = ["now", "now_exact", "today"]
