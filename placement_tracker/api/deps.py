"""
Shared route dependencies.
"""

from datetime import datetime, timezone


def get_now() -> datetime:
    """Evaluation time for status derivation; overridden in tests."""
    return datetime.now(timezone.utc)
