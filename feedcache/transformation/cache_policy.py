"""
Cache Policy - Transform Layer

Decides whether a cached snapshot is still fresh. The caller supplies the
current time so the policy never reads a clock itself.
"""

from datetime import datetime, timedelta

MAX_CACHE_AGE = timedelta(days=7)


def validate(timestamp: datetime, against: datetime) -> bool:
    """
    Check a snapshot timestamp against the maximum cache age

    Args:
        timestamp: When the snapshot was written
        against: The current time

    Returns:
        bool: True while `against` is strictly before `timestamp + MAX_CACHE_AGE`
    """
    return against < timestamp + MAX_CACHE_AGE
