"""
Exception types raised by roletagger.

The tag controller itself never raises: stale or duplicate commits degrade
to no-ops. These are for the APIs around it (registry, admin, stores).
"""


class RoletaggerError(Exception):
    """Base class for roletagger errors."""
    pass


class InvalidTagError(RoletaggerError, ValueError):
    """Raised when a tag is empty after trimming."""
    pass


class StoreError(RoletaggerError):
    """Raised when a backing store cannot be read or written."""
    pass
