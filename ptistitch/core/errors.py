"""
Rejections raised while loading sources or editing slices.
None of them is fatal: the composer reports them and leaves its state alone.
"""
from .config import Severity


class SliceRejected(Exception):
    """Base class for user-facing rejections."""
    severity = Severity.WARNING

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DecodeError(SliceRejected):
    """Source bytes could not be decoded as audio."""
    severity = Severity.ERROR


class DurationExceeded(SliceRejected):
    """Source or kit is longer than the configured ceiling."""


class CapacityExceeded(SliceRejected):
    """Slice or layer ceiling reached."""


class MinimumViolation(SliceRejected):
    """Edit would leave a slice without layers."""
