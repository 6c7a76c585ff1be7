"""Custom exception classes for FinTrack."""


class FinTrackError(Exception):
    """Base exception for FinTrack."""
    pass


class InvalidTransactionError(FinTrackError, ValueError):
    """A transaction record carries a value of the wrong type."""

    def __init__(self, record_ref, field: str, value, reason: str = "invalid value"):
        self.record_ref = record_ref
        self.field = field
        self.value = value
        super().__init__(f"Transaction {record_ref}: {reason} for '{field}': {value!r}")


class InvalidAmountError(FinTrackError, ValueError):
    """Monetary value that cannot be converted to cents."""
    pass
