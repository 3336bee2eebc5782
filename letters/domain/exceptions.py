class TreeHoleError(Exception):
    """Base class for every error the letters core signals to its callers."""


class ValidationError(TreeHoleError):
    """Raised when request input fails a domain rule (content, id, limit, reply)."""


class Unauthorized(TreeHoleError):
    """Raised when the operator credential is missing or does not match."""

    def __init__(self):
        super().__init__("Unauthorized")


class QuotaExceeded(TreeHoleError):
    """Raised when an origin already used its daily letter quota."""

    def __init__(self, origin, limit):
        self.origin = origin
        self.limit = limit
        super().__init__(
            f"Origin {origin} reached the daily limit of {limit}"
        )


class StoreFailure(TreeHoleError):
    """Raised when the database could not complete an operation."""
