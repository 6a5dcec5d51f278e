"""Custom exceptions for the syracuse sequence toolkit."""


class SyracuseError(RuntimeError):
    """Base class for domain-specific runtime errors."""


class UninitializedTermsError(SyracuseError):
    """Raised when an evaluation is requested without any initial terms."""


class ArityMismatchError(SyracuseError):
    """Raised when the initial terms do not match the relation's arity."""


class StepLimitExceededError(SyracuseError):
    """Raised when a search exceeds its configured maximum number of steps."""


class SearchCancelledError(SyracuseError):
    """Raised when a running search observes its cancellation event."""


class SearchTimeoutError(SyracuseError):
    """Raised when a batch search does not complete within its timeout."""


class RelationNotFoundError(SyracuseError):
    """Raised when a named recurrence relation is not registered."""
