"""Error kinds raised by the stores and engines."""


class GoalTrackerError(Exception):
    """Base class for application errors."""


class PersistenceError(GoalTrackerError):
    """A read or write against the local store failed."""


class ValidationError(GoalTrackerError):
    """Input rejected before touching the store (e.g. an empty title)."""


class NotFoundError(GoalTrackerError):
    """A single required record does not exist."""
