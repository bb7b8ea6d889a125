"""Error taxonomy for canteen feedback operations."""


class CanteenFeedbackError(Exception):
    """Base class for all application errors."""


class InvalidArgumentError(CanteenFeedbackError):
    """Raised when a caller supplies a missing or malformed argument."""


class StoreUnavailableError(CanteenFeedbackError):
    """Raised when the backing store cannot be read or written."""


class ComputationError(CanteenFeedbackError):
    """Raised when an aggregate cannot be derived from its inputs."""


class DuplicateRatingError(CanteenFeedbackError):
    """Raised when a user has already rated the same meal."""


class DuplicateMealError(CanteenFeedbackError):
    """Raised when a canteen already serves a meal in the same slot."""


class MealNotFoundError(CanteenFeedbackError):
    """Raised when a meal id does not exist."""
