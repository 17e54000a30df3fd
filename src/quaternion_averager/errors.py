"""Define the exceptions raised while averaging quaternions."""


class QuaternionAveragingError(Exception):
    """Base class for all errors raised by the quaternion averager."""


class InvalidWeightError(QuaternionAveragingError, ValueError):
    """Raised when a sample's weight is negative or not a finite number."""

    def __init__(self, weight: float) -> None:
        """Initialize the error using the rejected weight."""
        super().__init__(f"Sample weights must be finite and non-negative, got {weight}.")
        self.weight = weight


class NoSamplesError(QuaternionAveragingError):
    """Raised when an average is requested before any positively weighted sample was added."""


class EigenDecompositionError(QuaternionAveragingError):
    """Raised when the symmetric eigensolver fails or returns an unusable result."""
