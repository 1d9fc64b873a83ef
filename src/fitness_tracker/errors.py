"""Domain error types."""


class FitnessTrackerError(Exception):
    """Base class for errors raised by the fitness tracker."""


class ValidationError(FitnessTrackerError):
    """Raised when onboarding input is missing or malformed."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid profile fields: {fields}")


class AnalysisError(FitnessTrackerError):
    """Raised when a food or exercise analysis cannot produce a result."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Failed to analyze {kind}")


class NavigationError(FitnessTrackerError):
    """Raised for a view transition that is not allowed from the current view."""


class FlowBusyError(FitnessTrackerError):
    """Raised when a logger flow already has a submission in flight."""


class MissingInputError(FitnessTrackerError):
    """Raised when a logger is submitted without any input to analyze."""
