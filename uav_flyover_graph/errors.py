class PlannerError(Exception):
    """Base class for graph construction failures."""


class ConfigurationError(PlannerError):
    pass


class InsufficientBoundary(ConfigurationError):
    """Raised when no flyzone is given or a flyzone has fewer than 3 points."""


class InvalidGeometry(PlannerError):
    """Raised for degenerate node pairs such as coincident centers."""
