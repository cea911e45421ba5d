"""Exceptions raised by the route optimizer."""


class RouteOptimizerError(Exception):
    """Base class for route optimizer errors."""
    pass


class InvalidEdgeWeight(RouteOptimizerError, ValueError):
    """An edge whose effective weight is negative or not finite."""

    def __init__(self, edge, weight: float):
        self.edge = edge
        self.weight = weight
        super().__init__(f"Invalid edge weight {weight} for edge {edge}: weights must be finite and >= 0")


class InvalidWindowFormat(RouteOptimizerError, ValueError):
    """A delivery window string that cannot be turned into a cutoff."""

    def __init__(self, window, reason: str):
        self.window = window
        self.reason = reason
        super().__init__(f"Invalid delivery window {window!r}: {reason}")


class UnknownCriterion(RouteOptimizerError, ValueError):
    """Raised only when a criterion is parsed in strict mode."""

    def __init__(self, criterion, valid: list[str]):
        self.criterion = criterion
        super().__init__(f"Unknown criterion: {criterion!r}. Must be one of {valid}")
