"""
Error types for the route optimizer and seat recommender.
"""


class RouteOptimizationError(Exception):
    """Base class for all route_ga errors."""
    pass


class InvalidPermutationError(RouteOptimizationError):
    """
    Raised when a chromosome's stop sequence is not a permutation of the
    expected stop set.

    Crossover and mutation preserve the permutation by construction, so
    seeing this means an internal bug rather than bad user input.
    """
    pass


class EmptyInputError(RouteOptimizationError, ValueError):
    """Raised when optimization is requested for an empty stop collection."""
    pass


class DuplicateStopError(RouteOptimizationError, ValueError):
    """Raised when two input stops share the same id."""
    pass


class InvalidConfigurationError(RouteOptimizationError, ValueError):
    """Raised for non-positive budgets, bad rates or unknown policy names."""
    pass
