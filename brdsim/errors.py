"""
Exception hierarchy for the best-response dynamics simulator.

Argument problems are reported synchronously when a game, engine or batch is
set up. Running out of unexplored profiles is a normal outcome and is never
signalled with an exception.
"""


class DynamicsError(Exception):
    """Base class for every error raised by brdsim."""

    pass


class InvalidArgument(DynamicsError, ValueError):
    """Raised for non-positive counts, unsupported strategy cardinality,
    malformed payoff tables and out-of-range profile codes."""

    pass


class ResourceLimitError(DynamicsError, MemoryError):
    """Raised when a game is too large to enumerate its 2^n profiles."""

    pass


class EngineFinished(DynamicsError, RuntimeError):
    """Raised when stepping an engine that already reached a terminal state."""

    pass


class EngineNotFinished(DynamicsError, RuntimeError):
    """Raised when an outcome is requested from an engine that is still running."""

    pass


class IterationLimitExceeded(DynamicsError, RuntimeError):
    """Raised when a caller-imposed iteration cap is reached before termination.

    A restart step counts two iterations, so `iterations` can be `limit + 1`.
    """

    def __init__(self, limit: int, iterations: int):
        self.limit = limit
        self.iterations = iterations
        super().__init__(
            f"dynamics still running after {iterations} iterations "
            f"(limit {limit})"
        )
