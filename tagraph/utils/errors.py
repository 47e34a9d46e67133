"""
Exceptions raised by the bar series and indicator graph.
"""


class TaGraphError(Exception):
    """Base exception for ta-graph errors."""
    pass


class UnsupportedOperationError(TaGraphError, NotImplementedError):
    """Raised by mutation entry points that a fixed series or read-only view does not support."""
    pass


class IncompatibleSeriesError(TaGraphError, ValueError):
    """Raised when indicators over series with different base date or time period are combined."""
    pass
