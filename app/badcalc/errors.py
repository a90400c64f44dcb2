"""
Errors Module

Exception types shared by the calculator components.
"""


# =============================================================================
# Custom Exceptions
# =============================================================================

class CalculatorError(Exception):
    """Base exception for calculator errors."""
    pass


class InvalidInput(CalculatorError, ValueError):
    """Raised when an operand or raw input line is rejected."""
    pass


class HistoryWriteError(CalculatorError):
    """Raised when a record cannot be appended to the history file."""
    pass


class StartupError(CalculatorError):
    """Raised when the data directory cannot be prepared."""
    pass
