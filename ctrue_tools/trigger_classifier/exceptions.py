"""
Exceptions for the CTRUE trigger-class analysis.

All of them inherit from CTrueError so callers can catch the whole family
with one except clause.
"""


class CTrueError(Exception):
    """Base exception for all CTRUE analysis errors."""
    pass


class ConfigurationError(CTrueError):
    """
    Raised when a run table or trigger-input map is invalid

    Examples:
    - Unknown period preset
    - Duplicate run number, non-positive weight, negative mu
    - Trigger input bit outside a 32-bit word
    - Changing period while events of the previous one are accumulated
    """
    pass


class RunNotFoundError(CTrueError, KeyError):
    """Raised by GoodRunTable[run] when the run is not a known good run."""

    def __init__(self, run_id: int, period: str = None):
        self.run_id = run_id
        self.period = period

        message = f"Run {run_id} is not in the good-run table"
        if period:
            message += f" for period '{period}'"

        super().__init__(message)


class InsufficientDataError(CTrueError):
    """
    Raised when the efficiency fit is underdetermined

    Examples:
    - Fewer distinct mu values than polynomial coefficients
    - No run bucket with a non-zero total
    """
    pass
