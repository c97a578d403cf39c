"""Error taxonomy for fleet charge scheduling."""
from dataclasses import dataclass
from enum import Enum


class FleetChargingError(Exception):
    """Base class for all scheduler and data provider errors."""


class InvalidArgumentError(FleetChargingError, ValueError):
    """Raised when an input violates a precondition before any work begins."""


class DataUnavailableError(FleetChargingError):
    """Raised when trucks, chargers or the time horizon cannot be retrieved."""


class SchedulingError(FleetChargingError):
    """Raised when a produced schedule breaks one of its own invariants."""


class ErrorKind(Enum):
    """Error kinds surfaced to callers of the scheduling pipeline."""
    INVALID_INPUT = 'invalid_input'
    DATA_UNAVAILABLE = 'data_unavailable'
    CALCULATION = 'calculation'
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class AppError:
    """Application-level error returned in place of a schedule."""

    kind: ErrorKind
    message: str = ''

    @classmethod
    def from_exception(cls, exc: BaseException) -> 'AppError':
        """
        Map an exception raised by the pipeline to an AppError.

        Args:
            exc: Exception raised while fetching data or scheduling

        Returns:
            AppError with the matching kind and the exception message
        """
        message = str(exc)
        if isinstance(exc, InvalidArgumentError):
            return cls(ErrorKind.INVALID_INPUT, message or 'Invalid input')
        if isinstance(exc, DataUnavailableError):
            return cls(ErrorKind.DATA_UNAVAILABLE, message or 'Data unavailable')
        if isinstance(exc, SchedulingError):
            return cls(ErrorKind.CALCULATION, message or 'Failed to generate schedule')
        return cls(ErrorKind.UNKNOWN, message)

    def display_message(self) -> str:
        """Human-readable error message."""
        if self.kind == ErrorKind.INVALID_INPUT:
            return f"Invalid input: {self.message}"
        if self.kind == ErrorKind.DATA_UNAVAILABLE:
            return f"Data error: {self.message}"
        if self.kind == ErrorKind.CALCULATION:
            return f"Calculation error: {self.message}"
        return "An unknown error occurred"

    def __repr__(self):
        return f"AppError(kind={self.kind.value}, message={self.message!r})"
