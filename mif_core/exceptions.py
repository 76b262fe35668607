"""Exception types raised by the conversion engine.

The CLI maps each of these to a message on stderr and an exit code.
Soft outcomes (a node outside the bounding box, a way no rule matched)
are never raised; they are counted in ConversionStats instead.
"""
from typing import Optional


class ConversionError(Exception):
    """Base class for fatal conversion errors."""
    pass


class ConfigurationError(ConversionError, ValueError):
    """Raised when the rule description is malformed or ambiguous."""

    def __init__(self, message: str, line: Optional[str] = None,
                 line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        if line is not None:
            location = f" (line {line_number})" if line_number else ""
            message = f"Error in '{line}'{location}: {message}"
        super().__init__(message)


class InputReadError(ConversionError, IOError):
    """Raised when the OSM input cannot be read to its end marker."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (read {line_number} lines)"
        super().__init__(message)


class OutputWriteError(ConversionError, IOError):
    """Raised when an output file cannot be opened or written."""
    pass


class DataError(ConversionError, ValueError):
    """Raised when a numeric field of the input fails to parse."""

    def __init__(self, field_name: str, token: str):
        self.field_name = field_name
        self.token = token
        super().__init__(f"Could not turn '{token}' into a {field_name}")
