"""Error types raised by flamaster.

Every error is fatal for a run; the CLI reports it and exits non-zero.
"""

from typing import Optional


class FlamasterError(Exception):
    """Base class for all flamaster errors."""


class MalformedInputError(FlamasterError):
    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class InputReadError(FlamasterError):
    """Input CSV could not be opened or read."""


class UnknownOptionError(FlamasterError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown option '{name}'")


class InvalidOptionValueError(FlamasterError):
    def __init__(self, name: str, value: str, expected: str):
        self.name = name
        self.value = value
        super().__init__(f"invalid value '{value}' for option '{name}': expected {expected}")


class TemplateError(FlamasterError):
    """Template could not be loaded or rendered."""


class OutputError(FlamasterError):
    """Rendered output could not be written."""
