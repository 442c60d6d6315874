from __future__ import annotations

"""
Error Taxonomy.

Programmer errors (unknown level, duplicate registration, missing output)
signal misuse and should not be caught by application code. Configuration
errors are returned to the configurer as explicit failures. Emit-time
failures never reach the application; handlers report them on stderr.
"""

from typing import Any, Optional


class LogRelayError(Exception):
    """Base class for every error raised by logrelay."""


class UnknownLevelError(LogRelayError, ValueError):
    """Raised when a level name has not been registered."""

    def __init__(self, level_name: str) -> None:
        super().__init__(f"can not find level by name: {level_name}")
        self.level_name = level_name


class DuplicateRegistrationError(LogRelayError, KeyError):
    """Raised when a name is registered twice in the same registry table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Repeated registration key: {name}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0])


class MissingOutputError(LogRelayError, RuntimeError):
    """Raised when a handler that requires an output is used without one."""


class HandlerOutputError(LogRelayError, OSError):
    """Raised when a file sink can not be opened."""


class ConfigurationError(LogRelayError, ValueError):
    """Raised for invalid dynamic configuration (recoverable)."""


class FormatError(LogRelayError):
    """Raised by a formatter that could not render a record."""


class CriticalLogError(LogRelayError):
    """
    Raised by the panic-flavored logger methods after the record is dispatched.

    Attributes:
        message: The rendered log message.
        record: The dispatched record, if one was built.
    """

    def __init__(self, message: str, record: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.record = record
