from __future__ import annotations

"""
logrelay: leveled, structured logging.

Named loggers build immutable records and fan them out to handlers; each
handler filters by its own level, renders through a text or JSON formatter
and writes under its own lock.

    from logrelay import Fields, get_logger, INFO

    log = get_logger("billing")
    log.set_level(INFO)
    log.infof("charged %s", customer_id, Fields(amount=12.5))
"""

import logging

from logrelay.core.caller import CallerInfo, CallerResolver, FrameCallerResolver, NoCallerResolver
from logrelay.core.formatters import (
    DEFAULT_FORMATTER,
    TERMINAL_FORMATTER,
    Formatter,
    JsonFormatter,
    TextFormatter,
    format_time,
)
from logrelay.core.handlers import FileHandler, Handler, NullHandler, StreamHandler
from logrelay.core.logger import Logger
from logrelay.core.options import (
    Option,
    apply_options,
    discard_output,
    with_caller_stack_depth,
    with_formatter,
    with_handlers,
    with_level,
    with_name,
    with_output,
    with_runtime_caller,
)
from logrelay.core.registry import (
    Registry,
    disable_existing_loggers,
    get_logger,
    get_registry,
    reset_registry,
    set_registry,
)
from logrelay.core.rotating import RotatingFileHandler
from logrelay.domain.errors import (
    ConfigurationError,
    CriticalLogError,
    DuplicateRegistrationError,
    FormatError,
    HandlerOutputError,
    LogRelayError,
    MissingOutputError,
    UnknownLevelError,
)
from logrelay.domain.levels import (
    ALL,
    CRITICAL,
    DEBUG,
    ERROR,
    INFO,
    NOTHING,
    NOTICE,
    WARN,
    WARNING,
    level_by_name,
    level_name,
    register_level,
)
from logrelay.domain.record import Fields, LogRecord, new_record
from logrelay.infra.dict_config import dict_config

# Internal diagnostics go through the standard library; stay silent by default
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # levels
    "NOTHING",
    "DEBUG",
    "INFO",
    "WARN",
    "WARNING",
    "ERROR",
    "NOTICE",
    "CRITICAL",
    "ALL",
    "level_name",
    "level_by_name",
    "register_level",
    # records
    "Fields",
    "LogRecord",
    "new_record",
    # formatters
    "Formatter",
    "TextFormatter",
    "JsonFormatter",
    "DEFAULT_FORMATTER",
    "TERMINAL_FORMATTER",
    "format_time",
    # handlers
    "Handler",
    "NullHandler",
    "StreamHandler",
    "FileHandler",
    "RotatingFileHandler",
    # loggers & registry
    "Logger",
    "Registry",
    "get_logger",
    "get_registry",
    "set_registry",
    "reset_registry",
    "disable_existing_loggers",
    "dict_config",
    # caller capture
    "CallerInfo",
    "CallerResolver",
    "FrameCallerResolver",
    "NoCallerResolver",
    # options
    "Option",
    "apply_options",
    "with_name",
    "with_level",
    "with_formatter",
    "with_handlers",
    "with_runtime_caller",
    "with_caller_stack_depth",
    "with_output",
    "discard_output",
    # errors
    "LogRelayError",
    "UnknownLevelError",
    "DuplicateRegistrationError",
    "MissingOutputError",
    "HandlerOutputError",
    "ConfigurationError",
    "FormatError",
    "CriticalLogError",
]
