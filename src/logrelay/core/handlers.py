from __future__ import annotations

"""
Output Handlers.

A handler filters a record by its own level, renders it through its
formatter and writes the line to its sink. ``handle`` holds the handler's
lock for exactly the duration of ``emit``; ``close`` takes the same lock, so a
sink is never released under an in-flight write.

Concurrency contract: apart from ``close``, the lock serializes writes
only. Reassigning ``level``, ``formatter`` or ``out`` (directly, through
``load_config`` or through options) is NOT serialized against an in-flight
``emit``; callers that reconfigure handlers while other threads are
logging must synchronize externally or accept that an emit may see the old value.

Emit-time failures (formatter errors, write errors) are reported on the
stderr diagnostic channel and never propagate to the logging call site.
"""

import logging
import os
import sys
import threading
from abc import ABC, abstractmethod
from typing import IO, TYPE_CHECKING, Any, Mapping, Optional

from logrelay.core.formatters import DEFAULT_FORMATTER, TERMINAL_FORMATTER, Formatter
from logrelay.domain.config_models import FileHandlerConfig, HandlerConfig
from logrelay.domain.constants import DEFAULT_FORMATTER_NAME, TERMINAL_FORMATTER_NAME
from logrelay.domain.errors import ConfigurationError, HandlerOutputError, MissingOutputError
from logrelay.domain.levels import NOTHING, is_filtered, level_by_name
from logrelay.domain.record import LogRecord
from logrelay.infra.diagnostics import report_error

if TYPE_CHECKING:
    from logrelay.core.registry import Registry

logger = logging.getLogger(__name__)


class Handler(ABC):
    """
    Base class for output sinks.

    Attributes:
        name: Optional display name.
        level: Records strictly below this level are suppressed.
        formatter: Renderer used by ``emit``.
    """

    def __init__(
            self,
            name: str = "",
            level: int = NOTHING,
            formatter: Optional[Formatter] = None,
    ) -> None:
        self.name = name
        self.level = level
        self.formatter: Formatter = formatter if formatter is not None else DEFAULT_FORMATTER
        self._lock = threading.Lock()
        self._closed = False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} level={self.level}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def filter(self, record: LogRecord) -> bool:
        """Return True when the record must be suppressed."""
        return is_filtered(record.level, self.level)

    def handle(self, record: LogRecord) -> None:
        """Filter the record and, if it passes, emit it under the handler lock."""
        if self._closed:
            return
        if self.filter(record):
            return
        with self._lock:
            if self._closed:
                return
            self.emit(record)

    @abstractmethod
    def emit(self, record: LogRecord) -> None:
        """Write the record to the sink."""

    def close(self) -> None:
        """Release the sink. Calling it more than once is harmless."""
        with self._lock:
            self._closed = True

    def load_config(
            self,
            config: Mapping[str, Any],
            registry: Optional["Registry"] = None,
    ) -> None:
        """Apply a dynamic configuration mapping."""
        cfg = HandlerConfig.from_mapping(config, TERMINAL_FORMATTER_NAME)
        self._apply_base_config(cfg, registry)

    def _apply_base_config(self, cfg: HandlerConfig, registry: Optional["Registry"]) -> None:
        formatter = _lookup_formatter(cfg.formatter, registry)
        level = level_by_name(cfg.level)
        self.name = cfg.name
        self.level = level
        self.formatter = formatter


# -----------------------------------------------------------------------------
# Null
# -----------------------------------------------------------------------------
class NullHandler(Handler):
    """Handler that suppresses every record."""

    def filter(self, record: LogRecord) -> bool:
        return True

    def handle(self, record: LogRecord) -> None:
        pass

    def emit(self, record: LogRecord) -> None:
        pass

    def load_config(
            self,
            config: Mapping[str, Any],
            registry: Optional["Registry"] = None,
    ) -> None:
        pass


# -----------------------------------------------------------------------------
# Stream
# -----------------------------------------------------------------------------
class _WriterHandler(Handler):
    """Shared emit path of handlers that write text lines to ``out``."""

    out: Optional[IO[str]]

    def emit(self, record: LogRecord) -> None:
        self._require_output()
        line = self._render(record)
        if line is not None:
            self._write_line(line)

    def _render(self, record: LogRecord) -> Optional[str]:
        try:
            return self.formatter.format(record)
        except Exception as e:
            report_error(f"Format record failed, [{e}]")
            return None

    def _require_output(self) -> None:
        # Runs under the handler lock, after the closed check
        if self.out is None:
            raise MissingOutputError(
                f"{type(self).__name__}: an output must be set before use"
            )

    def _write_line(self, line: str) -> bool:
        """Write one line to ``out``; return False if the write failed."""
        out = self.out
        if out is None:
            return False
        try:
            out.write(line + "\n")
            out.flush()
        except (OSError, ValueError) as e:
            report_error(f"Write record failed, [{e}]")
            return False
        return True


class StreamHandler(_WriterHandler):
    """
    Writes formatted records to a text stream (stderr by default).

    The stream is never closed by the handler since it may be shared
    (``sys.stdout`` / ``sys.stderr``).
    """

    def __init__(
            self,
            out: Optional[IO[str]] = None,
            name: str = "",
            level: int = NOTHING,
            formatter: Optional[Formatter] = None,
    ) -> None:
        super().__init__(
            name=name,
            level=level,
            formatter=formatter if formatter is not None else TERMINAL_FORMATTER,
        )
        self.out = out if out is not None else sys.stderr


# -----------------------------------------------------------------------------
# File
# -----------------------------------------------------------------------------
class FileHandler(_WriterHandler):
    """
    Appends formatted records to a file.

    The file is opened (append, create) when a filename is given to the
    constructor or through ``load_config``. The handler only ever closes the
    file it opened itself; a stream installed with ``with_output`` is left
    open.

    Raises:
        HandlerOutputError: If the file can not be opened.
    """

    def __init__(
            self,
            filename: Optional[str] = None,
            name: str = "",
            level: int = NOTHING,
            formatter: Optional[Formatter] = None,
    ) -> None:
        super().__init__(name=name, level=level, formatter=formatter)
        self.path: str = ""
        self.out = None
        self._file: Optional[IO[str]] = None
        if filename:
            self._open(filename)

    def load_config(
            self,
            config: Mapping[str, Any],
            registry: Optional["Registry"] = None,
    ) -> None:
        cfg = FileHandlerConfig.from_mapping(config, DEFAULT_FORMATTER_NAME)
        formatter = _lookup_formatter(cfg.formatter, registry)
        level = level_by_name(cfg.level)
        self._open(cfg.filename)
        self.name = cfg.name
        self.level = level
        self.formatter = formatter

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self.out = None
            stream, self._file = self._file, None
        if stream is not None:
            stream.close()

    def _open(self, filename: str) -> None:
        try:
            stream = open(filename, "a", encoding="utf-8")
        except OSError as e:
            raise HandlerOutputError(f"Can not open file {filename}: {e}") from e

        previous = self._file
        self._file = stream
        self.out = stream
        self.path = os.fspath(filename)
        self._closed = False
        logger.debug(f"FileHandler: opened {self.path}")

        if previous is not None:
            try:
                previous.close()
            except OSError as e:
                report_error(f"Close previous file failed, [{e}]")


# -----------------------------------------------------------------------------
# Private helpers
# -----------------------------------------------------------------------------
def _lookup_formatter(name: str, registry: Optional["Registry"]) -> Formatter:
    if registry is None:
        from logrelay.core.registry import get_registry
        registry = get_registry()

    formatter = registry.get_formatter(name)
    if formatter is None:
        raise ConfigurationError(f"can not find formatter: {name}")
    return formatter
