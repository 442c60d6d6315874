from __future__ import annotations

"""
Logger Dispatch Core.

A ``Logger`` turns a leveled call into a ``LogRecord``, drops it if it is
below the logger threshold, and otherwise hands it to every attached
handler in insertion order, synchronously, on the calling thread.

Concurrency contract: ``handlers``, ``level``, ``func_call_depth`` and
``runtime_caller`` are plain attributes. Nothing here locks them against
concurrent dispatch. Configure loggers before logging starts, or
serialize configuration with logging traffic externally; a dispatch may
otherwise observe a partially updated handler list.
"""

import logging
from typing import TYPE_CHECKING, Any, List, Mapping, Optional

from logrelay.core.caller import UNKNOWN_CALLER, CallerInfo, CallerResolver, FrameCallerResolver
from logrelay.core.handlers import Handler
from logrelay.domain import levels
from logrelay.domain.config_models import LoggerConfig
from logrelay.domain.constants import DEFAULT_FUNC_CALL_DEPTH
from logrelay.domain.errors import ConfigurationError, CriticalLogError
from logrelay.domain.levels import is_filtered, level_by_name
from logrelay.domain.record import LogRecord
from logrelay.infra.diagnostics import report_error

if TYPE_CHECKING:
    from logrelay.core.options import Option
    from logrelay.core.registry import Registry

logger = logging.getLogger(__name__)


class Logger:
    """
    Named dispatch point.

    Args:
        name: Logger name, copied into every record.
        level: Records strictly below this level are dropped.
        handlers: Initial handlers; duplicates are allowed.
        func_call_depth: Frames to ascend from the internal ``_log`` to the
            application's call site. Raise it when wrapping the leveled
            methods in your own helper.
        runtime_caller: Capture file, line and function of the caller.
        caller_resolver: Stack inspection capability.
    """

    def __init__(
            self,
            name: str,
            level: int = levels.NOTHING,
            handlers: Optional[List[Handler]] = None,
            func_call_depth: int = DEFAULT_FUNC_CALL_DEPTH,
            runtime_caller: bool = True,
            caller_resolver: Optional[CallerResolver] = None,
    ) -> None:
        self.name = name
        self.level = level
        self.handlers: List[Handler] = list(handlers) if handlers else []
        self.func_call_depth = func_call_depth
        self.runtime_caller = runtime_caller
        self.caller_resolver: CallerResolver = caller_resolver or FrameCallerResolver()

    def __repr__(self) -> str:
        return f"<Logger name={self.name!r} level={self.level} handlers={len(self.handlers)}>"

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------
    def set_level(self, level: int) -> None:
        self.level = level

    def set_func_call_depth(self, depth: int) -> None:
        """Change the number of frames to ascend when capturing the caller."""
        self.func_call_depth = depth

    def enable_runtime_caller(self, enable: bool) -> None:
        self.runtime_caller = enable

    def add_handler(self, *handlers: Handler) -> None:
        """Append handlers; not synchronized with concurrent dispatch."""
        self.handlers.extend(handlers)

    def apply_options(self, *options: "Option") -> List[bool]:
        """
        Apply typed options to this logger.

        Returns:
            List[bool]: Per option, whether it is supported by loggers.
        """
        from logrelay.core.options import apply_options
        return apply_options(self, *options)

    def load_config(
            self,
            config: Mapping[str, Any],
            registry: Optional["Registry"] = None,
    ) -> None:
        """
        Apply a dynamic configuration mapping.

        Recognized keys: ``name``, ``level``, ``enable_runtime_caller`` and
        ``handlers`` (registered handler names, attached in order).

        Raises:
            ConfigurationError: On invalid values or unknown handler names.
            UnknownLevelError: If ``level`` names an unregistered level.
        """
        cfg = LoggerConfig.from_mapping(config)

        if registry is None:
            from logrelay.core.registry import get_registry
            registry = get_registry()

        resolved: List[Handler] = []
        for handler_name in cfg.handlers:
            handler = registry.get_handler(handler_name)
            if handler is None:
                raise ConfigurationError(f"can not find handler: {handler_name}")
            resolved.append(handler)

        level = level_by_name(cfg.level)

        if cfg.name:
            self.name = cfg.name
        self.level = level
        self.runtime_caller = cfg.enable_runtime_caller
        self.add_handler(*resolved)
        logger.debug(f"Logger '{self.name}': configured with {len(resolved)} handler(s)")

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------
    def _log(self, level: int, msg: str, *args: Any) -> LogRecord:
        caller = UNKNOWN_CALLER
        if self.runtime_caller:
            caller = self._find_caller()

        record = LogRecord.create(
            self.name, level, caller.pathname, caller.func_name, caller.lineno, msg, *args
        )
        self.handle(record)
        return record

    def _find_caller(self) -> CallerInfo:
        try:
            # +1 for this helper's own frame
            return self.caller_resolver.resolve(self.func_call_depth + 1)
        except Exception as e:
            report_error(f"Resolve caller failed, [{e}]")
            return UNKNOWN_CALLER

    def filter(self, record: LogRecord) -> bool:
        """Return True when the record is below the logger threshold."""
        return is_filtered(record.level, self.level)

    def handle(self, record: LogRecord) -> None:
        """Filter the record and fan it out to every handler."""
        if not self.filter(record):
            self.call_handlers(record)

    def call_handlers(self, record: LogRecord) -> None:
        for handler in self.handlers:
            handler.handle(record)

    def close(self) -> None:
        """
        Close every handler; a failing close is reported and skipped.
        """
        for handler in self.handlers:
            try:
                handler.close()
            except Exception as e:
                report_error(f"Close handler failed, [{e}]")

    # -------------------------------------------------------------------------
    # Template variants
    # -------------------------------------------------------------------------
    def logf(self, level: int, msg: str, *args: Any) -> None:
        self._log(level, msg, *args)

    def debugf(self, msg: str, *args: Any) -> None:
        self._log(levels.DEBUG, msg, *args)

    def infof(self, msg: str, *args: Any) -> None:
        self._log(levels.INFO, msg, *args)

    def warningf(self, msg: str, *args: Any) -> None:
        self._log(levels.WARN, msg, *args)

    def warnf(self, msg: str, *args: Any) -> None:
        self._log(levels.WARN, msg, *args)

    def errorf(self, msg: str, *args: Any) -> None:
        self._log(levels.ERROR, msg, *args)

    def noticef(self, msg: str, *args: Any) -> None:
        self._log(levels.NOTICE, msg, *args)

    def criticalf(self, msg: str, *args: Any) -> None:
        self._log(levels.CRITICAL, msg, *args)

    def panicf(self, msg: str, *args: Any) -> None:
        """
        Log at CRITICAL, then raise.

        Raises:
            CriticalLogError: Always, after the record has been dispatched.
        """
        record = self._log(levels.CRITICAL, msg, *args)
        raise CriticalLogError(record.get_message(), record)

    # -------------------------------------------------------------------------
    # Message-only variants
    # -------------------------------------------------------------------------
    def log(self, level: int, *args: Any) -> None:
        self._log(level, "", *args)

    def debug(self, *args: Any) -> None:
        self._log(levels.DEBUG, "", *args)

    def info(self, *args: Any) -> None:
        self._log(levels.INFO, "", *args)

    def warning(self, *args: Any) -> None:
        self._log(levels.WARN, "", *args)

    def warn(self, *args: Any) -> None:
        self._log(levels.WARN, "", *args)

    def error(self, *args: Any) -> None:
        self._log(levels.ERROR, "", *args)

    def notice(self, *args: Any) -> None:
        self._log(levels.NOTICE, "", *args)

    def critical(self, *args: Any) -> None:
        self._log(levels.CRITICAL, "", *args)

    def panic(self, *args: Any) -> None:
        """
        Log at CRITICAL, then raise.

        Raises:
            CriticalLogError: Always, after the record has been dispatched.
        """
        record = self._log(levels.CRITICAL, "", *args)
        raise CriticalLogError(record.get_message(), record)
