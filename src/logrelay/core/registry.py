from __future__ import annotations

"""
Component Registry.

Binds names to formatters, handlers, constructors and loggers. Every table
has its own lock; registering a name twice in one table is a programmer
error. Loggers are created lazily, one instance per name, through an
atomic get-or-insert on the logger table.

A process-wide default registry backs the module-level ``get_logger``; it
can be swapped or reset (mainly for tests) with ``set_registry`` and
``reset_registry``.
"""

import logging
import threading
from typing import Callable, Dict, Generic, List, Optional, TypeVar, Union

from logrelay.core.caller import CallerResolver, FrameCallerResolver
from logrelay.core.formatters import (
    DEFAULT_FORMATTER,
    TERMINAL_FORMATTER,
    Formatter,
    JsonFormatter,
    TextFormatter,
)
from logrelay.core.handlers import FileHandler, Handler, NullHandler, StreamHandler
from logrelay.core.logger import Logger
from logrelay.core.options import Option, apply_options
from logrelay.core.rotating import RotatingFileHandler
from logrelay.domain.constants import (
    DEFAULT_FORMATTER_NAME,
    DEFAULT_FUNC_CALL_DEPTH,
    ROOT_LOGGER_NAME,
    TERMINAL_FORMATTER_NAME,
)
from logrelay.domain.errors import ConfigurationError, DuplicateRegistrationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Zero-argument factory producing a configurable component
Constructor = Callable[[], Union[Handler, Formatter]]

BUILTIN_CONSTRUCTORS: Dict[str, Constructor] = {
    "NullHandler": NullHandler,
    "StreamHandler": StreamHandler,
    "FileHandler": FileHandler,
    "RotatingFileHandler": RotatingFileHandler,
    "TextFormatter": TextFormatter,
    "JsonFormatter": JsonFormatter,
}


class RegistryTable(Generic[T]):
    """Name to object table with unique keys, guarded by its own lock."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._data: Dict[str, T] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def register(self, name: str, value: T) -> None:
        """
        Bind a name.

        Raises:
            DuplicateRegistrationError: If the name is already bound.
        """
        with self._lock:
            if name in self._data:
                raise DuplicateRegistrationError(name)
            self._data[name] = value

    def get(self, name: str) -> Optional[T]:
        with self._lock:
            return self._data.get(name)

    def get_or_create(self, name: str, factory: Callable[[], T]) -> T:
        """Return the bound value, creating and binding it atomically if absent."""
        with self._lock:
            value = self._data.get(name)
            if value is None:
                value = factory()
                self._data[name] = value
            return value

    def names(self) -> List[str]:
        with self._lock:
            return list(self._data)

    def drain(
            self,
            visit: Optional[Callable[[T], None]] = None,
            seed: Optional[Callable[[], Dict[str, T]]] = None,
    ) -> List[T]:
        """
        Empty the table in one critical section.

        Args:
            visit: Called on each removed value under the lock.
            seed: Builds the entries the table starts over with.

        Returns:
            List[T]: The removed values.
        """
        with self._lock:
            values = list(self._data.values())
            if visit is not None:
                for value in values:
                    visit(value)
            self._data = dict(seed()) if seed is not None else {}
            return values


class Registry:
    """
    Holds the four name tables of one logging setup.

    Args:
        caller_resolver: Caller capture capability given to new loggers.
        install_defaults: Register the built-in constructors, the
            ``default`` / ``terminal`` formatters and a root logger with one
            stream handler.
    """

    def __init__(
            self,
            caller_resolver: Optional[CallerResolver] = None,
            install_defaults: bool = True,
    ) -> None:
        self.caller_resolver: CallerResolver = caller_resolver or FrameCallerResolver()
        self.formatters: RegistryTable[Formatter] = RegistryTable("formatter")
        self.handlers: RegistryTable[Handler] = RegistryTable("handler")
        self.constructors: RegistryTable[Constructor] = RegistryTable("constructor")
        self.loggers: RegistryTable[Logger] = RegistryTable("logger")

        if install_defaults:
            self._install_defaults()

    # -------------------------------------------------------------------------
    # Formatters / handlers / constructors
    # -------------------------------------------------------------------------
    def register_formatter(self, name: str, formatter: Formatter) -> None:
        self.formatters.register(name, formatter)

    def get_formatter(self, name: str) -> Optional[Formatter]:
        return self.formatters.get(name)

    def register_handler(self, name: str, handler: Handler) -> None:
        self.handlers.register(name, handler)

    def get_handler(self, name: str) -> Optional[Handler]:
        return self.handlers.get(name)

    def register_constructor(self, name: str, constructor: Constructor) -> None:
        self.constructors.register(name, constructor)

    def get_constructor(self, name: str) -> Optional[Constructor]:
        return self.constructors.get(name)

    def construct(self, name: str) -> Union[Handler, Formatter]:
        """
        Instantiate a component from its registered constructor.

        Raises:
            ConfigurationError: If no constructor is bound to ``name``.
        """
        constructor = self.get_constructor(name)
        if constructor is None:
            raise ConfigurationError(f"can not find constructor: {name}")
        return constructor()

    # -------------------------------------------------------------------------
    # Loggers
    # -------------------------------------------------------------------------
    def get_logger(self, name: str = "", *options: Option) -> Logger:
        """
        Return the logger bound to ``name``, creating it on first use.

        An empty name selects the root logger. Options, if any, are applied
        to the returned logger on every call.
        """
        if not name:
            name = ROOT_LOGGER_NAME

        instance = self.loggers.get_or_create(name, lambda: self._new_logger(name))
        if options:
            apply_options(instance, *options)
        return instance

    def disable_existing_loggers(self) -> None:
        """
        Close and forget every logger, then recreate a working root logger.
        """
        closed = self.loggers.drain(
            visit=lambda existing: existing.close(),
            seed=lambda: {ROOT_LOGGER_NAME: self._new_root()},
        )
        logger.debug(f"Registry: disabled {len(closed)} logger(s)")

    def _new_logger(self, name: str) -> Logger:
        logger.debug(f"Registry: creating logger '{name}'")
        return Logger(
            name,
            func_call_depth=DEFAULT_FUNC_CALL_DEPTH,
            runtime_caller=True,
            caller_resolver=self.caller_resolver,
        )

    def _new_root(self) -> Logger:
        root = self._new_logger(ROOT_LOGGER_NAME)
        root.add_handler(StreamHandler())
        return root

    def _install_defaults(self) -> None:
        for constructor_name, constructor in BUILTIN_CONSTRUCTORS.items():
            self.register_constructor(constructor_name, constructor)
        self.register_formatter(DEFAULT_FORMATTER_NAME, DEFAULT_FORMATTER)
        self.register_formatter(TERMINAL_FORMATTER_NAME, TERMINAL_FORMATTER)
        self.loggers.register(ROOT_LOGGER_NAME, self._new_root())


# -----------------------------------------------------------------------------
# Default registry
# -----------------------------------------------------------------------------
_DEFAULT_LOCK = threading.Lock()
_default_registry: Optional[Registry] = None


def get_registry() -> Registry:
    """Return the process-wide default registry, creating it on first use."""
    global _default_registry
    with _DEFAULT_LOCK:
        if _default_registry is None:
            _default_registry = Registry()
        return _default_registry


def set_registry(registry: Registry) -> Optional[Registry]:
    """Install ``registry`` as the default and return the previous one."""
    global _default_registry
    with _DEFAULT_LOCK:
        previous = _default_registry
        _default_registry = registry
    return previous


def reset_registry() -> Registry:
    """Replace the default registry with a fresh one and return it."""
    registry = Registry()
    set_registry(registry)
    return registry


def get_logger(name: str = "", *options: Option) -> Logger:
    """Return a logger from the default registry."""
    return get_registry().get_logger(name, *options)


def disable_existing_loggers() -> None:
    """Reset the loggers of the default registry."""
    get_registry().disable_existing_loggers()
