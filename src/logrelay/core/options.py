from __future__ import annotations

"""
Typed Component Options.

Options are small immutable values applied to loggers and handlers after
construction. The targets each option supports are enumerated in
``_SUPPORTED``; applying an option to any other target leaves it untouched
and writes a diagnostic line to stderr.

    logger = get_logger("api", with_level(INFO), with_caller_stack_depth(3))
"""

from dataclasses import dataclass
from typing import IO, Any, Callable, Dict, FrozenSet, List, Tuple, Type

from logrelay.core.formatters import Formatter
from logrelay.core.handlers import FileHandler, Handler, NullHandler, StreamHandler
from logrelay.core.logger import Logger
from logrelay.infra.diagnostics import report_error
from logrelay.infra.terminal import DISCARD

_NAME = "name"
_LEVEL = "level"
_FORMATTER = "formatter"
_HANDLERS = "handlers"
_RUNTIME_CALLER = "enable_runtime_caller"
_CALLER_STACK_DEPTH = "caller_stack_depth"
_OUTPUT = "output"
_DISCARD_OUTPUT = "discard_output"

# Most specific classes first
_SUPPORTED: Tuple[Tuple[Type[Any], FrozenSet[str]], ...] = (
    (Logger, frozenset({_NAME, _LEVEL, _HANDLERS, _RUNTIME_CALLER, _CALLER_STACK_DEPTH})),
    (NullHandler, frozenset({_NAME})),
    (StreamHandler, frozenset({_NAME, _LEVEL, _FORMATTER, _OUTPUT, _DISCARD_OUTPUT})),
    (FileHandler, frozenset({_NAME, _LEVEL, _FORMATTER, _OUTPUT, _DISCARD_OUTPUT})),
)


@dataclass(frozen=True)
class Option:
    """A named setting and its value."""
    key: str
    value: Any = None


# -----------------------------------------------------------------------------
# Option builders
# -----------------------------------------------------------------------------
def with_name(name: str) -> Option:
    return Option(_NAME, name)


def with_level(level: int) -> Option:
    return Option(_LEVEL, level)


def with_formatter(formatter: Formatter) -> Option:
    return Option(_FORMATTER, formatter)


def with_handlers(*handlers: Handler) -> Option:
    """Replace the target's handler list."""
    return Option(_HANDLERS, tuple(handlers))


def with_runtime_caller(enable: bool) -> Option:
    return Option(_RUNTIME_CALLER, enable)


def with_caller_stack_depth(depth: int) -> Option:
    return Option(_CALLER_STACK_DEPTH, depth)


def with_output(out: IO[str]) -> Option:
    return Option(_OUTPUT, out)


def discard_output() -> Option:
    """Replace the target's sink with one that swallows every write."""
    return Option(_DISCARD_OUTPUT)


# -----------------------------------------------------------------------------
# Application
# -----------------------------------------------------------------------------
def apply_options(target: Any, *options: Option) -> List[bool]:
    """
    Apply options in order.

    Args:
        target: Logger or handler instance.
        options: Options to apply.

    Returns:
        List[bool]: Per option, whether the target supported it.
    """
    return [_apply(target, option) for option in options]


def supported_options(target: Any) -> FrozenSet[str]:
    """Return the option keys accepted by ``target``."""
    for cls, keys in _SUPPORTED:
        if isinstance(target, cls):
            return keys
    return frozenset()


def _apply(target: Any, option: Option) -> bool:
    if option.key not in supported_options(target):
        report_error(f"target[{type(target).__name__}] does not support this option")
        return False
    _SETTERS[option.key](target, option.value)
    return True


def _set_handlers(target: Logger, handlers: Tuple[Handler, ...]) -> None:
    target.handlers = list(handlers)


_SETTERS: Dict[str, Callable[[Any, Any], None]] = {
    _NAME: lambda target, value: setattr(target, "name", value),
    _LEVEL: lambda target, value: setattr(target, "level", value),
    _FORMATTER: lambda target, value: setattr(target, "formatter", value),
    _HANDLERS: _set_handlers,
    _RUNTIME_CALLER: lambda target, value: target.enable_runtime_caller(value),
    _CALLER_STACK_DEPTH: lambda target, value: target.set_func_call_depth(value),
    _OUTPUT: lambda target, value: setattr(target, "out", value),
    _DISCARD_OUTPUT: lambda target, value: setattr(target, "out", DISCARD),
}
