from __future__ import annotations

"""
Log Record Model.

A ``LogRecord`` is an immutable snapshot of one logging call. It is built
once by the dispatching logger, passed by reference to every handler and
discarded afterwards.
"""

import posixpath
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from logrelay.domain.constants import UNKNOWN_CALLER_LINE, UNKNOWN_CALLER_NAME
from logrelay.domain.levels import level_name


class Fields(dict):
    """
    Key/value context attached to a record.

    Pass an instance as the *last* positional argument of a logging call:

        logger.infof("user %s logged in", user, Fields(ip=addr))
    """

    def __repr__(self) -> str:
        return f"Fields({dict.__repr__(self)})"


_EMPTY_FIELDS: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable logging event.

    Attributes:
        name: Name of the emitting logger.
        level: Numeric severity.
        level_name: Resolved display name of ``level``.
        pathname: Full source path of the caller, or ``"??"``.
        filename: Last path segment of ``pathname``.
        func_name: Caller function name with any package path stripped.
        short_func_name: ``func_name`` after its last dot.
        lineno: Caller line number, or 0.
        created: Creation timestamp.
        msg: Raw message template, possibly empty.
        args: Positional arguments for the template.
        fields: Extracted key/value fields (read-only).
    """

    name: str
    level: int
    level_name: str
    pathname: str
    filename: str
    func_name: str
    short_func_name: str
    lineno: int
    created: datetime
    msg: str = ""
    args: Tuple[Any, ...] = ()
    fields: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_FIELDS)

    @classmethod
    def create(
            cls,
            name: str,
            level: int,
            pathname: Optional[str],
            func_name: Optional[str],
            lineno: Optional[int],
            msg: Optional[str],
            *args: Any,
    ) -> "LogRecord":
        """
        Build a record, deriving names and splitting trailing fields from args.

        Never raises: missing caller information degrades to ``"??"`` / 0.
        """
        pathname = pathname or UNKNOWN_CALLER_NAME
        func_name = func_name or UNKNOWN_CALLER_NAME

        filename = posixpath.basename(pathname.replace("\\", "/")) or pathname

        # "pkg/path/module.Class.method" -> "module.Class.method" -> "method"
        full_func = func_name[func_name.rfind("/") + 1:]
        short_func = full_func[full_func.rfind(".") + 1:]

        call_args, fields = _split_fields(args)

        return cls(
            name=name,
            level=level,
            level_name=level_name(level),
            pathname=pathname,
            filename=filename,
            func_name=full_func,
            short_func_name=short_func,
            lineno=lineno or UNKNOWN_CALLER_LINE,
            created=datetime.now(),
            msg=msg or "",
            args=call_args,
            fields=fields,
        )

    def get_message(self) -> str:
        """
        Render the message.

        An empty template joins the string form of every argument with
        spaces. Otherwise the template is applied printf-style; when the
        arguments do not fit the template, it is returned verbatim followed
        by the arguments.
        """
        if not self.msg:
            return " ".join(str(arg) for arg in self.args)

        try:
            return self.msg % self.args
        except (TypeError, ValueError, KeyError):
            if not self.args:
                return self.msg
            return " ".join([self.msg] + [str(arg) for arg in self.args])


def new_record(
        name: str,
        level: int,
        pathname: Optional[str],
        func_name: Optional[str],
        lineno: Optional[int],
        msg: Optional[str],
        *args: Any,
) -> LogRecord:
    """Alias of ``LogRecord.create``."""
    return LogRecord.create(name, level, pathname, func_name, lineno, msg, *args)


def _split_fields(args: Tuple[Any, ...]) -> Tuple[Tuple[Any, ...], Mapping[str, Any]]:
    """Detach a trailing ``Fields`` argument, if present."""
    if args and isinstance(args[-1], Fields):
        return tuple(args[:-1]), MappingProxyType(dict(args[-1]))
    return tuple(args), _EMPTY_FIELDS
