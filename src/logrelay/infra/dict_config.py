from __future__ import annotations

"""
Mapping-Driven Setup.

Builds formatters, handlers and loggers from a single configuration
mapping, using the constructors bound in a registry:

    dict_config({
        "formatters": {"json": {"class": "JsonFormatter"}},
        "handlers": {
            "audit": {"class": "FileHandler", "filename": "audit.log", "formatter": "json"},
        },
        "loggers": {"audit": {"level": "INFO", "handlers": ["audit"]}},
    })

Sections are applied in the order formatters, handlers, loggers, so later
sections may refer to names registered by earlier ones.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from logrelay.core.formatters import Formatter
from logrelay.core.handlers import Handler
from logrelay.core.logger import Logger
from logrelay.core.registry import Registry, get_registry
from logrelay.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

_CLASS_KEY = "class"


def dict_config(
        config: Mapping[str, Any],
        registry: Optional[Registry] = None,
) -> Dict[str, Logger]:
    """
    Configure a registry from a mapping.

    Args:
        config: Mapping with optional ``formatters``, ``handlers``,
            ``loggers`` sections and a ``disable_existing_loggers`` flag.
        registry: Target registry; defaults to the process-wide one.

    Returns:
        Dict[str, Logger]: The configured loggers keyed by section name.

    Raises:
        ConfigurationError: On malformed sections, unknown classes or
            references to unregistered components.
    """
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"Invalid config: expected a mapping, got {type(config).__name__}."
        )
    registry = registry if registry is not None else get_registry()

    disable = config.get("disable_existing_loggers", False)
    if not isinstance(disable, bool):
        raise ConfigurationError("Field 'disable_existing_loggers' is invalid: expected bool.")
    if disable:
        registry.disable_existing_loggers()

    for name, entry in _section(config, "formatters").items():
        formatter = _build(registry, "formatters", name, entry)
        if not isinstance(formatter, Formatter):
            raise ConfigurationError(f"formatters.{name}: class does not build a formatter")
        formatter.load_config(entry)
        registry.register_formatter(name, formatter)

    for name, entry in _section(config, "handlers").items():
        handler = _build(registry, "handlers", name, entry)
        if not isinstance(handler, Handler):
            raise ConfigurationError(f"handlers.{name}: class does not build a handler")
        handler.load_config(entry, registry)
        registry.register_handler(name, handler)

    configured: Dict[str, Logger] = {}
    for name, entry in _section(config, "loggers").items():
        if not isinstance(entry, Mapping):
            raise ConfigurationError(f"loggers.{name}: expected a mapping")
        instance = registry.get_logger(name)
        instance.load_config(entry, registry)
        configured[name] = instance

    logger.debug(
        f"dict_config: {len(configured)} logger(s) configured "
        f"({', '.join(_names(configured)) or 'none'})"
    )
    return configured


# -----------------------------------------------------------------------------
# Private helpers
# -----------------------------------------------------------------------------
def _section(config: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = config.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"Section '{key}' is invalid: expected a mapping.")
    return section


def _build(registry: Registry, section: str, name: str, entry: Any) -> Any:
    if not isinstance(entry, Mapping):
        raise ConfigurationError(f"{section}.{name}: expected a mapping")
    class_name = entry.get(_CLASS_KEY)
    if not isinstance(class_name, str) or not class_name:
        raise ConfigurationError(f"{section}.{name}: missing '{_CLASS_KEY}'")
    return registry.construct(class_name)


def _names(loggers: Mapping[str, Logger]) -> List[str]:
    return sorted(loggers)
