from __future__ import annotations

"""
Core Layer.

Dispatch pipeline: loggers, handlers, formatters, options and the registry.
"""
