from __future__ import annotations

"""
Domain Layer.

Levels, records, configuration models and the error taxonomy. Nothing in
this package performs I/O.
"""
