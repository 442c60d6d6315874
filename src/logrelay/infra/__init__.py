from __future__ import annotations

"""
Infrastructure Layer.

Terminal capabilities, the stderr diagnostic channel and mapping-driven
setup.
"""
