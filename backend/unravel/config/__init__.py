# backend/unravel/config/__init__.py
from __future__ import annotations

"""
Shortcut imports for configuration.
"""

from .settings import DEFAULT_EXAMPLE_SOURCE, Settings, get_settings  # noqa: F401
