# sylburst/config/__init__.py

"""
Configuration management for sylburst.

This package handles loading configuration from files (TOML),
environment variables, and internal defaults, providing a unified
configuration object.
"""

from .models import SylburstConfig, SegmentParams
from .loaders import load_configuration

__all__ = [
    "SylburstConfig",
    "SegmentParams",
    "load_configuration",
]
