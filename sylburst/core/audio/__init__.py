# sylburst/core/audio/__init__.py

"""
Audio input for sylburst.
"""

from . import io

__all__ = ["io"]
