# sylburst/core/__init__.py

"""
Core Processing Package for sylburst.

Contains modules for:
- Audio input
- Amplitude envelope extraction
- Syllable detection
- Burst detection
- Summary statistics
- Segmentation of single sounds and folders
"""

from . import audio
from . import envelope
from . import syllables
from . import bursts
from . import summary
from . import segmentation
from . import batch_processor

__all__ = [
    "audio",
    "envelope",
    "syllables",
    "bursts",
    "summary",
    "segmentation",
    "batch_processor",
]
