# sylburst/__init__.py

"""
sylburst: syllable and vocal burst segmentation of audio amplitude envelopes.
"""

from .version import __version__
from .core.segmentation import segment, segment_envelope
from .core.batch_processor import segment_folder

__all__ = [
    "__version__",
    "segment",
    "segment_envelope",
    "segment_folder",
]
