# sylburst/core/audio/io.py

"""
Handles loading of audio files using librosa and soundfile.
"""

import logging
from pathlib import Path
from typing import Tuple, Optional, Union

import librosa
import numpy as np
import soundfile as sf
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# Extensions (lowercase, with dot) readable through soundfile, plus mp3 via librosa's audioread backend
SUPPORTED_READ_EXTENSIONS = {f".{fmt.lower()}" for fmt in sf.available_formats()}
SUPPORTED_READ_EXTENSIONS.add(".mp3")


def load_audio(
    file_path: Union[str, Path],
    sr: Optional[int] = None,
    mono: bool = True
) -> Tuple[NDArray[np.float64], int]:
    """
    Loads an audio file using librosa.

    Args:
        file_path: Path to the audio file.
        sr: Target sampling rate. If None, uses the native sampling rate.
        mono: If True, convert signal to mono by averaging channels.

    Returns:
        A tuple (data, sample_rate). `data` is float64, shape (n_samples,) if
        mono, otherwise (n_channels, n_samples).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the path is not a file.
        Exception: For librosa/soundfile/audioread loading errors (e.g. unsupported
                   format, corrupted file).
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Audio input file not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Input path is not a file: {file_path}")
    if file_path.suffix.lower() not in SUPPORTED_READ_EXTENSIONS:
        logger.warning(f"Extension '{file_path.suffix}' is not a known audio format; trying to load anyway.")

    logger.info(f"Loading audio from: {file_path} (sr={sr}, mono={mono})")
    try:
        data, sample_rate = librosa.load(file_path, sr=sr, mono=mono)
    except Exception as e:
        logger.error(f"Error loading audio file {file_path}: {e}")
        raise
    # librosa returns float32
    if data.dtype != np.float64:
        data = data.astype(np.float64)
    logger.debug(f"Audio loaded successfully. Shape: {data.shape}, SR: {sample_rate}")
    return data, int(sample_rate)
