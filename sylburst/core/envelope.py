# sylburst/core/envelope.py

"""
Amplitude envelope extraction.

Turns a raw audio signal into the smoothed, rectified, decimated envelope
that the syllable and burst detectors operate on. The envelope is the
mean of |y| over sliding windows of `window_length_ms` with `overlap` percent
overlap between consecutive windows.
"""

import logging
import math

import numpy as np
import librosa # Used for framing
from numpy.typing import NDArray

from .types import Envelope

logger = logging.getLogger(__name__)

_EPSILON = np.finfo(np.float64).eps

MIN_USEFUL_WINDOW_MS = 10.0
MAX_OVERLAP = 99.0


def prepare_signal(y) -> NDArray[np.float64]:
    """
    Converts a raw signal to a peak-normalised mono float64 array.

    Strictly positive signals (e.g. unsigned PCM read without centring) are
    standardised first so that silence sits around zero.

    Args:
        y: Raw samples. 2D input is treated as (n_channels, n_samples) and
           averaged to mono.

    Returns:
        Signal scaled so that max(|y|) == 1 (all-zero input is returned as is).
    """
    sound = np.asarray(y, dtype=np.float64)
    if sound.ndim == 2:
        logger.warning(f"Input signal is multi-channel {sound.shape}. Converting to mono by averaging.")
        sound = np.mean(sound, axis=0)
    elif sound.ndim != 1:
        raise ValueError(f"Input signal must be 1D or 2D, got shape {sound.shape}.")
    if sound.size == 0:
        raise ValueError("Input signal is empty.")

    if np.min(sound) > 0:
        sd = np.std(sound, ddof=1) if sound.size > 1 else 0.0
        sound = sound - np.mean(sound)
        if sd > _EPSILON:
            sound = sound / sd

    peak = np.max(np.abs(sound))
    if peak < _EPSILON:
        logger.warning("Input signal is silent (peak amplitude is zero).")
        return sound
    return sound / peak


def compute_envelope(
    y: NDArray[np.float64],
    sr: int,
    window_length_ms: float = 40.0,
    overlap: float = 80.0
) -> Envelope:
    """
    Computes the smoothed amplitude envelope of a signal.

    Args:
        y: Input signal (1D float64), normally the output of `prepare_signal`.
        sr: Sampling rate (Hz).
        window_length_ms: Length of the smoothing window (ms). Windows longer
                          than half the signal are shortened to half the signal.
        overlap: Overlap between consecutive windows (%), clamped to [0, 99].

    Returns:
        Envelope with times in ms starting at 0.

    Raises:
        ValueError: If `sr` is not positive, the window is not positive, or the
                    signal has fewer than 2 samples.
    """
    if sr is None or sr <= 0:
        raise ValueError(f"Sampling rate must be positive, got {sr}.")
    if window_length_ms <= 0:
        raise ValueError(f"window_length_ms must be positive, got {window_length_ms}.")
    y = np.asarray(y, dtype=np.float64)
    if y.ndim != 1:
        raise ValueError("Input signal y must be 1D.")
    if y.size < 2:
        raise ValueError(f"Signal too short to compute an envelope ({y.size} samples).")

    if window_length_ms < MIN_USEFUL_WINDOW_MS:
        logger.warning(f"window_length {window_length_ms} ms < {MIN_USEFUL_WINDOW_MS:g} ms is slow and usually not very useful.")

    clamped_overlap = min(max(overlap, 0.0), MAX_OVERLAP)
    if clamped_overlap != overlap:
        logger.debug(f"Overlap {overlap}% clamped to {clamped_overlap}%.")

    window_samples = max(1, math.ceil(window_length_ms * sr / 1000))
    if window_samples > y.size / 2:
        logger.debug(f"Smoothing window ({window_samples} samples) longer than half the signal; "
                     f"clamped to {y.size // 2} samples.")
        window_samples = max(1, y.size // 2)
    hop_samples = max(1, window_samples - int(round(window_samples * clamped_overlap / 100)))

    frames = librosa.util.frame(np.abs(y), frame_length=window_samples, hop_length=hop_samples)
    amplitude = frames.mean(axis=0).astype(np.float64, copy=False)

    timestep = 1000.0 / sr * (y.size / amplitude.size)
    time = np.arange(amplitude.size, dtype=np.float64) * timestep

    logger.debug(f"Envelope: {amplitude.size} points, window={window_samples} samples, "
                 f"hop={hop_samples} samples, timestep={timestep:.3f} ms")
    return Envelope(time=time, amplitude=amplitude, timestep=timestep)
