# sylburst/core/segmentation.py

"""
Finds syllables and vocal bursts in a sound.

Syllables are continuous segments with amplitude above threshold. Bursts are
local maxima of the amplitude envelope that are high enough both in absolute
terms (relative to the global maximum) and with respect to the surrounding
region (relative to local minima).

Flow: signal -> envelope -> syllables -> inter-burst window -> bursts ->
(plot) -> detailed result or summary.
"""

import logging
from pathlib import Path
from typing import Optional, Union, Sequence

import numpy as np

from sylburst.config.models import SegmentParams
from .audio.io import load_audio
from .envelope import prepare_signal, compute_envelope
from .syllables import find_syllables
from .bursts import find_bursts, resolve_interburst
from .summary import summarize
from .types import Envelope, SegmentationResult, SegmentationSummary

logger = logging.getLogger(__name__)

SoundInput = Union[str, Path, Sequence[float], np.ndarray]


def resolve_params(params: Optional[SegmentParams], overrides: dict) -> SegmentParams:
    """Applies keyword overrides on top of `params`, re-validating the result."""
    base = params.model_dump() if params is not None else {}
    if not overrides:
        return params if params is not None else SegmentParams()
    unknown = set(overrides) - set(SegmentParams.model_fields)
    if unknown:
        raise TypeError(f"Unknown segmentation parameter(s): {sorted(unknown)}")
    return SegmentParams(**{**base, **overrides})


def segment_envelope(
    envelope: Envelope,
    params: Optional[SegmentParams] = None,
    **overrides
) -> SegmentationResult:
    """
    Runs syllable and burst detection on a precomputed envelope.

    Args:
        envelope: Amplitude envelope (times in ms).
        params: Segmentation parameters; defaults when omitted.
        **overrides: Individual SegmentParams fields overriding `params`.

    Returns:
        SegmentationResult with syllables, bursts, threshold and the
        inter-burst window that was used.
    """
    params = resolve_params(params, overrides)
    if len(envelope) == 0:
        logger.warning("Empty envelope; nothing to segment.")
        return SegmentationResult(envelope=envelope)
    if not np.any(envelope.amplitude > 0):
        # a zero threshold would make the whole silent envelope one syllable
        logger.warning("Silent envelope; no syllables or bursts.")
        interburst = resolve_interburst([], params.interburst, params.interburst_mult,
                                        params.shortest_syl, envelope.timestep)
        return SegmentationResult(envelope=envelope, threshold=0.0, interburst=interburst)

    threshold = float(np.mean(envelope.amplitude)) * params.syl_thres
    syllables = find_syllables(
        envelope,
        threshold=threshold,
        shortest_syl=params.shortest_syl,
        shortest_pause=params.shortest_pause,
    )

    interburst = resolve_interburst(
        syllables,
        interburst=params.interburst,
        interburst_mult=params.interburst_mult,
        shortest_syl=params.shortest_syl,
        timestep=envelope.timestep,
    )
    bursts = find_bursts(
        envelope,
        interburst=interburst,
        burst_thres=params.burst_thres,
        peak_to_trough=params.peak_to_trough,
        trough_left=params.trough_left,
        trough_right=params.trough_right,
        global_max=float(np.max(envelope.amplitude)),
    )
    logger.info(f"Found {len(syllables)} syllables and {len(bursts)} bursts "
                f"(threshold={threshold:.4g}, interburst={interburst:.1f} ms).")
    return SegmentationResult(
        syllables=syllables,
        bursts=bursts,
        envelope=envelope,
        threshold=threshold,
        interburst=interburst,
    )


def segment(
    x: SoundInput,
    sr: Optional[int] = None,
    params: Optional[SegmentParams] = None,
    summary: bool = False,
    plot: bool = False,
    save_path: Optional[Union[str, Path]] = None,
    **overrides
) -> Union[SegmentationResult, SegmentationSummary]:
    """
    Segments a sound into syllables and bursts.

    Args:
        x: Path to an audio file, or a numeric sequence of samples (then `sr`
           is required).
        sr: Sampling rate of `x` when `x` is numeric. Ignored for files.
        params: Segmentation parameters; defaults when omitted.
        summary: If True, return only a summary of the number and spacing of
                 syllables and bursts; otherwise the full per-event results.
        plot: If True, show a segmentation plot.
        save_path: Directory in which to save the plot as '<sound name>.jpg'.
                   Implies plot=True.
        **overrides: Individual SegmentParams fields (e.g. shortest_syl=25).

    Returns:
        SegmentationSummary if `summary`, else SegmentationResult.

    Raises:
        ValueError: If `sr` is missing for numeric input or parameters are invalid.
        FileNotFoundError: If an audio file path does not exist.
    """
    params = resolve_params(params, overrides)

    if isinstance(x, (str, Path)):
        sound, sr = load_audio(Path(x), sr=None)
        sound_name = Path(x).stem
    else:
        if sr is None:
            raise ValueError("Please specify sr (sampling rate, e.g. 44100) for numeric input.")
        sound = np.asarray(x, dtype=np.float64)
        if sound.size < 2:
            raise ValueError(f"Numeric input must contain more than one sample, got {sound.size}.")
        sound_name = ""

    sound = prepare_signal(sound)
    envelope = compute_envelope(sound, sr, window_length_ms=params.window_length, overlap=params.overlap)
    result = segment_envelope(envelope, params)

    if save_path is not None or plot:
        # matplotlib is loaded only when plotting
        from sylburst.utils.visualizations import plot_segmentation
        output_file = Path(save_path) / f"{sound_name or 'segmentation'}.jpg" if save_path is not None else None
        plot_segmentation(envelope, result.threshold, result.syllables, result.bursts,
                          output_file=output_file, title=sound_name)

    if summary:
        return summarize(result.syllables, result.bursts)
    return result
