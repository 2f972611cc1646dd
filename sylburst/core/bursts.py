# sylburst/core/bursts.py

"""
Vocal burst detection.

A burst is a local maximum of the amplitude envelope that is
1) high relative to the global maximum of the envelope,
2) prominent relative to the trough(s) within the inter-burst window on its
   left and/or right side, and
3) the highest such peak within the inter-burst window (non-maximum
   suppression).

Flat peaks (plateaus) are represented by their middle sample, rounded down
for plateaus of even length (`scipy.signal.find_peaks` convention). Samples
at the very edges of the envelope are never peaks.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.signal import find_peaks

from .types import Envelope, Burst, Syllable

logger = logging.getLogger(__name__)

# Two bursts exactly one window apart must not suppress each other because of rounding.
_TIME_TOLERANCE_MS = 1e-9


def resolve_interburst(
    syllables: Sequence[Syllable],
    interburst: Optional[float] = None,
    interburst_mult: float = 1.0,
    shortest_syl: Optional[float] = None,
    timestep: float = 0.0
) -> float:
    """
    Determines the inter-burst window (ms).

    An explicit `interburst` wins. Otherwise the window is the median syllable
    duration times `interburst_mult`, or `shortest_syl` when there are no
    syllables. A window that is still undefined or non-positive becomes one
    envelope step.
    """
    if interburst is not None:
        window = float(interburst)
        source = "explicit"
    elif len(syllables) > 0:
        window = float(np.median([s.duration for s in syllables])) * interburst_mult
        source = f"median syllable length x {interburst_mult}"
    else:
        window = float(shortest_syl) if shortest_syl is not None else math.nan
        source = "shortest_syl fallback (no syllables)"

    if not math.isfinite(window) or window <= 0:
        logger.debug(f"Inter-burst window undefined or non-positive ({window}); using one envelope step ({timestep} ms).")
        return float(timestep)
    logger.debug(f"Inter-burst window {window:.3f} ms ({source}).")
    return window


def _side_satisfied(peak: float, side: NDArray[np.float64], peak_to_trough: float) -> bool:
    """True if peak / min(side) >= peak_to_trough (written multiplicatively so zero troughs pass)."""
    if side.size == 0:
        return False
    return bool(peak >= peak_to_trough * np.min(side))


def _suppress_non_maxima(
    times: NDArray[np.float64],
    amplitudes: NDArray[np.float64],
    window: float
) -> NDArray[np.intp]:
    """
    Greedy non-maximum suppression: visiting candidates from highest to lowest
    (earlier first on ties), keeps a candidate only if no kept candidate lies
    closer than `window`. Returns kept positions in time order.
    """
    order = np.argsort(-amplitudes, kind="stable")
    kept: List[int] = []
    for idx in order:
        if kept and np.any(np.abs(times[kept] - times[idx]) < window - _TIME_TOLERANCE_MS):
            continue
        kept.append(int(idx))
    return np.sort(np.asarray(kept, dtype=np.intp))


def find_bursts(
    envelope: Envelope,
    interburst: Optional[float],
    burst_thres: float = 0.075,
    peak_to_trough: float = 3.0,
    trough_left: bool = True,
    trough_right: bool = False,
    global_max: Optional[float] = None
) -> List[Burst]:
    """
    Finds vocal bursts in an amplitude envelope.

    Args:
        envelope: The amplitude envelope.
        interburst: Inter-burst window (ms): the extent of the trough search on
                    each side and the minimum spacing between bursts. None or
                    a non-positive value means one envelope step.
        burst_thres: Minimum peak height as a fraction of `global_max`.
        peak_to_trough: Minimum ratio of peak amplitude to trough amplitude.
        trough_left: Require prominence over the trough on the left.
        trough_right: Require prominence over the trough on the right. When
                      both sides are enabled, both must be satisfied.
        global_max: Global maximum of the envelope; computed when omitted.

    Returns:
        Time-ordered bursts. `interburst_gap` is None for the first burst.

    Raises:
        ValueError: If `peak_to_trough` < 1 or both trough sides are disabled.
    """
    if peak_to_trough < 1:
        raise ValueError(f"peak_to_trough must be >= 1, got {peak_to_trough}.")
    if not (trough_left or trough_right):
        raise ValueError("At least one of trough_left or trough_right must be enabled.")

    ampl = envelope.amplitude
    if ampl.size < 3:
        return []
    if global_max is None:
        global_max = float(np.max(ampl))

    timestep = envelope.timestep
    window = interburst if interburst is not None and interburst > 0 else timestep
    window_samples = max(1, int(round(window / timestep))) if timestep > 0 else 1

    # 1-2. Local maxima above the global threshold
    candidates, _ = find_peaks(ampl, height=burst_thres * global_max)
    logger.debug(f"{candidates.size} local maxima >= {burst_thres} x global max ({global_max:.4g}).")
    if candidates.size == 0:
        return []

    # 3. Local prominence over the trough(s) within the window
    prominent = []
    for i in candidates:
        peak = ampl[i]
        if trough_left and not _side_satisfied(peak, ampl[max(0, i - window_samples):i], peak_to_trough):
            continue
        if trough_right and not _side_satisfied(peak, ampl[i + 1:i + 1 + window_samples], peak_to_trough):
            continue
        prominent.append(i)
    logger.debug(f"{len(prominent)} candidates pass peak-to-trough ratio {peak_to_trough} "
                 f"(left={trough_left}, right={trough_right}, window={window_samples} samples).")
    if not prominent:
        return []

    # 4. Minimum spacing
    prominent = np.asarray(prominent, dtype=np.intp)
    kept = prominent[_suppress_non_maxima(envelope.time[prominent], ampl[prominent], window)]

    # 5. Forward gaps
    bursts = []
    prev_time = None
    for i in kept:
        t = float(envelope.time[i])
        bursts.append(Burst(time=t, amplitude=float(ampl[i]),
                            interburst_gap=None if prev_time is None else t - prev_time))
        prev_time = t
    logger.debug(f"{len(bursts)} bursts after minimum spacing of {window:.3f} ms.")
    return bursts
