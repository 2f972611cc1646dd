# sylburst/core/syllables.py

"""
Syllable detection: continuous runs of the amplitude envelope at or above a
threshold, with short pauses merged away and short runs discarded.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .types import Envelope, Syllable

logger = logging.getLogger(__name__)


def _find_runs(mask: NDArray[np.bool_]) -> List[Tuple[int, int]]:
    """Returns (first, last) indices of every maximal run of True values (inclusive)."""
    padded = np.concatenate(([False], mask, [False])).astype(np.int8)
    edges = np.diff(padded)
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1) - 1
    return list(zip(starts.tolist(), ends.tolist()))


def _merge_short_pauses(
    intervals: List[Tuple[float, float]],
    shortest_pause: float
) -> List[Tuple[float, float]]:
    """Joins consecutive intervals separated by a gap shorter than `shortest_pause`."""
    if not intervals:
        return []
    merged = [intervals[0]]
    for start, end in intervals[1:]:
        prev_start, prev_end = merged[-1]
        if start - prev_end < shortest_pause:
            merged[-1] = (prev_start, end)
        else:
            merged.append((start, end))
    return merged


def find_syllables(
    envelope: Envelope,
    threshold: float,
    shortest_syl: float = 40.0,
    shortest_pause: Optional[float] = 40.0
) -> List[Syllable]:
    """
    Finds syllables in an amplitude envelope.

    A sample is active when its amplitude is >= `threshold`. A run of active
    samples spans [time of first sample, time of last sample + timestep).

    Args:
        envelope: The amplitude envelope.
        threshold: Absolute amplitude threshold.
        shortest_syl: Syllables shorter than this (ms) are dropped, after merging.
        shortest_pause: Syllables separated by a pause shorter than this (ms)
                        are merged. None disables merging.

    Returns:
        Time-ordered, disjoint syllables. `pause_after` is the gap to the next
        surviving syllable and None for the last one.
    """
    if len(envelope) == 0:
        return []

    runs = _find_runs(envelope.amplitude >= threshold)
    if not runs:
        logger.debug(f"Envelope never reaches threshold {threshold:.4g}; no syllables.")
        return []

    time = envelope.time
    intervals = [(float(time[first]), float(time[last] + envelope.timestep)) for first, last in runs]
    logger.debug(f"{len(intervals)} above-threshold runs found.")

    if shortest_pause is not None:
        intervals = _merge_short_pauses(intervals, shortest_pause)
        logger.debug(f"{len(intervals)} candidates after merging pauses < {shortest_pause} ms.")

    kept = [(start, end) for start, end in intervals if end - start >= shortest_syl]
    if len(kept) < len(intervals):
        logger.debug(f"Discarded {len(intervals) - len(kept)} candidates shorter than {shortest_syl} ms.")

    syllables = []
    for i, (start, end) in enumerate(kept):
        pause = kept[i + 1][0] - end if i + 1 < len(kept) else None
        syllables.append(Syllable(start=start, end=end, pause_after=pause))
    return syllables
