# sylburst/core/summary.py

"""
Aggregation of syllable and burst lists into summary statistics and
tabular (pandas) representations.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .types import Syllable, Burst, SegmentationSummary

logger = logging.getLogger(__name__)

SYLLABLE_COLUMNS = ["start", "end", "syl_len", "pause_len"]
BURST_COLUMNS = ["time", "ampl", "interburst_int"]


def _finite_or_none(value: float) -> Optional[float]:
    value = float(value)
    return value if math.isfinite(value) else None


def describe(values: Sequence[float]):
    """
    Mean, median and sample standard deviation (ddof=1) of `values`.

    Each statistic is None where it is undefined: all three for an empty
    collection, the standard deviation for a single value.
    """
    arr = np.asarray([v for v in values if v is not None], dtype=np.float64)
    if arr.size == 0:
        return None, None, None
    mean = _finite_or_none(np.mean(arr))
    median = _finite_or_none(np.median(arr))
    sd = _finite_or_none(np.std(arr, ddof=1)) if arr.size > 1 else None
    return mean, median, sd


def summarize(syllables: Sequence[Syllable], bursts: Sequence[Burst]) -> SegmentationSummary:
    """Builds the single-row summary of a segmentation run."""
    syl_len = describe([s.duration for s in syllables])
    pause_len = describe([s.pause_after for s in syllables])
    interburst = describe([b.interburst_gap for b in bursts])
    return SegmentationSummary(
        n_syl=len(syllables),
        syl_len_mean=syl_len[0],
        syl_len_median=syl_len[1],
        syl_len_sd=syl_len[2],
        pause_len_mean=pause_len[0],
        pause_len_median=pause_len[1],
        pause_len_sd=pause_len[2],
        n_bursts=len(bursts),
        interburst_mean=interburst[0],
        interburst_median=interburst[1],
        interburst_sd=interburst[2],
    )


def syllables_to_frame(syllables: Sequence[Syllable]) -> pd.DataFrame:
    """One row per syllable; a missing pause is NaN."""
    rows = [
        {"start": s.start, "end": s.end, "syl_len": s.duration,
         "pause_len": np.nan if s.pause_after is None else s.pause_after}
        for s in syllables
    ]
    return pd.DataFrame(rows, columns=SYLLABLE_COLUMNS, dtype=np.float64)


def bursts_to_frame(bursts: Sequence[Burst]) -> pd.DataFrame:
    """One row per burst; a missing inter-burst interval is NaN."""
    rows = [
        {"time": b.time, "ampl": b.amplitude,
         "interburst_int": np.nan if b.interburst_gap is None else b.interburst_gap}
        for b in bursts
    ]
    return pd.DataFrame(rows, columns=BURST_COLUMNS, dtype=np.float64)


def summaries_to_frame(summaries: List[SegmentationSummary], sounds: List[str]) -> pd.DataFrame:
    """Stacks per-file summaries into one frame with a leading 'sound' column."""
    if len(summaries) != len(sounds):
        raise ValueError(f"Got {len(summaries)} summaries for {len(sounds)} sounds.")
    columns = ["sound"] + list(SegmentationSummary.__dataclass_fields__)
    rows = [{"sound": name, **summary.to_dict()} for name, summary in zip(sounds, summaries)]
    return pd.DataFrame(rows, columns=columns)
