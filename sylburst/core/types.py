# sylburst/core/types.py

"""
Value types produced by the segmentation core.

All times are in milliseconds. Optional fields use None for "absent"
(no following pause, no preceding burst, undefined statistic); numeric
sentinels such as NaN never leave the core.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Envelope:
    """Smoothed amplitude envelope: one amplitude per time point."""
    time: NDArray[np.float64]       # ms, strictly increasing
    amplitude: NDArray[np.float64]  # non-negative
    timestep: float                 # ms between consecutive samples

    def __post_init__(self):
        if self.time.ndim != 1 or self.amplitude.ndim != 1:
            raise ValueError("Envelope time and amplitude must be 1D arrays.")
        if self.time.shape != self.amplitude.shape:
            raise ValueError(
                f"Envelope time and amplitude differ in length "
                f"({self.time.size} != {self.amplitude.size})."
            )
        if np.any(np.diff(self.time) <= 0):
            raise ValueError("Envelope time must be strictly increasing.")
        if not np.all(self.amplitude >= 0):
            raise ValueError("Envelope amplitude must be non-negative.")

    def __len__(self) -> int:
        return int(self.time.size)

    @classmethod
    def from_arrays(cls, time, amplitude, timestep: Optional[float] = None) -> "Envelope":
        """Builds an envelope from sequences, inferring the step from the median time difference."""
        time_arr = np.asarray(time, dtype=np.float64)
        ampl_arr = np.asarray(amplitude, dtype=np.float64)
        if timestep is None:
            timestep = float(np.median(np.diff(time_arr))) if time_arr.size > 1 else 0.0
        return cls(time=time_arr, amplitude=ampl_arr, timestep=float(timestep))


@dataclass(frozen=True)
class Syllable:
    """A continuous above-threshold interval."""
    start: float
    end: float
    pause_after: Optional[float] = None  # gap to the next syllable, None for the last one

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class Burst:
    """A salient local maximum of the envelope."""
    time: float
    amplitude: float
    interburst_gap: Optional[float] = None  # gap from the previous burst, None for the first one


@dataclass(frozen=True)
class SegmentationSummary:
    """Counts and dispersion statistics over syllables and bursts."""
    n_syl: int
    syl_len_mean: Optional[float] = None
    syl_len_median: Optional[float] = None
    syl_len_sd: Optional[float] = None
    pause_len_mean: Optional[float] = None
    pause_len_median: Optional[float] = None
    pause_len_sd: Optional[float] = None
    n_bursts: int = 0
    interburst_mean: Optional[float] = None
    interburst_median: Optional[float] = None
    interburst_sd: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SegmentationResult:
    """Detailed output of one segmentation run."""
    syllables: List[Syllable] = field(default_factory=list)
    bursts: List[Burst] = field(default_factory=list)
    envelope: Optional[Envelope] = None
    threshold: Optional[float] = None
    interburst: Optional[float] = None  # effective inter-burst window (ms)
