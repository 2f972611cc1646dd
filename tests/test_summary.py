# tests/test_summary.py

"""
Tests for summary statistics and tabular output in sylburst.core.summary.
"""

import math

import pytest
import numpy as np
import pandas as pd
from numpy.testing import assert_allclose

from sylburst.core.types import Syllable, Burst, SegmentationSummary
from sylburst.core.summary import (
    describe,
    summarize,
    syllables_to_frame,
    bursts_to_frame,
    summaries_to_frame,
)

# --- Test Fixtures ---

@pytest.fixture
def three_syllables():
    # durations 40, 60, 100; pauses 10, 20
    return [Syllable(0.0, 40.0, 10.0), Syllable(50.0, 110.0, 20.0), Syllable(130.0, 230.0)]


@pytest.fixture
def two_bursts():
    return [Burst(20.0, 0.9), Burst(95.0, 0.7, 75.0)]

# --- Test Cases ---

def test_describe_degenerate_inputs():
    assert describe([]) == (None, None, None)
    assert describe([None]) == (None, None, None)
    assert describe([5.0]) == (5.0, 5.0, None)


def test_describe_uses_sample_sd():
    mean, median, sd = describe([1.0, 2.0, 6.0])
    assert_allclose(mean, 3.0)
    assert_allclose(median, 2.0)
    assert_allclose(sd, np.std([1.0, 2.0, 6.0], ddof=1))


def test_summarize_full(three_syllables, two_bursts):
    summary = summarize(three_syllables, two_bursts)
    assert summary.n_syl == 3
    assert_allclose(summary.syl_len_mean, (40 + 60 + 100) / 3)
    assert_allclose(summary.syl_len_median, 60.0)
    assert_allclose(summary.syl_len_sd, np.std([40, 60, 100], ddof=1))
    assert_allclose(summary.pause_len_mean, 15.0)
    assert_allclose(summary.pause_len_median, 15.0)
    assert_allclose(summary.pause_len_sd, np.std([10, 20], ddof=1))
    assert summary.n_bursts == 2
    assert summary.interburst_mean == 75.0
    assert summary.interburst_median == 75.0
    assert summary.interburst_sd is None  # a single gap


def test_summarize_nothing_found():
    """No syllables and no bursts: counts are zero and every statistic is absent."""
    summary = summarize([], [])
    assert summary == SegmentationSummary(n_syl=0, n_bursts=0)
    values = summary.to_dict()
    assert all(values[key] is None for key in values if key not in ("n_syl", "n_bursts"))


def test_summarize_single_syllable_single_burst():
    summary = summarize([Syllable(10.0, 70.0)], [Burst(40.0, 1.0)])
    assert summary.syl_len_mean == 60.0
    assert summary.syl_len_median == 60.0
    assert summary.syl_len_sd is None
    assert summary.pause_len_mean is None
    assert summary.pause_len_median is None
    assert summary.interburst_mean is None
    assert summary.n_bursts == 1


def test_summary_never_contains_nan(three_syllables, two_bursts):
    for summary in (summarize(three_syllables, two_bursts), summarize([], []), summarize(three_syllables[:1], [])):
        for value in summary.to_dict().values():
            assert value is None or math.isfinite(value)


def test_syllables_to_frame(three_syllables):
    frame = syllables_to_frame(three_syllables)
    assert list(frame.columns) == ["start", "end", "syl_len", "pause_len"]
    assert_allclose(frame["syl_len"], [40.0, 60.0, 100.0])
    assert np.isnan(frame["pause_len"].iloc[-1])


def test_bursts_to_frame(two_bursts):
    frame = bursts_to_frame(two_bursts)
    assert list(frame.columns) == ["time", "ampl", "interburst_int"]
    assert np.isnan(frame["interburst_int"].iloc[0])
    assert frame["interburst_int"].iloc[1] == 75.0


def test_empty_frames_keep_columns():
    assert list(syllables_to_frame([]).columns) == ["start", "end", "syl_len", "pause_len"]
    assert bursts_to_frame([]).empty


def test_summaries_to_frame(three_syllables, two_bursts):
    frame = summaries_to_frame([summarize(three_syllables, two_bursts), summarize([], [])], ["a.wav", "b.wav"])
    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns)[:2] == ["sound", "n_syl"]
    assert frame["sound"].tolist() == ["a.wav", "b.wav"]
    assert frame["n_syl"].tolist() == [3, 0]


def test_summaries_to_frame_length_mismatch():
    with pytest.raises(ValueError):
        summaries_to_frame([summarize([], [])], [])
