# tests/test_syllables.py

"""
Tests for syllable detection in sylburst.core.syllables.
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from sylburst.core.types import Envelope
from sylburst.core.syllables import find_syllables

# --- Helpers ---

def make_envelope(amplitude, timestep: float = 1.0) -> Envelope:
    amplitude = np.asarray(amplitude, dtype=np.float64)
    return Envelope.from_arrays(np.arange(amplitude.size) * timestep, amplitude, timestep=timestep)

# --- Test Fixtures ---

@pytest.fixture
def two_pulses() -> Envelope:
    """Two 60 ms pulses of amplitude 1.0 separated by a 20 ms gap (1 ms step)."""
    ampl = np.zeros(200)
    ampl[10:70] = 1.0
    ampl[90:150] = 1.0
    return make_envelope(ampl)

# --- Test Cases ---

def test_pulses_merge_when_pause_is_short(two_pulses):
    """Two pulses with a gap shorter than shortest_pause become one syllable."""
    syllables = find_syllables(two_pulses, threshold=0.5, shortest_syl=40, shortest_pause=30)
    assert len(syllables) == 1
    assert syllables[0].start == 10.0
    assert syllables[0].end == 150.0
    assert_allclose(syllables[0].duration, 140.0)
    assert syllables[0].pause_after is None


def test_pulses_stay_separate_when_pause_is_long(two_pulses):
    """With shortest_pause below the gap, both pulses stand alone."""
    syllables = find_syllables(two_pulses, threshold=0.5, shortest_syl=40, shortest_pause=10)
    assert len(syllables) == 2
    assert_allclose([s.duration for s in syllables], [60.0, 60.0])
    assert_allclose(syllables[0].pause_after, 20.0)
    assert syllables[1].pause_after is None


@pytest.mark.parametrize("shortest_pause, expected_count", [
    (20.5, 1),  # pause (20 ms) shorter than shortest_pause -> merge
    (20.0, 2),  # equal -> keep separate
    (5.0, 2),
    (None, 2),  # merging disabled
])
def test_merge_boundary(two_pulses, shortest_pause, expected_count):
    syllables = find_syllables(two_pulses, threshold=0.5, shortest_syl=40, shortest_pause=shortest_pause)
    assert len(syllables) == expected_count


def test_short_run_dropped_and_pause_recomputed():
    """A run shorter than shortest_syl disappears; the pause spans to the next surviving syllable."""
    ampl = np.zeros(200)
    ampl[0:60] = 1.0
    ampl[80:90] = 1.0   # 10 ms, too short
    ampl[120:180] = 1.0
    syllables = find_syllables(make_envelope(ampl), threshold=0.5, shortest_syl=40, shortest_pause=None)
    assert [(s.start, s.end) for s in syllables] == [(0.0, 60.0), (120.0, 180.0)]
    assert_allclose(syllables[0].pause_after, 60.0)


def test_short_runs_survive_through_merge():
    """Filtering happens after merging: two short runs merged into a long one are kept."""
    ampl = np.zeros(100)
    ampl[10:40] = 1.0
    ampl[45:75] = 1.0
    env = make_envelope(ampl)

    merged = find_syllables(env, threshold=0.5, shortest_syl=40, shortest_pause=10)
    assert len(merged) == 1
    assert_allclose(merged[0].duration, 65.0)

    unmerged = find_syllables(env, threshold=0.5, shortest_syl=40, shortest_pause=None)
    assert unmerged == []


def test_never_reaches_threshold():
    """A flat envelope below threshold has no syllables."""
    env = make_envelope(np.full(100, 0.2))
    assert find_syllables(env, threshold=0.5, shortest_syl=10, shortest_pause=10) == []


def test_never_drops_below_threshold():
    """An envelope always above threshold is one syllable spanning the whole envelope."""
    env = make_envelope(np.full(100, 0.8), timestep=2.0)
    syllables = find_syllables(env, threshold=0.5, shortest_syl=10, shortest_pause=10)
    assert len(syllables) == 1
    assert syllables[0].start == 0.0
    assert_allclose(syllables[0].end, 200.0)
    assert syllables[0].pause_after is None


def test_threshold_is_inclusive():
    """Samples exactly at the threshold are active."""
    ampl = np.zeros(100)
    ampl[20:80] = 0.5
    syllables = find_syllables(make_envelope(ampl), threshold=0.5, shortest_syl=10, shortest_pause=None)
    assert len(syllables) == 1
    assert (syllables[0].start, syllables[0].end) == (20.0, 80.0)


def test_syllables_disjoint_and_idempotent():
    """Syllables never overlap, are ordered, and repeated calls agree."""
    rng = np.random.default_rng(7)
    ampl = np.abs(np.convolve(rng.normal(size=2000), np.ones(15) / 15, mode="same"))
    env = make_envelope(ampl, timestep=2.5)
    threshold = float(np.mean(ampl))

    first = find_syllables(env, threshold=threshold, shortest_syl=10, shortest_pause=5)
    second = find_syllables(env, threshold=threshold, shortest_syl=10, shortest_pause=5)
    assert first == second
    assert len(first) > 1
    for prev, nxt in zip(first, first[1:]):
        assert prev.start < prev.end
        assert prev.end < nxt.start
        assert_allclose(prev.pause_after, nxt.start - prev.end)
        assert prev.pause_after >= 5
    assert all(s.duration >= 10 for s in first)


def test_empty_envelope():
    env = make_envelope(np.array([]))
    assert find_syllables(env, threshold=0.1) == []


def test_zero_threshold_spans_whole_envelope():
    """With a zero threshold every sample is active, including silent ones."""
    ampl = np.zeros(100)
    ampl[40:70] = 0.3
    syllables = find_syllables(make_envelope(ampl), threshold=0.0, shortest_syl=10, shortest_pause=None)
    assert [(s.start, s.end) for s in syllables] == [(0.0, 100.0)]
    assert syllables[0].pause_after is None
