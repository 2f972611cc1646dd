# tests/test_audio_io.py

import pytest
import numpy as np
import soundfile as sf
from pathlib import Path
from numpy.testing import assert_allclose

from sylburst.core.audio.io import load_audio, SUPPORTED_READ_EXTENSIONS

# --- Test Fixtures ---

@pytest.fixture
def stereo_wav(tmp_path: Path) -> Path:
    """Half a second of a 220 Hz tone, with the right channel at half amplitude."""
    sr = 8000
    t = np.arange(int(0.5 * sr)) / sr
    left = 0.6 * np.sin(2 * np.pi * 220 * t)
    path = tmp_path / "stereo.wav"
    sf.write(path, np.column_stack([left, 0.5 * left]), sr, subtype="FLOAT")
    return path

# --- Test Cases ---

def test_supported_extensions():
    assert ".wav" in SUPPORTED_READ_EXTENSIONS
    assert ".mp3" in SUPPORTED_READ_EXTENSIONS


def test_load_audio_native_rate(stereo_wav: Path):
    data, sr = load_audio(stereo_wav)
    assert isinstance(sr, int)
    assert sr == 8000
    assert data.dtype == np.float64
    assert data.ndim == 1
    assert data.size == 4000
    # mono is the channel average
    assert_allclose(np.max(np.abs(data)), 0.45, atol=1e-3)


def test_load_audio_multichannel(stereo_wav: Path):
    data, sr = load_audio(stereo_wav, mono=False)
    assert data.shape == (2, 4000)
    assert data.dtype == np.float64


def test_load_audio_resampled(stereo_wav: Path):
    data, sr = load_audio(stereo_wav, sr=4000)
    assert sr == 4000
    assert abs(data.size - 2000) <= 2


def test_load_audio_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_audio(tmp_path / "missing.wav")


def test_load_audio_directory(tmp_path: Path):
    with pytest.raises(ValueError):
        load_audio(tmp_path)
