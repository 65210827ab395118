"""Unit tests for formant_synth.waveforms."""

from __future__ import annotations

import math

import numpy as np
import pytest

from formant_synth.constants import DTYPE, SQUARE_AMPLITUDE
from formant_synth.waveforms import (
    GlottalExcitation,
    HarmonicExcitation,
    SquareExcitation,
    ToneExcitation,
    harmonic_stack,
    render_excitation,
    square_tone,
    tone,
)


def test_tone_length_and_dtype() -> None:
    y = tone(440.0, 0.5, 8000)
    assert y.shape == (4000,)
    assert y.dtype == DTYPE


def test_tone_samples_follow_absolute_time() -> None:
    sr = 44100
    y = tone(440.0, 1.0, sr)
    for i in (0, 1, 1000, 44099):
        assert y[i] == pytest.approx(math.sin(2.0 * math.pi * 440.0 * i / sr), abs=1e-6)


def test_tone_zero_duration_is_empty() -> None:
    assert tone(440.0, 0.0, 44100).size == 0


def test_tone_zero_frequency_is_silence() -> None:
    assert not np.any(tone(0.0, 0.01, 8000))


def test_tone_above_nyquist_is_accepted() -> None:
    y = tone(30000.0, 0.01, 8000)
    assert y.size == 80
    assert np.all(np.abs(y) <= 1.0)


@pytest.mark.parametrize(
    ("duration", "sample_rate"),
    [(-1.0, 8000), (1.0, 0), (1.0, -8000), (float("nan"), 8000), (float("inf"), 8000)],
)
def test_invalid_duration_or_rate(duration: float, sample_rate: float) -> None:
    with pytest.raises(ValueError):
        tone(100.0, duration, sample_rate)
    with pytest.raises(ValueError):
        square_tone(100.0, duration, sample_rate)
    with pytest.raises(ValueError):
        harmonic_stack(100.0, duration, sample_rate, 3)


def test_square_tone_levels() -> None:
    sr = 8000
    y = square_tone(100.0, 0.1, sr)
    sine = tone(100.0, 0.1, sr)
    np.testing.assert_allclose(np.abs(y), SQUARE_AMPLITUDE, atol=1e-6)
    assert np.all((y > 0) == (sine > 0))
    # sin(0) == 0 maps to the negative level
    assert y[0] == pytest.approx(-SQUARE_AMPLITUDE)


def test_harmonic_stack_never_exceeds_unit_amplitude() -> None:
    y = harmonic_stack(100.0, 0.1, 44100, 8)
    assert float(np.max(np.abs(y))) <= 1.0 + 1e-6
    assert float(np.max(np.abs(y))) == pytest.approx(1.0, abs=1e-6)


def test_harmonic_stack_quiet_sum_is_not_rescaled() -> None:
    sr = 8000
    y = harmonic_stack(100.0, 0.1, sr, 1)
    np.testing.assert_allclose(y, tone(100.0, 0.1, sr), atol=1e-7)


def test_harmonic_stack_matches_unnormalized_sum_when_quiet() -> None:
    # Harmonics 1 and 2 at 0.25 Hz over 0.05 s stay far below unit amplitude.
    sr = 8000
    expected = tone(0.25, 0.05, sr).astype(np.float64) + tone(0.5, 0.05, sr).astype(np.float64) / 2
    assert np.max(np.abs(expected)) < 1.0
    np.testing.assert_allclose(harmonic_stack(0.25, 0.05, sr, 2), expected, atol=1e-6)


def test_harmonic_stack_zero_harmonics_is_silence() -> None:
    y = harmonic_stack(100.0, 0.01, 8000, 0)
    assert y.size == 80
    assert not np.any(y)


def test_harmonic_stack_rejects_negative_count() -> None:
    with pytest.raises(ValueError):
        harmonic_stack(100.0, 0.01, 8000, -1)


@pytest.mark.parametrize(
    ("excitation", "reference"),
    [
        (ToneExcitation(), lambda f, d, sr: tone(f, d, sr)),
        (SquareExcitation(), lambda f, d, sr: square_tone(f, d, sr)),
        (HarmonicExcitation(3), lambda f, d, sr: harmonic_stack(f, d, sr, 3)),
    ],
)
def test_excitation_variants_delegate(excitation, reference) -> None:
    np.testing.assert_array_equal(excitation.generate(220.0, 0.02, 8000), reference(220.0, 0.02, 8000))


def test_glottal_excitation_length() -> None:
    y = GlottalExcitation().generate(100.0, 0.05, 8000)
    assert y.shape == (400,)
    assert y.dtype == DTYPE


def test_render_excitation_accepts_plain_callable() -> None:
    y = render_excitation(tone, 220.0, 0.01, 8000)
    np.testing.assert_array_equal(y, tone(220.0, 0.01, 8000))
