"""Unit tests for formant_synth.sources."""

from __future__ import annotations

import math

import numpy as np
import pytest

from formant_synth.sources import LFGlottalSource

SR = 44100


def test_timing_ratios() -> None:
    t0, tp, te, ta = LFGlottalSource(100.0, SR).timing()
    assert t0 == pytest.approx(0.01)
    assert tp == pytest.approx(0.004)
    assert te == pytest.approx(0.0057)
    assert ta == pytest.approx(0.0003)


def test_first_sample_is_zero() -> None:
    assert LFGlottalSource(100.0, SR).next_sample() == 0.0


def test_open_phase_sample_matches_formula() -> None:
    src = LFGlottalSource(100.0, SR)
    src.render(10)
    t = 10 / SR
    tp, te = 0.004, 0.0057
    wg = math.pi / tp
    alpha = -wg / math.tan(wg * te)
    assert src.next_sample() == pytest.approx(math.exp(alpha * t) * math.sin(wg * t), rel=1e-9)


def test_return_phase_sample_matches_formula() -> None:
    src = LFGlottalSource(100.0, SR)
    src.render(300)
    t = 300 / SR
    assert src.next_sample() == pytest.approx(-math.exp(-(t - 0.0057) / 0.0003), rel=1e-9)


def test_periodic_at_constant_f0() -> None:
    f0 = 100.0
    period = round(SR / f0)
    y = LFGlottalSource(f0, SR).render(period * 6)
    np.testing.assert_allclose(y[period:], y[:-period], atol=1e-5)


def test_phase_stays_in_unit_interval() -> None:
    src = LFGlottalSource(173.0, SR)
    for _ in range(2000):
        src.next_sample()
        assert 0.0 <= src.phase < 1.0


def test_output_is_bounded() -> None:
    y = LFGlottalSource(120.0, SR).render(SR // 10)
    assert np.all(np.abs(y) <= 1.0)


def test_f0_track_drives_pitch() -> None:
    n = 1000
    track = np.linspace(100.0, 200.0, n)
    src = LFGlottalSource(100.0, SR)
    src.render(n, f0_track=track)
    assert src.f0 == pytest.approx(200.0)


def test_changing_f0_keeps_phase() -> None:
    src = LFGlottalSource(100.0, SR)
    src.render(100)
    phase = src.phase
    src.f0 = 150.0
    assert src.phase == phase
    src.next_sample()
    assert src.phase == pytest.approx(phase + 150.0 / SR)


def test_render_rejects_mismatched_track() -> None:
    with pytest.raises(ValueError):
        LFGlottalSource(100.0, SR).render(10, f0_track=[100.0] * 5)
