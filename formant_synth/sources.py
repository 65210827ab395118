# Description: Liljencrants-Fant glottal excitation source.
"""Excitation source generators."""
from __future__ import annotations

from dataclasses import dataclass
from math import exp, pi, sin, tan
from typing import NamedTuple, Optional, Sequence

import numpy as np

from .constants import LF_CLOSURE_RATIO, LF_OPEN_PHASE_RATIO, LF_RETURN_RATIO

__all__ = ["LFTiming", "LFGlottalSource"]


class LFTiming(NamedTuple):
    """Timing of one LF pitch period, in seconds."""

    t0: float
    tp: float
    te: float
    ta: float


def _lf_timing(f0: float) -> LFTiming:
    t0 = 1.0 / f0
    return LFTiming(
        t0=t0,
        tp=LF_OPEN_PHASE_RATIO * t0,
        te=LF_CLOSURE_RATIO * t0,
        ta=LF_RETURN_RATIO * t0,
    )


@dataclass
class LFGlottalSource:
    """Quasi-periodic glottal-flow-derivative excitation (LF model).

    The source keeps a fractional ``phase`` in [0, 1) within the current
    pitch period. Timing is derived from ``f0`` on every sample, so ``f0``
    may be changed between calls to :meth:`next_sample` to produce smooth
    pitch glides. ``f0 <= 0`` is not guarded against.
    """

    f0: float
    sample_rate: float
    phase: float = 0.0

    def timing(self) -> LFTiming:
        return _lf_timing(self.f0)

    def next_sample(self) -> float:
        t0, tp, te, ta = _lf_timing(self.f0)
        t = self.phase * t0

        if t < te:
            # open + closing phase
            wg = pi / tp
            alpha = -wg / tan(wg * te)
            e = exp(alpha * t) * sin(wg * t)
        else:
            # return phase
            epsilon = 1.0 / ta
            e = -exp(-epsilon * (t - te))

        self.phase += 1.0 / (self.sample_rate * t0)
        while self.phase >= 1.0:
            self.phase -= 1.0
        return e

    def render(self, sample_count: int, f0_track: Optional[Sequence[float]] = None) -> np.ndarray:
        """Render ``sample_count`` samples, optionally following a per-sample f0 track."""
        sample_count = int(sample_count)
        if sample_count < 0:
            raise ValueError('sample_count must be non-negative')
        if f0_track is not None:
            f0_track = np.asarray(f0_track, dtype=np.float64).ravel()
            if f0_track.size != sample_count:
                raise ValueError('f0 track must match the requested sample count')

        out = np.empty(sample_count, dtype=np.float64)
        for i in range(sample_count):
            if f0_track is not None:
                self.f0 = float(f0_track[i])
            out[i] = self.next_sample()
        return out
