# Description: Pure tone generators and the excitation sources built on them.
"""Waveform generators and pluggable excitation sources."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Union

import numpy as np

from .constants import DTYPE, SQUARE_AMPLITUDE
from .core import _peak, _sample_count
from .sources import LFGlottalSource

__all__ = [
    "tone",
    "square_tone",
    "harmonic_stack",
    "ExcitationSource",
    "ExcitationLike",
    "ToneExcitation",
    "SquareExcitation",
    "HarmonicExcitation",
    "GlottalExcitation",
    "render_excitation",
]


def _sine(frequency: float, sample_count: int, sample_rate: float) -> np.ndarray:
    # Each sample is evaluated from absolute time i / sample_rate.
    t = np.arange(sample_count, dtype=np.float64) / float(sample_rate)
    return np.sin(2.0 * np.pi * float(frequency) * t)


def tone(frequency: float, duration: float, sample_rate: float) -> np.ndarray:
    """Sine at ``frequency`` Hz lasting ``duration`` seconds."""
    n = _sample_count(duration, sample_rate)
    return _sine(frequency, n, sample_rate).astype(DTYPE, copy=False)


def square_tone(frequency: float, duration: float, sample_rate: float) -> np.ndarray:
    """Hard-clipped sine at a fixed ±0.33 amplitude.

    This is not band-limited: it is the sign of :func:`tone` scaled to
    ``SQUARE_AMPLITUDE``, with zero samples mapped to the negative level.
    """
    n = _sample_count(duration, sample_rate)
    sine = _sine(frequency, n, sample_rate)
    return np.where(sine > 0.0, SQUARE_AMPLITUDE, -SQUARE_AMPLITUDE).astype(DTYPE)


def harmonic_stack(
    frequency: float,
    duration: float,
    sample_rate: float,
    harmonic_count: int,
) -> np.ndarray:
    """Sum of ``harmonic_count`` harmonics of ``frequency`` weighted by ``1/n``.

    The sum is divided by its absolute peak only when that peak exceeds 1.0;
    quiet signals are never scaled up.
    """
    harmonic_count = int(harmonic_count)
    if harmonic_count < 0:
        raise ValueError(f'harmonic_count must be non-negative, got {harmonic_count}')

    n = _sample_count(duration, sample_rate)
    total = np.zeros(n, dtype=np.float64)
    for index in range(1, harmonic_count + 1):
        total += _sine(frequency * index, n, sample_rate) / index

    peak = _peak(total)
    if peak > 1.0:
        total /= peak
    return total.astype(DTYPE, copy=False)


class ExcitationSource(Protocol):
    """Anything that renders a signal for a frequency, duration and rate."""

    def generate(self, frequency: float, duration: float, sample_rate: float) -> np.ndarray:
        ...


ExcitationLike = Union[ExcitationSource, Callable[[float, float, float], np.ndarray]]


@dataclass(frozen=True)
class ToneExcitation:
    def generate(self, frequency: float, duration: float, sample_rate: float) -> np.ndarray:
        return tone(frequency, duration, sample_rate)


@dataclass(frozen=True)
class SquareExcitation:
    def generate(self, frequency: float, duration: float, sample_rate: float) -> np.ndarray:
        return square_tone(frequency, duration, sample_rate)


@dataclass(frozen=True)
class HarmonicExcitation:
    harmonic_count: int = 5

    def generate(self, frequency: float, duration: float, sample_rate: float) -> np.ndarray:
        return harmonic_stack(frequency, duration, sample_rate, self.harmonic_count)


@dataclass(frozen=True)
class GlottalExcitation:
    """LF glottal pulses at a constant fundamental ``frequency``."""

    phase: float = 0.0

    def generate(self, frequency: float, duration: float, sample_rate: float) -> np.ndarray:
        n = _sample_count(duration, sample_rate)
        source = LFGlottalSource(frequency, sample_rate, phase=self.phase)
        return source.render(n).astype(DTYPE, copy=False)


def render_excitation(
    excitation: ExcitationLike,
    frequency: float,
    duration: float,
    sample_rate: float,
) -> np.ndarray:
    """Render either an :class:`ExcitationSource` or a plain generator function."""
    generate = getattr(excitation, 'generate', None)
    if generate is None:
        generate = excitation
    return np.asarray(generate(frequency, duration, sample_rate), dtype=DTYPE)
