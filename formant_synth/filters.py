# Description: Formant resonators and the cascade that chains them.
"""Filter design and processing helpers."""
from __future__ import annotations

from math import cos, exp, pi
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from .core import _ensure_array

__all__ = [
    "resonator_coefficients",
    "Resonator",
    "FormantCascade",
]


def _resonator_design(
    frequency: float,
    bandwidth: float,
    sample_rate: float,
) -> Tuple[float, float, Tuple[float, float, float, float, float]]:
    # pole radius, pole angle and the coefficients derived from them
    r = exp(-pi * bandwidth / sample_rate)
    theta = 2.0 * pi * frequency / sample_rate
    a1 = -2.0 * r * cos(theta)
    a2 = r * r
    b0 = 1.0 - r
    return r, theta, (b0, 0.0, 0.0, a1, a2)


def resonator_coefficients(
    frequency: float,
    bandwidth: float,
    sample_rate: float,
) -> Tuple[float, float, float, float, float]:
    """Two-pole resonance coefficients ``(b0, b1, b2, a1, a2)``.

    ``R`` sets the -3 dB bandwidth, ``theta`` the centre frequency.
    Bandwidth <= 0 or frequency >= Nyquist still produce numbers; making
    them meaningful is up to the caller.
    """
    return _resonator_design(frequency, bandwidth, sample_rate)[2]


class Resonator:
    """Second-order recursive filter tuned to one formant.

    Retuning recomputes the coefficients but keeps the delay registers,
    so the output stays continuous across a formant glide.
    """

    __slots__ = (
        "frequency", "bandwidth", "sample_rate",
        "r", "theta", "b0", "b1", "b2", "a1", "a2",
        "x1", "x2", "y1", "y2",
    )

    def __init__(self, frequency: float, bandwidth: float, sample_rate: float) -> None:
        self.sample_rate = float(sample_rate)
        self.x1 = self.x2 = 0.0
        self.y1 = self.y2 = 0.0
        self.retune(frequency, bandwidth)

    def __repr__(self) -> str:
        return (
            f'Resonator(frequency={self.frequency!r}, bandwidth={self.bandwidth!r}, '
            f'sample_rate={self.sample_rate!r})'
        )

    def retune(self, frequency: float, bandwidth: float) -> None:
        self.frequency = float(frequency)
        self.bandwidth = float(bandwidth)
        self.r, self.theta, coeffs = _resonator_design(
            self.frequency, self.bandwidth, self.sample_rate
        )
        self.b0, self.b1, self.b2, self.a1, self.a2 = coeffs

    def reset(self) -> None:
        self.x1 = self.x2 = 0.0
        self.y1 = self.y2 = 0.0

    def process(self, x: float) -> float:
        y = (
            self.b0 * x + self.b1 * self.x1 + self.b2 * self.x2
            - self.a1 * self.y1 - self.a2 * self.y2
        )
        self.x2, self.x1 = self.x1, x
        self.y2, self.y1 = self.y1, y
        return y

    def process_block(self, samples) -> np.ndarray:
        x = _ensure_array(samples, dtype=np.float64)
        y = np.empty_like(x)
        for i, xi in enumerate(x):
            y[i] = self.process(float(xi))
        return y


class FormantCascade:
    """Ordered chain of resonators; each stage feeds the next.

    The cascade keeps no state beyond its resonators. An empty cascade
    passes samples through unchanged.
    """

    def __init__(self, resonators: Iterable[Resonator] = ()) -> None:
        self.resonators: List[Resonator] = list(resonators)

    @classmethod
    def from_formants(
        cls,
        frequencies: Sequence[float],
        bandwidths: Sequence[float],
        sample_rate: float,
    ) -> "FormantCascade":
        if len(frequencies) != len(bandwidths):
            raise ValueError('Formant and bandwidth arrays must share length')
        return cls(Resonator(f, bw, sample_rate) for f, bw in zip(frequencies, bandwidths))

    def __len__(self) -> int:
        return len(self.resonators)

    def __getitem__(self, index: int) -> Resonator:
        return self.resonators[index]

    def __iter__(self) -> Iterator[Resonator]:
        return iter(self.resonators)

    def process(self, x: float) -> float:
        for resonator in self.resonators:
            x = resonator.process(x)
        return x

    def process_block(self, samples) -> np.ndarray:
        x = _ensure_array(samples, dtype=np.float64)
        y = np.empty_like(x)
        for i, xi in enumerate(x):
            y[i] = self.process(float(xi))
        return y

    def retune(self, index: int, frequency: float, bandwidth: float) -> None:
        self.resonators[index].retune(frequency, bandwidth)

    def retune_all(self, frequencies: Sequence[float], bandwidths: Sequence[float]) -> None:
        if not (len(frequencies) == len(bandwidths) == len(self.resonators)):
            raise ValueError('Retune requires one frequency and bandwidth per resonator')
        for resonator, f, bw in zip(self.resonators, frequencies, bandwidths):
            resonator.retune(f, bw)

    def reset(self) -> None:
        for resonator in self.resonators:
            resonator.reset()
