# Description: Phoneme and vowel assembly on top of the source/filter components.
"""High-level synthesis routines built on the DSP helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .constants import DTYPE, PEAK_DEFAULT
from .core import _normalize_peak, _sample_count
from .filters import FormantCascade
from .io import PathLike, write_wav
from .logger_utils import LoggerUtils
from .sources import LFGlottalSource
from .waveforms import (
    ExcitationLike,
    HarmonicExcitation,
    SquareExcitation,
    ToneExcitation,
    render_excitation,
)

__all__ = [
    "Phoneme",
    "generate_phoneme_wave",
    "generate_phoneme",
    "generate_square_phoneme",
    "generate_phoneme_with_harmonics",
    "synth_vowel",
    "synth_glide",
    "synth_vowel_to_wav",
]

logger = LoggerUtils.get_logger(__name__)

DEFAULT_BANDWIDTHS = (90.0, 110.0, 150.0)


@dataclass(frozen=True)
class Phoneme:
    """First two formant frequencies of a vowel, in Hz."""

    f1: float
    f2: float


def generate_phoneme_wave(
    formant1: float,
    formant2: float,
    pitch: float,
    duration: float,
    sample_rate: float,
    excitation: ExcitationLike,
) -> np.ndarray:
    """Average of ``excitation`` rendered at both formants and at the pitch."""
    wave1 = render_excitation(excitation, formant1, duration, sample_rate)
    wave2 = render_excitation(excitation, formant2, duration, sample_rate)
    pitch_wave = render_excitation(excitation, pitch, duration, sample_rate)
    n = min(len(wave1), len(wave2), len(pitch_wave))
    mixed = (
        wave1[:n].astype(np.float64)
        + wave2[:n].astype(np.float64)
        + pitch_wave[:n].astype(np.float64)
    ) / 3.0
    return mixed.astype(DTYPE, copy=False)


def generate_phoneme(formant1, formant2, pitch, duration, sample_rate) -> np.ndarray:
    return generate_phoneme_wave(formant1, formant2, pitch, duration, sample_rate, ToneExcitation())


def generate_square_phoneme(formant1, formant2, pitch, duration, sample_rate) -> np.ndarray:
    return generate_phoneme_wave(formant1, formant2, pitch, duration, sample_rate, SquareExcitation())


def generate_phoneme_with_harmonics(
    formant1, formant2, pitch, duration, sample_rate, harmonic_count: int = 5
) -> np.ndarray:
    return generate_phoneme_wave(
        formant1, formant2, pitch, duration, sample_rate, HarmonicExcitation(harmonic_count)
    )


def _resolve_bandwidths(formants: Sequence[float], bandwidths: Optional[Sequence[float]]) -> Sequence[float]:
    if bandwidths is None:
        defaults = list(DEFAULT_BANDWIDTHS)
        return [defaults[i] if i < len(defaults) else defaults[-1] for i in range(len(formants))]
    if len(bandwidths) != len(formants):
        raise ValueError('Formant and bandwidth arrays must share length')
    return bandwidths


def synth_vowel(
    formants: Sequence[float],
    bandwidths: Optional[Sequence[float]] = None,
    f0: float = 120.0,
    duration: float = 0.5,
    sample_rate: float = 22050,
    *,
    peak: Optional[float] = PEAK_DEFAULT,
) -> np.ndarray:
    """LF glottal source filtered by a cascade of formant resonators.

    ``peak=None`` leaves the cascade output unscaled.
    """
    bandwidths = _resolve_bandwidths(formants, bandwidths)
    n = _sample_count(duration, sample_rate)
    source = LFGlottalSource(f0, sample_rate)
    cascade = FormantCascade.from_formants(formants, bandwidths, sample_rate)

    y = np.empty(n, dtype=np.float64)
    for i in range(n):
        y[i] = cascade.process(source.next_sample())

    logger.debug("Synthesised vowel %s at f0=%.1f Hz (%d samples)", list(formants), f0, n)
    if peak is None:
        return y.astype(DTYPE, copy=False)
    return _normalize_peak(y, peak)


def synth_glide(
    start_formants: Sequence[float],
    end_formants: Sequence[float],
    bandwidths: Optional[Sequence[float]] = None,
    f0: float = 120.0,
    duration: float = 0.5,
    sample_rate: float = 22050,
    *,
    end_f0: Optional[float] = None,
    peak: Optional[float] = PEAK_DEFAULT,
) -> np.ndarray:
    """Diphthong: formants and pitch move linearly from start to end values.

    The cascade is retuned on every sample without clearing its delay
    registers, so the output stays continuous through the glide.
    """
    if len(start_formants) != len(end_formants):
        raise ValueError('Start and end formant arrays must share length')
    bandwidths = _resolve_bandwidths(start_formants, bandwidths)
    n = _sample_count(duration, sample_rate)
    if end_f0 is None:
        end_f0 = f0

    start = np.asarray(start_formants, dtype=np.float64)
    end = np.asarray(end_formants, dtype=np.float64)
    source = LFGlottalSource(f0, sample_rate)
    cascade = FormantCascade.from_formants(start, bandwidths, sample_rate)

    y = np.empty(n, dtype=np.float64)
    for i in range(n):
        frac = i / (n - 1) if n > 1 else 0.0
        cascade.retune_all(start + (end - start) * frac, bandwidths)
        source.f0 = f0 + (end_f0 - f0) * frac
        y[i] = cascade.process(source.next_sample())

    if peak is None:
        return y.astype(DTYPE, copy=False)
    return _normalize_peak(y, peak)


def synth_vowel_to_wav(
    outPath: PathLike,
    formants: Sequence[float],
    bandwidths: Optional[Sequence[float]] = None,
    f0: float = 120.0,
    duration: float = 0.5,
    sampleRate: int = 22050,
) -> str:
    waveform = synth_vowel(formants, bandwidths, f0=f0, duration=duration, sample_rate=sampleRate)
    return write_wav(outPath, waveform, sampleRate=sampleRate)
