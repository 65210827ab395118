"""Core numeric helpers shared across the synthesis modules."""
from __future__ import annotations

from math import isfinite

import numpy as np

from .constants import DTYPE, EPS, PCM16_MAX

__all__ = [
    "_sample_count",
    "_ensure_array",
    "_peak",
    "_normalize_peak",
    "_to_pcm16",
]


def _sample_count(duration: float, sample_rate: float) -> int:
    """Number of samples covering ``duration`` seconds (floor)."""
    duration = float(duration)
    sample_rate = float(sample_rate)
    if not isfinite(duration) or duration < 0.0:
        raise ValueError(f'Duration must be a finite non-negative number, got {duration!r}')
    if not isfinite(sample_rate) or sample_rate <= 0.0:
        raise ValueError(f'Sample rate must be a finite positive number, got {sample_rate!r}')
    count = duration * sample_rate
    if not isfinite(count):
        raise ValueError('duration * sample_rate is not representable as a sample count')
    return int(count)


def _ensure_array(x, *, dtype=DTYPE) -> np.ndarray:
    """Return ``x`` as a one-dimensional array of ``dtype``."""
    arr = np.asarray(x)
    if arr.dtype != dtype:
        arr = arr.astype(dtype, copy=False)
    return arr.ravel()


def _peak(sig: np.ndarray) -> float:
    if sig.size == 0:
        return 0.0
    return float(np.max(np.abs(sig)))


def _normalize_peak(sig: np.ndarray, target: float) -> np.ndarray:
    """Scale ``sig`` so that its absolute peak equals ``target`` (silence stays silent)."""
    sig = _ensure_array(sig, dtype=np.float64)
    peak = _peak(sig)
    if peak <= EPS:
        return sig.astype(DTYPE, copy=False)
    return (sig * (target / peak)).astype(DTYPE, copy=False)


def _to_pcm16(audio) -> np.ndarray:
    """Clamp float samples to [-1, 1] and quantize to int16 (truncating toward zero)."""
    audio = _ensure_array(audio, dtype=np.float64)
    clipped = np.clip(np.nan_to_num(audio, nan=0.0), -1.0, 1.0)
    return (clipped * PCM16_MAX).astype(np.int16)
