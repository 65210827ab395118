"""Shared constants for the synthesis components and the WAV codec."""
from __future__ import annotations

import numpy as np

__all__ = [
    "DTYPE",
    "EPS",
    "PEAK_DEFAULT",
    "PCM16_MAX",
    "SQUARE_AMPLITUDE",
    "LF_OPEN_PHASE_RATIO",
    "LF_CLOSURE_RATIO",
    "LF_RETURN_RATIO",
    "WAVE_FORMAT_PCM",
    "PCM_BITS_PER_SAMPLE",
    "FMT_CHUNK_MIN_SIZE",
    "CHUNK_HEADER_SIZE",
    "U16_MAX",
    "U32_MAX",
]

DTYPE = np.float32
EPS = 1e-12
PEAK_DEFAULT = 0.9

PCM16_MAX = 32767

# Hard-clipped sine used as a cheap square approximation.
SQUARE_AMPLITUDE = 0.33

# LF timing as fractions of the pitch period T0.
LF_OPEN_PHASE_RATIO = 0.4   # Tp
LF_CLOSURE_RATIO = 0.57     # Te
LF_RETURN_RATIO = 0.03      # Ta

# ---- RIFF/WAVE ----
WAVE_FORMAT_PCM = 1
PCM_BITS_PER_SAMPLE = 16
FMT_CHUNK_MIN_SIZE = 16
CHUNK_HEADER_SIZE = 8   # tag + size

U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF
