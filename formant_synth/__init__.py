"""Source-filter formant synthesis with a strict PCM16 WAV codec."""
from __future__ import annotations

from .constants import DTYPE, EPS, PEAK_DEFAULT
from .errors import (
    BadHeaderError,
    InvalidWavError,
    MissingChunkError,
    TruncatedError,
    UnsupportedFormatError,
    WavError,
    WavIOError,
)
from .filters import FormantCascade, Resonator, resonator_coefficients
from .io import (
    DecodedWav,
    WavData,
    WavFormat,
    decode,
    decode_bytes,
    encode,
    encode_bytes,
    encode_mono,
    encode_stereo,
    write_wav,
)
from .sources import LFGlottalSource, LFTiming
from .synthesis import (
    Phoneme,
    generate_phoneme,
    generate_phoneme_wave,
    generate_phoneme_with_harmonics,
    generate_square_phoneme,
    synth_glide,
    synth_vowel,
    synth_vowel_to_wav,
)
from .waveforms import (
    ExcitationSource,
    GlottalExcitation,
    HarmonicExcitation,
    SquareExcitation,
    ToneExcitation,
    harmonic_stack,
    square_tone,
    tone,
)

__all__ = [
    "DTYPE",
    "EPS",
    "PEAK_DEFAULT",
    "tone",
    "square_tone",
    "harmonic_stack",
    "ExcitationSource",
    "ToneExcitation",
    "SquareExcitation",
    "HarmonicExcitation",
    "GlottalExcitation",
    "resonator_coefficients",
    "Resonator",
    "FormantCascade",
    "LFGlottalSource",
    "LFTiming",
    "Phoneme",
    "generate_phoneme_wave",
    "generate_phoneme",
    "generate_square_phoneme",
    "generate_phoneme_with_harmonics",
    "synth_vowel",
    "synth_glide",
    "synth_vowel_to_wav",
    "WavFormat",
    "WavData",
    "DecodedWav",
    "decode",
    "decode_bytes",
    "encode",
    "encode_bytes",
    "encode_mono",
    "encode_stereo",
    "write_wav",
    "WavError",
    "WavIOError",
    "BadHeaderError",
    "MissingChunkError",
    "TruncatedError",
    "InvalidWavError",
    "UnsupportedFormatError",
]
