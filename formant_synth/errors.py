"""Errors raised by the WAV codec.

Every failure of :mod:`formant_synth.io` is a :class:`WavError`. Decoding
stops at the first error and never returns a partial result.
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    "WavError",
    "WavIOError",
    "BadHeaderError",
    "MissingChunkError",
    "TruncatedError",
    "InvalidWavError",
    "UnsupportedFormatError",
]


class WavError(Exception):
    """Base class of all codec errors."""


class WavIOError(WavError):
    """The underlying file could not be read or written."""

    def __init__(self, message: str, original: Optional[OSError] = None) -> None:
        super().__init__(message)
        self.original = original


class BadHeaderError(WavError):
    """A RIFF/WAVE/fmt literal is wrong or the fmt chunk is too small."""


class MissingChunkError(WavError):
    """The ``fmt `` or ``data`` chunk was not found."""

    def __init__(self, chunk_id: str) -> None:
        super().__init__(f"missing required chunk: {chunk_id!r}")
        self.chunk_id = chunk_id


class TruncatedError(WavError):
    """The buffer ended before a required field could be read."""

    def __init__(self, message: str = "file is truncated") -> None:
        super().__init__(message)


class InvalidWavError(WavError):
    """Structural violation: duplicate chunk, overread, size overflow, bad sample count."""


class UnsupportedFormatError(WavError):
    """Well-formed container whose encoding is not PCM16."""

    def __init__(self, audio_format: int, bits_per_sample: int, channels: int) -> None:
        super().__init__(
            f"unsupported WAV format: audio_format={audio_format}, "
            f"bits_per_sample={bits_per_sample}, channels={channels}"
        )
        self.audio_format = audio_format
        self.bits_per_sample = bits_per_sample
        self.channels = channels
