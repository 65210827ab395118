"""Audio I/O helpers: a strict RIFF/WAVE PCM16 reader and writer."""
from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .constants import (
    CHUNK_HEADER_SIZE,
    FMT_CHUNK_MIN_SIZE,
    PCM_BITS_PER_SAMPLE,
    U16_MAX,
    U32_MAX,
    WAVE_FORMAT_PCM,
)
from .core import _to_pcm16
from .errors import (
    BadHeaderError,
    InvalidWavError,
    MissingChunkError,
    TruncatedError,
    UnsupportedFormatError,
    WavIOError,
)
from .logger_utils import LoggerUtils

__all__ = [
    "WavFormat",
    "WavData",
    "DecodedWav",
    "decode_bytes",
    "decode",
    "encode_bytes",
    "encode",
    "encode_mono",
    "encode_stereo",
    "write_wav",
]

logger = LoggerUtils.get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_FMT_FIELDS = struct.Struct("<HHIIHH")
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")

# RIFF sizes written by streaming encoders that never patch the header
_UNKNOWN_RIFF_SIZES = (0, U32_MAX)


@dataclass(frozen=True)
class WavFormat:
    """Contents of the ``fmt `` chunk."""

    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    block_size: int = FMT_CHUNK_MIN_SIZE


@dataclass(frozen=True)
class WavData:
    """Raw little-endian payload of the ``data`` chunk."""

    data_size: int
    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != self.data_size:
            raise InvalidWavError("data chunk length does not match its declared size")

    def len_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class DecodedWav:
    """A decoded container: exactly one format and one data chunk."""

    format: WavFormat
    data_chunk: WavData

    @property
    def data_bytes(self) -> bytes:
        return self.data_chunk.data

    @property
    def frame_count(self) -> int:
        if self.format.block_align == 0:
            return 0
        return self.data_chunk.len_bytes() // self.format.block_align

    def to_array(self) -> np.ndarray:
        """Samples as int16, shaped ``(frames, channels)``."""
        channels = max(1, self.format.num_channels)
        usable = self.data_chunk.len_bytes() - self.data_chunk.len_bytes() % (2 * channels)
        samples = np.frombuffer(self.data_bytes[:usable], dtype="<i2").astype(np.int16)
        return samples.reshape(-1, channels)


# ---- decoding ----

class _Cursor:
    """Read position over an immutable byte buffer."""

    def __init__(self, buffer: bytes) -> None:
        self.buffer = buffer
        self.offset = 0

    def remaining(self) -> int:
        return len(self.buffer) - self.offset

    def read(self, length: int) -> bytes:
        end = self.offset + length
        if length < 0 or end > len(self.buffer):
            raise TruncatedError(
                f"needed {length} bytes at offset {self.offset}, {self.remaining()} available"
            )
        chunk = self.buffer[self.offset:end]
        self.offset = end
        return chunk

    def skip(self, length: int) -> None:
        self.read(length)

    def fourcc(self) -> bytes:
        return self.read(4)

    def u32(self) -> int:
        return struct.unpack("<I", self.read(4))[0]


def _parse_fmt(cursor: _Cursor, block_size: int) -> WavFormat:
    if block_size < FMT_CHUNK_MIN_SIZE:
        raise BadHeaderError("fmt chunk too small")

    fields = _FMT_FIELDS.unpack(cursor.read(_FMT_FIELDS.size))
    # extension fields (cbSize etc.) are ignored
    if block_size > FMT_CHUNK_MIN_SIZE:
        cursor.skip(block_size - FMT_CHUNK_MIN_SIZE)
    return WavFormat(*fields, block_size=block_size)


def decode_bytes(buffer: bytes) -> DecodedWav:
    """Decode a complete RIFF/WAVE buffer holding PCM16 audio.

    Raises:
        BadHeaderError: RIFF/WAVE tags wrong or fmt chunk shorter than 16 bytes.
        TruncatedError: The buffer ends before a field or chunk it announces.
        InvalidWavError: Duplicate fmt/data chunk or a chunk overread.
        MissingChunkError: No fmt or no data chunk in the file.
        UnsupportedFormatError: Anything other than 16-bit linear PCM.
    """
    cursor = _Cursor(bytes(buffer))

    if cursor.fourcc() != b"RIFF":
        raise BadHeaderError("RIFF missing")
    riff_size = cursor.u32()
    if cursor.fourcc() != b"WAVE":
        raise BadHeaderError("WAVE missing")

    fmt: Optional[WavFormat] = None
    data: Optional[WavData] = None

    while cursor.remaining() >= CHUNK_HEADER_SIZE:
        chunk_id = cursor.fourcc()
        chunk_size = cursor.u32()
        payload_start = cursor.offset

        if chunk_id == b"fmt ":
            if fmt is not None:
                raise InvalidWavError("duplicate fmt chunk")
            fmt = _parse_fmt(cursor, chunk_size)
        elif chunk_id == b"data":
            if data is not None:
                raise InvalidWavError("duplicate data chunk")
            data = WavData(data_size=chunk_size, data=cursor.read(chunk_size))
        else:
            logger.debug("Skipping chunk %r (%d bytes) at offset %d", chunk_id, chunk_size, payload_start - 8)
            cursor.skip(chunk_size)

        consumed = cursor.offset - payload_start
        if consumed < chunk_size:
            cursor.skip(chunk_size - consumed)
        elif consumed > chunk_size:
            raise InvalidWavError("overread chunk payload")

        # RIFF chunks are word aligned
        if chunk_size % 2 == 1:
            cursor.skip(1)

        if fmt is not None and data is not None:
            break

    if fmt is None or data is None:
        # leftover bytes here are a partial chunk header
        if cursor.remaining() > 0:
            raise TruncatedError(
                f"{cursor.remaining()} trailing bytes at offset {cursor.offset} "
                f"cannot hold a chunk header"
            )
        # A short file whose header promises more bytes was cut off, not malformed.
        if riff_size not in _UNKNOWN_RIFF_SIZES and len(cursor.buffer) < riff_size + CHUNK_HEADER_SIZE:
            raise TruncatedError(
                f"RIFF header declares {riff_size + CHUNK_HEADER_SIZE} bytes, "
                f"buffer holds {len(cursor.buffer)}"
            )
        raise MissingChunkError("fmt " if fmt is None else "data")

    if fmt.audio_format != WAVE_FORMAT_PCM or fmt.bits_per_sample != PCM_BITS_PER_SAMPLE:
        raise UnsupportedFormatError(fmt.audio_format, fmt.bits_per_sample, fmt.num_channels)

    logger.debug(
        "Decoded WAV: %d ch, %d Hz, %d data bytes",
        fmt.num_channels, fmt.sample_rate, data.len_bytes(),
    )
    return DecodedWav(format=fmt, data_chunk=data)


def decode(path: PathLike) -> DecodedWav:
    """Read ``path`` and decode it with :func:`decode_bytes`."""
    try:
        with open(path, "rb") as f:
            buffer = f.read()
    except OSError as err:
        raise WavIOError(f"I/O error: {err}", err) from err
    return decode_bytes(buffer)


# ---- encoding ----

def _as_int16(samples) -> np.ndarray:
    arr = np.asarray(samples)
    if arr.size == 0:
        return np.zeros(0, dtype=np.int16)
    if arr.dtype == np.int16:
        return arr.ravel()
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidWavError(f"PCM16 samples must be integers, got {arr.dtype}")
    if int(arr.min()) < -32768 or int(arr.max()) > 32767:
        raise InvalidWavError("sample value outside the 16-bit range")
    return arr.astype(np.int16).ravel()


def encode_bytes(samples, sample_rate: int, channels: int = 1) -> bytes:
    """Serialise interleaved PCM16 ``samples`` into a canonical 44-byte-header WAV.

    Raises:
        InvalidWavError: Bad channel count, a sample count not divisible by
            ``channels``, or any size field that would overflow.
    """
    channels = int(channels)
    sample_rate = int(sample_rate)
    if channels < 1 or channels > U16_MAX:
        raise InvalidWavError(f"channel count must be between 1 and {U16_MAX}, got {channels}")
    if sample_rate < 0 or sample_rate > U32_MAX:
        raise InvalidWavError(f"sample rate {sample_rate} does not fit the format")

    pcm = _as_int16(samples)
    if pcm.size % channels != 0:
        raise InvalidWavError("sample count is not divisible by the channel count")

    block_align = channels * 2
    if block_align > U16_MAX:
        raise InvalidWavError("block_align overflow")
    byte_rate = sample_rate * block_align
    if byte_rate > U32_MAX:
        raise InvalidWavError("byte_rate overflow")

    frame_count = pcm.size // channels
    data_size = frame_count * block_align
    if data_size > U32_MAX:
        raise InvalidWavError("data chunk too large")
    pad = data_size % 2
    riff_size = 36 + data_size + pad
    if riff_size > U32_MAX:
        raise InvalidWavError("RIFF size overflow")

    header = _HEADER.pack(
        b"RIFF", riff_size, b"WAVE",
        b"fmt ", FMT_CHUNK_MIN_SIZE,
        WAVE_FORMAT_PCM, channels, sample_rate, byte_rate, block_align, PCM_BITS_PER_SAMPLE,
        b"data", data_size,
    )
    payload = pcm.astype("<i2", copy=False).tobytes()
    logger.debug("Encoded %d frames x %d ch at %d Hz (%d data bytes)", frame_count, channels, sample_rate, data_size)
    return header + payload + (b"\x00" * pad)


def encode(path: PathLike, samples, sample_rate: int, channels: int = 1) -> str:
    """Encode ``samples`` and write them to ``path``; returns the absolute path."""
    buffer = encode_bytes(samples, sample_rate, channels)
    try:
        with open(path, "wb") as f:
            f.write(buffer)
    except OSError as err:
        raise WavIOError(f"I/O error: {err}", err) from err
    out = os.path.abspath(path)
    logger.info("Wrote %s (%d bytes)", out, len(buffer))
    return out


def encode_mono(path: PathLike, samples, sample_rate: int) -> str:
    return encode(path, samples, sample_rate, channels=1)


def encode_stereo(path: PathLike, interleaved_samples, sample_rate: int) -> str:
    return encode(path, interleaved_samples, sample_rate, channels=2)


def write_wav(path: PathLike, audio, sampleRate: int = 22050, channels: int = 1) -> str:
    """Write float ``audio`` to ``path`` as 16-bit PCM WAV."""
    return encode(path, _to_pcm16(audio), sampleRate, channels=channels)
