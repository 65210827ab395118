"""Print the format and data size of a WAV file: ``python -m formant_synth PATH``."""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .errors import WavError
from .io import decode
from .logger_utils import LoggerUtils

logger = LoggerUtils.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formant_synth",
        description="Inspect a 16-bit PCM WAV file.",
    )
    parser.add_argument("path", help="WAV file to inspect")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    LoggerUtils().set_level(args.log_level)

    try:
        wav = decode(args.path)
    except WavError as err:
        logger.error("%s: %s", args.path, err)
        return 1

    fmt = wav.format
    print(f"audio_format:    {fmt.audio_format}")
    print(f"channels:        {fmt.num_channels}")
    print(f"sample_rate:     {fmt.sample_rate}")
    print(f"byte_rate:       {fmt.byte_rate}")
    print(f"block_align:     {fmt.block_align}")
    print(f"bits_per_sample: {fmt.bits_per_sample}")
    print(f"data bytes:      {wav.data_chunk.len_bytes()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
