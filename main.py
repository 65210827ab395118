# main.py
"""Demo driver: renders every vowel of PHONEME_MAP with each excitation variant."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from formant_synth import (
    Phoneme,
    generate_phoneme,
    generate_phoneme_with_harmonics,
    generate_square_phoneme,
    synth_glide,
    synth_vowel,
    write_wav,
)
from formant_synth.config import ConfigLoaderError, load_config
from formant_synth.errors import WavError
from formant_synth.logger_utils import LoggerUtils

DEFAULT_CONFIG = "formant_synth.ini"

PHONEME_MAP: Dict[str, Phoneme] = {
    'a': Phoneme(f1=850.0, f2=1300.0),
    'i': Phoneme(f1=415.0, f2=2700.0),
    'u': Phoneme(f1=570.0, f2=1430.0),
    'e': Phoneme(f1=670.0, f2=2275.0),
    'o': Phoneme(f1=625.0, f2=1090.0),
}

# (start, end) vowels rendered as formant glides
DIPHTHONGS = (('a', 'i'), ('o', 'u'))


def render_all(config_path: str) -> List[str]:
    config = load_config(config_path)
    LoggerUtils(config.LOGGING.FILE).set_level(config.LOGGING.LEVEL)
    logger = LoggerUtils.get_logger(__name__)

    synth = config.SYNTHESIS
    sr = synth.SAMPLE_RATE
    out_dir = Path(config.OUTPUT.DIRECTORY)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: List[str] = []
    for symbol, ph in PHONEME_MAP.items():
        variants = {
            'phoneme': generate_phoneme(ph.f1, ph.f2, synth.PITCH, synth.DURATION, sr),
            'square_phoneme': generate_square_phoneme(ph.f1, ph.f2, synth.PITCH, synth.DURATION, sr),
            'harmonic_phoneme': generate_phoneme_with_harmonics(
                ph.f1, ph.f2, synth.PITCH, synth.DURATION, sr, synth.HARMONICS
            ),
            'lf_vowel': synth_vowel(
                [ph.f1, ph.f2],
                [synth.BANDWIDTH, synth.BANDWIDTH],
                f0=synth.GLOTTAL_F0,
                duration=synth.DURATION,
                sample_rate=sr,
            ),
        }
        for suffix, waveform in variants.items():
            written.append(write_wav(out_dir / f'{symbol}_{suffix}.wav', waveform, sampleRate=sr))

    for start, end in DIPHTHONGS:
        a, b = PHONEME_MAP[start], PHONEME_MAP[end]
        waveform = synth_glide(
            [a.f1, a.f2],
            [b.f1, b.f2],
            [synth.BANDWIDTH, synth.BANDWIDTH],
            f0=synth.GLOTTAL_F0,
            duration=synth.DURATION,
            sample_rate=sr,
            end_f0=synth.GLOTTAL_F0 * 0.85,
        )
        written.append(write_wav(out_dir / f'{start}{end}_glide.wav', waveform, sampleRate=sr))

    logger.info("Rendered %d files into %s", len(written), out_dir)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render demo vowel files.")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="INI configuration file")
    args = parser.parse_args(argv)

    try:
        written = render_all(args.config)
    except (ConfigLoaderError, WavError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    for path in written:
        print(path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
