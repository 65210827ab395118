"""Tests for the inspection CLI and the demo driver."""

from __future__ import annotations

from pathlib import Path

import pytest

import main as demo
from formant_synth.__main__ import main
from formant_synth.io import decode, encode_mono, encode_stereo


def test_inspect_prints_format(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "s.wav"
    encode_stereo(path, [1, 2, 3, 4, 5, 6], 22050)

    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "channels:        2" in out
    assert "sample_rate:     22050" in out
    assert "data bytes:      12" in out


def test_inspect_fails_on_bad_file(tmp_path: Path) -> None:
    path = tmp_path / "bad.wav"
    path.write_bytes(b"RIFX0000WAVE")
    assert main([str(path)]) == 1


def test_inspect_fails_on_missing_file(tmp_path: Path) -> None:
    assert main([str(tmp_path / "missing.wav")]) == 1


def test_inspect_debug_level_reaches_stderr(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "m.wav"
    encode_mono(path, [1, 2], 8000)

    assert main([str(path), "--log-level", "DEBUG"]) == 0
    assert "Decoded WAV: 1 ch, 8000 Hz, 4 data bytes" in capsys.readouterr().err


def test_inspect_default_level_keeps_stderr_quiet(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "m.wav"
    encode_mono(path, [1, 2], 8000)

    assert main([str(path)]) == 0
    assert "Decoded WAV" not in capsys.readouterr().err


def test_demo_renders_files(tmp_path: Path) -> None:
    out_dir = tmp_path / "sounds"
    ini = tmp_path / "demo.ini"
    ini.write_text(
        f"[SYNTHESIS]\nSAMPLE_RATE = 8000\nDURATION = 0.02\nHARMONICS = 3\n\n[OUTPUT]\nDIRECTORY = {out_dir}\n",
        encoding="utf-8",
    )

    assert demo.main(["--config", str(ini)]) == 0

    files = sorted(p.name for p in out_dir.iterdir())
    assert len(files) == len(demo.PHONEME_MAP) * 4 + len(demo.DIPHTHONGS)
    assert "a_phoneme.wav" in files
    assert "ai_glide.wav" in files
    assert decode(out_dir / "i_lf_vowel.wav").frame_count == 160


def test_demo_reports_missing_config(tmp_path: Path) -> None:
    assert demo.main(["--config", str(tmp_path / "none.ini")]) == 1
