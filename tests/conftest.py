from __future__ import annotations

from collections.abc import Iterator

import pytest

from formant_synth.logger_utils import LoggerUtils


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    # LoggerUtils is a process-wide singleton; start every test unconfigured.
    LoggerUtils.reset()
    yield
    LoggerUtils.reset()
