"""Shared fixtures: isolate settings and logging state between tests."""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from fallible.foundation.config import clear_settings_cache
from fallible.runtime.observability import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Fresh settings (no FALLIBLE_* env, no .env file) and default logging per test."""
    for key in [k for k in os.environ if k.startswith("FALLIBLE_")]:
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()


@pytest.fixture
def log_output() -> io.StringIO:
    """Capture JSON log lines at DEBUG level."""
    buf = io.StringIO()
    configure_logging(format="json", level="DEBUG", output=buf)
    return buf


class Resource:
    """Context manager recording how often it was entered and released."""

    def __init__(self, *, fail_on_exit: bool = False) -> None:
        self.entered = 0
        self.released = 0
        self.fail_on_exit = fail_on_exit

    def __enter__(self) -> Resource:
        self.entered += 1
        return self

    def __exit__(self, *_: object) -> None:
        self.released += 1
        if self.fail_on_exit:
            raise OSError("release failed")


class Closeable:
    """Object exposing only close()."""

    def __init__(self) -> None:
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


@pytest.fixture
def resource() -> Resource:
    return Resource()


@pytest.fixture
def failing_resource() -> Resource:
    return Resource(fail_on_exit=True)


@pytest.fixture
def closeable() -> Closeable:
    return Closeable()
