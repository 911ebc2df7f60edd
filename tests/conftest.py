# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Iterator
from typing import IO

import pytest


@pytest.fixture
def pipe_stdin(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[bytes], None]]:
    """Replaces STDIN with the read end of a pipe containing the given data."""
    handles: list[IO[str]] = []

    def _pipe_stdin(data: bytes) -> None:
        read_fd, write_fd = os.pipe()
        with os.fdopen(write_fd, "wb") as handle:
            handle.write(data)

        stdin = os.fdopen(read_fd, "r")
        handles.append(stdin)
        monkeypatch.setattr(sys, "stdin", stdin)

    yield _pipe_stdin

    for handle in handles:
        handle.close()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Command-line tools add handlers to the root logger; these are removed after
    each test, since they refer to the captured STDERR of that test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield

    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()

    root.setLevel(level)
