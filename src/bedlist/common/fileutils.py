# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations

import bz2
import collections
import gzip
import io
import os
import sys
from collections.abc import Iterator
from os import fspath
from types import TracebackType
from typing import IO, Any, Union, cast

PathTypes = Union[str, "os.PathLike[str]"]

# Paths that are read from STDIN rather than opened by name
STDIN_PATHS = ("-", "/dev/stdin")

# Maximum number of characters that may be read past a checkpoint
LOOKAHEAD_LIMIT = 8 * 1024


class CheckpointError(OSError):
    pass


def is_stdin(filename: PathTypes) -> bool:
    return fspath(filename) in STDIN_PATHS


def describe_input(filename: PathTypes) -> str:
    """Returns a human readable name for an input file, for use in messages."""
    if is_stdin(filename):
        return "stdin"

    return fspath(filename)


def open_rb(filename: PathTypes) -> IO[bytes]:
    """Opens a file for reading, transparently handling
    GZip and BZip2 compressed files. Returns a file handle.

    The filenames '-' and '/dev/stdin' are read from STDIN, without closing STDIN
    when the returned handle is closed.
    """
    if is_stdin(filename):
        handle = open(sys.stdin.fileno(), "rb", closefd=False)
    else:
        handle = open(fspath(filename), "rb")

    try:
        # Peeking is served from the read buffer, so this also works for pipes
        header = handle.peek(2)

        if header.startswith(b"\x1f\x8b"):
            return cast(IO[bytes], _GzipFile(mode="rb", fileobj=handle))
        elif header.startswith(b"BZ"):
            return _BZ2File(handle, "rb")
        else:
            return handle
    except BaseException:
        handle.close()
        raise


def open_rt(filename: PathTypes) -> IO[str]:
    return io.TextIOWrapper(open_rb(filename), encoding="utf-8")


class CheckpointReader:
    """Line-oriented reader that can rewind to a previously established checkpoint.

    Lines read after a checkpoint are kept in memory so that they can be replayed
    after calling `rewind_to_checkpoint`. At most `limit` characters are retained;
    reading past that limit invalidates the checkpoint. Since the underlying handle is
    never seeked, this works the same way for regular files, pipes, and FIFOs.
    """

    def __init__(self, handle: IO[str], limit: int = LOOKAHEAD_LIMIT) -> None:
        if limit < 0:
            raise ValueError(f"invalid lookahead limit {limit}")

        self._handle = handle
        self._limit = limit
        self._pending: collections.deque[str] = collections.deque()
        self._recorded: list[str] | None = None
        self._recorded_size = 0
        self._overflow = False

    def establish_checkpoint(self) -> None:
        self._recorded = []
        self._recorded_size = 0
        self._overflow = False

    def rewind_to_checkpoint(self) -> None:
        if self._recorded is None:
            raise CheckpointError("cannot rewind stream; no checkpoint established")
        elif self._overflow:
            raise CheckpointError(
                "cannot rewind stream; more than %i characters were read after the "
                "checkpoint was established" % (self._limit,)
            )

        self._pending.extendleft(reversed(self._recorded))
        self._recorded = []
        self._recorded_size = 0

    def readline(self) -> str:
        if self._pending:
            line = self._pending.popleft()
        else:
            line = self._handle.readline()

        if line and self._recorded is not None and not self._overflow:
            self._recorded_size += len(line)
            if self._recorded_size > self._limit:
                # Checkpoint is no longer usable; release the buffered lines
                self._overflow = True
                self._recorded = []
            else:
                self._recorded.append(line)

        return line

    def close(self) -> None:
        self._pending.clear()
        self._recorded = None
        self._handle.close()

    def __iter__(self) -> Iterator[str]:
        return iter(self.readline, "")

    def __enter__(self) -> CheckpointReader:
        return self

    def __exit__(
        self,
        typ: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class _GzipFile(gzip.GzipFile):
    "Wrapper ensuring that passed filehandles are properly closed"

    def close(self) -> None:
        fileobj: Any = self.fileobj
        super().close()
        if hasattr(fileobj, "close"):
            fileobj.close()


class _BZ2File(bz2.BZ2File):
    "Wrapper ensuring that passed filehandles are properly closed"

    def close(self) -> None:
        fileobj = self._fp  # type: ignore
        super().close()
        if hasattr(fileobj, "close"):
            fileobj.close()
