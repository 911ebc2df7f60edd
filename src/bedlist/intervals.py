# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
"""Loading of interval files in either BED or interval list format.

The format of a file is determined by inspecting its first significant line, after
which the stream is rewound and parsed in full. Since rewinding is done using an
in-memory buffer, the same approach works for files, pipes, and STDIN.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from bedlist.common.fileutils import (
    CheckpointReader,
    PathTypes,
    describe_input,
    open_rt,
)
from bedlist.common.formats import FormatError
from bedlist.common.formats.bed import read_bed_intervals
from bedlist.common.formats.interval_list import IntervalList
from bedlist.common.formats.seqdict import SequenceDictionary
from bedlist.common.formats.sniff import (
    FormatDetectionResult,
    IntervalFileFormat,
    detect_interval_format,
)


class IntervalIOError(OSError):
    pass


class UnrecognizedFormatError(FormatError):
    def __init__(self, first_line: str | None) -> None:
        super().__init__(
            "Unrecognized interval file format. Expected interval_list (lines "
            "starting with @) or BED (3 or more tab-separated fields). First data "
            f"line: {first_line}"
        )

        self.first_line = first_line


class FormatMismatchError(FormatError):
    def __init__(
        self,
        expected: IntervalFileFormat,
        result: FormatDetectionResult,
    ) -> None:
        if result.format == IntervalFileFormat.INTERVAL_LIST:
            hint = (
                "Input appears to be an interval_list file; supply a BED file instead."
            )
        elif result.first_line is not None:
            hint = f"First data line: {result.first_line}"
        else:
            hint = "File appears to be empty or contain only headers."

        super().__init__(f"{expected.name} format input is required. {hint}")

        self.expected = expected
        self.detected = result.format
        self.first_line = result.first_line


@contextmanager
def open_intervals(filename: PathTypes) -> Iterator[CheckpointReader]:
    """Opens a (possibly compressed) interval file, or STDIN if `filename` is '-' or
    '/dev/stdin', for reading. I/O and decoding errors raised while the file is open
    are re-raised as IntervalIOError with the name of the file."""
    try:
        with CheckpointReader(open_rt(filename)) as handle:
            yield handle
    except IntervalIOError:
        raise
    except (OSError, EOFError, UnicodeDecodeError) as error:
        raise IntervalIOError(
            f"Error reading intervals from {describe_input(filename)}: {error}"
        ) from error


def sniff_format(handle: CheckpointReader) -> FormatDetectionResult:
    """Detects the format of the remaining content of `handle`, and rewinds it to the
    current position."""
    handle.establish_checkpoint()
    result = detect_interval_format(handle)
    handle.rewind_to_checkpoint()

    return result


def require_bed_format(handle: CheckpointReader) -> None:
    """Raises FormatMismatchError if `handle` does not appear to contain BED records.
    The handle is rewound to the current position before returning."""
    result = sniff_format(handle)
    if result.format != IntervalFileFormat.BED:
        raise FormatMismatchError(IntervalFileFormat.BED, result)


def load_intervals(
    handle: CheckpointReader,
    dictionary: SequenceDictionary,
    source: str = "<stream>",
) -> IntervalList:
    """Loads an interval list or a BED file, returning a sorted interval list in
    which overlapping intervals have been merged. BED records are validated against
    `dictionary`, while interval lists use the dictionary in their header."""
    result = sniff_format(handle)
    if result.format == IntervalFileFormat.INTERVAL_LIST:
        intervals = IntervalList.from_lines(handle, source=source)
    elif result.format == IntervalFileFormat.BED:
        intervals = read_bed_intervals(handle, dictionary, source=source)
    else:
        raise UnrecognizedFormatError(result.first_line)

    return intervals.uniqued()


def load_intervals_file(
    filename: PathTypes,
    dictionary: SequenceDictionary,
) -> IntervalList:
    with open_intervals(filename) as handle:
        return load_intervals(handle, dictionary, source=describe_input(filename))
