# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from bedlist.common.utilities import Immutable


class IntervalFileFormat(Enum):
    INTERVAL_LIST = "interval_list"
    BED = "bed"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class FormatDetectionResult(Immutable):
    format: IntervalFileFormat
    first_line: str | None

    def __init__(
        self,
        format: IntervalFileFormat,
        first_line: str | None = None,
    ) -> None:
        Immutable.__init__(self, format=format, first_line=first_line)

    def __repr__(self) -> str:
        return f"FormatDetectionResult({self.format!s}, {self.first_line!r})"


def detect_interval_format(lines: Iterable[str]) -> FormatDetectionResult:
    """Classifies a stream as interval list or BED, based on the first line that is
    neither empty nor a comment. Lines are consumed from `lines` up to and including
    that line; callers reading from a stream are responsible for rewinding it.
    """
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        elif line.startswith("@"):
            return FormatDetectionResult(IntervalFileFormat.INTERVAL_LIST)
        elif len(line.split("\t")) >= 3:
            return FormatDetectionResult(IntervalFileFormat.BED)

        return FormatDetectionResult(IntervalFileFormat.UNKNOWN, line)

    return FormatDetectionResult(IntervalFileFormat.UNKNOWN)
