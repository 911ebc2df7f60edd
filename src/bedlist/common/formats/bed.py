# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
"""BED files: tab-separated records with 0-based, half-open coordinates.

Records consist of at least three columns (contig, start, end), optionally followed
by name, score, and strand. Columns past the first six are ignored. Intervals are
converted to 1-based, closed coordinates when read, i.e. BED start + 1 and BED end.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from bedlist.common.formats import FormatError
from bedlist.common.formats.interval_list import Interval, IntervalList
from bedlist.common.formats.seqdict import ContigInfo, SequenceDictionary

# Plain ASCII integers; excludes whitespace, underscores, and non-ASCII digits
_INTEGER = re.compile(r"[+-]?[0-9]+")


class BEDError(FormatError):
    pass


class MalformedRecordError(BEDError):
    pass


class UnknownContigError(BEDError):
    pass


class CoordinateOutOfRangeError(BEDError):
    pass


class BEDRecord:
    """Class for representing a BED record.

    The class has the following properties:
       .contig -> str
       .start -> int (0-based)
       .end -> int (1-based)
       .name -> str
       .score -> int
       .strand -> '+' or '-'
    """

    __slots__ = ["contig", "end", "name", "score", "start", "strand"]

    def __init__(
        self,
        contig: str,
        start: int,
        end: int,
        name: str | None = None,
        score: int | None = None,
        strand: str | None = None,
    ) -> None:
        self.contig = contig
        self.start = start
        self.end = end
        self.name = name
        self.score = score
        self.strand = strand

        if not contig:
            raise ValueError("contig is blank")
        elif strand not in (None, "+", "-"):
            raise ValueError(f"invalid strand {strand!r}")
        elif not (0 <= start <= end):
            raise ValueError("invalid start/end coordinates")

    @classmethod
    def from_interval(cls, interval: Interval, columns: int = 6) -> BEDRecord:
        """Converts a 1-based, closed interval to a BED record with 3 or 6 columns."""
        if columns == 3:
            return BEDRecord(interval.contig, interval.start - 1, interval.end)
        elif columns != 6:
            raise ValueError(f"invalid number of BED columns {columns}")

        return BEDRecord(
            contig=interval.contig,
            start=interval.start - 1,
            end=interval.end,
            name=interval.name,
            score=0,
            strand=interval.strand,
        )

    def __str__(self) -> str:
        values = [self.contig, self.start, self.end, self.name, self.score, self.strand]
        while values and values[-1] is None:
            values.pop()

        length = len(values)
        # Default score if strand is set
        if length >= 5 and values[4] is None:
            values[4] = "0"

        # Default name if strand or score is set
        if length >= 4 and values[3] is None:
            values[3] = ""

        return "\t".join(map(str, values))

    def __repr__(self) -> str:
        keys = ("contig", "start", "end", "name", "score", "strand")
        values = [self.contig, self.start, self.end, self.name, self.score, self.strand]
        while values and values[-1] is None:
            values.pop()

        return "BEDRecord({})".format(
            ", ".join(f"{key}={value!r}" for key, value in zip(keys, values))
        )


class BEDDiagnostics:
    """Counts of records dropped or flagged while reading a BED file."""

    __slots__ = [
        "dropped_missing_contig_bases",
        "dropped_missing_contig_count",
        "zero_length_count",
    ]

    def __init__(self) -> None:
        self.dropped_missing_contig_count = 0
        self.dropped_missing_contig_bases = 0
        self.zero_length_count = 0

    def report(
        self,
        log: logging.Logger,
        *,
        drop_missing_contigs: bool,
        keep_zero_length: bool,
    ) -> None:
        if drop_missing_contigs:
            if not self.dropped_missing_contig_bases:
                log.info("There were no missing regions.")
            else:
                log.warning(
                    "There were %i missing regions with a total of %i bases",
                    self.dropped_missing_contig_count,
                    self.dropped_missing_contig_bases,
                )

        if not keep_zero_length:
            if not self.zero_length_count:
                log.info("No input regions had length zero, so none were skipped.")
            else:
                log.info(
                    "Skipped writing a total of %i entries with length zero in the "
                    "input file.",
                    self.zero_length_count,
                )
        elif self.zero_length_count:
            log.warning(
                "Input file had %i entries with length zero. Run without "
                "--keep-length-zero-intervals to remove these.",
                self.zero_length_count,
            )


def read_bed_intervals(
    handle: Iterable[str],
    dictionary: SequenceDictionary,
    *,
    drop_missing_contigs: bool = False,
    keep_zero_length: bool = False,
    log: logging.Logger | None = None,
    source: str = "<stream>",
) -> IntervalList:
    """Reads BED records from a sequence of lines, returning an unsorted interval
    list with 1-based, closed coordinates. Comments and empty lines are skipped.

    Records on contigs missing from `dictionary` raise an UnknownContigError, unless
    `drop_missing_contigs` is set, in which case they are skipped. Length zero
    records are skipped unless `keep_zero_length` is set. If `log` is set, skipped
    records and a summary of the skipped records are logged using it. Errors are
    prefixed with `source` and the line number.
    """
    intervals = IntervalList(dictionary)
    diagnostics = BEDDiagnostics()

    for line_num, line in enumerate(handle, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        try:
            contig_name, start, end, name, negative_strand = _parse_bed_line(line)
            contig = dictionary.resolve(contig_name)
            if contig is None:
                if not drop_missing_contigs:
                    raise UnknownContigError(
                        f"Sequence {contig_name!r} was not found in the sequence "
                        "dictionary"
                    )

                if log is not None:
                    log.info(
                        "Dropping interval with missing contig: %s:%i-%i",
                        contig_name,
                        start,
                        end,
                    )

                diagnostics.dropped_missing_contig_count += 1
                diagnostics.dropped_missing_contig_bases += end - start + 1
                continue

            _validate_coordinates(contig, start, end)
        except BEDError as error:
            raise type(error)(f"{source}:{line_num}: {error}") from error

        if start == end + 1:
            diagnostics.zero_length_count += 1
            if not keep_zero_length:
                if log is not None:
                    log.info(
                        "Skipping writing length zero interval at %s:%i-%i.",
                        contig_name,
                        start,
                        end,
                    )
                continue

        intervals.append(Interval(contig_name, start, end, negative_strand, name))

    if log is not None:
        diagnostics.report(
            log,
            drop_missing_contigs=drop_missing_contigs,
            keep_zero_length=keep_zero_length,
        )

    return intervals


def _parse_bed_line(line: str) -> tuple[str, int, int, str | None, bool]:
    """Returns (contig, start, end, name, negative strand) for a BED line, with
    coordinates converted to 1-based, closed coordinates."""
    fields = line.split("\t")
    if len(fields) < 3:
        raise MalformedRecordError(
            f"Invalid BED line (fewer than 3 tab-separated fields): {line!r}"
        )

    # BED start is 0-based; BED end is 0-based exclusive, i.e. 1-based inclusive
    start = _parse_coordinate(1, fields, line) + 1
    end = _parse_coordinate(2, fields, line)
    # Empty names are not allowed for intervals
    name = fields[3] if len(fields) > 3 and fields[3] else None
    negative_strand = len(fields) > 5 and fields[5] == "-"

    return fields[0], start, end, name, negative_strand


def _parse_coordinate(column: int, fields: list[str], line: str) -> int:
    value = fields[column]
    if _INTEGER.fullmatch(value) is None:
        raise MalformedRecordError(
            "Expected int in column {} but found {!r}: {!r}".format(
                column + 1, value, line
            )
        )

    return int(value)


def _validate_coordinates(contig: ContigInfo, start: int, end: int) -> None:
    # The order of these checks determines which error is reported
    if start < 1:
        raise CoordinateOutOfRangeError(
            f"Start on sequence {contig.name!r} was less than one: {start}"
        )
    elif contig.length < start:
        raise CoordinateOutOfRangeError(
            f"Start on sequence {contig.name!r} was past the end: "
            f"{contig.length} < {start}"
        )
    elif (end == 0 and start != 1) or end < 0:
        # A zero-length interval ending at position 0 is only possible at the start
        raise CoordinateOutOfRangeError(
            f"End on sequence {contig.name!r} was less than one: {end}"
        )
    elif contig.length < end:
        raise CoordinateOutOfRangeError(
            f"End on sequence {contig.name!r} was past the end: "
            f"{contig.length} < {end}"
        )
    elif end < start - 1:
        raise CoordinateOutOfRangeError(
            f"On sequence {contig.name!r}, end < start - 1: {end} < {start - 1}"
        )
