# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
"""Picard-style interval lists.

An interval list consists of a SAM-style header, listing the contigs against which
the intervals are described, followed by one record per line with tab-separated
columns: contig, start (1-based), end (1-based, inclusive), strand ('+' or '-'), and
name ('.' if the interval is unnamed).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from os import fspath
from typing import IO, Any

from bedlist.common.fileutils import PathTypes
from bedlist.common.formats import FormatError
from bedlist.common.formats.seqdict import SequenceDictionary, parse_sam_header
from bedlist.common.utilities import TotallyOrdered

SAM_VERSION = "1.6"
UNSORTED = "unsorted"
COORDINATE = "coordinate"


class IntervalListError(FormatError):
    pass


class Interval(TotallyOrdered):
    """A closed, 1-based interval on a contig.

    Zero-length intervals are represented with start == end + 1, i.e. the interval
    lies immediately before the base at position `start`. Empty names are stored as
    None.
    """

    __slots__ = ["contig", "end", "name", "negative_strand", "start"]

    def __init__(
        self,
        contig: str,
        start: int,
        end: int,
        negative_strand: bool = False,
        name: str | None = None,
    ) -> None:
        self.contig = contig
        self.start = start
        self.end = end
        self.negative_strand = negative_strand
        self.name = name or None

        if not contig:
            raise ValueError("contig is blank")
        elif start < 1:
            raise ValueError(f"invalid start coordinate {start}")
        elif end < start - 1:
            raise ValueError(f"invalid start/end coordinates {start}-{end}")

    @property
    def strand(self) -> str:
        return "-" if self.negative_strand else "+"

    def is_zero_length(self) -> bool:
        return self.start == self.end + 1

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        values = [self.contig, self.start, self.end, self.strand, self.name or "."]

        return "\t".join(map(str, values))

    def __repr__(self) -> str:
        return (
            f"Interval(contig={self.contig!r}, start={self.start!r}, "
            f"end={self.end!r}, strand={self.strand!r}, name={self.name!r})"
        )

    def __lt__(self, obj: object) -> bool:
        if not isinstance(obj, Interval):
            return NotImplemented

        return self._key() < obj._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple[str, int, int, bool, str]:
        name = self.name or ""
        return (self.contig, self.start, self.end, self.negative_strand, name)


class IntervalList:
    """Collection of intervals described relative to a sequence dictionary."""

    def __init__(
        self,
        dictionary: SequenceDictionary,
        intervals: Iterable[Interval] = (),
        sort_order: str = UNSORTED,
    ) -> None:
        self.dictionary = dictionary
        self.intervals = list(intervals)
        self.sort_order = sort_order

    def append(self, interval: Interval) -> None:
        self.intervals.append(interval)
        self.sort_order = UNSORTED

    def base_count(self) -> int:
        """Returns the total number of bases covered by intervals, counting
        overlapping bases once for each interval."""
        return sum(len(interval) for interval in self.intervals)

    def sorted(self) -> IntervalList:
        """Returns a new list sorted by the order of contigs in the dictionary,
        followed by start, end, strand, and name."""
        dictionary = self.dictionary
        # Contigs missing from the dictionary are placed last
        infinite = len(dictionary)

        def _by_dictionary_order(it: Interval) -> tuple[int, tuple[Any, ...]]:
            if it.contig in dictionary:
                return (dictionary.index(it.contig), it._key())

            return (infinite, it._key())

        return IntervalList(
            dictionary=self.dictionary,
            intervals=sorted(self.intervals, key=_by_dictionary_order),
            sort_order=COORDINATE,
        )

    def uniqued(self, concatenate_names: bool = True) -> IntervalList:
        """Returns a new, sorted list in which overlapping and abutting intervals on the
        same contig have been merged. Names of merged intervals are joined using '|'
        if `concatenate_names` is set, otherwise the first name is kept."""
        results: list[Interval] = []
        group: list[Interval] = []
        group_end = 0
        for interval in self.sorted():
            # Intervals that overlap or abut are merged
            if group and (
                group[0].contig != interval.contig or group_end + 1 < interval.start
            ):
                results.append(_merge_intervals(group, concatenate_names))
                group = []

            if not group:
                group_end = interval.end

            group.append(interval)
            group_end = max(group_end, interval.end)

        if group:
            results.append(_merge_intervals(group, concatenate_names))

        return IntervalList(self.dictionary, results, sort_order=COORDINATE)

    def write(self, filename: PathTypes) -> None:
        with open(fspath(filename), "w", encoding="utf-8") as handle:
            self.write_to(handle)

    def write_to(self, handle: IO[str]) -> None:
        handle.write(f"@HD\tVN:{SAM_VERSION}\tSO:{self.sort_order}\n")
        for contig in self.dictionary:
            handle.write(f"@SQ\tSN:{contig.name}\tLN:{contig.length}\n")

        for interval in self.intervals:
            handle.write(f"{interval}\n")

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        source: str = "<stream>",
    ) -> IntervalList:
        """Parses an interval list. The header must precede all records; records on
        contigs not listed in the header are skipped with a warning."""
        log = logging.getLogger(__name__)
        header: list[str] = []
        intervals: list[Interval] = []

        dictionary: SequenceDictionary | None = None
        for line_num, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            if line.startswith("@"):
                if dictionary is not None:
                    raise IntervalListError(
                        f"{source}:{line_num}: header line found after records"
                    )

                header.append(line)
                continue
            elif not line.strip() or line.startswith("#"):
                continue
            elif dictionary is None:
                dictionary = parse_sam_header(header)

            try:
                interval = _parse_interval(line)
            except (IntervalListError, ValueError) as error:
                raise IntervalListError(f"{source}:{line_num}: {error}") from error

            if interval.contig not in dictionary:
                log.warning("Ignoring interval for unknown reference: %s", interval)
                continue

            intervals.append(interval)

        if dictionary is None:
            dictionary = parse_sam_header(header)

        return IntervalList(dictionary, intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    def __getitem__(self, index: int) -> Interval:
        return self.intervals[index]

    def __repr__(self) -> str:
        return f"IntervalList({self.dictionary!r}, {self.intervals!r})"


def _parse_interval(line: str) -> Interval:
    fields = line.split("\t")
    if len(fields) != 5:
        raise IntervalListError(
            f"invalid interval record with {len(fields)} fields, expected 5: {line!r}"
        )

    contig, start, end, strand, name = fields
    if strand not in ("+", "-"):
        raise IntervalListError(f"strand must be + or -, not {strand!r}")

    return Interval(
        contig=contig,
        start=_parse_int(start, "start"),
        end=_parse_int(end, "end"),
        negative_strand=strand == "-",
        name=None if name == "." else name,
    )


def _parse_int(value: str, field: str) -> int:
    try:
        return int(value)
    except ValueError as error:
        raise IntervalListError(
            f"expected int for {field} but found {value!r}"
        ) from error


def _merge_intervals(intervals: list[Interval], concatenate_names: bool) -> Interval:
    first = intervals[0]
    if len(intervals) == 1:
        return first

    names: list[str] = []
    for interval in intervals:
        if interval.name is not None and interval.name not in names:
            names.append(interval.name)

    if concatenate_names:
        name = "|".join(names)
    else:
        name = names[0] if names else None

    return Interval(
        contig=first.contig,
        start=min(it.start for it in intervals),
        end=max(it.end for it in intervals),
        negative_strand=first.negative_strand,
        name=name,
    )
