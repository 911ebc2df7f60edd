# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations

import logging
import sys
from typing import IO

import bedlist.common.logging
from bedlist.common.argparse import ArgumentParser, Namespace
from bedlist.common.formats import FormatError
from bedlist.common.formats.bed import BEDRecord
from bedlist.common.formats.interval_list import IntervalList
from bedlist.common.formats.seqdict import (
    SequenceDictionary,
    load_sequence_dictionary,
)
from bedlist.intervals import load_intervals_file


def write_bed(handle: IO[str], intervals: IntervalList, columns: int) -> None:
    for interval in intervals:
        record = BEDRecord.from_interval(interval, columns=columns)
        handle.write(f"{record}\n")


def parse_args(argv: list[str]) -> Namespace:
    parser = ArgumentParser("bedlist interval_list_to_bed")
    parser.add_argument(
        "intervals",
        help="Interval list or BED file. Use '-' to read from STDIN",
    )
    parser.add_argument(
        "-SD",
        "--sequence-dictionary",
        default=None,
        help="Sequence dictionary used to validate BED input; interval lists use the "
        "dictionary in their header",
    )
    parser.add_argument(
        "-O",
        "--output",
        default="-",
        help="Write BED records to this file. Use '-' to write to STDOUT",
    )
    parser.add_argument(
        "--columns",
        type=int,
        default=6,
        choices=(3, 6),
        help="Number of BED columns to write",
    )

    bedlist.common.logging.add_argument_group(parser, log_file=False)

    return parser.parse_args(argv)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    bedlist.common.logging.initialize_console_logging(
        log_level=args.log_level,
        log_color=args.log_color,
    )

    log = logging.getLogger(__name__)

    try:
        dictionary = SequenceDictionary()
        if args.sequence_dictionary is not None:
            dictionary = load_sequence_dictionary(args.sequence_dictionary)

        intervals = load_intervals_file(args.intervals, dictionary)

        if args.output == "-":
            write_bed(sys.stdout, intervals, args.columns)
        else:
            with open(args.output, "w", encoding="utf-8") as handle:
                write_bed(handle, intervals, args.columns)
    except (FormatError, OSError) as error:
        log.error("%s", error)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
