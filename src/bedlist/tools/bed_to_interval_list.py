# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
"""Converts a BED file to a Picard-style interval list.

BED records are validated against a sequence dictionary, which is also written as the
header of the resulting interval list. The input may be a regular file, a compressed
file, or STDIN ('-'); interval lists are rejected with an explanatory message.
"""

from __future__ import annotations

import logging
import sys

import bedlist.common.logging
from bedlist.common.argparse import ArgumentParser, Namespace
from bedlist.common.fileutils import describe_input
from bedlist.common.formats import FormatError
from bedlist.common.formats.bed import read_bed_intervals
from bedlist.common.formats.seqdict import load_sequence_dictionary
from bedlist.intervals import open_intervals, require_bed_format

_DEFAULT_CONFIG_FILES = [
    "/etc/bedlist/bed_to_interval_list.ini",
    "~/.bedlist/bed_to_interval_list.ini",
]


def parse_args(argv: list[str]) -> Namespace:
    parser = ArgumentParser(
        prog="bedlist bed_to_interval_list",
        default_config_files=_DEFAULT_CONFIG_FILES,
    )

    parser.add_argument(
        "-I",
        "--input",
        required=True,
        help="The input BED file. Use '-' to read from STDIN",
    )
    parser.add_argument(
        "-SD",
        "--sequence-dictionary",
        required=True,
        help="The sequence dictionary, or a BAM/VCF/FASTA/interval list file from "
        "which a dictionary can be extracted",
    )
    parser.add_argument(
        "-O",
        "--output",
        required=True,
        help="The output interval list file. Use '-' to write to STDOUT",
    )
    parser.add_argument(
        "--no-sort",
        dest="sort",
        default=True,
        action="store_false",
        help="Write intervals in input order, rather than sorted by coordinate",
    )
    parser.add_argument(
        "--unique",
        default=False,
        action="store_true",
        help="Merge overlapping and adjacent intervals; implies sorting",
    )
    parser.add_argument(
        "--drop-missing-contigs",
        default=False,
        action="store_true",
        help="Skip intervals on sequences not found in the sequence dictionary, "
        "rather than terminating with an error",
    )
    parser.add_argument(
        "--keep-length-zero-intervals",
        default=False,
        action="store_true",
        help="Write intervals of length zero to the output, rather than skipping them",
    )

    bedlist.common.logging.add_argument_group(parser)

    return parser.parse_args(argv)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    bedlist.common.logging.initialize_console_and_file_logging(
        log_level=args.log_level,
        log_color=args.log_color,
        log_file=args.log_file,
    )

    log = logging.getLogger(__name__)

    try:
        dictionary = load_sequence_dictionary(args.sequence_dictionary)

        with open_intervals(args.input) as handle:
            require_bed_format(handle)

            intervals = read_bed_intervals(
                handle,
                dictionary,
                drop_missing_contigs=args.drop_missing_contigs,
                keep_zero_length=args.keep_length_zero_intervals,
                log=log,
                source=describe_input(args.input),
            )

        if args.sort or args.unique:
            intervals = intervals.sorted()

        if args.unique:
            intervals = intervals.uniqued()

        if args.output == "-":
            intervals.write_to(sys.stdout)
        else:
            intervals.write(args.output)
    except (FormatError, OSError) as error:
        log.error("%s", error)
        return 1

    log.info(
        "Wrote %i intervals spanning a total of %i bases",
        len(intervals),
        intervals.base_count(),
    )

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
