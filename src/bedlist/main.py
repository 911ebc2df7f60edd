# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations

import importlib
import logging
import sys
import textwrap

import setproctitle

import bedlist
import bedlist.common.logging

_BEDLIST_COMMANDS = (
    ("Conversion", None, None),
    (
        "bed_to_interval_list",
        "bedlist.tools.bed_to_interval_list",
        "Converts a BED file to an interval list, using the sequences in a "
        "sequence dictionary (.dict, FASTA, BAM, VCF, or interval list).",
    ),
    (
        "interval_list_to_bed",
        "bedlist.tools.interval_list_to_bed",
        "Converts an interval list (or a BED file) to a 3 or 6 column BED file.",
    ),
)


def _print_help() -> None:
    """Prints description of commands."""
    template = "    bedlist %s%s-- %s\n"
    max_len = max(len(key) for (key, module, _) in _BEDLIST_COMMANDS if module)
    help_len = 80 - len(template % (" " * max_len, " ", ""))
    help_padding = (80 - help_len) * " "

    sys.stderr.write("bedlist - conversion between BED files and interval lists.\n")
    sys.stderr.write(f"Version: {bedlist.__version__}\n\n")
    sys.stderr.write("Usage: bedlist <command> [options]\n")
    for key, module, help_str in _BEDLIST_COMMANDS:
        if help_str is None:
            if module is None:
                sys.stderr.write(f"\n{key}:\n")
        else:
            lines = textwrap.wrap(help_str, help_len)
            padding = (max_len - len(key) + 2) * " "
            sys.stderr.write(template % (key, padding, lines[0]))

            for line in lines[1:]:
                sys.stderr.write(f"{help_padding}{line}\n")


def main(argv: list[str]) -> int:
    # Change process name from 'python' to 'bedlist'
    setproctitle.setproctitle("bedlist")
    # Setup basic logging to STDERR
    bedlist.common.logging.initialize_console_logging()

    if not argv or argv[0] in ("help", "-h", "--help"):
        _print_help()
        return 0

    command = argv[0]
    for cmd_name, cmd_module, _ in _BEDLIST_COMMANDS:
        if cmd_module and command == cmd_name:
            module = importlib.import_module(cmd_module)
            return module.main(argv[1:])

    log = logging.getLogger(__name__)
    log.error("Unknown command %r", command)
    return 1


def entry_point() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
