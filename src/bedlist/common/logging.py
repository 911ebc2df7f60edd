# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
"""Logging to STDERR and (optionally) to a log file.

Tools call `add_argument_group` when building their argument parser and pass the
resulting `--log-*` values to `initialize_console_and_file_logging`. Messages are
prefixed with time and level; multi-line messages get a prefix on every line, so
that per-record diagnostics remain readable when grepping a log.
"""

from __future__ import annotations

import copy
import logging
import os
import sys

import coloredlogs
from humanfriendly.terminal import terminal_supports_colors

from bedlist.common.argparse import ArgumentParser

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_COLORS = ("auto", "always", "never")

_CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class LineFormatter(coloredlogs.ColoredFormatter):
    """Formats each line of a message as a separate record. Colors are only used if
    `colors` is set."""

    def __init__(self, fmt: str, *, colors: bool = False) -> None:
        if colors:
            super().__init__(fmt=fmt)
        else:
            super().__init__(fmt=fmt, level_styles={}, field_styles={})

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if "\n" not in message:
            return super().format(record)

        lines: list[str] = []
        for line in message.split("\n"):
            line_record = copy.copy(record)
            line_record.msg = line
            line_record.args = ()
            lines.append(super().format(line_record))

        return "\n".join(lines)


def initialize_console_logging(
    log_level: str = "info",
    log_color: str = "never",
) -> None:
    root = logging.getLogger()
    root.setLevel(coloredlogs.level_to_number(log_level))

    handler = _find_stderr_handler(root)
    if handler is None:
        handler = logging.StreamHandler()
        root.addHandler(handler)

    colors = _color_logging_supported(log_color)
    handler.setFormatter(LineFormatter(_CONSOLE_FORMAT, colors=colors))


def initialize_console_and_file_logging(
    *,
    log_level: str = "info",
    log_color: str = "auto",
    log_file: str | None = None,
) -> None:
    initialize_console_logging(log_level=log_level, log_color=log_color)
    if not log_file:
        return

    log = logging.getLogger(__name__)
    log.info("Writing %s log to %r", log_level, log_file)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(coloredlogs.level_to_number(log_level))
    handler.setFormatter(LineFormatter(_FILE_FORMAT))

    logging.getLogger().addHandler(handler)


def add_argument_group(parser: ArgumentParser, *, log_file: bool = True) -> None:
    """Adds the --log-level and --log-color options to a parser, as well as the
    --log-file option unless `log_file` is False."""
    group = parser.add_argument_group("Logging")
    if log_file:
        group.add_argument(
            "--log-file",
            default=None,
            help="Write log messages to this file, in addition to STDERR",
        )

    group.add_argument(
        "--log-level",
        default="info",
        choices=LOG_LEVELS,
        type=str.lower,
        help="Minimum level of messages written to STDERR and to the --log-file",
    )
    group.add_argument(
        "--log-color",
        default="auto",
        choices=LOG_COLORS,
        type=str.lower,
        help="Use colors when logging to STDERR. With 'auto', colors are used if "
        "STDERR is a terminal that supports colors and NO_COLOR is not set",
    )


def _find_stderr_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr:
            return handler

    return None


def _color_logging_supported(log_color: str) -> bool:
    if log_color not in LOG_COLORS:
        raise ValueError(log_color)
    elif log_color != "auto":
        return log_color == "always"

    return (
        "NO_COLOR" not in os.environ
        and sys.stderr.isatty()
        and terminal_supports_colors()
    )
