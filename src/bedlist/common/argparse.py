# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
"""Command-line parsing with support for INI-style config files.

Options may be given in config files using either their long name or the name with
underscores, e.g. both `drop-missing-contigs = true` and `drop_missing_contigs = true`.
Values given on the command-line take precedence over values in config files.
"""

from __future__ import annotations

import argparse
from typing import Any

import configargparse

import bedlist

__all__ = [
    "ArgumentParser",
    "HelpFormatter",
    "Namespace",
]

Action = configargparse.Action
Namespace = configargparse.Namespace


class HelpFormatter(argparse.HelpFormatter):
    """Appends the default value of an option to its help text, unless the default
    is a flag value, None, or an empty collection."""

    def __init__(self, prog: str, width: int | None = 79, **kwargs: Any) -> None:
        super().__init__(prog=prog, width=width, **kwargs)

    def _get_help_string(self, action: Action) -> str | None:
        text = action.help
        if text is None or "%(default)" in text or not action.option_strings:
            return text
        elif _is_trivial_default(action.default):
            return text

        return f"{text} [%(default)s]"


class ArgumentParser(configargparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("formatter_class", HelpFormatter)
        # Abbreviated options are not matched against config file keys, which would
        # allow config files to override abbreviated command-line options.
        kwargs.setdefault("allow_abbrev", False)

        super().__init__(*args, **kwargs)

        self.add_argument(
            "-v",
            "--version",
            action="version",
            version=f"%(prog)s v{bedlist.__version__}",
        )

    def get_possible_config_keys(self, action: Action) -> list[str]:
        keys = super().get_possible_config_keys(action)
        aliases = [key.lstrip("-").replace("-", "_") for key in keys]

        return list(dict.fromkeys(keys + aliases))


def _is_trivial_default(value: object) -> bool:
    if value is argparse.SUPPRESS or isinstance(value, bool):
        return True

    return value is None or value == [] or value == ()
