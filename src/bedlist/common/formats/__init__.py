# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations


class FormatError(RuntimeError):
    pass
