# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations

__version_info__ = (1, 0, 0)
__version__ = "{}.{}.{}".format(*__version_info__)
