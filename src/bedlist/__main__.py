# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
import sys

from bedlist.main import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
