# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.

from .argx import arg

arg.json = arg("--json", help="Raw json output", action="store_true", default=False)
arg.limit = arg("-n", "--limit", type=int, default=None, help="Show at most N suggestions per word")
arg.words = arg("words", nargs="+", metavar="WORD", help="Word to look up")
