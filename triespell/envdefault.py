# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""
Configurable parameters via environment variables
"""

import os

USER_HOME = os.path.expanduser("~")

TRIESPELL_CONFIG_DIR = os.environ.get("TRIESPELL_CONFIG_DIR", os.path.join(USER_HOME, ".config", "triespell"))

TRIESPELL_CONFIG = os.environ.get("TRIESPELL_CONFIG", os.path.join(TRIESPELL_CONFIG_DIR, "triespell.json"))
TRIESPELL_DICTIONARY = os.environ.get("TRIESPELL_DICTIONARY")
