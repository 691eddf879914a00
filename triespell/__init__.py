# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from .dictionary import DictionaryError, FrequencyDictionary, WordFrequencySource
from .index import PrefixIndex, PrefixNode
from .speller import SpellChecker, suggest

__all__ = [
    "DictionaryError",
    "FrequencyDictionary",
    "PrefixIndex",
    "PrefixNode",
    "SpellChecker",
    "WordFrequencySource",
    "suggest",
]
