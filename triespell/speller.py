# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""
Spelling corrector in the style of http://norvig.com/spell-correct.html

Instead of trying every letter of an alphabet for replacements and insertions,
candidates are drawn from a character trie of the dictionary, so only
characters that continue some dictionary word at that position are proposed.
"""
from __future__ import annotations

from .dictionary import FrequencyDictionary, WordFrequencySource
from .index import build_index
from typing import Iterable, Mapping

import logging


class SpellChecker:
    """
    Suggest corrections for a single word.

    The trie and the first-character adjacency map are built once from a snapshot
    of `dictionary` and never modified afterwards, so one instance can serve
    concurrent readers. To pick up dictionary changes build a new instance.
    """

    def __init__(self, dictionary: WordFrequencySource) -> None:
        self.log = logging.getLogger("SpellChecker")
        self.dictionary = dictionary
        self.index, self.first_chars = build_index(dictionary.entries())
        self.log.debug(
            "indexed %d words, %d trie nodes, %d adjacent first characters",
            len(self.index),
            self.index.node_count(),
            len(self.first_chars),
        )

    def frequency(self, word: str) -> int:
        return self.dictionary.get_frequency(word)

    def known(self, words: Iterable[str]) -> set[str]:
        """The subset of `words` that appear in the dictionary."""
        return {w for w in words if self.dictionary.contains_word(w)}

    def edits1(self, word: str) -> set[str]:
        """Edits that are one edit away from `word` and plausible for the dictionary."""
        n = len(word)
        splits = [(word[:i], word[i:]) for i in range(n + 1)]
        deletes = [L + R[1:] for L, R in splits if R]
        transposes = [L + R[1] + R[0] + R[2:] for L, R in splits if len(R) > 1]

        replaces: set[str] = set()
        inserts: set[str] = set()
        if n > 1:
            for c in self.first_chars.get(word[1], ()):
                if c != word[0]:
                    replaces.add(c + word[1:])

            # only the subtree under the original first character is explored
            node = self.index.child(word[0])
            for i in range(1, n):
                if node is None or not node.children:
                    break
                for c in node.children:
                    replaces.add(word[:i] + c + word[i + 1 :])
                node = node.children.get(word[i])

            for c in self.first_chars.get(word[0], ()):
                inserts.add(c + word)

            node = self.index.child(word[0])
            for i in range(n):
                if node is None or not node.children:
                    break
                for c in node.children:
                    inserts.add(word[: i + 1] + c + word[i + 1 :])
                if i < n - 1:
                    node = node.children.get(word[i + 1])

        return set(deletes) | set(transposes) | replaces | inserts

    def known_edits2(self, word: str) -> set[str]:
        """Known words reached by applying `edits1` twice."""
        return {e2 for e1 in self.edits1(word) for e2 in self.edits1(e1) if self.dictionary.contains_word(e2)}

    def rank(self, candidates: Iterable[str]) -> list[str]:
        # ties on frequency are ordered alphabetically
        return sorted(candidates, key=lambda w: (-self.frequency(w), w))

    def suggest(self, word: str) -> list[str]:
        """
        Spelling suggestions for `word`, most frequent first.

        A dictionary word is returned as is. Otherwise known words one edit away
        are returned, falling back to known words two edits away. An empty list
        means nothing was found.
        """
        if self.dictionary.contains_word(word):
            return [word]

        candidates = self.known(self.edits1(word))
        if not candidates:
            candidates = self.known_edits2(word)
        return self.rank(candidates)

    def correction(self, word: str) -> str | None:
        """Most probable spelling correction for word."""
        suggestions = self.suggest(word)
        return suggestions[0] if suggestions else None


def suggest(word_to_check: str, known_words: Mapping[str, int] | Iterable[str]) -> str | None:
    """
    One-off correction against a word list or a word -> frequency mapping.

    Plain word lists give every word the same frequency. Builds the index on every
    call; keep a `SpellChecker` around when checking more than a few words.
    """
    if isinstance(known_words, Mapping):
        dictionary = FrequencyDictionary(known_words)
    else:
        dictionary = FrequencyDictionary((w, 1) for w in known_words)
    return SpellChecker(dictionary).correction(word_to_check)
