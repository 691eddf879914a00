# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Character trie over a frequency dictionary"""
from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, Mapping, Tuple

AdjacentFirstChars = Mapping[str, FrozenSet[str]]


class PrefixNode:
    """One trie node; `frequency` is set only where a dictionary word ends"""

    __slots__ = ("children", "frequency")

    def __init__(self) -> None:
        self.children: dict[str, PrefixNode] = {}
        self.frequency: int | None = None

    @property
    def is_terminal(self) -> bool:
        return self.frequency is not None

    def __repr__(self) -> str:
        return f"PrefixNode(children={sorted(self.children)!r}, frequency={self.frequency!r})"


class PrefixIndex:
    """
    Trie keyed by character.

    The root represents the empty prefix. Walking from the root one character at
    a time, `node.children` lists the characters that continue some dictionary
    word at that depth, which is what the edit generator uses instead of trying
    every character of the alphabet.
    """

    __slots__ = ("root", "_words")

    def __init__(self) -> None:
        self.root = PrefixNode()
        self._words = 0

    def insert(self, word: str, frequency: int) -> None:
        if frequency <= 0:
            raise ValueError("frequency must be positive, got {!r} for {!r}".format(frequency, word))

        node = self.root
        for ch in word:
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = PrefixNode()
            node = child

        if node.frequency is None:
            self._words += 1
        node.frequency = frequency

    def child(self, ch: str) -> PrefixNode | None:
        return self.root.children.get(ch)

    def find(self, prefix: str) -> PrefixNode | None:
        """Return the node reached by consuming `prefix`, or None if no such path"""
        node = self.root
        for ch in prefix:
            nxt = node.children.get(ch)
            if nxt is None:
                return None
            node = nxt
        return node

    def frequency(self, word: str) -> int:
        node = self.find(word)
        if node is None or node.frequency is None:
            return 0
        return node.frequency

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self.find(word)
        return node is not None and node.is_terminal

    def __len__(self) -> int:
        return self._words

    def node_count(self) -> int:
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count

    def words(self) -> Iterator[Tuple[str, int]]:
        """Yield (word, frequency) for every terminal node, depth first"""
        stack: list[tuple[str, PrefixNode]] = [("", self.root)]
        while stack:
            prefix, node = stack.pop()
            if node.frequency is not None:
                yield prefix, node.frequency
            for ch, child in node.children.items():
                stack.append((prefix + ch, child))


def build_index(entries: Iterable[Tuple[str, int]]) -> tuple[PrefixIndex, AdjacentFirstChars]:
    """
    Build the trie and the first-character adjacency map from (word, frequency) pairs.

    Entries with a non-positive frequency are not words and are skipped. For every
    word of two or more characters the first character is recorded under the
    second one, eg. "cat" adds "c" to the set for "a".
    """
    index = PrefixIndex()
    first_chars: dict[str, set[str]] = {}
    for word, frequency in entries:
        if not word or frequency <= 0:
            continue
        index.insert(word, frequency)
        if len(word) >= 2:
            first_chars.setdefault(word[1], set()).add(word[0])

    return index, {second: frozenset(firsts) for second, firsts in first_chars.items()}
