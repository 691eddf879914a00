# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Word frequency dictionaries and their loaders"""
from __future__ import annotations

from .argx import UserError
from .session import get_requests_session
from typing import Any, Iterable, Iterator, Mapping, Protocol, Tuple, Union
from urllib.parse import urlparse

import json
import logging
import os

Entries = Union[Mapping[str, int], Iterable[Tuple[str, int]]]


class DictionaryError(UserError):
    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def __str__(self) -> str:
        return self.message


class WordFrequencySource(Protocol):
    """What the spell checker needs from a dictionary"""

    def entries(self) -> Iterable[Tuple[str, int]]:
        ...

    def contains_word(self, word: str) -> bool:
        ...

    def get_frequency(self, word: str) -> int:
        ...


def is_url(location: str) -> bool:
    return urlparse(location).scheme in {"http", "https"}


class FrequencyDictionary:
    """
    In-memory word to frequency table.

    Entries with a zero or negative frequency may be stored but are not words:
    `contains_word` is false for them and the spell checker does not index them.
    """

    def __init__(self, entries: Entries | None = None, *, source: str | None = None) -> None:
        self.log = logging.getLogger("FrequencyDictionary")
        self.source = source
        self._frequencies: dict[str, int] = {}
        if entries is not None:
            items = entries.items() if isinstance(entries, Mapping) else entries
            for word, frequency in items:
                self.add_word(word, frequency)

    def add_word(self, word: str, frequency: int) -> None:
        self._frequencies[word] = frequency

    def entries(self) -> Iterator[Tuple[str, int]]:
        return iter(list(self._frequencies.items()))

    def contains_word(self, word: str) -> bool:
        return self._frequencies.get(word, 0) > 0

    def get_frequency(self, word: str) -> int:
        return self._frequencies.get(word, 0)

    @property
    def total_frequency(self) -> int:
        return sum(frequency for frequency in self._frequencies.values() if frequency > 0)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains_word(word)

    def __len__(self) -> int:
        return len(self._frequencies)

    def __repr__(self) -> str:
        return f"FrequencyDictionary(source={self.source!r}, words={len(self)})"

    @classmethod
    def from_mapping(cls, mapping: Any, *, source: str = "<mapping>") -> FrequencyDictionary:
        """Build from a decoded JSON object of word -> frequency"""
        if not isinstance(mapping, Mapping):
            raise DictionaryError(
                "Invalid dictionary {!r}: expected an object of word to frequency, got {}".format(
                    source, type(mapping).__name__
                )
            )
        for word, frequency in mapping.items():
            if isinstance(frequency, bool) or not isinstance(frequency, int):
                raise DictionaryError(
                    "Invalid dictionary {!r}: frequency of {!r} must be an integer, got {!r}".format(
                        source, word, frequency
                    )
                )
        return cls(mapping, source=source)

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, source: str = "<lines>") -> FrequencyDictionary:
        """
        Parse the plain text dictionary format.

        One entry per line as `word frequency [tag]`, separated by whitespace.
        Blank lines and lines starting with '#' are ignored and a repeated word
        replaces the earlier entry.
        """
        dictionary = cls(source=source)
        for lineno, line in enumerate(lines, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) < 2:
                raise DictionaryError(
                    "{}:{}: expected 'word frequency [tag]', got {!r}".format(source, lineno, line)
                )
            try:
                frequency = int(parts[1])
            except ValueError as ex:
                raise DictionaryError(
                    "{}:{}: invalid frequency {!r} for {!r}".format(source, lineno, parts[1], parts[0])
                ) from ex
            dictionary.add_word(parts[0], frequency)

        dictionary.log.debug("loaded %d entries from %r", len(dictionary), source)
        return dictionary

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> FrequencyDictionary:
        source = os.fspath(path)
        try:
            with open(source, encoding="utf-8-sig") as fp:
                if source.endswith(".json"):
                    try:
                        return cls.from_mapping(json.load(fp), source=source)
                    except ValueError as ex:
                        raise DictionaryError("Invalid JSON in dictionary {!r}".format(source)) from ex
                return cls.from_lines(fp, source=source)
        except UnicodeDecodeError as ex:
            raise DictionaryError("Dictionary {!r} is not valid UTF-8: {}".format(source, ex)) from ex
        except OSError as ex:
            raise DictionaryError(
                "Failed to load dictionary {!r}: {}: {}".format(source, ex.__class__.__name__, ex)
            ) from ex

    @classmethod
    def from_url(cls, url: str, *, timeout: int | None = None) -> FrequencyDictionary:
        log = logging.getLogger("FrequencyDictionary")
        log.debug("downloading dictionary from %r", url)
        session = get_requests_session(timeout=timeout)
        response = session.get(url)
        if not response.ok:
            raise DictionaryError(
                "Failed to download dictionary {!r}: HTTP {} {}".format(url, response.status_code, response.reason)
            )

        if urlparse(url).path.endswith(".json"):
            try:
                mapping = response.json()
            except ValueError as ex:
                raise DictionaryError("Invalid JSON in dictionary {!r}".format(url)) from ex
            return cls.from_mapping(mapping, source=url)

        return cls.from_lines(response.text.splitlines(), source=url)

    @classmethod
    def load(cls, location: str, *, timeout: int | None = None) -> FrequencyDictionary:
        """Load from an http(s) URL or a local file path"""
        if is_url(location):
            return cls.from_url(location, timeout=timeout)
        return cls.from_file(location)
