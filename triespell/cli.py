# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from . import argx, envdefault
from .cliarg import arg
from .dictionary import FrequencyDictionary
from .speller import SpellChecker
from argparse import ArgumentParser
from functools import cached_property
from typing import Any, Callable, Sequence

import logging
import requests.exceptions

SUGGEST_LAYOUT = [["word", "known", "suggestions"]]
CORRECT_LAYOUT = [["word", "correction"]]
CHECK_LAYOUT = [["word", "known", "frequency"]]
DICTIONARY_INFO_LAYOUT = [["source", "words", "total_frequency", "index_nodes"]]


class SpellerCLI(argx.CommandLineTool):
    def __init__(self) -> None:
        super().__init__("triespell")

    def add_args(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--dictionary",
            help="Dictionary file or http(s) URL [TRIESPELL_DICTIONARY], default %(default)r",
            default=envdefault.TRIESPELL_DICTIONARY,
            metavar="PATH_OR_URL",
        )
        parser.add_argument(
            "--request-timeout",
            type=int,
            default=None,
            help="Wait for up to N seconds when downloading a dictionary (default: infinite)",
        )
        parser.add_argument("-v", "--verbose", help="Verbose output", action="store_true", default=False)

    def pre_run(self, func: Callable[[], int | None]) -> None:
        if self.args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

    def expected_errors(self) -> Sequence[type[BaseException]]:
        return [requests.exceptions.Timeout]

    def _get_dictionary_location(self) -> str:
        location = self.args.dictionary or self.config.get("dictionary")
        if not location:
            raise argx.UserError(
                "no dictionary configured: use --dictionary, TRIESPELL_DICTIONARY or 'dictionary' in {!r}".format(
                    self.config.file_path
                )
            )
        return location

    def _get_request_timeout(self) -> int | None:
        if self.args.request_timeout is not None:
            return self.args.request_timeout
        timeout = self.config.get("request_timeout")
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, int)):
            raise argx.UserError("Invalid request_timeout {!r} in {!r}".format(timeout, self.config.file_path))
        return timeout

    @cached_property
    def dictionary(self) -> FrequencyDictionary:
        location = self._get_dictionary_location()
        self.log.debug("loading dictionary from %r", location)
        return FrequencyDictionary.load(location, timeout=self._get_request_timeout())

    @cached_property
    def speller(self) -> SpellChecker:
        return SpellChecker(self.dictionary)

    @arg.json
    @arg.limit
    @arg.words
    def suggest(self) -> None:
        """Suggest spelling corrections, most frequent first"""
        if self.args.limit is not None and self.args.limit < 1:
            raise argx.UserError("--limit must be at least 1")

        result: list[dict[str, Any]] = []
        for word in self.args.words:
            suggestions = self.speller.suggest(word)
            if self.args.limit is not None:
                suggestions = suggestions[: self.args.limit]
            result.append(
                {
                    "word": word,
                    "known": self.dictionary.contains_word(word),
                    "suggestions": suggestions,
                }
            )
        self.print_response(result, json=self.args.json, table_layout=SUGGEST_LAYOUT)

    @arg.json
    @arg.words
    def correct(self) -> None:
        """Show the most probable correction of each word"""
        result = [{"word": word, "correction": self.speller.correction(word)} for word in self.args.words]
        self.print_response(result, json=self.args.json, table_layout=CORRECT_LAYOUT)

    @arg.json
    @arg.words
    def check(self) -> int | None:
        """Check whether words are in the dictionary"""
        result = [
            {
                "word": word,
                "known": self.dictionary.contains_word(word),
                "frequency": self.dictionary.get_frequency(word),
            }
            for word in self.args.words
        ]
        self.print_response(result, json=self.args.json, table_layout=CHECK_LAYOUT)
        if not all(item["known"] for item in result):
            return 1
        return None

    @arg.json
    def dictionary__info(self) -> None:
        """Show dictionary statistics"""
        self.print_response(
            {
                "source": self.dictionary.source,
                "words": len(self.speller.index),
                "total_frequency": self.dictionary.total_frequency,
                "index_nodes": self.speller.index.node_count(),
            },
            json=self.args.json,
            table_layout=DICTIONARY_INFO_LAYOUT,
            single_item=True,
        )


def main(args: Sequence[str] | None = None) -> None:
    SpellerCLI().main(args)


if __name__ == "__main__":
    main()
