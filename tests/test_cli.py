# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from pathlib import Path
from pytest import CaptureFixture, LogCaptureFixture
from triespell import envdefault
from triespell.cli import SpellerCLI
from triespell.dictionary import FrequencyDictionary
from typing import Any
from unittest import mock

import json
import pytest
import requests.exceptions

WORDS = """\
# test dictionary
hello 500 n
help 300 v
world 200 n
word 150 n
cat 100 n
cats 50 n
bat 10 n
zero 0 x
"""


@pytest.fixture(name="dictionary_path")
def fixture_dictionary_path(tmp_path: Path) -> Path:
    path = tmp_path / "words.txt"
    path.write_text(WORDS, encoding="utf-8")
    return path


@pytest.fixture(name="config_path")
def fixture_config_path(tmp_path: Path) -> Path:
    return tmp_path / "triespell.json"


def run_cli(config_path: Path, *args: str) -> int | None:
    return SpellerCLI().run(args=["--config", str(config_path), *args])


def run_json(capsys: CaptureFixture[str], config_path: Path, *args: str) -> Any:
    assert run_cli(config_path, *args) is None
    return json.loads(capsys.readouterr().out)


def test_cli() -> None:
    with pytest.raises(SystemExit) as excinfo:
        SpellerCLI().run(args=["--help"])
    assert excinfo.value.code == 0


def test_suggest_json(capsys: CaptureFixture[str], config_path: Path, dictionary_path: Path) -> None:
    result = run_json(
        capsys, config_path, "--dictionary", str(dictionary_path), "suggest", "--json", "helo", "cot", "cat", "xyz"
    )
    assert result == [
        {"word": "helo", "known": False, "suggestions": ["hello", "help"]},
        {"word": "cot", "known": False, "suggestions": ["cat"]},
        {"word": "cat", "known": True, "suggestions": ["cat"]},
        {"word": "xyz", "known": False, "suggestions": []},
    ]


def test_suggest_limit(capsys: CaptureFixture[str], config_path: Path, dictionary_path: Path) -> None:
    result = run_json(capsys, config_path, "--dictionary", str(dictionary_path), "suggest", "--json", "-n", "1", "hat")
    assert result == [{"word": "hat", "known": False, "suggestions": ["cat"]}]


def test_suggest_invalid_limit(caplog: LogCaptureFixture, config_path: Path, dictionary_path: Path) -> None:
    assert run_cli(config_path, "--dictionary", str(dictionary_path), "suggest", "--limit", "0", "hat") == 1
    assert "--limit must be at least 1" in caplog.text


def test_suggest_table(capsys: CaptureFixture[str], config_path: Path, dictionary_path: Path) -> None:
    assert run_cli(config_path, "--dictionary", str(dictionary_path), "suggest", "helo", "wrold") is None
    assert capsys.readouterr().out.splitlines() == [
        "WORD   KNOWN  SUGGESTIONS",
        "=====  =====  ===========",
        "helo   false  hello, help",
        "wrold  false  world",
    ]


def test_correct(capsys: CaptureFixture[str], config_path: Path, dictionary_path: Path) -> None:
    result = run_json(capsys, config_path, "--dictionary", str(dictionary_path), "correct", "--json", "wrold", "xyz")
    assert result == [
        {"word": "wrold", "correction": "world"},
        {"word": "xyz", "correction": None},
    ]


def test_check(capsys: CaptureFixture[str], config_path: Path, dictionary_path: Path) -> None:
    result = run_json(capsys, config_path, "--dictionary", str(dictionary_path), "check", "--json", "hello", "cats")
    assert result == [
        {"word": "hello", "known": True, "frequency": 500},
        {"word": "cats", "known": True, "frequency": 50},
    ]


def test_check_unknown_word(capsys: CaptureFixture[str], config_path: Path, dictionary_path: Path) -> None:
    assert run_cli(config_path, "--dictionary", str(dictionary_path), "check", "--json", "hello", "zero", "helo") == 1
    result = json.loads(capsys.readouterr().out)
    assert result == [
        {"word": "hello", "known": True, "frequency": 500},
        {"word": "zero", "known": False, "frequency": 0},
        {"word": "helo", "known": False, "frequency": 0},
    ]


def test_dictionary_info(capsys: CaptureFixture[str], config_path: Path, dictionary_path: Path) -> None:
    result = run_json(capsys, config_path, "--dictionary", str(dictionary_path), "dictionary", "info", "--json")
    assert result == {
        "source": str(dictionary_path),
        "words": 7,
        "total_frequency": 1310,
        # root, h-e-l-l-o, p, w-o-r-l-d, d, c-a-t-s, b-a-t
        "index_nodes": 20,
    }


def test_dictionary_from_config(
    capsys: CaptureFixture[str], monkeypatch: pytest.MonkeyPatch, config_path: Path, dictionary_path: Path
) -> None:
    monkeypatch.setattr(envdefault, "TRIESPELL_DICTIONARY", None)
    config_path.write_text(json.dumps({"dictionary": str(dictionary_path)}), encoding="utf-8")
    result = run_json(capsys, config_path, "correct", "--json", "hlep")
    assert result == [{"word": "hlep", "correction": "help"}]


def test_dictionary_argument_overrides_config(
    capsys: CaptureFixture[str], tmp_path: Path, config_path: Path, dictionary_path: Path
) -> None:
    other = tmp_path / "other.json"
    other.write_text(json.dumps({"hero": 1}), encoding="utf-8")
    config_path.write_text(json.dumps({"dictionary": str(other)}), encoding="utf-8")
    result = run_json(capsys, config_path, "--dictionary", str(dictionary_path), "correct", "--json", "helo")
    assert result == [{"word": "helo", "correction": "hello"}]


def test_dictionary_from_environment(
    capsys: CaptureFixture[str], monkeypatch: pytest.MonkeyPatch, config_path: Path, dictionary_path: Path
) -> None:
    monkeypatch.setattr(envdefault, "TRIESPELL_DICTIONARY", str(dictionary_path))
    result = run_json(capsys, config_path, "correct", "--json", "wrold")
    assert result == [{"word": "wrold", "correction": "world"}]


def test_no_dictionary_configured(
    caplog: LogCaptureFixture, monkeypatch: pytest.MonkeyPatch, config_path: Path
) -> None:
    monkeypatch.setattr(envdefault, "TRIESPELL_DICTIONARY", None)
    assert run_cli(config_path, "suggest", "helo") == 1
    assert "command failed: UserError: no dictionary configured" in caplog.text


def test_invalid_dictionary(caplog: LogCaptureFixture, tmp_path: Path, config_path: Path) -> None:
    path = tmp_path / "broken.txt"
    path.write_text("hello five\n", encoding="utf-8")
    assert run_cli(config_path, "--dictionary", str(path), "suggest", "helo") == 1
    assert "command failed: DictionaryError: {}:1: invalid frequency 'five' for 'hello'".format(path) in caplog.text


def test_invalid_config_timeout(caplog: LogCaptureFixture, config_path: Path) -> None:
    config_path.write_text(
        json.dumps({"dictionary": "https://example.com/words.txt", "request_timeout": "soon"}), encoding="utf-8"
    )
    assert run_cli(config_path, "suggest", "helo") == 1
    assert "Invalid request_timeout 'soon'" in caplog.text


@pytest.mark.parametrize(
    "cli_args,config,expected_timeout",
    [
        ([], {}, None),
        ([], {"request_timeout": 7}, 7),
        (["--request-timeout", "3"], {"request_timeout": 7}, 3),
    ],
)
def test_download_timeout(
    capsys: CaptureFixture[str], config_path: Path, cli_args: list[str], config: dict[str, Any], expected_timeout: int | None
) -> None:
    config_path.write_text(json.dumps(config), encoding="utf-8")
    dictionary = FrequencyDictionary({"hello": 5}, source="https://example.com/words.txt")
    with mock.patch.object(FrequencyDictionary, "from_url", return_value=dictionary) as from_url:
        result = run_json(
            capsys,
            config_path,
            "--dictionary",
            "https://example.com/words.txt",
            *cli_args,
            "correct",
            "--json",
            "helo",
        )
    from_url.assert_called_once_with("https://example.com/words.txt", timeout=expected_timeout)
    assert result == [{"word": "helo", "correction": "hello"}]


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.ConnectionError("connection refused"),
        requests.exceptions.ReadTimeout("read timed out"),
    ],
)
def test_download_errors(caplog: LogCaptureFixture, config_path: Path, error: Exception) -> None:
    with mock.patch.object(FrequencyDictionary, "from_url", side_effect=error):
        assert run_cli(config_path, "--dictionary", "https://example.com/words.txt", "suggest", "helo") == 1
    assert "command failed: {}".format(error.__class__.__name__) in caplog.text
