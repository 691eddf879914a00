# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Pretty-print command results as tables"""
from __future__ import annotations

from typing import Any, cast, Collection, Iterator, List, Mapping, TextIO, Tuple, Union

import json
import sys

ResultType = Collection[Mapping[str, Any]]
TableLayout = Collection[Union[List[str], Tuple[str], str]]


def format_item(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        formatted = ", ".join(format_item(entry) for entry in value)
    elif isinstance(value, dict):
        formatted = json.dumps(value, sort_keys=True)
    elif value is None:
        formatted = ""
    else:
        # json encode, but if adding quotes is the only thing json encoding would do, omit them
        json_v = json.dumps(value, sort_keys=True, ensure_ascii=False)
        quoted_v = '"{}"'.format(value)
        if json_v == quoted_v:
            formatted = "{}".format(value)
        else:
            formatted = json_v

    return formatted


def flatten_list(complex_list: TableLayout | None) -> Collection[str]:
    """Flatten a multi-dimensional list to 1D list"""
    if complex_list is None:
        return []
    flattened_list: list[str] = []
    for level1 in complex_list:
        if isinstance(level1, (list, tuple)):
            flattened_list.extend(flatten_list(level1))
        else:
            flattened_list.append(level1)
    return flattened_list


def yield_table(
    result: ResultType,
    table_layout: TableLayout | None = None,
    header: bool = True,
) -> Iterator[str]:
    """
    format a list of dicts in a nicer table format yielding string rows

    :param list result: List of dicts to be printed.
    :param list table_layout: Fields to be printed, as a 1D or 2D list. Examples:
        ["word", "known", "suggestions"] or
        [["word", "known", "suggestions"]]
    :param bool header: True to print the field name
    """
    widths: dict[str, int] = {}
    formatted_values: list[dict[str, str]] = []
    flattened_table_layout = flatten_list(table_layout)
    for item in result:
        formatted_row: dict[str, str] = {}
        formatted_values.append(formatted_row)
        for key, value in item.items():
            if table_layout is not None and key not in flattened_table_layout:
                continue
            formatted_row[key] = format_item(value)
            widths[key] = max(len(key), len(formatted_row[key]), widths.get(key, 1))

    # default table layout is one row per item with sorted field names
    fields: Collection[str] = sorted(widths) if table_layout is None else flattened_table_layout
    for field in fields:
        widths.setdefault(field, len(field))

    if header:
        yield "  ".join(f.upper().ljust(widths[f]) for f in fields).rstrip()
        yield "  ".join("=" * widths[f] for f in fields)
    for formatted_row in formatted_values:
        yield "  ".join(formatted_row.get(f, "").ljust(widths[f]) for f in fields).rstrip()


def print_table(
    result: Collection[Any] | ResultType | None,
    table_layout: TableLayout | None = None,
    header: bool = True,
    file: TextIO | None = None,
) -> None:
    """print a list of dicts in a nicer table format"""

    def yield_rows() -> Iterator[str]:
        if not result:
            return
        elif not isinstance(next(iter(result), None), dict):
            yield from (format_item(item) for item in result)
        else:
            table_result = cast(ResultType, result)
            yield from yield_table(table_result, table_layout=table_layout, header=header)

    for row in yield_rows():
        print(row, file=file or sys.stdout)
