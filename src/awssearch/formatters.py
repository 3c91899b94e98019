"""Output formatting for AWS Search Tool."""

from __future__ import annotations

import json
from typing import List

from tabulate import tabulate, tabulate_formats

from .config import DEFAULT_OUTPUT_FORMAT
from .exceptions import UnsupportedOutputFormat
from .utils import debug_print

JSON_FORMAT = "json"


def supported_formats() -> List[str]:
    """Output formats accepted by ``--output``"""
    return [JSON_FORMAT] + sorted(tabulate_formats)


def validate_output_format(output_format):
    """Return the output format, or raise UnsupportedOutputFormat"""
    if output_format is None:
        return DEFAULT_OUTPUT_FORMAT
    if output_format != JSON_FORMAT and output_format not in tabulate_formats:
        raise UnsupportedOutputFormat(output_format)
    return output_format


def truncate_cell(value, width=80):
    if len(value) > width:
        return value[: width - 3] + "..."
    return value


def format_table_output(headers, rows, tablefmt=DEFAULT_OUTPUT_FORMAT):
    """Format rows as a table using tabulate, followed by the row count"""
    debug_print(f"Rendering {len(rows)} rows with {len(headers)} columns as {tablefmt}")  # pragma: no mutate
    table_data = [[truncate_cell(cell) for cell in row] for row in rows]
    table = tabulate(table_data, headers=headers, tablefmt=tablefmt, disable_numparse=True)
    return f"{table}\ncounts: {len(rows)}"


def format_json_output(headers, rows):
    """Format rows as JSON objects keyed by column header"""
    results = [dict(zip(headers, row)) for row in rows]
    return json.dumps({"results": results}, indent=2, default=str)


def format_output(headers, rows, output_format=None):
    output_format = validate_output_format(output_format)
    if output_format == JSON_FORMAT:
        return format_json_output(headers, rows)
    return format_table_output(headers, rows, output_format)
