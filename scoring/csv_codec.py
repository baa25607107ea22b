"""
CSV reading and writing for batch predictions.

Parsing is a small character-level state machine (inside quotes / outside
quotes) so that commas and doubled quotes inside quoted fields survive.
Writing goes through pandas with minimal quoting: any field containing a
comma, quote or line break is wrapped in quotes and inner quotes doubled.
"""

import csv
import re
from typing import TYPE_CHECKING, Iterator, Mapping, Sequence, Union

import pandas as pd

from .exceptions import FormatError

if TYPE_CHECKING:
    from .batch import BatchSummary


Value = Union[str, int, float]

_INTEGER = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_value(raw: str) -> Value:
    """
    Convert a raw field to a number when it is entirely a numeric literal.

    Empty and whitespace-only fields, and anything else that is not a
    plain decimal literal ("nan", "1,000", "12abc"), stay strings.
    """
    text = raw.strip()
    if not text:
        return raw
    if _INTEGER.fullmatch(text):
        return int(text)
    if _DECIMAL.fullmatch(text):
        return float(text)
    return raw


def _iter_records(text: str) -> Iterator[list[str]]:
    """
    Split CSV text into records of raw field strings.

    Records end at "\\n" or "\\r\\n" outside quotes. A doubled quote inside
    a quoted field is a literal quote. Blank records are skipped.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    has_content = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < n and text[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(ch)
        elif ch == '"':
            in_quotes = True
            has_content = True
        elif ch == ",":
            fields.append("".join(current))
            current = []
            has_content = True
        elif ch == "\n" or (ch == "\r" and i + 1 < n and text[i + 1] == "\n"):
            if ch == "\r":
                i += 1
            if has_content:
                fields.append("".join(current))
                yield fields
            fields, current, has_content = [], [], False
        else:
            current.append(ch)
            if not ch.isspace():
                has_content = True
        i += 1

    if has_content:
        fields.append("".join(current))
        yield fields


def parse_csv(text: str) -> list[dict[str, Value]]:
    """
    Parse CSV text into customer records.

    Args:
        text: CSV text with a header line and at least one data line

    Returns:
        One dict per data line, keyed by the trimmed, lower-cased headers
        in header order. Missing trailing values are "" and surplus
        values are ignored.

    Raises:
        FormatError: If fewer than two non-blank lines are present
    """
    records = list(_iter_records(text))
    if len(records) < 2:
        raise FormatError("CSV file must contain headers and at least one data row")

    headers = [h.strip().lower() for h in records[0]]
    rows = []
    for values in records[1:]:
        row: dict[str, Value] = {}
        for idx, header in enumerate(headers):
            raw = values[idx] if idx < len(values) else ""
            row[header] = coerce_value(raw)
        rows.append(row)
    return rows


def serialize_csv(columns: Sequence[str], rows: Sequence[Mapping]) -> str:
    """
    Write rows as CSV text.

    Args:
        columns: Column order for the header and every row
        rows: Row mappings; missing or None values are written empty

    Returns:
        CSV text, lines separated by "\\n", no trailing line break
    """
    df = pd.DataFrame(list(rows), columns=list(columns), dtype=object)
    df = df.where(df.notna(), "")
    body = df.to_csv(
        index=False,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    return body[:-1] if body.endswith("\n") else body


def format_summary(summary: "BatchSummary") -> str:
    """Human-readable summary block appended to batch output."""
    return (
        "\n\nPREDICTION SUMMARY\n"
        "==================\n"
        f"Total Customers Analyzed: {summary.total_count}\n"
        f"Average Churn Probability: {summary.avg_churn_probability * 100:.2f}%\n"
        f"High Risk Customers: {summary.high_count}\n"
        f"Medium Risk Customers: {summary.medium_count}\n"
        f"Low Risk Customers: {summary.low_count}\n"
        f"Average Model Confidence: {summary.avg_confidence * 100:.2f}%"
    )
