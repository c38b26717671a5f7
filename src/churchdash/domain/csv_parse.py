"""Line parser for the roster spreadsheet export.

A double quote toggles quoted mode; commas inside quotes stay in the field.
Doubled quotes (``""``) are NOT unescaped: each one toggles the mode, so the
pair disappears from the output. Real exports have not needed more.
"""
from __future__ import annotations


def parse_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields. Never raises."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields
