"""Quoted delimited text codec for the Census batch wire format.

The request side always quotes every field. The response side is read with a
small scanner rather than the ``csv`` module: a quoted field is assumed to be
followed by its closing quote and the delimiter, and those two characters are
skipped without being checked.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from census_batch.common.models import GeocodeRequest

COMMA = ","
QUOTE = '"'
NEWLINE = "\n"

IN_FIELD = "in_field"
IN_QUOTED_FIELD = "in_quoted_field"


def escape(value: str) -> str:
    """Trim surrounding whitespace and double embedded quotes."""
    return value.strip().replace(QUOTE, QUOTE + QUOTE)


def encode_row(fields: Sequence[str | None]) -> str:
    return QUOTE + '","'.join(escape(value) if value else "" for value in fields) + QUOTE


def encode(rows: Iterable[Sequence[str | None]]) -> str:
    return NEWLINE.join(encode_row(fields) for fields in rows)


def encode_requests(requests: Iterable[GeocodeRequest]) -> str:
    return encode(request.fields() for request in requests)


def split_line(line: str, delimiter: str = COMMA) -> list[str]:
    fields: list[str] = []
    length = len(line)
    start = 0
    pos = 0
    state = IN_FIELD

    while pos < length:
        if state == IN_FIELD:
            if pos == start and line[pos] == QUOTE:
                state = IN_QUOTED_FIELD
                start = pos + 1
                pos = start
            elif line[pos] == delimiter:
                fields.append(line[start:pos])
                start = pos + 1
                pos = start
            else:
                pos += 1
        else:
            if line[pos] == QUOTE and pos + 1 < length and line[pos + 1] == QUOTE:
                # escaped quote, kept doubled
                pos += 2
            elif line[pos] == QUOTE:
                fields.append(line[start:pos])
                start = pos + 2
                pos = start
                state = IN_FIELD
            else:
                pos += 1

    if state == IN_QUOTED_FIELD:
        fields.append(line[start:])
    elif start < pos:
        fields.append(line[start:pos])
    if line.endswith(delimiter):
        fields.append("")

    return fields


def decode(text: str, delimiter: str = COMMA) -> list[list[str]]:
    return [split_line(line, delimiter) for line in text.split(NEWLINE)]
