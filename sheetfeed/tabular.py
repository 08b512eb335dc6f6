"""
CSV decoding for sheet exports.

Google's export is simple enough that a line-oriented parser is all we need:
one record per line, double-quote quoting, "" as an escaped quote. The parser
is lenient: malformed input (e.g. an unmatched quote) still produces fields.
"""

import logging
from typing import Dict, List, NamedTuple

log = logging.getLogger("sheetfeed")


class Table(NamedTuple):
    headers: List[str]
    rows: List[Dict[str, str]]


def parse_csv_line(line):
    """Split one CSV line into trimmed fields, honoring quotes."""
    fields = []
    current = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                # Escaped quote
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    # Last field has no trailing comma
    fields.append("".join(current).strip())
    return fields


def decode(text):
    """Decode CSV text into a Table (header row + one dict per data row).

    Blank lines are skipped. Short rows are padded with "" and extra values
    beyond the header count are dropped.
    """
    lines = [line for line in (text or "").split("\n") if line.strip()]
    if not lines:
        return Table(headers=[], rows=[])

    headers = parse_csv_line(lines[0])
    log.debug(f"Parsed headers: {headers}")

    rows = []
    for line in lines[1:]:
        values = parse_csv_line(line)
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        rows.append(row)

    log.info(f"Parsed {len(rows)} rows")
    return Table(headers=headers, rows=rows)
