# app/quotes/csv_parser.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class QuoteTable:
    by_key: dict[str, str] = field(default_factory=dict)  # "14" / "287" -> quote
    quotes: list[str] = field(default_factory=list)  # row order

    def is_empty(self) -> bool:
        return not self.by_key and not self.quotes


def parse_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into trimmed fields.

    Quotes toggle quoted mode, ``""`` inside quotes is a literal quote, and
    commas only separate fields outside quotes. A line never spans rows.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append("".join(current).strip())
    return fields


def _strip_outer_quotes(text: str) -> str:
    if text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


def parse_quotes(csv_text: str) -> QuoteTable:
    """Build a QuoteTable from ``key,quote[,...]`` rows; other rows are ignored."""
    table = QuoteTable()
    for raw in csv_text.split("\n"):
        line = raw.strip()
        if not line:
            continue
        columns = parse_csv_line(line)
        if len(columns) < 2 or not columns[0] or not columns[1]:
            continue
        key = columns[0]
        quote = _strip_outer_quotes(columns[1])
        if not quote:
            continue
        table.by_key[key] = quote
        table.quotes.append(quote)
    return table
