"""Tabular rendering of search results."""

from __future__ import annotations

import sys
from typing import Iterable, Sequence, TextIO

from sbomex.model import SearchResult

HEADERS = ("ID", "TARGET", "QUALITY", "TYPE", "CREATOR")


def _cells(result: SearchResult) -> list[str]:
    return [
        str(result.id),
        f"{result.target}:{result.target_version}",
        f"{result.score:.2f}",
        f"{result.spec}-{result.format}",
        f"{result.creator}-{result.creator_version}",
    ]


def _line(cells: Sequence[str], widths: Sequence[int]) -> str:
    body = "".join(f" {cell.ljust(width)} " for cell, width in zip(cells, widths))
    return (" " + body).rstrip()


def format_search(results: Iterable[SearchResult]) -> str:
    """Render results as a borderless, left-aligned table.

    Consecutive rows with the same ID show the ID only once.
    """
    rows = [_cells(result) for result in results]
    previous = None
    for row in rows:
        current = row[0]
        if current == previous:
            row[0] = ""
        previous = current
    widths = [max(len(cell) for cell in column) for column in zip(HEADERS, *rows)]
    lines = [_line(HEADERS, widths)]
    lines.extend(_line(row, widths) for row in rows)
    return "\n".join(lines) + "\n"


def search_view(results: Iterable[SearchResult], stream: TextIO | None = None) -> None:
    """Write the results table to stream, standard output by default."""
    out = stream if stream is not None else sys.stdout
    out.write(format_search(results))