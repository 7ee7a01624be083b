"""Access to the local SQLite copy of the SBOM catalogue."""

from __future__ import annotations

import os
import random
import sqlite3

from sbomex.model import DATA_SOURCE, CmdArgs, SearchResult
from sbomex.query import search_query, url_query
from sbomex.utils import random_pick


class NoRecordFound(LookupError):
    """No SBOM in the catalogue matches the requested id."""

    def __init__(self, sbom_id: int) -> None:
        super().__init__("no record found")
        self.sbom_id = sbom_id


class SbomDatabase:
    """A connection to the SBOM catalogue database."""

    def __init__(self, path: str | os.PathLike[str] = DATA_SOURCE) -> None:
        self.path = path
        self._conn = sqlite3.connect(os.fspath(path))

    def search(self, args: CmdArgs) -> list[SearchResult]:
        """Return the SBOMs matching the filters in args."""
        sql = search_query(args.target, args.format, args.spec, args.tool, args.limit)
        return [SearchResult.from_row(row) for row in self._conn.execute(sql)]

    def url(self, args: CmdArgs, rng: random.Random | None = None) -> str:
        """Return the file URL of the SBOM with args.id, chosen at random among matches."""
        rows = self._conn.execute(url_query(args.id)).fetchall()
        if not rows:
            raise NoRecordFound(args.id)
        _, file_url = rows[random_pick(0, len(rows), rng)]
        return str(file_url)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> SbomDatabase:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()