"""Records stored in the SBOM catalogue and the arguments used to query it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

DATA_SOURCE = ".sbomex/sqlite3.db"
DEFAULT_LIMIT = 25


@dataclass
class Sbom:
    """One SBOM entry of the catalogue."""

    id: int = 0
    source: str = ""
    name: str = ""
    format: str = ""
    spec: str = ""
    spec_version: str = ""
    creator: str = ""
    creator_version: str = ""
    target: str = ""
    target_version: str = ""
    file_url: str = ""
    visibility: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Score:
    """Quality score recorded for an SBOM."""

    sbom_id: int = 0
    score: float = 0.0
    score_json: str = ""


@dataclass
class SearchResult:
    """A row returned by a catalogue search: SBOM details joined with its score."""

    id: int = 0
    target: str = ""
    target_version: str = ""
    spec: str = ""
    format: str = ""
    score: float = 0.0
    creator: str = ""
    creator_version: str = ""
    file_url: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> SearchResult:
        """Build a result from a row in search-query column order."""
        (sbom_id, target, target_version, spec, fmt, score,
         creator, creator_version, file_url) = row
        return cls(
            id=int(sbom_id),
            target=str(target),
            target_version=str(target_version),
            spec=str(spec),
            format=str(fmt),
            score=float(score),
            creator=str(creator),
            creator_version=str(creator_version),
            file_url=str(file_url),
        )

    def to_sbom(self) -> Sbom:
        """The SBOM part of this result."""
        return Sbom(
            id=self.id,
            format=self.format,
            spec=self.spec,
            creator=self.creator,
            creator_version=self.creator_version,
            target=self.target,
            target_version=self.target_version,
            file_url=self.file_url,
        )

    def to_score(self) -> Score:
        """The score part of this result."""
        return Score(sbom_id=self.id, score=self.score)


@dataclass
class CmdArgs:
    """Filters and selectors given on the command line."""

    id: int = 0
    target: str = ""
    format: str = ""
    spec: str = ""
    tool: str = ""
    limit: int = DEFAULT_LIMIT