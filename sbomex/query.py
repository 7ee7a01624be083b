"""SQL text for catalogue queries."""

from __future__ import annotations

_SEARCH_BASE = (
    "SELECT id, target, target_version, spec, format, score, creator, "
    "creator_version, file_url FROM sboms JOIN scores ON sboms.id = scores.sbom_id "
)


def add_filter(column: str, value: str, filter_exists: bool) -> str:
    """Return a LIKE clause on column, joined with 'and' or opening with 'where'."""
    joiner = " and " if filter_exists else " where "
    return f"{joiner}{column} LIKE '%{value}%'"


def search_query(target: str, fmt: str, spec: str, tool: str, limit: int) -> str:
    """Build the search query for the given filters; empty filters are skipped."""
    filters = [
        ("sboms.format", fmt),
        ("sboms.target || sboms.target_version", target),
        ("sboms.spec", spec),
        ("sboms.creator", tool),
    ]
    query = _SEARCH_BASE
    filter_exists = False
    for column, value in filters:
        if value:
            query += add_filter(column, value, filter_exists)
            filter_exists = True
    return f"{query} limit {int(limit)}"


def url_query(sbom_id: int) -> str:
    """Build the query that looks up the file URLs of an SBOM id."""
    return f"SELECT id, file_url FROM sboms where id = {int(sbom_id)} limit 50"