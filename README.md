# sbomex

SBOM Explorer is a command line tool for searching a catalogue of public
SBOMs and printing the SBOM documents it lists. It helps you get familiar with
the common SBOM specifications (SPDX, CycloneDX), their formats, and the
quality scores of SBOMs produced by different tools.

The catalogue is a SQLite database. When `search` or `pull` runs and no valid
database is found at the database path (`.sbomex/sqlite3.db` under the current
directory by default), the catalogue is downloaded there first, with progress
written to standard error. After that the local copy is reused.

## Installation

```
pip install .
```

## Usage

Search the catalogue:

```
sbomex search --target centos --spec spdx --format json --limit 10
```

Filters (each one is matched as a substring with SQL `LIKE '%value%'`, so `%`
also works as a wildcard inside a value):

- `--target`: target name followed by its version
- `--format`: one of `json`, `xml`, `tv`
- `--spec`: one of `spdx`, `cdx`
- `--tool`: name of the tool that created the SBOM, such as `syft`, `trivy` or `bom`
- `--limit`: most results to show (25 by default)

A format or spec outside the listed choices is reported and the command exits
with status 1.

Results are printed as a borderless table with the columns ID, TARGET,
QUALITY, TYPE and CREATOR. When consecutive rows share an ID, the ID is shown
only on the first of them.

Pull one SBOM by its ID and print the document to standard output:

```
sbomex pull --id 42
```

If the ID is not in the catalogue, `no record found` is printed. If an ID has
several files, one of them is chosen at random.

Show the version:

```
sbomex version
```

Use another database location with the global `--db` option, given before the
command:

```
sbomex --db /tmp/catalogue.db search --spec cdx
```

## Library use

```python
from sbomex.db import SbomDatabase
from sbomex.model import CmdArgs
from sbomex.view import search_view

with SbomDatabase(".sbomex/sqlite3.db") as db:
    search_view(db.search(CmdArgs(spec="cdx", limit=5)))
```

- `sbomex.db.SbomDatabase` opens a catalogue; `search(args)` returns a list of
  `sbomex.model.SearchResult`, and `url(args)` returns the file URL for
  `args.id` or raises `sbomex.db.NoRecordFound`.
- `sbomex.query` builds the SQL text: `search_query`, `url_query`, `add_filter`.
- `sbomex.view.format_search(results)` returns the results table as a string.
- `sbomex.fetch.fetch(url)` returns a document's text, raising
  `sbomex.fetch.FetchError` on any answer other than 200.
- `sbomex.cli.download_db(path)` downloads the catalogue unless `path` already
  holds a valid SQLite database, and `check_sqlite_db(path)` tells which.

## Limitations

The filter values are placed into the SQL text as given, not bound as
parameters, so a quote character in a filter breaks the query. The catalogue is
read only; there is no command to add SBOMs to it or to refresh an existing
copy, short of deleting the database file.

## Running the tests

```
pip install .[test]
pytest
```