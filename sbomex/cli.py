"""Command line interface: find and pull public SBOMs from the catalogue."""

from __future__ import annotations

import argparse
import logging
import platform
import sqlite3
import sys
import urllib.error
import urllib.request
from importlib import metadata
from pathlib import Path
from typing import BinaryIO, Sequence

from sbomex.db import NoRecordFound, SbomDatabase
from sbomex.fetch import FetchError, fetch
from sbomex.model import DATA_SOURCE, DEFAULT_LIMIT, CmdArgs
from sbomex.view import search_view

DB_LOCATION = "https://s3.amazonaws.com/app.interlynk.io/static/db/sbomlc.db"
VALID_FORMATS = ("json", "xml", "tv")
VALID_SPECS = ("spdx", "cdx")
_CHUNK = 64 * 1024

log = logging.getLogger(__name__)

_DESCRIPTION = """\
SBOM Explorer (sbomex) is a command line utility
to help query and fetch Interlynk's public SBOM repository.
The tool is intended to help familiarize with the specifications
and formats of common SBOM standards and the quality of produced SBOMs (See sbomqs).
The underlying repository is updated periodically with SBOMs
from a variety of sources built with many tools"""


class InvalidArguments(ValueError):
    """Command line values outside the accepted choices."""


def check_sqlite_db(path: str | Path) -> bool:
    """Return True when path holds a readable SQLite database."""
    target = Path(path)
    if not target.is_file() or target.stat().st_size == 0:
        return False
    try:
        conn = sqlite3.connect(f"{target.resolve().as_uri()}?mode=ro", uri=True)
    except sqlite3.Error:
        return False
    try:
        conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
    except sqlite3.Error:
        return False
    finally:
        conn.close()
    return True


def _copy_with_progress(source: BinaryIO, out: BinaryIO, total: int | None) -> None:
    done = 0
    while chunk := source.read(_CHUNK):
        out.write(chunk)
        done += len(chunk)
        if total:
            sys.stderr.write(f"\rdownloading db {done * 100 // total}% ({done}/{total} B)")
        else:
            sys.stderr.write(f"\rdownloading db {done} B")
    sys.stderr.write("\n")


def _download(url: str, destination: Path) -> None:
    try:
        with urllib.request.urlopen(url, timeout=60) as response:
            if response.status is not None and response.status != 200:
                raise FetchError(f"bad status: {response.status} {response.reason}",
                                 status=response.status)
            with destination.open("wb") as out:
                _copy_with_progress(response, out, response.length)
    except urllib.error.HTTPError as exc:
        raise FetchError(f"bad status: {exc.code} {exc.reason}", status=exc.code) from exc
    except (urllib.error.URLError, ValueError) as exc:
        raise FetchError(f"failed to download file {exc}") from exc


def download_db(path: str | Path, url: str = DB_LOCATION) -> bool:
    """Download the catalogue to path unless a valid database is already there.

    Returns True when a download took place.
    """
    target = Path(path)
    if check_sqlite_db(target):
        return False
    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(target.name + ".part")
    try:
        _download(url, partial)
    except BaseException:
        partial.unlink(missing_ok=True)
        raise
    partial.replace(target)
    return True


def validate_args(args: CmdArgs) -> None:
    """Raise InvalidArguments when format, spec or id are not acceptable."""
    if args.format and args.format not in VALID_FORMATS:
        raise InvalidArguments(
            f"Invalid format {args.format}: must be one of - {', '.join(VALID_FORMATS)}")
    if args.spec and args.spec not in VALID_SPECS:
        raise InvalidArguments(
            f"Invalid spec {args.spec}: must be one of - {', '.join(VALID_SPECS)}")
    if args.id < 0:
        raise InvalidArguments("invalid id: must be greater than 0")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser with the search, pull and version commands."""
    parser = argparse.ArgumentParser(
        prog="sbomex",
        description="Find & pull public SBOMs from Interlynk's SBOM repository",
        epilog=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    parser.add_argument("--db", default=DATA_SOURCE, help="path of the local catalogue database")
    commands = parser.add_subparsers(dest="command")

    search = commands.add_parser(
        "search", help="Finds SBOM in the repository that matches the filtering criteria")
    search.add_argument("--target", default="",
                        help="SBOM target name (e.g. '%%centos%%')")
    search.add_argument("--format", default="", help="SBOM format options json/xml/tv")
    search.add_argument("--spec", default="", help="SBOM Specification options spdx/cdx")
    search.add_argument("--tool", default="",
                        help="SBOM creator tool name (e.g. syft, trivy, bom)")
    search.add_argument("--limit", type=int, default=DEFAULT_LIMIT,
                        help="max number of search results to print (default 25)")

    pull = commands.add_parser(
        "pull", help="Pulls specified SBOM from the repository and prints to the screen")
    pull.add_argument("--id", type=int, required=True, help="Pull SBOM based on Id")

    commands.add_parser("version", help="Prints the version")
    return parser


def _version_text() -> str:
    try:
        version = metadata.version("sbomex")
    except metadata.PackageNotFoundError:
        version = "devel"
    return "\n".join([
        "sbomex",
        f"GitVersion:    {version}",
        f"PythonVersion: {platform.python_version()}",
        f"Platform:      {sys.platform}/{platform.machine()}",
    ])


def _run_search(db: SbomDatabase, args: CmdArgs) -> int:
    log.debug("Processing search")
    try:
        results = db.search(args)
    except sqlite3.Error as exc:
        print(f"query execution failed {exc}", file=sys.stderr)
        return 1
    search_view(results)
    return 0


def _run_pull(db: SbomDatabase, args: CmdArgs) -> int:
    try:
        url = db.url(args)
    except NoRecordFound as exc:
        print(exc)
        return 0
    except sqlite3.Error as exc:
        print(f"query execution failed {exc}", file=sys.stderr)
        return 1
    try:
        text = fetch(url)
    except FetchError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(text)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the exit status."""
    parser = build_parser()
    options = parser.parse_args(argv)

    if options.command is None:
        parser.print_help()
        return 0
    if options.command == "version":
        print(_version_text())
        return 0

    if options.command == "search":
        args = CmdArgs(target=options.target, format=options.format, spec=options.spec,
                       tool=options.tool, limit=options.limit)
    else:
        args = CmdArgs(id=options.id)

    try:
        validate_args(args)
    except InvalidArguments as exc:
        print(exc)
        return 1

    try:
        download_db(options.db)
    except (FetchError, OSError) as exc:
        print(f"failed to download db: {exc}", file=sys.stderr)
        return 1

    with SbomDatabase(options.db) as db:
        if options.command == "search":
            return _run_search(db, args)
        return _run_pull(db, args)


if __name__ == "__main__":
    sys.exit(main())