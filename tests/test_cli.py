import sqlite3
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from sbomex.cli import (
    InvalidArguments,
    build_parser,
    check_sqlite_db,
    download_db,
    main,
    validate_args,
)
from sbomex.fetch import FetchError
from sbomex.model import CmdArgs


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        status, body = self.server.routes.get(self.path, (404, b"missing"))
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.routes = {}
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


def _url(httpd, path):
    host, port = httpd.server_address[:2]
    return f"http://{host}:{port}{path}"


def _make_db(path, rows):
    conn = sqlite3.connect(path)
    conn.execute(
        "CREATE TABLE sboms (id INTEGER, target TEXT, target_version TEXT, spec TEXT, "
        "format TEXT, creator TEXT, creator_version TEXT, file_url TEXT)")
    conn.execute("CREATE TABLE scores (sbom_id INTEGER, score REAL)")
    for row in rows:
        conn.execute("INSERT INTO sboms VALUES (?, ?, ?, ?, ?, ?, ?, ?)", row[:8])
        conn.execute("INSERT INTO scores VALUES (?, ?)", (row[0], row[8]))
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def catalogue(tmp_path):
    return _make_db(tmp_path / "catalogue.db", [
        (1, "centos", "7", "spdx", "json", "syft", "0.70", "https://example.com/1.json", 7.5),
        (2, "alpine", "3.17", "cdx", "xml", "trivy", "0.38", "https://example.com/2.xml", 8.0),
        (3, "nginx", "1.25", "cdx", "json", "bom", "0.4", "https://example.com/3.json", 6.25),
    ])


def test_validate_rejects_unknown_format():
    with pytest.raises(InvalidArguments, match="Invalid format yaml"):
        validate_args(CmdArgs(format="yaml"))


def test_validate_rejects_unknown_spec():
    with pytest.raises(InvalidArguments, match="Invalid spec swid"):
        validate_args(CmdArgs(spec="swid"))


def test_validate_rejects_negative_id():
    with pytest.raises(InvalidArguments, match="invalid id"):
        validate_args(CmdArgs(id=-1))


def test_check_sqlite_db(tmp_path, catalogue):
    garbage = tmp_path / "garbage.db"
    garbage.write_bytes(b"this is not a database at all, just some text" * 4)
    assert check_sqlite_db(catalogue) is True
    assert check_sqlite_db(tmp_path / "absent.db") is False
    assert check_sqlite_db(garbage) is False


def test_download_db_fetches_missing_database(tmp_path, server, catalogue):
    server.routes["/sbomlc.db"] = (200, catalogue.read_bytes())
    target = tmp_path / "nested" / "dir" / "sqlite3.db"
    assert download_db(target, _url(server, "/sbomlc.db")) is True
    assert target.read_bytes() == catalogue.read_bytes()
    assert check_sqlite_db(target) is True


def test_download_db_skips_valid_database(catalogue, server):
    before = catalogue.read_bytes()
    assert download_db(catalogue, _url(server, "/never-served")) is False
    assert catalogue.read_bytes() == before


def test_download_db_bad_status_leaves_no_file(tmp_path, server):
    target = tmp_path / "db" / "sqlite3.db"
    with pytest.raises(FetchError) as info:
        download_db(target, _url(server, "/absent.db"))
    assert info.value.status == 404
    assert not target.exists()
    assert list(target.parent.iterdir()) == []


def test_parser_search_defaults():
    options = build_parser().parse_args(["search"])
    assert options.limit == 25
    assert (options.target, options.format, options.spec, options.tool) == ("", "", "", "")


def test_parser_pull_requires_id():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["pull"])


def test_main_search_filters_by_spec(catalogue, capsys):
    assert main(["--db", str(catalogue), "search", "--spec", "cdx"]) == 0
    lines = capsys.readouterr().out.splitlines()
    ids = [line.split()[0] for line in lines[1:]]
    assert ids == ["2", "3"]


def test_main_search_respects_limit(catalogue, capsys):
    assert main(["--db", str(catalogue), "search", "--limit", "1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2


def test_main_search_invalid_format(catalogue, capsys):
    assert main(["--db", str(catalogue), "search", "--format", "yaml"]) == 1
    assert "Invalid format yaml" in capsys.readouterr().out


def test_main_pull_prints_document(tmp_path, server, capsys):
    document = '{"spdxVersion": "SPDX-2.3"}'
    server.routes["/doc.json"] = (200, document.encode())
    db_path = _make_db(tmp_path / "pull.db", [
        (5, "busybox", "1.36", "spdx", "json", "syft", "0.70",
         _url(server, "/doc.json"), 5.0),
    ])
    assert main(["--db", str(db_path), "pull", "--id", "5"]) == 0
    assert capsys.readouterr().out == document + "\n"


def test_main_pull_unknown_id(catalogue, capsys):
    assert main(["--db", str(catalogue), "pull", "--id", "99"]) == 0
    assert "no record found" in capsys.readouterr().out


def test_main_version(capsys):
    assert main(["version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("sbomex")
    assert "GitVersion:" in out