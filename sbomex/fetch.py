"""Retrieval of SBOM documents over HTTP."""

from __future__ import annotations

import urllib.error
import urllib.request

DEFAULT_TIMEOUT = 30.0


class FetchError(Exception):
    """A document could not be retrieved."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def fetch(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the body of url as text; anything but a 200 answer raises FetchError."""
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            status = response.status
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise FetchError(f"failed to fetch {exc.code}", status=exc.code) from exc
    except (urllib.error.URLError, ValueError, OSError) as exc:
        raise FetchError(f"failed to get {exc}") from exc
    if status is not None and status != 200:
        raise FetchError(f"failed to fetch {status}", status=status)
    return body.decode("utf-8", errors="replace")