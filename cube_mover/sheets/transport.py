"""HTTP transport for sheet downloads."""

from __future__ import annotations

import http.client
import urllib.error
import urllib.request
from typing import Callable, Optional

from .errors import SheetParseError, TransportError

Transport = Callable[[str, Optional[float]], str]


def urllib_transport(url: str, timeout: Optional[float] = None) -> str:
    """GET ``url`` and return the body decoded as UTF-8.

    Raises TransportError on connection failures, truncated reads, bad URLs
    and non-2xx responses; SheetParseError if the body is not valid UTF-8.
    """
    try:
        request = urllib.request.Request(url, headers={"Accept": "text/csv"})
        if timeout is None:
            response = urllib.request.urlopen(request)
        else:
            response = urllib.request.urlopen(request, timeout=timeout)
        with response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise TransportError(f"GET {url} returned HTTP {status}")
            body = response.read()
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
        raise TransportError(f"GET {url} failed: {exc}") from exc
    try:
        return body.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise SheetParseError(f"Body from {url} is not valid UTF-8: {exc}") from exc
