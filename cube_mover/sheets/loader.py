"""Remote sheet loader.

Downloads a spreadsheet as CSV on a background worker and hands the parsed
``name -> value`` mapping back on the caller's thread. The caller's frame loop
drives delivery through ``PendingFetch.poll()``; exactly one of the two
handlers fires per fetch.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

from ..constants import SHEET_DOCUMENT_ID, SHEET_EXPORT_ENDPOINT, SHEET_ID
from .errors import FetchInProgressError, SheetError, TransportError
from .parser import parse_sheet
from .transport import Transport, urllib_transport

logger = logging.getLogger(__name__)

LoadedHandler = Callable[[Dict[str, str]], None]
FailedHandler = Callable[[SheetError], None]


@dataclass
class SheetSource:
    """Where to download the sheet from."""

    document_id: str = SHEET_DOCUMENT_ID
    sheet_id: str = SHEET_ID
    endpoint: str = SHEET_EXPORT_ENDPOINT
    timeout_s: Optional[float] = None

    def __post_init__(self) -> None:
        assert self.document_id, "document_id must be non-empty"
        assert self.endpoint, "endpoint must be non-empty"
        assert self.timeout_s is None or self.timeout_s > 0.0, "timeout_s must be > 0"

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "SheetSource":
        timeout = cfg.get("timeout_s")
        return cls(
            document_id=str(cfg.get("document_id", SHEET_DOCUMENT_ID)),
            sheet_id=str(cfg.get("sheet_id", SHEET_ID)),
            endpoint=str(cfg.get("endpoint", SHEET_EXPORT_ENDPOINT)),
            timeout_s=None if timeout is None else float(timeout),
        )


def build_export_url(endpoint: str, document_id: str, sheet_id: str) -> str:
    """Build the CSV export URL for one sheet of a document."""
    query = urlencode({"key": document_id, "exportFormat": "csv", "gid": sheet_id})
    return f"{endpoint}?{query}"


class PendingFetch:
    """Handle for one in-flight fetch.

    Wraps the worker future; ``poll()`` dispatches the matching handler once
    the download and parse have finished.
    """

    def __init__(
        self,
        future: "Future[Dict[str, str]]",
        on_loaded: LoadedHandler,
        on_failed: FailedHandler,
        on_settled: Callable[[Optional[Dict[str, str]]], None],
    ) -> None:
        self._future = future
        self._on_loaded = on_loaded
        self._on_failed = on_failed
        self._on_settled = on_settled
        self._dispatched = False

    @property
    def done(self) -> bool:
        return self._dispatched

    def poll(self) -> bool:
        """Fire the handler if the result is ready. Returns True once dispatched."""
        if self._dispatched:
            return True
        if not self._future.done():
            return False
        self._dispatched = True

        exc = self._future.exception()
        if exc is None:
            sheet = self._future.result()
            self._on_settled(sheet)
            self._on_loaded(dict(sheet))
            return True
        if not isinstance(exc, SheetError):
            logger.error("Sheet fetch failed unexpectedly: %r", exc)
            wrapped = TransportError(f"Sheet fetch failed: {exc!r}")
            wrapped.__cause__ = exc
            exc = wrapped
        self._on_settled(None)
        self._on_failed(exc)
        return True

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the worker finishes, then dispatch."""
        self._future.exception(timeout=timeout)
        self.poll()


class SheetLoader:
    """Fetch a name/value sheet from a CSV export endpoint.

    Interface:
    - fetch(document_id, sheet_id, on_loaded, on_failed) -> PendingFetch
    - load_sheet(document_id?, sheet_id?) -> dict  (blocking)
    - loaded_sheet -> last successfully parsed mapping
    """

    def __init__(
        self,
        source: Optional[SheetSource] = None,
        transport: Optional[Transport] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self.source = source or SheetSource()
        self._transport = transport or urllib_transport
        self._executor = executor
        self._pending: Optional[PendingFetch] = None
        self._loaded_sheet: Dict[str, str] = {}

    @property
    def loaded_sheet(self) -> Dict[str, str]:
        return dict(self._loaded_sheet)

    @property
    def busy(self) -> bool:
        return self._pending is not None and not self._pending.done

    def _download_and_parse(self, url: str) -> Dict[str, str]:
        try:
            body = self._transport(url, self.source.timeout_s)
        except TransportError:
            logger.error("Unable to fetch CSV data from %s", url)
            raise
        return parse_sheet(body)

    def _settle(self, sheet: Optional[Dict[str, str]]) -> None:
        if sheet is not None:
            self._loaded_sheet = dict(sheet)

    def fetch(
        self,
        document_id: Optional[str] = None,
        sheet_id: Optional[str] = None,
        on_loaded: Optional[LoadedHandler] = None,
        on_failed: Optional[FailedHandler] = None,
    ) -> PendingFetch:
        """Start downloading a sheet without blocking the caller."""
        if self.busy:
            raise FetchInProgressError("A sheet fetch is already pending")

        doc = document_id or self.source.document_id
        gid = self.source.sheet_id if sheet_id is None else sheet_id
        url = build_export_url(self.source.endpoint, doc, gid)
        logger.debug("Fetching sheet %s", url)

        self._loaded_sheet = {}
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sheet-loader")
        future = self._executor.submit(self._download_and_parse, url)
        self._pending = PendingFetch(
            future,
            on_loaded or (lambda sheet: None),
            on_failed or (lambda err: None),
            self._settle,
        )
        return self._pending

    def load_sheet(
        self, document_id: Optional[str] = None, sheet_id: Optional[str] = None
    ) -> Dict[str, str]:
        """Fetch and parse synchronously; raises SheetError on failure."""
        outcome: Dict[str, Any] = {}

        def _loaded(sheet: Dict[str, str]) -> None:
            outcome["sheet"] = sheet

        def _failed(err: SheetError) -> None:
            outcome["error"] = err

        self.fetch(document_id, sheet_id, _loaded, _failed).wait()
        if "error" in outcome:
            raise outcome["error"]
        return outcome["sheet"]

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
