"""Remote name/value sheet fetching and parsing."""

from .errors import FetchInProgressError, SheetError, SheetParseError, TransportError
from .loader import PendingFetch, SheetLoader, SheetSource, build_export_url
from .parser import parse_sheet, read_rows
from .transport import urllib_transport

__all__ = [
    "FetchInProgressError",
    "SheetError",
    "SheetParseError",
    "TransportError",
    "PendingFetch",
    "SheetLoader",
    "SheetSource",
    "build_export_url",
    "parse_sheet",
    "read_rows",
    "urllib_transport",
]
