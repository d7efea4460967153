"""Error types raised while fetching and parsing remote sheets."""

from __future__ import annotations


class SheetError(Exception):
    """Base class for sheet fetch and parse failures."""


class TransportError(SheetError):
    """The sheet could not be downloaded."""


class SheetParseError(SheetError):
    """The downloaded body is not a readable name/value sheet."""


class FetchInProgressError(SheetError):
    """A fetch was started while another one is still pending."""
