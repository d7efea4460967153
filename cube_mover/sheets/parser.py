"""CSV parsing for two-column name/value sheets.

Expected layout::

    name,value
    cubeSize,2.5
    cubeMoveStep,1.0

Other columns are carried through ``read_rows`` but ignored by ``parse_sheet``.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Dict, List, Tuple

from ..constants import SHEET_NAME_COLUMN, SHEET_VALUE_COLUMN
from .errors import SheetParseError

logger = logging.getLogger(__name__)


def _read_table(csv_text: str) -> Tuple[List[str], List[List[str]]]:
    reader = csv.reader(io.StringIO(csv_text.lstrip("\ufeff")))
    try:
        records = [r for r in reader if any(cell.strip() for cell in r)]
    except csv.Error as exc:
        raise SheetParseError(f"Unreadable CSV: {exc}") from exc
    if not records:
        return [], []
    header = [cell.strip() for cell in records[0]]
    return header, records[1:]


def _to_rows(header: List[str], records: List[List[str]]) -> List[Dict[str, str]]:
    return [{key: cell.strip() for key, cell in zip(header, record) if key} for record in records]


def read_rows(csv_text: str) -> List[Dict[str, str]]:
    """Read CSV text into an ordered list of header -> cell mappings.

    Blank lines are dropped and cells are whitespace-trimmed. Cells missing at
    the end of a short row are left out of that row's mapping.
    """
    return _to_rows(*_read_table(csv_text))


def parse_sheet(csv_text: str) -> Dict[str, str]:
    """Parse a name/value sheet into a flat mapping.

    Empty text yields an empty mapping. Rows lacking a name or a value are
    skipped; later rows overwrite earlier ones with the same name.
    """
    if not csv_text or not csv_text.strip():
        return {}

    header, records = _read_table(csv_text)
    missing = [c for c in (SHEET_NAME_COLUMN, SHEET_VALUE_COLUMN) if c not in header]
    if missing:
        raise SheetParseError(f"Sheet header lacks column(s): {', '.join(missing)}")

    sheet: Dict[str, str] = {}
    for i, row in enumerate(_to_rows(header, records), start=1):
        name = row.get(SHEET_NAME_COLUMN)
        value = row.get(SHEET_VALUE_COLUMN)
        if not name or not value:
            logger.debug("Skipping sheet row %d: missing name or value", i)
            continue
        sheet[name] = value
    return sheet
