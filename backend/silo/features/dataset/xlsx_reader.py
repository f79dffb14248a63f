"""
Spreadsheet decoding (openpyxl).

Turns an uploaded .xlsx into header-keyed rows. Cells keep the types
openpyxl gives them (str, int, float, datetime, time); empty cells become
"". Unlike the analytics core this adapter raises on bad input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Iterable, Sequence
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from silo.shared.normalizer import to_text

logger = logging.getLogger(__name__)

EMPTY_HEADER = "__EMPTY"


class WorkbookError(ValueError):
    """Upload could not be decoded as a workbook."""


@dataclass
class WorkbookData:
    """Decoded worksheet."""

    sheet_name: str
    columns: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)


def find_sheet_name(names: Sequence[str], preferred: str) -> str | None:
    """Exact name, then case-insensitive, then case-insensitive trimmed."""
    if not names:
        return None
    if preferred in names:
        return preferred

    lower = preferred.lower()
    for name in names:
        if str(name).lower() == lower:
            return name
    for name in names:
        if str(name).strip().lower() == lower:
            return name
    return None


def header_names(cells: Iterable[Any]) -> list[str]:
    """
    Column names from the header row.

    Empty headers become "__EMPTY", "__EMPTY_1", ...; repeated names get a
    "_1", "_2", ... suffix so every column stays addressable.
    """
    names: list[str] = []
    seen: set[str] = set()
    for cell in cells:
        base = to_text(cell)
        if not base.strip():
            base = EMPTY_HEADER
        name, n = base, 0
        while name in seen:
            n += 1
            name = f"{base}_{n}"
        seen.add(name)
        names.append(name)
    return names


def _is_blank(values: Sequence[Any]) -> bool:
    return all(v is None or (isinstance(v, str) and not v.strip()) for v in values)


def read_workbook(content: bytes, preferred_sheet: str = "results") -> WorkbookData:
    """
    Decode workbook bytes.

    Args:
        content: Raw .xlsx bytes
        preferred_sheet: Sheet to use when present; otherwise the first sheet

    Returns:
        WorkbookData with columns in header order and one dict per data row

    Raises:
        WorkbookError: Not a readable workbook, or no worksheet
    """
    try:
        wb = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError, ValueError) as e:
        raise WorkbookError(f"Not a readable .xlsx workbook: {e}") from e

    try:
        sheet_name = find_sheet_name(wb.sheetnames, preferred_sheet)
        if sheet_name is None:
            if not wb.sheetnames:
                raise WorkbookError("Workbook has no worksheets")
            sheet_name = wb.sheetnames[0]
            logger.debug(f"Sheet '{preferred_sheet}' not found, using '{sheet_name}'")

        ws = wb[sheet_name]
        values = ws.iter_rows(values_only=True)

        header = next(values, None)
        if header is None:
            return WorkbookData(sheet_name=sheet_name)

        # trailing empty header cells are just sheet padding
        header = list(header)
        while header and (header[-1] is None or to_text(header[-1]).strip() == ""):
            header.pop()
        columns = header_names(header)

        rows = []
        for raw in values:
            raw = list(raw or ())[:len(columns)]
            if _is_blank(raw):
                continue
            row = {}
            for i, column in enumerate(columns):
                cell = raw[i] if i < len(raw) else None
                row[column] = "" if cell is None else cell
            rows.append(row)
    finally:
        wb.close()

    logger.info(f"Decoded sheet '{sheet_name}': {len(rows)} rows, {len(columns)} columns")
    return WorkbookData(sheet_name=sheet_name, columns=columns, rows=rows)
