"""
Reading and writing ``.xlsx`` workbooks.

This is the only module that touches files; the engine itself works on
plain lists of rows.
"""

import logging
import os

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill

from .errors import SheetNotFound

logger = logging.getLogger(__name__)

_HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4",
                           fill_type="solid")
_HEADER_FONT = Font(bold=True, color="FFFFFF")


def sheet_names(path):
    """Return the list of sheet names in a workbook."""
    wb = load_workbook(path, read_only=True)
    names = wb.sheetnames
    wb.close()
    return names


def load_grid(path, sheet_name=None):
    """Read one worksheet as a list of rows of cached cell values.

    The first sheet is used when *sheet_name* is ``None``.  Raises
    :class:`~variation_grouping.errors.SheetNotFound` for an unknown sheet.
    """
    wb = load_workbook(path, data_only=True)
    try:
        if sheet_name is None:
            ws = wb[wb.sheetnames[0]]
        elif sheet_name in wb.sheetnames:
            ws = wb[sheet_name]
        else:
            raise SheetNotFound(f"Sheet {sheet_name!r} not found in {path}")
        grid = [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
    logger.debug("Loaded %d rows from %s [%s]", len(grid), path, ws.title)
    return grid


def _argb(color):
    """``#RRGGBB`` -> ``FFRRGGBB`` as openpyxl expects."""
    return "FF" + color.lstrip("#").upper()


def write_workbook(path, sheets, fills=None, header_sheets=()):
    """Write ``{sheet_name: grid}`` to *path* and return the path.

    *fills* maps sheet name to ``{(row, col): "#RRGGBB"}`` (zero-based);
    sheets named in *header_sheets* get a styled first row.
    """
    fills = fills or {}
    wb = Workbook()
    default = wb.active

    for name, grid in sheets.items():
        ws = wb.create_sheet(name)
        for r, cells in enumerate(grid, 1):
            for c, value in enumerate(cells or (), 1):
                if value is not None:
                    ws.cell(row=r, column=c, value=value)

        for (r, c), color in fills.get(name, {}).items():
            argb = _argb(color)
            ws.cell(row=r + 1, column=c + 1).fill = PatternFill(
                start_color=argb, end_color=argb, fill_type="solid")

        if name in header_sheets and grid:
            for c in range(1, len(grid[0]) + 1):
                cell = ws.cell(row=1, column=c)
                cell.font = _HEADER_FONT
                cell.fill = _HEADER_FILL

    if len(wb.sheetnames) > 1:
        wb.remove(default)

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    wb.save(path)
    wb.close()
    logger.info("Wrote workbook: %s", path)
    return path
