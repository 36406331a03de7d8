"""
==============================================================================
Workbook Source Module
==============================================================================

Reads the catalog workbook into plain records.

Sheets:
-------
- prices_usados: used-condition price rows (required for a useful catalog)
- prices_novos:  new-condition price rows
- colors:        optional model -> color rows
- products:      optional model -> image rows

The first row of each sheet holds the headers. Blank rows are skipped and
missing cells become None. A missing sheet yields no records; a missing
workbook raises FileNotFoundError.

==============================================================================
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from openpyxl import load_workbook

from .models import CatalogSheets


# Module logger
logger = logging.getLogger(__name__)


USED_SHEET = "prices_usados"
NEW_SHEET = "prices_novos"
COLORS_SHEET = "colors"
PRODUCTS_SHEET = "products"


def rows_to_records(rows: List[tuple]) -> List[Dict[str, Any]]:
    """
    Convert worksheet value rows into header-keyed records.

    Args:
        rows: Row tuples, the first one being the header

    Returns:
        One dict per non-blank data row
    """
    if not rows:
        return []

    headers = [
        str(cell).strip() if cell is not None and str(cell).strip() else None
        for cell in rows[0]
    ]

    records: List[Dict[str, Any]] = []
    for row in rows[1:]:
        if all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row):
            continue
        record = {
            header: (row[i] if i < len(row) else None)
            for i, header in enumerate(headers)
            if header is not None
        }
        records.append(record)
    return records


class WorkbookSource:
    """
    Spreadsheet reader for the catalog workbook.

    The workbook is opened fresh on every read; nothing is cached.

    Example:
        >>> source = WorkbookSource(Path("data/catalog.xlsx"))
        >>> sheets = source.read()
        >>> len(sheets.used)
        42
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        """Check if the workbook file is present."""
        return self._path.is_file()

    def read(self) -> CatalogSheets:
        """
        Read every sheet the catalog engine consumes.

        Raises:
            FileNotFoundError: If the workbook does not exist
        """
        if not self.exists():
            logger.error(f"Catalog workbook not found: {self._path}")
            raise FileNotFoundError(str(self._path))

        workbook = load_workbook(self._path, read_only=True, data_only=True)
        try:
            sheets = CatalogSheets(
                used=self._sheet_records(workbook, USED_SHEET),
                new=self._sheet_records(workbook, NEW_SHEET),
                colors=self._sheet_records(workbook, COLORS_SHEET),
                products=self._sheet_records(workbook, PRODUCTS_SHEET),
            )
        finally:
            workbook.close()

        logger.debug(
            f"Read workbook {self._path.name}: {len(sheets.used)} used, "
            f"{len(sheets.new)} new, {len(sheets.colors)} colors, "
            f"{len(sheets.products)} products"
        )
        return sheets

    @staticmethod
    def _sheet_records(workbook, name: str) -> List[Dict[str, Any]]:
        """Records of one sheet, empty if the sheet is absent."""
        if name not in workbook.sheetnames:
            return []
        worksheet = workbook[name]
        return rows_to_records(list(worksheet.iter_rows(values_only=True)))
