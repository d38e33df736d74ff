"""Excel file parser"""

import io
import logging
from typing import List, Optional

import pandas as pd

from core.models import ParsedTable, UploadedFile
from core.exceptions import FileParseError, EmptyDataError
from utils.scalars import normalize_cell
from .base import FileParser, build_table, unique_columns

logger = logging.getLogger(__name__)


def parse_spreadsheet(buffer: bytes, file_name: Optional[str] = None) -> ParsedTable:
    """
    Parse the first sheet of a workbook into a ParsedTable

    The first row of the sheet is the header. Cells keep their native values;
    date cells become ISO strings and blank cells None.

    Raises:
        EmptyDataError: Workbook without sheets or first sheet without data rows
        FileParseError: Workbook could not be read
    """
    try:
        excel_file = pd.ExcelFile(io.BytesIO(buffer))
        sheet_names = excel_file.sheet_names
        df = None
        if sheet_names:
            df = excel_file.parse(sheet_name=sheet_names[0], header=0, dtype=object)
    except Exception as e:
        raise FileParseError(f"Failed to parse Excel file: {e}", file_name) from e

    if df is None:
        raise EmptyDataError("Excel file contains no sheets", file_name)
    if df.empty:
        raise EmptyDataError("Excel file is empty", file_name)

    columns = unique_columns(df.columns)
    rows = [
        {column: normalize_cell(value) for column, value in zip(columns, record)}
        for record in df.itertuples(index=False, name=None)
    ]

    logger.debug(f"Parsed sheet {sheet_names[0]!r}: {len(rows)} rows x {len(columns)} columns")
    return build_table(columns, rows, file_name)


class ExcelParser(FileParser):
    """Parser for Excel files (.xlsx, .xls)"""

    @property
    def supported_extensions(self) -> List[str]:
        return [".xlsx", ".xls"]

    async def read(self, file: UploadedFile) -> ParsedTable:
        buffer = await file.read_bytes()
        return parse_spreadsheet(buffer, file_name=file.name)
