"""CSV / TSV file parser"""

import csv
import io
import logging
from typing import List, Optional

import pandas as pd

from core.models import ParsedTable, UploadedFile
from core.exceptions import FileParseError, EmptyDataError
from utils.scalars import coerce_text
from .base import FileParser, build_table

logger = logging.getLogger(__name__)

DELIMITERS = [',', '\t', '|', ';']


def _check_row_widths(content: str, delimiter: str, file_name: Optional[str]):
    """Reject rows carrying more fields than the header, trailing delimiters included"""
    reader = csv.reader(io.StringIO(content), delimiter=delimiter)
    width = None
    try:
        for row in reader:
            if not row:
                continue
            if width is None:
                width = len(row)
            elif len(row) > width:
                raise FileParseError(
                    f"Expected {width} fields in line {reader.line_num}, saw {len(row)}",
                    file_name
                )
    except csv.Error as e:
        raise FileParseError(f"Failed to parse CSV file: {e}", file_name) from e


def detect_delimiter(content: str) -> str:
    """Pick the delimiter that splits the first lines most consistently"""
    sample = content[:4096]

    scores = {}
    for delim in DELIMITERS:
        counts = [line.count(delim) for line in sample.split('\n')[:10] if line.strip()]
        if counts and min(counts) > 0:
            avg = sum(counts) / len(counts)
            variance = sum((c - avg) ** 2 for c in counts) / len(counts)
            scores[delim] = min(counts) if variance < 2 else 0

    return max(scores, key=scores.get) if scores else ','


async def parse_delimited(
    content: str,
    delimiter: Optional[str] = None,
    file_name: Optional[str] = None,
) -> ParsedTable:
    """
    Parse delimited text into a ParsedTable

    The first row is the header, blank lines are skipped and every cell goes
    through dynamic typing (numbers, true/false) before column types are
    detected.

    Args:
        content: Decoded file text
        delimiter: Field separator, sniffed from the content when omitted
        file_name: Original file name, used in errors and on the table

    Raises:
        EmptyDataError: No header row at all
        FileParseError: Malformed quoting or rows with too many fields
    """
    if not content.strip():
        raise EmptyDataError("CSV file is empty", file_name)

    delimiter = delimiter or detect_delimiter(content)
    _check_row_widths(content, delimiter, file_name)

    try:
        df = pd.read_csv(
            io.StringIO(content),
            sep=delimiter,
            header=0,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines='error',
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, csv.Error) as e:
        raise FileParseError(f"Failed to parse CSV file: {e}", file_name) from e

    columns: List[str] = [str(c) for c in df.columns]
    rows = [
        {
            column: coerce_text(None if pd.isna(value) else value)
            for column, value in zip(columns, record)
        }
        for record in df.itertuples(index=False, name=None)
    ]

    logger.debug(f"Parsed {len(rows)} rows x {len(columns)} columns (delimiter={delimiter!r})")
    return build_table(columns, rows, file_name)


class CSVParser(FileParser):
    """Parser for CSV and TSV files"""

    @property
    def supported_extensions(self) -> List[str]:
        return [".csv", ".tsv"]

    async def read(self, file: UploadedFile) -> ParsedTable:
        content = await file.read_text()
        delimiter = '\t' if file.name.lower().endswith('.tsv') else None
        return await parse_delimited(content, delimiter=delimiter, file_name=file.name)
