"""Base file parser"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from core.interfaces import FileParser as IFileParser
from core.models import ParsedTable, UploadedFile
from utils.column_types import infer_column_types


class FileParser(IFileParser, ABC):
    """Abstract base class for file parsers"""

    @abstractmethod
    async def read(self, file: UploadedFile) -> ParsedTable:
        """Load file content and return ParsedTable"""
        pass


def unique_columns(names: Sequence) -> List[str]:
    """Header names as strings, repeats suffixed .1, .2 ... the way pandas does it"""
    columns: List[str] = []
    seen = set()
    for name in names:
        column = str(name)
        candidate, counter = column, 0
        while candidate in seen:
            counter += 1
            candidate = f"{column}.{counter}"
        seen.add(candidate)
        columns.append(candidate)
    return columns


def build_table(columns: Sequence[str], rows: List[dict], source_name: str = None) -> ParsedTable:
    """Attach detected column types to parsed rows"""
    columns = list(columns)
    return ParsedTable(
        columns=columns,
        types=infer_column_types(columns, rows),
        rows=rows,
        source_name=source_name,
    )
