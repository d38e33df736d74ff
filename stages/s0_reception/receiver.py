"""Stage 0: Reception - File parsing"""

import logging

from core.interfaces import Stage
from core.models import ParsedTable, UploadedFile
from core.enums import FileType
from core.exceptions import StageError, FileParseError, UnsupportedFormatError
from .parsers import ExcelParser, CSVParser, JSONParser
from .validator import file_extension

logger = logging.getLogger(__name__)

PARSERS = {
    FileType.CSV: CSVParser(),
    FileType.TSV: CSVParser(),
    FileType.EXCEL_XLSX: ExcelParser(),
    FileType.EXCEL_XLS: ExcelParser(),
    FileType.JSON: JSONParser(),
}


async def parse_file(file: UploadedFile, parsers: dict = None) -> ParsedTable:
    """
    Parse an uploaded file with the parser registered for its extension

    Validation is left to the caller (see ``validate_file``).

    Raises:
        UnsupportedFormatError: Missing or unknown extension
        FileParseError: The parser rejected the content
    """
    parsers = parsers or PARSERS
    ext = file_extension(file.name)

    try:
        file_type = FileType(ext)
    except ValueError:
        file_type = None

    if file_type not in parsers:
        raise UnsupportedFormatError(f"Unsupported file type: {ext}", ext)

    logger.info(f"Parsing {file.name} ({file.size} bytes) as {file_type.value}")
    return await parsers[file_type].read(file)


class Receiver(Stage[UploadedFile, ParsedTable]):
    """Stage 0: Reception - Parse the uploaded file into a table"""

    @property
    def name(self) -> str:
        return "Reception"

    @property
    def stage_number(self) -> int:
        return 0

    def __init__(self, json_schema_policy: str = None):
        self.parsers = dict(PARSERS)
        if json_schema_policy:
            self.parsers[FileType.JSON] = JSONParser(json_schema_policy)

    def validate_input(self, input_data: UploadedFile) -> bool:
        """Check the input looks like an upload"""
        return isinstance(input_data, UploadedFile) and bool(input_data.name)

    async def execute(self, input_data: UploadedFile) -> ParsedTable:
        """Execute reception stage"""
        try:
            return await parse_file(input_data, self.parsers)
        except UnsupportedFormatError as e:
            raise StageError(
                self.stage_number,
                f"{e}. Supported: {', '.join(t.value for t in self.parsers)}"
            ) from e
        except FileParseError as e:
            raise StageError(self.stage_number, str(e)) from e
        except Exception as e:
            raise StageError(
                self.stage_number,
                f"Unexpected error parsing file: {e}"
            ) from e
