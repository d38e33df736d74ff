"""File parsers"""

from .base import FileParser
from .excel import ExcelParser, parse_spreadsheet
from .csv import CSVParser, parse_delimited, detect_delimiter
from .json import JSONParser, parse_json_table

__all__ = [
    "FileParser",
    "ExcelParser",
    "CSVParser",
    "JSONParser",
    "parse_spreadsheet",
    "parse_delimited",
    "detect_delimiter",
    "parse_json_table",
]
