"""JSON file parser"""

import json
import logging
from typing import List, Optional, Union

from core.models import ParsedTable, UploadedFile
from core.enums import JSONSchemaPolicy
from core.exceptions import FileParseError, EmptyDataError
from utils.scalars import normalize_cell
from config import settings
from .base import FileParser, build_table

logger = logging.getLogger(__name__)


def _collect_columns(records: List[dict], policy: JSONSchemaPolicy) -> List[str]:
    if policy == JSONSchemaPolicy.FIRST_RECORD:
        return list(records[0].keys())

    columns = {}
    for record in records:
        for key in record:
            columns.setdefault(key, None)
    return list(columns)


def parse_json_table(
    content: str,
    schema_policy: Optional[Union[JSONSchemaPolicy, str]] = None,
    file_name: Optional[str] = None,
) -> ParsedTable:
    """
    Parse a JSON document into a ParsedTable

    An array becomes one row per element, a single object a one-row table.
    With the ``first_record`` policy the columns are the keys of the first
    record and extra keys in later records are dropped; ``union`` keeps every
    key in first-seen order. Missing keys become None.

    Raises:
        FileParseError: Invalid JSON or a record that is not an object
        EmptyDataError: Empty array
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise FileParseError(f"Invalid JSON: {e}", file_name) from e

    records = data if isinstance(data, list) else [data]

    if not records:
        raise EmptyDataError("JSON file is empty", file_name)

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise FileParseError(
                f"JSON record {index} is a {type(record).__name__}, expected an object",
                file_name
            )

    policy = JSONSchemaPolicy(schema_policy or settings.JSON_SCHEMA_POLICY)
    columns = _collect_columns(records, policy)

    rows = [
        {column: normalize_cell(record.get(column)) for column in columns}
        for record in records
    ]

    logger.debug(f"Parsed {len(rows)} JSON records into {len(columns)} columns ({policy.value})")
    return build_table(columns, rows, file_name)


class JSONParser(FileParser):
    """Parser for JSON files"""

    def __init__(self, schema_policy: Optional[Union[JSONSchemaPolicy, str]] = None):
        self.schema_policy = schema_policy

    @property
    def supported_extensions(self) -> List[str]:
        return [".json"]

    async def read(self, file: UploadedFile) -> ParsedTable:
        content = await file.read_text()
        return parse_json_table(content, schema_policy=self.schema_policy, file_name=file.name)
