"""Column type detection"""

import re
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence

from core.enums import ColumnType
from config import settings
from .scalars import to_number

DATE_PATTERN = re.compile(
    r"^\s*(?:(?P<iso>\d{4}-\d{2}-\d{2})|(?P<us>\d{2}/\d{2}/\d{4}))"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?\s*$"
)

BOOLEAN_LITERALS = {"true", "false", "yes", "no"}


def is_date_string(value: Any) -> bool:
    """ISO (YYYY-MM-DD) or US (MM/DD/YYYY) date naming a real calendar day"""
    if not isinstance(value, str):
        return False
    match = DATE_PATTERN.match(value)
    if not match:
        return False
    try:
        if match.group("iso"):
            datetime.strptime(match.group("iso"), "%Y-%m-%d")
        else:
            datetime.strptime(match.group("us"), "%m/%d/%Y")
    except ValueError:
        return False
    return True


def is_boolean_like(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value.lower() in BOOLEAN_LITERALS


def distinct_key(value: Any):
    """Equality key for counting distinct cells"""
    # 1 and 1.0 are the same cell; "1" and True both differ from 1
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (int, float)):
        return ("number", float(value))
    return (type(value).__name__, value)


def detect_column_type(values: Iterable[Any], sample_size: Optional[int] = None) -> ColumnType:
    """
    Classify a column from its values

    Checks run in order and the first one that holds wins: number, date,
    boolean, category, then text. Each ratio test must be strictly above its
    threshold.

    Args:
        values: Column values in row order
        sample_size: Only look at the first N values (defaults to config,
            None means all of them)

    Returns:
        ColumnType, TEXT when there is nothing to look at
    """
    if sample_size is None:
        sample_size = settings.TYPE_INFERENCE_SAMPLE_SIZE

    values = list(values)
    if sample_size is not None:
        values = values[:sample_size]

    valid = [v for v in values if v is not None and v != ""]
    total = len(valid)
    if total == 0:
        return ColumnType.TEXT

    numeric_count = sum(1 for v in valid if to_number(v) is not None)
    if numeric_count / total > settings.NUMERIC_THRESHOLD:
        return ColumnType.NUMBER

    date_count = sum(1 for v in valid if is_date_string(v))
    if date_count / total > settings.DATE_THRESHOLD:
        return ColumnType.DATE

    bool_count = sum(1 for v in valid if is_boolean_like(v))
    if bool_count / total > settings.BOOLEAN_THRESHOLD:
        return ColumnType.BOOLEAN

    unique_count = len({distinct_key(v) for v in valid})
    if unique_count <= settings.CATEGORY_MAX_UNIQUE and unique_count < total * settings.CATEGORY_MAX_RATIO:
        return ColumnType.CATEGORY

    return ColumnType.TEXT


def infer_column_types(columns: Sequence[str], rows: Sequence[dict]) -> List[ColumnType]:
    """Detect the type of every column over its full value sequence"""
    return [
        detect_column_type(row.get(column) for row in rows)
        for column in columns
    ]
