"""Cell value coercion

Every cell leaving an ingestor is one of ``None``, ``bool``, ``int``,
``float`` or ``str``. Parsers feed raw values through these helpers so the
type detector only ever sees that closed set.
"""

import json
import math
import re
from datetime import date, datetime, time
from typing import Any, Optional

import pandas as pd

NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")
INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")

TRUE_LITERALS = {"true", "TRUE", "True"}
FALSE_LITERALS = {"false", "FALSE", "False"}


def to_number(value: Any) -> Optional[float]:
    """
    Lenient numeric coercion

    Numbers and numeric-looking strings yield a finite float, everything else
    (booleans, NaN/inf, free text) yields None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        if not NUMERIC_PATTERN.match(value):
            return None
        number = float(value)
    else:
        return None
    return number if math.isfinite(number) else None


def coerce_text(text: Optional[str]) -> Any:
    """Dynamic typing for delimited text cells"""
    if text is None or text == "":
        return None
    if text in TRUE_LITERALS:
        return True
    if text in FALSE_LITERALS:
        return False
    if NUMERIC_PATTERN.match(text):
        if INTEGER_PATTERN.match(text):
            return int(text)
        number = float(text)
        if math.isfinite(number):
            return number
    return text


def normalize_cell(value: Any) -> Any:
    """Map a value produced by pandas/openpyxl/json onto the cell variant"""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, (pd.Timestamp, datetime)):
        if value.hour == value.minute == value.second == value.microsecond == 0:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), default=str)
    if pd.api.types.is_bool(value):
        return bool(value)
    if pd.api.types.is_integer(value):
        return int(value)
    if pd.api.types.is_float(value):
        number = float(value)
        return None if math.isnan(number) else number
    if pd.isna(value):
        return None
    return str(value)
