"""Utility modules"""

from .encoding import detect_encoding_bytes
from .scalars import to_number, coerce_text, normalize_cell
from .column_types import detect_column_type, infer_column_types, is_date_string, distinct_key

__all__ = [
    "detect_encoding_bytes",
    "to_number",
    "coerce_text",
    "normalize_cell",
    "detect_column_type",
    "infer_column_types",
    "is_date_string",
    "distinct_key",
]
