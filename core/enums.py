"""Core enumerations for Datalens"""

from enum import Enum


class FileType(str, Enum):
    """Supported file types"""
    CSV = "csv"
    TSV = "tsv"
    EXCEL_XLSX = "xlsx"
    EXCEL_XLS = "xls"
    JSON = "json"


class ColumnType(str, Enum):
    """Semantic column type"""
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    CATEGORY = "category"
    TEXT = "text"


class JSONSchemaPolicy(str, Enum):
    """How the JSON ingestor derives its column list"""
    FIRST_RECORD = "first_record"
    UNION = "union"


class Severity(str, Enum):
    """Anomaly severity level"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CorrelationStrength(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class CorrelationDirection(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
