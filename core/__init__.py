"""Core abstractions for Datalens"""

from .enums import *
from .exceptions import *
from .models import *
from .interfaces import *

__all__ = [
    # Models
    "CellValue",
    "UploadedFile",
    "ValidationResult",
    "ParsedTable",
    "TopValue",
    "ColumnStatistics",
    "DatasetStatistics",
    "Anomaly",
    "BoxPlotData",
    "CorrelationPair",
    "CorrelationMatrix",
    "MissingValues",
    "OutlierSummary",
    "ColumnConsistency",
    "DataQualityReport",
    "ProfileResult",
    # Enums
    "FileType",
    "ColumnType",
    "JSONSchemaPolicy",
    "Severity",
    "CorrelationStrength",
    "CorrelationDirection",
    # Exceptions
    "DatalensError",
    "PipelineError",
    "StageError",
    "ValidationError",
    "FileParseError",
    "EmptyDataError",
    "UnsupportedFormatError",
    # Interfaces
    "Stage",
    "FileParser",
]
