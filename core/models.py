"""Core data models for Datalens"""

import asyncio
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .enums import (
    ColumnType, Severity, CorrelationStrength, CorrelationDirection
)
from utils.encoding import detect_encoding_bytes


# A single table cell after ingestion
CellValue = Union[None, bool, int, float, str]


# ─────────────────────────────────────────────────────────────
# Uploads
# ─────────────────────────────────────────────────────────────

class UploadedFile(BaseModel):
    """A file handed to Datalens: a name, a byte size and its content"""
    name: str
    size: int = Field(ge=0)
    path: Optional[str] = None
    content: Optional[bytes] = None

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "UploadedFile":
        path = Path(file_path)
        return cls(name=path.name, size=path.stat().st_size, path=str(path.absolute()))

    @classmethod
    def from_bytes(cls, name: str, content: bytes) -> "UploadedFile":
        return cls(name=name, size=len(content), content=content)

    async def read_bytes(self) -> bytes:
        """Full binary content"""
        if self.content is not None:
            return self.content
        if self.path is None:
            raise ValueError(f"No content available for {self.name}")
        return await asyncio.to_thread(Path(self.path).read_bytes)

    async def read_text(self) -> str:
        """Full content decoded with the detected encoding"""
        raw = await self.read_bytes()
        encoding = detect_encoding_bytes(raw)
        return raw.decode(encoding, errors="replace")


class ValidationResult(BaseModel):
    """Outcome of the pre-flight upload check"""
    valid: bool
    error: Optional[str] = None


# ─────────────────────────────────────────────────────────────
# Ingestion
# ─────────────────────────────────────────────────────────────

class ParsedTable(BaseModel):
    """Uniform result of ingesting a file"""
    model_config = ConfigDict(frozen=True)

    columns: list[str]
    types: list[ColumnType]
    rows: list[dict[str, CellValue]]
    source_name: Optional[str] = None

    @model_validator(mode="after")
    def check_alignment(self) -> "ParsedTable":
        if len(self.types) != len(self.columns):
            raise ValueError(
                f"{len(self.types)} types given for {len(self.columns)} columns"
            )
        if len(set(self.columns)) != len(self.columns):
            raise ValueError("Column names must be unique")
        return self

    @computed_field
    @property
    def row_count(self) -> int:
        return len(self.rows)

    @computed_field
    @property
    def column_count(self) -> int:
        return len(self.columns)

    def column_type(self, column: str) -> ColumnType:
        """Type assigned to a column"""
        return self.types[self.columns.index(column)]

    def column_values(self, column: str) -> list[CellValue]:
        """All values of a column in row order (absent keys as None)"""
        return [row.get(column) for row in self.rows]

    def columns_of_type(self, column_type: ColumnType) -> list[str]:
        return [c for c, t in zip(self.columns, self.types) if t == column_type]


# ─────────────────────────────────────────────────────────────
# Statistics
# ─────────────────────────────────────────────────────────────

class TopValue(BaseModel):
    value: str
    count: int


class ColumnStatistics(BaseModel):
    """Summary of a single column"""
    column: str
    type: ColumnType
    count: int
    null_count: int
    unique_count: int
    sample_values: list[CellValue] = []

    # Numeric columns
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    sum: Optional[float] = None
    std_dev: Optional[float] = None

    # Category / text columns
    top_values: list[TopValue] = []


class DatasetStatistics(BaseModel):
    """Statistics over a whole table"""
    total_rows: int
    total_columns: int
    column_stats: list[ColumnStatistics] = []
    representative_sample: list[dict[str, CellValue]] = []


class Anomaly(BaseModel):
    """A value whose z-score exceeds the threshold"""
    column: str
    value: float
    index: int
    z_score: float
    severity: Severity
    row: dict[str, CellValue] = {}


class BoxPlotData(BaseModel):
    min: float = 0.0
    q1: float = 0.0
    median: float = 0.0
    q3: float = 0.0
    max: float = 0.0
    outliers: list[float] = []
    mean: float = 0.0
    std_dev: float = 0.0


class CorrelationPair(BaseModel):
    column_a: str
    column_b: str
    correlation: float
    strength: CorrelationStrength
    direction: CorrelationDirection


class CorrelationMatrix(BaseModel):
    columns: list[str] = []
    matrix: list[list[float]] = []
    significant_pairs: list[CorrelationPair] = []


# ─────────────────────────────────────────────────────────────
# Data quality
# ─────────────────────────────────────────────────────────────

class MissingValues(BaseModel):
    column: str
    count: int
    percentage: float


class OutlierSummary(BaseModel):
    """IQR outliers of a column, first few values only"""
    column: str
    values: list[float] = []
    count: int


class ColumnConsistency(BaseModel):
    column: str
    detected_type: str
    issues: Optional[str] = None


class DataQualityReport(BaseModel):
    """Missing values, duplicates, outliers and type consistency of a table"""
    missing_values: list[MissingValues] = []
    duplicates: int = 0
    outliers: list[OutlierSummary] = []
    data_types: list[ColumnConsistency] = []
    recommendations: list[str] = []
    overall_score: float = 100.0


class ProfileResult(BaseModel):
    """Output of the profiling stage"""
    statistics: DatasetStatistics
    anomalies: dict[str, list[Anomaly]] = {}
    correlations: Optional[CorrelationMatrix] = None
    quality: Optional[DataQualityReport] = None

