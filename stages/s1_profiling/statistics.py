"""Descriptive statistics, outliers and correlations over a ParsedTable"""

import math
from typing import List, Optional, Sequence

import pandas as pd

from core.models import (
    ParsedTable, ColumnStatistics, DatasetStatistics, TopValue, Anomaly,
    BoxPlotData, CorrelationPair, CorrelationMatrix
)
from core.enums import ColumnType, Severity, CorrelationStrength, CorrelationDirection
from utils.scalars import to_number
from utils.column_types import distinct_key
from config import settings


def _numeric_series(values: Sequence) -> pd.Series:
    """Finite numeric values, keeping the row index of each"""
    series = pd.Series([to_number(v) for v in values], dtype="float64")
    return series.dropna()


def column_statistics(table: ParsedTable, column: str) -> ColumnStatistics:
    """
    Summarise one column

    Numeric columns get min/max/mean/median/sum/std, category and text
    columns their most frequent values.
    """
    column_type = table.column_type(column)
    values = table.column_values(column)
    present = [v for v in values if v is not None and v != ""]

    stats = ColumnStatistics(
        column=column,
        type=column_type,
        count=len(values),
        null_count=len(values) - len(present),
        unique_count=len({distinct_key(v) for v in present}),
        sample_values=present[:3],
    )

    if column_type == ColumnType.NUMBER:
        numbers = _numeric_series(present)
        if not numbers.empty:
            stats.min = float(numbers.min())
            stats.max = float(numbers.max())
            stats.mean = float(numbers.mean())
            stats.median = float(numbers.median())
            stats.sum = float(numbers.sum())
            stats.std_dev = float(numbers.std(ddof=0))

    if column_type in (ColumnType.CATEGORY, ColumnType.TEXT) and present:
        counts = pd.Series([str(v) for v in present]).value_counts(sort=True)
        stats.top_values = [
            TopValue(value=value, count=int(count))
            for value, count in counts.head(settings.TOP_VALUES_LIMIT).items()
        ]

    return stats


def representative_sample(rows: Sequence[dict], sample_size: Optional[int] = None) -> List[dict]:
    """
    Rows from the start, the middle and the end of a table

    Tables no longer than ``sample_size`` come back whole. Otherwise three
    equal segments of ``sample_size // 3`` rows are taken.
    """
    if sample_size is None:
        sample_size = settings.REPRESENTATIVE_SAMPLE_SIZE

    rows = list(rows)
    if len(rows) <= sample_size:
        return rows

    segment = sample_size // 3
    if segment == 0:
        return rows[:sample_size]

    middle = (len(rows) - segment) // 2
    return rows[:segment] + rows[middle:middle + segment] + rows[-segment:]


def dataset_statistics(table: ParsedTable) -> DatasetStatistics:
    """Statistics for every column of the table"""
    return DatasetStatistics(
        total_rows=table.row_count,
        total_columns=table.column_count,
        column_stats=[column_statistics(table, column) for column in table.columns],
        representative_sample=representative_sample(table.rows),
    )


def _severity(z_score: float) -> Severity:
    if z_score > 4:
        return Severity.HIGH
    if z_score > 3:
        return Severity.MEDIUM
    return Severity.LOW


def detect_anomalies(
    table: ParsedTable,
    column: str,
    threshold: Optional[float] = None,
) -> List[Anomaly]:
    """
    Z-score outliers of a column

    Uses the population standard deviation. Rows whose absolute z-score is
    strictly above the threshold are returned in row order; a constant or
    non-numeric column has none.
    """
    if threshold is None:
        threshold = settings.ANOMALY_Z_THRESHOLD

    numbers = _numeric_series(table.column_values(column))
    if numbers.empty:
        return []

    std_dev = numbers.std(ddof=0)
    if std_dev == 0 or math.isnan(std_dev):
        return []

    z_scores = ((numbers - numbers.mean()) / std_dev).abs()
    flagged = z_scores[z_scores > threshold]

    return [
        Anomaly(
            column=column,
            value=float(numbers[index]),
            index=int(index),
            z_score=float(z_score),
            severity=_severity(z_score),
            row=table.rows[int(index)],
        )
        for index, z_score in flagged.items()
    ]


def calculate_box_plot(values: Sequence[float]) -> BoxPlotData:
    """Quartiles, 1.5 IQR fences and outliers of a list of numbers"""
    if len(values) == 0:
        return BoxPlotData()

    ordered = sorted(float(v) for v in values)
    n = len(ordered)

    median = ordered[n // 2]
    q1 = ordered[n // 4]
    q3 = ordered[(3 * n) // 4]

    iqr = q3 - q1
    lower_bound = q1 - 1.5 * iqr
    upper_bound = q3 + 1.5 * iqr

    outliers = [v for v in ordered if v < lower_bound or v > upper_bound]
    inliers = [v for v in ordered if lower_bound <= v <= upper_bound]

    series = pd.Series(ordered)
    return BoxPlotData(
        min=inliers[0] if inliers else ordered[0],
        q1=q1,
        median=median,
        q3=q3,
        max=inliers[-1] if inliers else ordered[-1],
        outliers=outliers,
        mean=float(series.mean()),
        std_dev=float(series.std(ddof=0)),
    )


def calculate_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation, 0 when undefined"""
    if len(x) != len(y) or len(x) == 0:
        return 0.0

    xs = pd.Series(x, dtype="float64")
    ys = pd.Series(y, dtype="float64")
    dx = xs - xs.mean()
    dy = ys - ys.mean()

    denominator = math.sqrt(float((dx * dx).sum()) * float((dy * dy).sum()))
    if denominator == 0:
        return 0.0
    return float((dx * dy).sum()) / denominator


def _strength(correlation: float) -> CorrelationStrength:
    magnitude = abs(correlation)
    if magnitude > 0.7:
        return CorrelationStrength.STRONG
    if magnitude > 0.5:
        return CorrelationStrength.MODERATE
    return CorrelationStrength.WEAK


def correlation_matrix(
    table: ParsedTable,
    columns: Optional[Sequence[str]] = None,
) -> CorrelationMatrix:
    """
    Pairwise Pearson correlations

    Defaults to the table's number columns. Only rows where both columns hold
    a number enter a pair's coefficient. Pairs above ``CORRELATION_MIN`` are
    listed, strongest first.
    """
    columns = list(columns) if columns is not None else table.columns_of_type(ColumnType.NUMBER)
    frame = pd.DataFrame(
        {column: [to_number(v) for v in table.column_values(column)] for column in columns},
        dtype="float64",
    )

    size = len(columns)
    matrix = [[0.0] * size for _ in range(size)]
    pairs: List[CorrelationPair] = []

    for i in range(size):
        matrix[i][i] = 1.0
        for j in range(i + 1, size):
            both = frame[[columns[i], columns[j]]].dropna()
            correlation = calculate_correlation(
                both[columns[i]].tolist(), both[columns[j]].tolist()
            )
            matrix[i][j] = matrix[j][i] = correlation

            if abs(correlation) > settings.CORRELATION_MIN:
                pairs.append(CorrelationPair(
                    column_a=columns[i],
                    column_b=columns[j],
                    correlation=correlation,
                    strength=_strength(correlation),
                    direction=(
                        CorrelationDirection.POSITIVE if correlation > 0
                        else CorrelationDirection.NEGATIVE
                    ),
                ))

    pairs.sort(key=lambda pair: abs(pair.correlation), reverse=True)
    return CorrelationMatrix(columns=columns, matrix=matrix, significant_pairs=pairs)
