"""Data quality report: missing values, duplicates, IQR outliers and mixed types"""

import logging
from typing import Any, List

from core.models import (
    ParsedTable, DataQualityReport, MissingValues, OutlierSummary, ColumnConsistency
)
from utils.scalars import to_number
from utils.column_types import distinct_key, is_date_string
from config import settings

logger = logging.getLogger(__name__)

OUTLIER_PREVIEW = 5


def is_missing(value: Any) -> bool:
    """None, empty text and the literal string "null" (any case)"""
    if value is None:
        return True
    return isinstance(value, str) and (value == "" or value.lower() == "null")


def iqr_outliers(values: List[float]) -> List[float]:
    """Values outside the 1.5 IQR fences, in their original order"""
    if len(values) < 4:
        return []

    ordered = sorted(values)
    q1 = ordered[int(len(ordered) * 0.25)]
    q3 = ordered[int(len(ordered) * 0.75)]
    iqr = q3 - q1
    lower_bound = q1 - 1.5 * iqr
    upper_bound = q3 + 1.5 * iqr

    return [v for v in values if v < lower_bound or v > upper_bound]


def _value_kind(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if to_number(value) is not None:
        return "number"
    if is_date_string(value):
        return "date"
    return "string"


def analyze_data_quality(table: ParsedTable) -> DataQualityReport:
    """
    Score a table from 0 to 100 and list what lowers the score

    Deductions:
        - a column more than ``QUALITY_MISSING_WARN_PERCENT`` empty loses
          half its missing percentage, at most 10 points
        - duplicate rows cost their percentage, at most 15 points
        - each column mixing value kinds costs 5 points

    IQR outliers are reported for columns with more than
    ``QUALITY_OUTLIER_MIN_VALUES`` numbers but do not change the score.
    """
    report = DataQualityReport()
    rows = table.rows

    if not rows:
        report.recommendations.append("Dataset is empty - please upload data with values")
        report.overall_score = 0.0
        return report

    score = 100.0
    total = len(rows)

    for column in table.columns:
        missing = sum(1 for value in table.column_values(column) if is_missing(value))
        if missing == 0:
            continue

        percentage = missing / total * 100
        report.missing_values.append(MissingValues(
            column=column, count=missing, percentage=round(percentage, 2)
        ))
        if percentage > settings.QUALITY_MISSING_WARN_PERCENT:
            report.recommendations.append(
                f'Column "{column}" has {percentage:.1f}% missing values - consider filling or removing'
            )
            score -= min(10.0, percentage / 2)

    distinct_rows = {
        tuple(distinct_key(row.get(column)) for column in table.columns) for row in rows
    }
    report.duplicates = total - len(distinct_rows)
    if report.duplicates:
        percentage = report.duplicates / total * 100
        report.recommendations.append(
            f"Found {report.duplicates} duplicate rows ({percentage:.1f}%) - consider removing"
        )
        score -= min(15.0, percentage)

    for column in table.columns:
        numbers = [n for n in map(to_number, table.column_values(column)) if n is not None]
        if len(numbers) <= settings.QUALITY_OUTLIER_MIN_VALUES:
            continue

        outliers = iqr_outliers(numbers)
        if not outliers:
            continue

        report.outliers.append(OutlierSummary(
            column=column, values=outliers[:OUTLIER_PREVIEW], count=len(outliers)
        ))
        if len(outliers) > len(numbers) * 0.05:
            report.recommendations.append(
                f'Column "{column}" has {len(outliers)} outliers - review for data quality'
            )

    for column in table.columns:
        kinds = {}
        for value in table.column_values(column):
            if value is not None and value != "":
                kinds.setdefault(_value_kind(value), None)

        consistency = ColumnConsistency(
            column=column,
            detected_type="mixed" if len(kinds) > 1 else next(iter(kinds), "empty"),
        )
        if len(kinds) > 1:
            consistency.issues = f"Mixed types found: {', '.join(kinds)}"
            report.recommendations.append(
                f'Column "{column}" has mixed data types - consider data cleaning'
            )
            score -= 5
        report.data_types.append(consistency)

    if not report.recommendations:
        report.recommendations.append("✓ Data quality is excellent - no issues detected!")
    if report.duplicates == 0:
        report.recommendations.append("✓ No duplicate rows found")
    if not report.missing_values:
        report.recommendations.append("✓ No missing values detected")

    report.overall_score = max(0.0, min(100.0, score))
    logger.debug(f"Quality score {report.overall_score:.1f} for {table.source_name or 'table'}")
    return report
