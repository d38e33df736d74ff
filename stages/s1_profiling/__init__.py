"""Stage 1: Profiling"""

from .profiler import Profiler
from .quality import analyze_data_quality, iqr_outliers, is_missing
from .statistics import (
    column_statistics,
    dataset_statistics,
    representative_sample,
    detect_anomalies,
    calculate_box_plot,
    calculate_correlation,
    correlation_matrix,
)

__all__ = [
    "Profiler",
    "column_statistics",
    "dataset_statistics",
    "representative_sample",
    "detect_anomalies",
    "calculate_box_plot",
    "calculate_correlation",
    "correlation_matrix",
    "analyze_data_quality",
    "iqr_outliers",
    "is_missing",
]
