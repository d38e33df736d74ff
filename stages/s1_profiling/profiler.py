"""Stage 1: Profiling"""

import logging
from typing import Optional

from core.interfaces import Stage
from core.models import ParsedTable, ProfileResult
from core.enums import ColumnType
from core.exceptions import StageError
from config import settings
from .statistics import dataset_statistics, detect_anomalies, correlation_matrix
from .quality import analyze_data_quality

logger = logging.getLogger(__name__)


class Profiler(Stage[ParsedTable, ProfileResult]):
    """Stage 1: Descriptive statistics, outliers and data quality of a parsed table"""

    @property
    def name(self) -> str:
        return "Profiling"

    @property
    def stage_number(self) -> int:
        return 1

    def __init__(self, anomaly_threshold: Optional[float] = None):
        self.anomaly_threshold = (
            settings.ANOMALY_Z_THRESHOLD if anomaly_threshold is None else anomaly_threshold
        )

    def validate_input(self, input_data: ParsedTable) -> bool:
        return isinstance(input_data, ParsedTable)

    async def execute(self, input_data: ParsedTable) -> ProfileResult:
        """Execute profiling stage"""
        if not self.validate_input(input_data):
            raise StageError(self.stage_number, "Expected a ParsedTable")

        statistics = dataset_statistics(input_data)

        anomalies = {}
        for column in input_data.columns_of_type(ColumnType.NUMBER):
            found = detect_anomalies(input_data, column, self.anomaly_threshold)
            if found:
                anomalies[column] = found
                logger.info(f"{len(found)} anomalies in column {column!r}")

        correlations = None
        if len(input_data.columns_of_type(ColumnType.NUMBER)) >= 2:
            correlations = correlation_matrix(input_data)

        quality = analyze_data_quality(input_data)
        logger.info(f"Quality score {quality.overall_score:.1f}, {quality.duplicates} duplicate rows")

        return ProfileResult(
            statistics=statistics,
            anomalies=anomalies,
            correlations=correlations,
            quality=quality,
        )
