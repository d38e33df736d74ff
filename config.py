"""Configuration and environment settings"""

from pydantic_settings import BaseSettings
from typing import Optional, List


class Settings(BaseSettings):
    """Application configuration"""

    # Upload validation
    MAX_FILE_SIZE_BYTES: int = 50 * 1024 * 1024  # 50MB
    ALLOWED_EXTENSIONS: str = "csv,tsv,xlsx,xls,json"

    # Type inference
    TYPE_INFERENCE_SAMPLE_SIZE: Optional[int] = None  # None = whole column
    NUMERIC_THRESHOLD: float = 0.8
    DATE_THRESHOLD: float = 0.8
    BOOLEAN_THRESHOLD: float = 0.8
    CATEGORY_MAX_UNIQUE: int = 10
    CATEGORY_MAX_RATIO: float = 0.5

    # JSON ingestion: "first_record" or "union"
    JSON_SCHEMA_POLICY: str = "first_record"

    # Statistics
    ANOMALY_Z_THRESHOLD: float = 2.5
    CORRELATION_MIN: float = 0.3
    TOP_VALUES_LIMIT: int = 5
    REPRESENTATIVE_SAMPLE_SIZE: int = 10

    # Data quality
    QUALITY_MISSING_WARN_PERCENT: float = 20.0
    QUALITY_OUTLIER_MIN_VALUES: int = 10

    # Output
    MAX_PREVIEW_ROWS: int = 10
    LOG_LEVEL: str = "WARNING"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    def get_allowed_extensions(self) -> List[str]:
        """Get allowed upload extensions (lowercase, no dot)"""
        return [e.strip().lower().lstrip(".") for e in self.ALLOWED_EXTENSIONS.split(",") if e.strip()]


settings = Settings()
