"""Upload pre-flight checks"""

from typing import Any, Optional

from core.models import ValidationResult
from core.exceptions import ValidationError
from config import settings


def file_extension(file_name: str) -> Optional[str]:
    """Lowercase text after the last dot, None when there is none"""
    if not file_name or "." not in file_name:
        return None
    extension = file_name.rsplit(".", 1)[1].lower()
    return extension or None


def validate_file(file: Any) -> ValidationResult:
    """
    Check an upload's extension and size before parsing

    Args:
        file: Anything with ``name`` and ``size`` (bytes) attributes

    Returns:
        ValidationResult, with a human-readable error when rejected
    """
    allowed = settings.get_allowed_extensions()
    extension = file_extension(file.name)

    if extension is None or extension not in allowed:
        return ValidationResult(
            valid=False,
            error=f"Invalid file type. Allowed types: {', '.join(allowed)}",
        )

    if file.size > settings.MAX_FILE_SIZE_BYTES:
        limit_mb = settings.MAX_FILE_SIZE_BYTES // (1024 * 1024)
        return ValidationResult(
            valid=False,
            error=f"File size exceeds {limit_mb}MB limit",
        )

    return ValidationResult(valid=True)


def ensure_valid(file: Any) -> None:
    """Raise ValidationError if the upload would be rejected"""
    result = validate_file(file)
    if not result.valid:
        raise ValidationError(result.error, getattr(file, "name", None))
