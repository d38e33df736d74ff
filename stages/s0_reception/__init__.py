"""Stage 0: Reception"""

from .receiver import Receiver, parse_file
from .validator import validate_file, ensure_valid, file_extension

__all__ = ["Receiver", "parse_file", "validate_file", "ensure_valid", "file_extension"]
