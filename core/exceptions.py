"""Custom exceptions for Datalens"""


class DatalensError(Exception):
    """Base exception for all Datalens errors"""
    pass


class PipelineError(DatalensError):
    """Error in pipeline execution"""
    def __init__(self, message: str, stage: int = None):
        super().__init__(message)
        self.stage = stage


class StageError(DatalensError):
    """Error in a specific stage"""
    def __init__(self, stage: int, message: str):
        super().__init__(f"Stage {stage}: {message}")
        self.stage = stage
        self.message = message


class ValidationError(DatalensError):
    """Uploaded file rejected before parsing"""
    def __init__(self, message: str, file_name: str = None):
        super().__init__(message)
        self.file_name = file_name


class FileParseError(DatalensError):
    """Error parsing file"""
    def __init__(self, message: str, file_name: str = None):
        super().__init__(message)
        self.file_name = file_name


class EmptyDataError(FileParseError):
    """File is well-formed but holds no data rows"""
    pass


class UnsupportedFormatError(DatalensError):
    """No parser registered for the file extension"""
    def __init__(self, message: str, extension: str = None):
        super().__init__(message)
        self.extension = extension
