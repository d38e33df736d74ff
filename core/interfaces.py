"""Abstract base classes for Datalens components"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class Stage(ABC, Generic[InputT, OutputT]):
    """Abstract base class for all pipeline stages"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable stage name"""
        pass

    @property
    @abstractmethod
    def stage_number(self) -> int:
        """Stage number (0-1)"""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """Execute the stage"""
        pass

    @abstractmethod
    def validate_input(self, input_data: InputT) -> bool:
        """Validate input before processing"""
        pass


class FileParser(ABC):
    """Abstract base class for file parsers"""

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """List of supported file extensions"""
        pass

    @abstractmethod
    async def read(self, file: "UploadedFile") -> "ParsedTable":
        """Load the file's content and parse it into a ParsedTable"""
        pass
