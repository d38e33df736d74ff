"""Progress tracking"""

from abc import ABC, abstractmethod


class ProgressTracker(ABC):
    """Abstract progress tracker"""

    @abstractmethod
    def start_stage(self, stage_num: int, stage_name: str):
        """Start a stage"""
        pass

    @abstractmethod
    def complete_stage(self, stage_num: int):
        """Complete a stage"""
        pass

    @abstractmethod
    def fail(self, stage_num: int, message: str):
        """Mark stage as failed"""
        pass

    @abstractmethod
    def complete(self):
        """Mark pipeline as complete"""
        pass


class ConsoleProgress(ProgressTracker):
    """Prints one line per stage transition"""

    def __init__(self):
        self.stage_names = {}

    def start_stage(self, stage_num: int, stage_name: str):
        self.stage_names[stage_num] = stage_name
        print(f"[◉] Stage {stage_num}: {stage_name}...")

    def complete_stage(self, stage_num: int):
        print(f"[✓] Stage {stage_num}: {self._label(stage_num)} complete")

    def fail(self, stage_num: int, message: str):
        # Validation can fail before stage 0 has started
        print(f"[✗] Stage {stage_num}: {self._label(stage_num)} failed - {message}")

    def complete(self):
        print("\n[✓] Pipeline complete!")

    def _label(self, stage_num: int) -> str:
        return self.stage_names.get(stage_num, "Validation" if stage_num == 0 else "Unknown")
