"""Pipeline orchestrator"""

import logging
from dataclasses import dataclass
from typing import Optional

from core.models import UploadedFile, ValidationResult, ParsedTable, ProfileResult
from core.exceptions import PipelineError, StageError
from stages import Receiver, Profiler
from stages.s0_reception import validate_file
from ui.progress import ProgressTracker

logger = logging.getLogger(__name__)


@dataclass
class PipelineContext:
    """Shared context passed through pipeline"""
    file: UploadedFile
    validation: Optional[ValidationResult] = None
    table: Optional[ParsedTable] = None
    profile: Optional[ProfileResult] = None


class Orchestrator:
    """Pipeline coordinator"""

    def __init__(
        self,
        progress: ProgressTracker,
        json_schema_policy: Optional[str] = None,
        anomaly_threshold: Optional[float] = None,
    ):
        self.progress = progress

        # Initialize stages
        self.stages = {
            0: Receiver(json_schema_policy),
            1: Profiler(anomaly_threshold),
        }

    async def run(self, file: UploadedFile) -> PipelineContext:
        """Validate, parse and profile a file"""
        ctx = PipelineContext(file=file)

        try:
            ctx.validation = validate_file(file)
            if not ctx.validation.valid:
                raise StageError(0, ctx.validation.error)

            # Stage 0: Reception
            ctx.table = await self._execute_stage(0, file)

            # Stage 1: Profiling
            ctx.profile = await self._execute_stage(1, ctx.table)

            self.progress.complete()
            return ctx

        except StageError as e:
            logger.error(f"Pipeline failed for {file.name}: {e}")
            self.progress.fail(e.stage, str(e))
            raise PipelineError(f"Pipeline failed at stage {e.stage}: {e}", stage=e.stage) from e

    async def _execute_stage(self, stage_num: int, input_data):
        """Execute a single stage with progress tracking"""
        stage = self.stages[stage_num]

        self.progress.start_stage(stage_num, stage.name)

        if not stage.validate_input(input_data):
            raise StageError(stage_num, "Invalid input")

        result = await stage.execute(input_data)

        self.progress.complete_stage(stage_num)
        return result
