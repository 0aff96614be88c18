"""
Progress callbacks emitted while a bill is generated.
"""

from pathlib import Path
from typing import List

from ..logging_config import get_logger

logger = get_logger(__name__)


class GenerationListener:
    """Receives stage and file events. Every hook is a no-op by default."""

    def on_stage_start(self, stage: str):
        pass

    def on_file_written(self, stage: str, path: Path):
        pass

    def on_stage_complete(self, stage: str, files: List[Path]):
        pass

    def on_stage_failed(self, stage: str, error: Exception):
        pass


class LoggingListener(GenerationListener):
    """Reports generation progress through the billgen logger."""

    def on_stage_start(self, stage: str):
        logger.info("Stage %s started", stage)

    def on_file_written(self, stage: str, path: Path):
        logger.info("[%s] wrote %s", stage, path)

    def on_stage_complete(self, stage: str, files: List[Path]):
        logger.info("Stage %s finished, %d file(s)", stage, len(files))

    def on_stage_failed(self, stage: str, error: Exception):
        logger.error("Stage %s failed: %s", stage, error)
