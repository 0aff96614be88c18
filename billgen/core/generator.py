"""
Base generator interface for all layer generators.

Defines the contract that every layer (VO, client, business logic, ...)
implements, plus the result containers passed back to the orchestrator.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..logging_config import get_logger
from .config import GeneratorConfig
from .events import GenerationListener
from .exceptions import GeneratorError
from .model import BillConfig, BillType
from .naming import output_path
from .statistics import CodeStatistics
from .templates import FileSink, TemplateEngine

logger = get_logger(__name__)


@dataclass
class LayerResult:
    """Outcome of one layer: the config later layers continue with, and its files."""

    bill: BillConfig
    files: List[Path] = field(default_factory=list)


class LayerGenerator(ABC):
    """
    Abstract base class for all layer generators.

    Subclasses declare their per-variant templates as class-level dicts
    keyed by BillType. Every such dict must cover all BillType members;
    this is checked when the subclass is defined.
    """

    #: Registry name of the layer, used in events and logs
    name: str = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for attr, value in vars(cls).items():
            if not isinstance(value, dict) or not value:
                continue
            if not any(isinstance(key, BillType) for key in value):
                continue
            missing = [member.name for member in BillType if member not in value]
            if missing:
                raise TypeError(
                    f"{cls.__name__}.{attr} has no template for: {', '.join(missing)}"
                )

    def __init__(
        self,
        engine: TemplateEngine,
        sink: FileSink,
        config: Optional[GeneratorConfig] = None,
        listener: Optional[GenerationListener] = None,
    ):
        self.engine = engine
        self.sink = sink
        self.config = config or GeneratorConfig()
        self.listener = listener or GenerationListener()

    @abstractmethod
    def generate(self, bill: BillConfig, output_dir: Path) -> LayerResult:
        """
        Generate every file of this layer for one bill.

        Args:
            bill: Bill configuration
            output_dir: Root of the generated source tree

        Returns:
            LayerResult carrying the bill configuration and written paths
        """
        pass

    def build_context(self, bill: BillConfig, **extra: Any) -> Dict[str, Any]:
        """Base rendering context shared by every template."""
        context = {
            "bill": bill,
            "date": self.config.render_date(),
            "author": bill.resolved_author or self.config.author or "",
        }
        context.update(extra)
        return context

    def emit(
        self,
        kind: str,
        template: str,
        bill: BillConfig,
        output_dir: Path,
        context: Dict[str, Any],
        body_code: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Path:
        """
        Render one template and write it to its conventional path.

        Args:
            kind: Artifact kind from the output path grammar
            template: Template id
            bill: Bill being generated
            output_dir: Root of the generated source tree
            context: Rendering context
            body_code: Body entity code, for body VOs
            action: Publish action name, for publish actions

        Returns:
            Path of the written file
        """
        logger.debug("Rendering %s with %s", kind, template)
        text = self.engine.render_template(template, context)
        path = output_path(output_dir, kind, bill, body_code=body_code, action=action)
        self.sink.write(path, text, self.config.encoding)
        self.listener.on_file_written(self.name, path)
        return path


class GenerationResult:
    """Container for the outcome of one generation run."""

    def __init__(
        self,
        success: bool,
        duration_ms: float,
        stats: Optional[CodeStatistics] = None,
        error_message: Optional[str] = None,
        output_dir: Optional[Path] = None,
        files: Optional[List[Path]] = None,
        bill: Optional[BillConfig] = None,
    ):
        """
        Initialize generation result.

        Args:
            success: Whether every stage completed
            duration_ms: Elapsed wall time in milliseconds
            stats: Code statistics, present only on success
            error_message: Failure description
            output_dir: Root of the generated tree, present only on success
            files: Paths written before the run ended
            bill: Configuration as left by the last completed stage
        """
        self.success = success
        self.duration_ms = duration_ms
        self.stats = stats
        self.error_message = error_message
        self.output_dir = output_dir
        self.files = files or []
        self.bill = bill
        self.exception: Optional[BaseException] = None

    @classmethod
    def error(
        cls,
        message: str,
        duration_ms: float,
        exception: Optional[BaseException] = None,
        files: Optional[List[Path]] = None,
        bill: Optional[BillConfig] = None,
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(
            success=False,
            duration_ms=duration_ms,
            error_message=message,
            files=files,
            bill=bill,
        )
        result.exception = exception
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase result structure read by callers."""
        result: Dict[str, Any] = {
            "success": self.success,
            "durationMs": self.duration_ms,
        }
        if self.stats is not None:
            result["stats"] = {
                "fileCount": self.stats.file_count,
                "codeLines": self.stats.code_lines,
            }
        if self.error_message:
            result["errorMessage"] = self.error_message
        if self.output_dir is not None:
            result["outputDir"] = str(self.output_dir)
        return result

    def __repr__(self):
        status = "ok" if self.success else f"failed: {self.error_message}"
        return f"GenerationResult({status}, {self.duration_ms:.2f} ms)"


__all__ = [
    "GenerationResult",
    "GeneratorError",
    "LayerGenerator",
    "LayerResult",
]
