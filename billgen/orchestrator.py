"""
Generation orchestrator.

Runs the layer generators for one bill in a fixed order, threading the
configuration returned by each layer into the next, and turns the run
into a single GenerationResult.
"""

import time
from pathlib import Path
from typing import Callable, List, Optional, Union

from .core.config import GeneratorConfig
from .core.events import GenerationListener
from .core.exceptions import GenerationCancelled
from .core.generator import GenerationResult
from .core.model import BillConfig
from .core.statistics import collect_statistics
from .core.templates import FileSink, TemplateEngine
from .core.validation import ensure_valid
from .logging_config import get_logger
from .registry import LayerRegistry, get_registry

logger = get_logger(__name__)

BUSINESS_STAGES = ("itf", "bs", "impl", "rule")


def plan_stages(bill: BillConfig) -> List[str]:
    """
    Ordered layer names to run for a bill.

    The VO layer always runs; every other layer is gated by a global
    config toggle and skipped when the bill has no global config.
    """
    stages = []
    if bill.generate_metadata:
        stages.append("metadata")
    stages.append("vo")
    if bill.generate_client:
        stages.append("client")
    if bill.generate_business:
        stages.extend(BUSINESS_STAGES)
    return stages


def _elapsed_ms(start: float) -> float:
    # Clamp so a completed run never reports zero
    return max((time.perf_counter() - start) * 1000.0, 0.001)


class CodeGenerator:
    """Drives the layer generators for one bill at a time."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        registry: Optional[LayerRegistry] = None,
        listener: Optional[GenerationListener] = None,
        engine: Optional[TemplateEngine] = None,
        sink: Optional[FileSink] = None,
    ):
        self.config = config or GeneratorConfig()
        self.registry = registry or get_registry()
        self.listener = listener or GenerationListener()
        self.engine = engine or TemplateEngine(self.config.template_dir)
        self.sink = sink or FileSink(self.config.encoding)

    def generate(
        self,
        bill: BillConfig,
        output_dir: Union[str, Path],
        cancel_requested: Optional[Callable[[], bool]] = None,
    ) -> GenerationResult:
        """
        Generate the complete source tree for a bill.

        Any exception raised by a stage ends the run. Files written by
        earlier stages are left in place.

        Args:
            bill: Bill configuration; not modified
            output_dir: Root of the generated source tree
            cancel_requested: Polled between stages; True stops the run

        Returns:
            GenerationResult describing the run
        """
        output_dir = Path(output_dir)
        start = time.perf_counter()
        current = bill
        files: List[Path] = []
        stage = None

        logger.info("Generating %s into %s", bill.bill_code, output_dir)

        try:
            for stage in plan_stages(bill):
                if cancel_requested is not None and cancel_requested():
                    raise GenerationCancelled(f"Generation cancelled before {stage}")

                self.listener.on_stage_start(stage)
                generator = self.registry.create_generator(
                    stage, self.engine, self.sink, self.config, self.listener
                )
                layer = generator.generate(current, output_dir)
                current = layer.bill
                files.extend(layer.files)
                self.listener.on_stage_complete(stage, layer.files)

            stage = None
            stats = collect_statistics(
                output_dir, self.config.source_extension, self.config.encoding
            )

        except Exception as e:
            if stage is not None and not isinstance(e, GenerationCancelled):
                self.listener.on_stage_failed(stage, e)
            logger.error("Generation of %s failed: %s", bill.bill_code, e)
            return GenerationResult.error(
                str(e) or type(e).__name__,
                _elapsed_ms(start),
                exception=e,
                files=files,
                bill=current,
            )

        duration_ms = _elapsed_ms(start)
        logger.info(
            "Generated %d file(s) for %s in %.1f ms",
            len(files),
            bill.bill_code,
            duration_ms,
        )
        return GenerationResult(
            success=True,
            duration_ms=duration_ms,
            stats=stats,
            output_dir=output_dir,
            files=files,
            bill=current,
        )


def generate_bill(
    bill: BillConfig,
    output_dir: Union[str, Path],
    config: Optional[GeneratorConfig] = None,
    listener: Optional[GenerationListener] = None,
    validate: bool = False,
) -> GenerationResult:
    """
    Generate code for a bill with a default orchestrator.

    Args:
        bill: Bill configuration
        output_dir: Root of the generated source tree
        config: Generator configuration
        listener: Progress listener
        validate: Check required information first

    Returns:
        GenerationResult

    Raises:
        ConfigValidationError: If validate is set and the bill is incomplete
    """
    if validate:
        ensure_valid(bill)
    return CodeGenerator(config, listener=listener).generate(bill, output_dir)
