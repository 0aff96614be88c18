"""
Service implementation layer.
"""

from pathlib import Path

from ..core.generator import LayerGenerator, LayerResult
from ..core.model import BillConfig

IMPLEMENTATION_TEMPLATE = "impl/by-type/ServerImpl.java.j2"


class ImplementationGenerator(LayerGenerator):
    """Generator for the ``{code}Impl`` class behind the service interface."""

    name = "impl"

    def generate(self, bill: BillConfig, output_dir: Path) -> LayerResult:
        path = self.emit(
            "implementation",
            IMPLEMENTATION_TEMPLATE,
            bill,
            output_dir,
            self.build_context(bill),
        )
        return LayerResult(bill, [path])
