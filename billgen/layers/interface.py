"""
Service interface layer.
"""

from pathlib import Path

from ..core.generator import LayerGenerator, LayerResult
from ..core.model import BillConfig

INTERFACE_TEMPLATE = "itf/by-type/IServer.java.j2"


class InterfaceGenerator(LayerGenerator):
    """Generator for the ``I{code}`` service interface."""

    name = "itf"

    def generate(self, bill: BillConfig, output_dir: Path) -> LayerResult:
        path = self.emit(
            "interface", INTERFACE_TEMPLATE, bill, output_dir, self.build_context(bill)
        )
        return LayerResult(bill, [path])
