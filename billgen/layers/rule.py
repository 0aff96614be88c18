"""
Business rule layer.
"""

from pathlib import Path

from ..core.generator import LayerGenerator, LayerResult
from ..core.model import BillConfig

RULE_TEMPLATE = "rule/by-type/Rule.java.j2"


class RuleGenerator(LayerGenerator):
    name = "rule"

    def generate(self, bill: BillConfig, output_dir: Path) -> LayerResult:
        path = self.emit("rule", RULE_TEMPLATE, bill, output_dir, self.build_context(bill))
        return LayerResult(bill, [path])
