"""
Client layer: controller, UI shell and their helpers.
"""

from pathlib import Path

from ..core.generator import LayerGenerator, LayerResult
from ..core.model import BillConfig, BillType


def _by_type(prefix: str) -> dict:
    return {
        bill_type: f"client/by-type/{bill_type.value}/{prefix}_{bill_type.variant}.java.j2"
        for bill_type in BillType
    }


class ClientGenerator(LayerGenerator):
    """Generator for the client-side classes of a bill."""

    name = "client"

    CONTROLLER_TEMPLATES = _by_type("Controller")
    CLIENT_UI_TEMPLATES = _by_type("ClientUI")

    # (artifact kind, template or per-variant table), in emission order
    FILES = (
        ("controller", CONTROLLER_TEMPLATES),
        ("private_btn", "client/common/IPrivateBtn.java.j2"),
        ("client_ui", CLIENT_UI_TEMPLATES),
        ("business_action", "client/common/BusinessAction.java.j2"),
        ("delegator", "client/common/Delegator.java.j2"),
        ("event_handler", "client/common/EventHandler.java.j2"),
        ("ref_model", "client/common/RefModel.java.j2"),
    )

    def generate(self, bill: BillConfig, output_dir: Path) -> LayerResult:
        bill_type = bill.bill_type
        context = self.build_context(bill)
        files = []

        for kind, template in self.FILES:
            if isinstance(template, dict):
                template = template[bill_type]
            files.append(self.emit(kind, template, bill, output_dir, context))

        return LayerResult(bill, files)
