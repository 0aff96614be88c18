"""
Value object layer.

Emits the header VO, one body VO per body entity of a multi-body bill,
and the aggregate VO tying them together.
"""

from pathlib import Path

from ..core.generator import LayerGenerator, LayerResult
from ..core.model import BillConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

HEAD_VO_TEMPLATE = "vo/common/HVO.java.j2"
BODY_VO_TEMPLATE = "vo/common/BVO.java.j2"
AGG_VO_TEMPLATE = "vo/common/AggVO.java.j2"


class VoGenerator(LayerGenerator):
    """Generator for header, body and aggregate value objects."""

    name = "vo"

    def generate(self, bill: BillConfig, output_dir: Path) -> LayerResult:
        files = [
            self.emit(
                "head_vo",
                HEAD_VO_TEMPLATE,
                bill,
                output_dir,
                self.build_context(bill),
            )
        ]

        if bill.has_body:
            body_codes = bill.resolved_body_codes()
            if not body_codes:
                logger.warning("%s is multi-body but names no body code", bill.bill_code)

            for body_code in body_codes:
                context = self.build_context(
                    bill,
                    current_body_code=body_code,
                    body_fields=bill.fields_for_body(body_code),
                )
                files.append(
                    self.emit(
                        "body_vo",
                        BODY_VO_TEMPLATE,
                        bill,
                        output_dir,
                        context,
                        body_code=body_code,
                    )
                )

            files.append(
                self.emit(
                    "agg_vo",
                    AGG_VO_TEMPLATE,
                    bill,
                    output_dir,
                    self.build_context(bill, body_codes=body_codes),
                )
            )

        return LayerResult(bill, files)
