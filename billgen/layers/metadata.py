"""
Metadata descriptor layer.

Runs the enrichment pass and renders the ``.bmf`` descriptor the metadata
designer imports. The enriched configuration is handed back so the
remaining layers see the same identifiers.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.enrichment import enrich_metadata, find_role_field
from ..core.generator import LayerGenerator, LayerResult
from ..core.identifiers import IdentifierFactory, generate_id
from ..core.model import BillConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

SINGLE_HEAD_TEMPLATE = "metadata/common/SingleHeadBMF.bmf.j2"

# Descriptor business role -> GlobalConfig role link
BUSI_ROLES = (
    ("billno", "bill_no_field_id"),
    ("pk_corp", "corp_field_id"),
    ("busitype", "busi_type_field_id"),
    ("operator", "operator_id_field_id"),
    ("approver", "approver_field_id"),
    ("approvestatus", "bill_status_field_id"),
    ("approvenote", "approve_note_field_id"),
    ("approvedate", "approve_date_field_id"),
    ("billdate", "bill_date_field_id"),
    ("billtype", "bill_type_field_id"),
)


def busi_role_links(bill: BillConfig) -> List[Tuple[str, str, str]]:
    """(role, field id, field name) for every role linked to a header field."""
    links = []
    for role, attribute in BUSI_ROLES:
        field_name = find_role_field(bill, attribute)
        if field_name:
            links.append((role, getattr(bill.global_config, attribute), field_name))
    return links


class MetadataGenerator(LayerGenerator):
    """Generator for the bill's metadata descriptor."""

    name = "metadata"

    def __init__(self, *args, id_factory: Optional[IdentifierFactory] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.id_factory = id_factory or generate_id

    def generate(self, bill: BillConfig, output_dir: Path) -> LayerResult:
        enriched = enrich_metadata(bill, id_factory=self.id_factory)

        if enriched.has_body:
            logger.warning(
                "%s has body entities; writing the single-head descriptor",
                bill.bill_code,
            )

        context = self.build_context(
            enriched,
            now=self._timestamp(),
            busi_roles=busi_role_links(enriched),
        )
        path = self.emit("metadata", SINGLE_HEAD_TEMPLATE, enriched, output_dir, context)
        return LayerResult(enriched, [path])

    def _timestamp(self) -> str:
        """Descriptor create/modify time; midnight of the pinned date when set."""
        if self.config.date:
            return f"{self.config.date}T00:00:00"
        return datetime.now().isoformat(timespec="seconds")
