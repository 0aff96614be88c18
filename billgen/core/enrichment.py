"""
Metadata enrichment pass.

Fills in the identifiers, storage types and role links that the metadata
descriptor template needs. Only gaps are filled: an identifier that is
already present is never replaced, so running the pass again on its own
output changes nothing.
"""

import copy
from typing import Optional, Sequence, Tuple

from ..logging_config import get_logger
from .identifiers import IdentifierFactory, generate_id
from .model import BillConfig, GlobalConfig
from .type_mapping import (
    REF_MODEL_KEYWORDS,
    display_type_name,
    infer_ref_model_name,
    storage_type_id,
)

logger = get_logger(__name__)

COMBO_UI_TYPE = "combo"

# Header field name -> GlobalConfig role attribute; first match per role wins
ROLE_FIELD_NAMES = {
    "billno": "bill_no_field_id",
    "corp": "corp_field_id",
    "vbusitype": "busi_type_field_id",
    "operatorid": "operator_id_field_id",
    "reviewer": "approver_field_id",
    "vstatus": "bill_status_field_id",
    "vbillstatus": "bill_status_field_id",
    "reviewnote": "approve_note_field_id",
    "reviewdate": "approve_date_field_id",
    "billdate": "bill_date_field_id",
    "createdate": "bill_date_field_id",
    "vbilltype": "bill_type_field_id",
}

# Feature switch -> (reference id, connection id)
REFERENCE_LINKS = {
    "enable_pub_bill_interface": ("ref_pub_bill_id", "connection_pub_bill_id"),
    "enable_user": ("ref_user_id", "connection_user_id"),
    "enable_bill_status": ("ref_bill_status_id", "connection_bill_status_id"),
}


def enrich_metadata(
    bill: BillConfig,
    id_factory: IdentifierFactory = generate_id,
    ref_models: Sequence[Tuple[Tuple[str, ...], str]] = REF_MODEL_KEYWORDS,
) -> BillConfig:
    """
    Return an enriched copy of a bill configuration.

    The input is left untouched; callers continue with the returned value.
    Without a global config there is nothing to enrich and an unchanged
    copy is returned.

    Args:
        bill: Bill configuration to enrich
        id_factory: Source of new identifiers
        ref_models: Keyword table used to infer combo reference entities

    Returns:
        Enriched BillConfig
    """
    enriched = copy.deepcopy(bill)
    global_config = enriched.global_config
    if global_config is None:
        logger.debug("No global config on %s, skipping enrichment", bill.bill_code)
        return enriched

    _assign_component_ids(global_config, id_factory)
    _assign_enum_ids(global_config, id_factory)
    _enrich_head_fields(enriched, id_factory, ref_models)
    _assign_reference_ids(global_config, id_factory)
    _assign_role_links(enriched)

    logger.info("Enriched metadata for %s", bill.bill_code)
    return enriched


def _fill(target, attribute: str, id_factory: IdentifierFactory) -> None:
    if not getattr(target, attribute):
        setattr(target, attribute, id_factory())


def _assign_component_ids(
    global_config: GlobalConfig, id_factory: IdentifierFactory
) -> None:
    _fill(global_config, "component_id", id_factory)
    _fill(global_config, "main_entity_id", id_factory)


def _assign_enum_ids(global_config: GlobalConfig, id_factory: IdentifierFactory) -> None:
    for enum_config in global_config.enums:
        _fill(enum_config, "id", id_factory)
        for item in enum_config.items:
            _fill(item, "id", id_factory)


def _enrich_head_fields(
    bill: BillConfig,
    id_factory: IdentifierFactory,
    ref_models: Sequence[Tuple[Tuple[str, ...], str]],
) -> None:
    enums = bill.global_config.enums
    for field in bill.head_fields:
        _fill(field, "id", id_factory)

        if not field.data_type:
            field.data_type = storage_type_id(field.type, enums)

        if not field.type_display_name:
            field.type_display_name = display_type_name(field.type)

        if (field.ui_type or "").lower() == COMBO_UI_TYPE and not field.ref_model_name:
            field.ref_model_name = infer_ref_model_name(field.label, ref_models)
            if field.ref_model_name:
                logger.debug(
                    "Inferred reference %s for field %s",
                    field.ref_model_name,
                    field.name,
                )


def _assign_reference_ids(
    global_config: GlobalConfig, id_factory: IdentifierFactory
) -> None:
    for switch, attributes in REFERENCE_LINKS.items():
        if not getattr(global_config, switch):
            continue
        for attribute in attributes:
            _fill(global_config, attribute, id_factory)


def _assign_role_links(bill: BillConfig) -> None:
    global_config = bill.global_config
    for field in bill.head_fields:
        if field.primary_key and not global_config.pk_field_id:
            global_config.pk_field_id = field.id

        role = ROLE_FIELD_NAMES.get(field.name)
        if role and not getattr(global_config, role):
            setattr(global_config, role, field.id)


def find_role_field(bill: BillConfig, role: str) -> Optional[str]:
    """Return the name of the header field linked to a role attribute."""
    if bill.global_config is None:
        return None
    field_id = getattr(bill.global_config, role, None)
    for field in bill.head_fields:
        if field_id and field.id == field_id:
            return field.name
    return None
