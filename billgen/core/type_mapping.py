"""
Type mapping tables for metadata generation.

Maps a field's logical type to the storage type identifiers registered
in the target framework, and to the short type names shown in the
metadata designer.
"""

from typing import Iterable, Optional, Sequence, Tuple

from .model import EnumConfig

ENUM_PREFIX = "enum:"

# Pre-registered storage type identifiers
STRING_TYPE_ID = "BS000010000100001001"
INTEGER_TYPE_ID = "BS000010000100001002"
DOUBLE_TYPE_ID = "BS000010000100001003"
UFDOUBLE_TYPE_ID = "BS000010000100001004"
UFBOOLEAN_TYPE_ID = "BS000010000100001032"
UFDATE_TYPE_ID = "BS000010000100001033"
UFID_TYPE_ID = "BS000010000100001051"

STORAGE_TYPE_IDS = {
    "string": STRING_TYPE_ID,
    "integer": INTEGER_TYPE_ID,
    "int": INTEGER_TYPE_ID,
    "double": DOUBLE_TYPE_ID,
    "decimal": DOUBLE_TYPE_ID,
    "ufdouble": UFDOUBLE_TYPE_ID,
    "ufboolean": UFBOOLEAN_TYPE_ID,
    "ufdate": UFDATE_TYPE_ID,
    "ufid": UFID_TYPE_ID,
    "enum": STRING_TYPE_ID,
}

ENUM_DISPLAY_NAME = "状态"

DISPLAY_TYPE_NAMES = {
    "string": "String",
    "integer": "Integer",
    "int": "Integer",
    "double": "Double",
    "ufdate": "UFDate",
    "ufboolean": "UFBoolean",
    "ufdouble": "UFDouble",
    "ufid": "UFID",
    "enum": ENUM_DISPLAY_NAME,
}

# Label keywords -> reference entity name, checked in order
REF_MODEL_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("操作员", "制单人", "审批人"), "操作员"),
    (("公司", "组织"), "公司目录(集团)"),
    (("业务类型",), "业务类型"),
    (("单据类型",), "影响因素单据类型"),
    (("部门",), "部门"),
    (("物料", "产品"), "物料基本(集团)"),
)


def storage_type_id(
    logical_type: Optional[str], enums: Iterable[EnumConfig] = ()
) -> str:
    """
    Resolve a logical field type to its storage type identifier.

    ``enum:<Name>`` resolves to the id of the enum named exactly ``Name``.
    Anything that cannot be resolved maps to the String identifier.

    Args:
        logical_type: Field type such as ``UFDate`` or ``enum:Status``
        enums: Enumerations available for ``enum:`` lookups

    Returns:
        Storage type identifier
    """
    if not logical_type:
        return STRING_TYPE_ID

    if logical_type.lower().startswith(ENUM_PREFIX):
        enum_name = logical_type[len(ENUM_PREFIX) :]
        for enum_config in enums:
            if enum_config.name == enum_name:
                return enum_config.id or STRING_TYPE_ID
        return STRING_TYPE_ID

    return STORAGE_TYPE_IDS.get(logical_type.lower(), STRING_TYPE_ID)


def display_type_name(logical_type: Optional[str]) -> str:
    """Resolve a logical field type to its display name, defaulting to String."""
    if not logical_type:
        return "String"
    return DISPLAY_TYPE_NAMES.get(logical_type.lower(), "String")


def infer_ref_model_name(
    label: Optional[str],
    table: Sequence[Tuple[Tuple[str, ...], str]] = REF_MODEL_KEYWORDS,
) -> Optional[str]:
    """
    Guess the reference entity behind a combo field from its label.

    Args:
        label: Display label of the field
        table: Ordered (keywords, entity) pairs; first hit wins

    Returns:
        Reference entity name or None
    """
    if not label:
        return None

    for keywords, entity in table:
        if any(keyword in label for keyword in keywords):
            return entity

    return None
