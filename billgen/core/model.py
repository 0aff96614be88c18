"""
Core data model for bill code generation.

Normalizes the editor's bill description into dataclasses that every
layer generator and template works with consistently.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)


class BillType(Enum):
    """Document layout variants."""

    SINGLE = "single"
    MULTI = "multi"
    ARCHIVE = "archive"

    @property
    def description(self) -> str:
        return _BILL_TYPE_DESCRIPTIONS[self]

    @property
    def variant(self) -> str:
        """Capitalized code used in template file names (``Single``)."""
        return self.value.capitalize()

    @classmethod
    def from_code(cls, code: Any) -> "BillType":
        """
        Resolve a bill type code.

        Unknown or empty codes resolve to SINGLE, matching the editor.

        Args:
            code: Code string or BillType

        Returns:
            Matching BillType
        """
        if isinstance(code, BillType):
            return code

        normalized = str(code or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member

        if normalized:
            logger.warning("Unknown bill type '%s', using single", code)
        return cls.SINGLE


GENERIC_AGG_VO = "nc.vo.trade.pub.HYBillVO"

_BILL_TYPE_DESCRIPTIONS = {
    BillType.SINGLE: "单表头类型",
    BillType.MULTI: "多表体类型",
    BillType.ARCHIVE: "档案类型",
}


def _camel(name: str) -> str:
    """snake_case attribute name to the editor's camelCase JSON key."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _scalar_kwargs(cls, data: Dict[str, Any], skip: set) -> Dict[str, Any]:
    """Pick dataclass scalar attributes from camelCase or snake_case keys."""
    kwargs = {}
    for f in fields(cls):
        if f.name in skip:
            continue
        camel = _camel(f.name)
        if camel in data:
            kwargs[f.name] = data[camel]
        elif f.name in data:
            kwargs[f.name] = data[f.name]
    return kwargs


def _scalar_dict(obj, skip: set) -> Dict[str, Any]:
    """Dump dataclass scalars with camelCase keys, dropping unset values."""
    result = {}
    for f in fields(obj):
        if f.name in skip:
            continue
        value = getattr(obj, f.name)
        if value is None:
            continue
        result[_camel(f.name)] = value
    return result


@dataclass
class FieldConfig:
    """One column of the header or a body entity."""

    name: str
    label: str = ""
    type: str = "String"
    db_type: Optional[str] = None
    length: Optional[int] = None
    required: bool = False
    primary_key: bool = False
    editable: bool = True
    visible: bool = True
    ui_type: Optional[str] = None
    default_value: Optional[str] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    ref_table: Optional[str] = None
    enum_code: Optional[str] = None
    description: Optional[str] = None

    # Filled by metadata enrichment
    id: Optional[str] = None
    data_type: Optional[str] = None
    type_display_name: Optional[str] = None
    ref_model_name: Optional[str] = None

    @property
    def java_type(self) -> str:
        """Java type used for the VO attribute."""
        return _JAVA_TYPES.get((self.type or "").lower(), "String")

    @property
    def property_name(self) -> str:
        """Field name with its first letter upper-cased (``Billno``)."""
        return self.name[:1].upper() + self.name[1:]

    @property
    def getter_name(self) -> str:
        return f"get{self.property_name}"

    @property
    def setter_name(self) -> str:
        return f"set{self.property_name}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldConfig":
        return cls(**_scalar_kwargs(cls, data, skip=set()))

    def to_dict(self) -> Dict[str, Any]:
        return _scalar_dict(self, skip=set())


_JAVA_TYPES = {
    "int": "Integer",
    "integer": "Integer",
    "double": "Double",
    "date": "UFDate",
    "datetime": "UFDate",
    "ufdate": "UFDate",
    "decimal": "UFDouble",
    "ufdouble": "UFDouble",
    "boolean": "UFBoolean",
    "ufboolean": "UFBoolean",
}


@dataclass
class EnumItem:
    """Single value of an enumeration."""

    value: str
    display: str = ""
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnumItem":
        return cls(**_scalar_kwargs(cls, data, skip=set()))

    def to_dict(self) -> Dict[str, Any]:
        return _scalar_dict(self, skip=set())


@dataclass
class EnumConfig:
    """Enumeration referenced by ``enum:<name>`` field types."""

    name: str
    display_name: str = ""
    class_name: str = ""
    items: List[EnumItem] = field(default_factory=list)
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnumConfig":
        kwargs = _scalar_kwargs(cls, data, skip={"items"})
        kwargs["items"] = [EnumItem.from_dict(i) for i in data.get("items") or []]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result = _scalar_dict(self, skip={"items"})
        result["items"] = [item.to_dict() for item in self.items]
        return result


@dataclass
class GlobalConfig:
    """Generation toggles plus the metadata identifier graph."""

    # Generation switches
    generate_client: bool = False
    generate_business: bool = False
    generate_metadata: bool = False
    sync_after_generate: bool = False

    output_dir: Optional[str] = None
    source_path: Optional[str] = None
    author: Optional[str] = None

    # Metadata component
    component_id: Optional[str] = None
    main_entity_id: Optional[str] = None
    enums: List[EnumConfig] = field(default_factory=list)

    # Cross-document references
    enable_pub_bill_interface: bool = False
    enable_user: bool = False
    enable_bill_status: bool = False
    ref_pub_bill_id: Optional[str] = None
    connection_pub_bill_id: Optional[str] = None
    ref_user_id: Optional[str] = None
    connection_user_id: Optional[str] = None
    ref_bill_status_id: Optional[str] = None
    connection_bill_status_id: Optional[str] = None

    # Role links: field ids playing well-known roles
    pk_field_id: Optional[str] = None
    bill_no_field_id: Optional[str] = None
    corp_field_id: Optional[str] = None
    busi_type_field_id: Optional[str] = None
    operator_id_field_id: Optional[str] = None
    approver_field_id: Optional[str] = None
    bill_status_field_id: Optional[str] = None
    approve_note_field_id: Optional[str] = None
    approve_date_field_id: Optional[str] = None
    bill_date_field_id: Optional[str] = None
    bill_type_field_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlobalConfig":
        kwargs = _scalar_kwargs(cls, data, skip={"enums"})
        kwargs["enums"] = [EnumConfig.from_dict(e) for e in data.get("enums") or []]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result = _scalar_dict(self, skip={"enums"})
        result["enums"] = [e.to_dict() for e in self.enums]
        return result


@dataclass
class BillConfig:
    """Root description of one business document."""

    bill_code: str
    bill_name: str = ""
    module: str = ""
    package_name: str = ""
    bill_type: BillType = BillType.SINGLE
    description: Optional[str] = None
    author: Optional[str] = None
    head_code: Optional[str] = None
    body_code: Optional[str] = None

    head_fields: List[FieldConfig] = field(default_factory=list)
    body_fields: List[FieldConfig] = field(default_factory=list)
    body_code_list: List[str] = field(default_factory=list)
    body_fields_by_code: Dict[str, List[FieldConfig]] = field(default_factory=dict)

    global_config: Optional[GlobalConfig] = None

    def __post_init__(self):
        self.bill_type = BillType.from_code(self.bill_type)

    # Naming helpers used by paths and templates

    @property
    def class_name(self) -> str:
        return self.bill_code

    @property
    def class_name_lower(self) -> str:
        return self.bill_code.lower()

    @property
    def head_vo_name(self) -> str:
        """Header VO class name, derived from the bill code unless set."""
        if self.head_code:
            return self.head_code
        if self.bill_code.endswith("H"):
            return f"{self.bill_code}VO"
        return f"{self.bill_code}HVO"

    @property
    def head_vo_class(self) -> str:
        """Java class of the header VO; always matches its file name."""
        return f"{self.bill_code}HVO"

    @property
    def agg_vo_name(self) -> str:
        return f"Agg{self.bill_code}VO"

    @property
    def agg_vo_import(self) -> str:
        """Aggregate VO class used by generated code.

        Only multi-body bills get their own aggregate; the others use the
        framework's generic one.
        """
        if self.has_body:
            return f"{self.vo_package}.{self.agg_vo_name}"
        return GENERIC_AGG_VO

    @property
    def agg_vo_class(self) -> str:
        return self.agg_vo_import.rsplit(".", 1)[1]

    @property
    def package_suffix(self) -> str:
        return f"{self.module}.{self.class_name_lower}"

    # Java packages, matching the output path grammar

    @property
    def vo_package(self) -> str:
        return f"nc.vo.{self.package_suffix}"

    @property
    def client_package(self) -> str:
        return f"nc.ui.{self.package_name}.{self.class_name_lower}"

    @property
    def bs_package(self) -> str:
        return f"nc.bs.{self.package_suffix}"

    @property
    def itf_package(self) -> str:
        return f"nc.itf.{self.package_suffix}"

    @property
    def interface_name(self) -> str:
        return f"I{self.bill_code}"

    @property
    def table_name(self) -> str:
        return f"{self.module}_{self.class_name_lower}_h"

    @property
    def pk_field(self) -> Optional[FieldConfig]:
        for f in self.head_fields:
            if f.primary_key:
                return f
        return None

    @property
    def pk_field_name(self) -> str:
        """Primary key column, ``pk_{code}`` when no header field is flagged."""
        pk = self.pk_field
        return pk.name if pk else f"pk_{self.class_name_lower}"

    @property
    def has_body(self) -> bool:
        return self.bill_type is BillType.MULTI

    def resolved_body_codes(self) -> List[str]:
        """Body codes to emit; falls back to ``body_code`` when the list is empty."""
        if self.body_code_list:
            return list(self.body_code_list)
        return [self.body_code] if self.body_code else []

    def fields_for_body(self, body_code: Optional[str]) -> List[FieldConfig]:
        """Fields of one body entity, falling back to the shared body schema."""
        if body_code and body_code in self.body_fields_by_code:
            return self.body_fields_by_code[body_code]
        return self.body_fields

    # Global config shortcuts

    @property
    def generate_client(self) -> bool:
        return bool(self.global_config and self.global_config.generate_client)

    @property
    def generate_business(self) -> bool:
        return bool(self.global_config and self.global_config.generate_business)

    @property
    def generate_metadata(self) -> bool:
        return bool(self.global_config and self.global_config.generate_metadata)

    @property
    def resolved_author(self) -> str:
        if self.author:
            return self.author
        if self.global_config and self.global_config.author:
            return self.global_config.author
        return ""

    @property
    def enums(self) -> List[EnumConfig]:
        return self.global_config.enums if self.global_config else []

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BillConfig":
        """
        Build a BillConfig from the editor's JSON structure.

        Accepts camelCase keys as written by the editor, or snake_case.
        A nested ``basicInfo`` block is flattened first.

        Args:
            data: Parsed JSON object

        Returns:
            BillConfig instance
        """
        data = dict(data)
        basic_info = data.pop("basicInfo", None)
        if isinstance(basic_info, dict):
            data = {**basic_info, **data}

        nested = {
            "head_fields",
            "body_fields",
            "body_code_list",
            "body_fields_by_code",
            "global_config",
        }
        kwargs = _scalar_kwargs(cls, data, skip=nested)

        def _get(name: str):
            return data.get(_camel(name), data.get(name))

        kwargs["head_fields"] = [
            FieldConfig.from_dict(f) for f in _get("head_fields") or []
        ]
        kwargs["body_fields"] = [
            FieldConfig.from_dict(f) for f in _get("body_fields") or []
        ]
        kwargs["body_code_list"] = list(_get("body_code_list") or [])
        kwargs["body_fields_by_code"] = {
            code: [FieldConfig.from_dict(f) for f in body_fields]
            for code, body_fields in (_get("body_fields_by_code") or {}).items()
        }

        global_data = _get("global_config")
        kwargs["global_config"] = (
            GlobalConfig.from_dict(global_data) if global_data is not None else None
        )

        # Enum configs may live beside the global block in editor files
        enum_configs = data.get("enumConfigs")
        if enum_configs and kwargs["global_config"] is not None:
            if not kwargs["global_config"].enums:
                kwargs["global_config"].enums = [
                    EnumConfig.from_dict(e) for e in enum_configs
                ]

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Dump back to the editor's camelCase JSON structure."""
        nested = {
            "bill_type",
            "head_fields",
            "body_fields",
            "body_code_list",
            "body_fields_by_code",
            "global_config",
        }
        result = _scalar_dict(self, skip=nested)
        result["billType"] = self.bill_type.value
        result["headFields"] = [f.to_dict() for f in self.head_fields]
        result["bodyFields"] = [f.to_dict() for f in self.body_fields]
        result["bodyCodeList"] = list(self.body_code_list)
        if self.body_fields_by_code:
            result["bodyFieldsByCode"] = {
                code: [f.to_dict() for f in body_fields]
                for code, body_fields in self.body_fields_by_code.items()
            }
        if self.global_config is not None:
            result["globalConfig"] = self.global_config.to_dict()
        return result
