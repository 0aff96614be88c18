"""
billgen: NC bill source code generator.

Turns a bill configuration into the value objects, client classes,
business actions, service layer and metadata descriptor of an NC bill.
"""

from .core import (
    BillConfig,
    BillType,
    CodeStatistics,
    EnumConfig,
    EnumItem,
    FieldConfig,
    GenerationListener,
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    GlobalConfig,
    LoggingListener,
    enrich_metadata,
    load_config,
    validate_bill_config,
)
from .orchestrator import CodeGenerator, generate_bill
from .registry import LayerRegistry, get_registry
from .utils import load_bill_config, save_bill_config

__version__ = "0.1.0"

__all__ = [
    "BillConfig",
    "BillType",
    "CodeGenerator",
    "CodeStatistics",
    "EnumConfig",
    "EnumItem",
    "FieldConfig",
    "GenerationListener",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "GlobalConfig",
    "LayerRegistry",
    "LoggingListener",
    "enrich_metadata",
    "generate_bill",
    "get_registry",
    "load_bill_config",
    "load_config",
    "save_bill_config",
    "validate_bill_config",
]
