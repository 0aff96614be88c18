"""
Core code generation components.

Provides the data model, metadata enrichment and the base classes used
by all layer generators.
"""

from .config import ConfigManager, GeneratorConfig, load_config
from .enrichment import enrich_metadata
from .events import GenerationListener, LoggingListener
from .exceptions import (
    ConfigError,
    ConfigValidationError,
    GenerationCancelled,
    GeneratorError,
    OutputWriteError,
    TemplateError,
)
from .generator import GenerationResult, LayerGenerator, LayerResult
from .identifiers import generate_id, sequential_ids
from .model import BillConfig, BillType, EnumConfig, EnumItem, FieldConfig, GlobalConfig
from .statistics import CodeStatistics, collect_statistics
from .templates import FileSink, TemplateEngine
from .validation import validate_bill_config

__all__ = [
    # Data model
    "BillConfig",
    "BillType",
    "EnumConfig",
    "EnumItem",
    "FieldConfig",
    "GlobalConfig",
    # Metadata
    "enrich_metadata",
    "generate_id",
    "sequential_ids",
    # Generator interface
    "LayerGenerator",
    "LayerResult",
    "GenerationResult",
    "GenerationListener",
    "LoggingListener",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "validate_bill_config",
    # Template system
    "TemplateEngine",
    "FileSink",
    # Statistics
    "CodeStatistics",
    "collect_statistics",
    # Errors
    "GeneratorError",
    "TemplateError",
    "OutputWriteError",
    "ConfigError",
    "ConfigValidationError",
    "GenerationCancelled",
]
