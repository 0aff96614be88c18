"""
Layer generators, one per slice of the generated source tree.
"""

from .business import BusinessGenerator
from .client import ClientGenerator
from .implementation import ImplementationGenerator
from .interface import InterfaceGenerator
from .metadata import MetadataGenerator
from .rule import RuleGenerator
from .vo import VoGenerator

__all__ = [
    "BusinessGenerator",
    "ClientGenerator",
    "ImplementationGenerator",
    "InterfaceGenerator",
    "MetadataGenerator",
    "RuleGenerator",
    "VoGenerator",
]
