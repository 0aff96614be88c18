"""
Generator registry system for managing the available layer generators.

Provides registration and instantiation of layer generators by name.
"""

from typing import Dict, List, Optional, Type

from .core.config import GeneratorConfig
from .core.events import GenerationListener
from .core.exceptions import GeneratorError
from .core.generator import LayerGenerator
from .core.templates import FileSink, TemplateEngine


class RegistryError(GeneratorError):
    """Exception raised for registry-related errors."""

    pass


class LayerRegistry:
    """Registry for managing available layer generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[LayerGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        generator_class: Type[LayerGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a layer.

        Args:
            name: Primary layer name (e.g., 'vo', 'bs')
            generator_class: Generator class implementing LayerGenerator
            aliases: Alternative names for this layer
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not (
            isinstance(generator_class, type)
            and issubclass(generator_class, LayerGenerator)
        ):
            raise RegistryError("Generator class must inherit from LayerGenerator")

        name_key = name.lower()

        if name_key in self._generators and not replace:
            return

        self._generators[name_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()

            if alias_key == name_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary layer"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != name_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = name_key

    def unregister(self, name: str):
        """Unregister a generator and its aliases."""
        name_key = name.lower()
        self._generators.pop(name_key, None)

        for alias in [a for a, target in self._aliases.items() if target == name_key]:
            del self._aliases[alias]

    def resolve(self, name: str) -> str:
        """
        Resolve a layer name or alias to its primary name.

        Raises:
            RegistryError: If the layer is not registered
        """
        name_key = name.lower()

        if name_key in self._generators:
            return name_key

        if name_key in self._aliases:
            return self._aliases[name_key]

        raise RegistryError(
            f"No generator registered for layer: {name}. "
            f"Available: {', '.join(self.list_layers())}"
        )

    def get_generator_class(self, name: str) -> Type[LayerGenerator]:
        """Get generator class for a layer name or alias."""
        return self._generators[self.resolve(name)]

    def create_generator(
        self,
        name: str,
        engine: TemplateEngine,
        sink: FileSink,
        config: Optional[GeneratorConfig] = None,
        listener: Optional[GenerationListener] = None,
    ) -> LayerGenerator:
        """
        Create generator instance for a layer.

        Args:
            name: Layer name or alias
            engine: Template engine shared by all layers of a run
            sink: File sink shared by all layers of a run
            config: Generator configuration
            listener: Progress listener

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If the layer is unknown
        """
        generator_class = self.get_generator_class(name)
        return generator_class(engine, sink, config, listener)

    def list_layers(self) -> List[str]:
        """Get list of registered primary layer names."""
        return sorted(self._generators.keys())

    def get_aliases(self, name: str) -> List[str]:
        """Get all aliases for a specific layer."""
        name_key = name.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == name_key)

    def is_supported(self, name: str) -> bool:
        name_key = name.lower()
        return name_key in self._generators or name_key in self._aliases

    def get_layer_info(self, name: str) -> Dict[str, object]:
        """Describe a registered layer for listings."""
        primary = self.resolve(name)
        generator_class = self._generators[primary]
        doc = (generator_class.__doc__ or "").strip().splitlines()
        return {
            "name": primary,
            "class": generator_class.__name__,
            "aliases": self.get_aliases(primary),
            "module": generator_class.__module__,
            "description": doc[0] if doc else "",
        }


# Global registry instance - created once
_global_registry: Optional[LayerRegistry] = None


def get_registry() -> LayerRegistry:
    """Get the global layer registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = LayerRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: LayerRegistry):
    """
    Register the built-in layers with their aliases.

    This is the single source of truth for layer names.
    """
    from .layers import (
        BusinessGenerator,
        ClientGenerator,
        ImplementationGenerator,
        InterfaceGenerator,
        MetadataGenerator,
        RuleGenerator,
        VoGenerator,
    )

    registry.register("metadata", MetadataGenerator, aliases=["bmf"])
    registry.register("vo", VoGenerator)
    registry.register("client", ClientGenerator, aliases=["ui"])
    registry.register("itf", InterfaceGenerator, aliases=["interface"])
    registry.register("bs", BusinessGenerator, aliases=["business"])
    registry.register("impl", ImplementationGenerator, aliases=["implementation"])
    registry.register("rule", RuleGenerator)


def list_layers() -> List[str]:
    """List all layers from the global registry."""
    return get_registry().list_layers()
