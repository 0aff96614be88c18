"""
Tests for the layer registry.
"""

import pytest

from billgen.core.generator import LayerGenerator, LayerResult
from billgen.core.templates import FileSink, TemplateEngine
from billgen.layers import BusinessGenerator, ClientGenerator, MetadataGenerator
from billgen.registry import LayerRegistry, RegistryError, get_registry, list_layers


class DummyGenerator(LayerGenerator):
    """Does nothing."""

    name = "dummy"

    def generate(self, bill, output_dir):
        return LayerResult(bill)


class TestGlobalRegistry:
    """Test the built-in layer registrations."""

    def test_builtin_layers(self):
        assert list_layers() == ["bs", "client", "impl", "itf", "metadata", "rule", "vo"]

    def test_aliases_resolve(self):
        registry = get_registry()

        assert registry.get_generator_class("business") is BusinessGenerator
        assert registry.get_generator_class("UI") is ClientGenerator
        assert registry.get_generator_class("bmf") is MetadataGenerator
        assert registry.resolve("implementation") == "impl"

    def test_unknown_layer(self):
        with pytest.raises(RegistryError, match="No generator registered"):
            get_registry().get_generator_class("nope")

    def test_layer_info(self):
        info = get_registry().get_layer_info("business")

        assert info["name"] == "bs"
        assert info["class"] == "BusinessGenerator"
        assert info["aliases"] == ["business"]
        assert info["description"] == "Generator for server-side actions."

    def test_create_generator(self):
        generator = get_registry().create_generator("vo", TemplateEngine(), FileSink())

        assert generator.name == "vo"


class TestLayerRegistry:
    """Test registration rules on a fresh registry."""

    def test_rejects_non_generators(self):
        with pytest.raises(RegistryError):
            LayerRegistry().register("x", object)

    def test_keeps_first_registration_unless_replaced(self):
        registry = LayerRegistry()
        registry.register("vo", DummyGenerator)
        registry.register("vo", BusinessGenerator)
        assert registry.get_generator_class("vo") is DummyGenerator

        registry.register("vo", BusinessGenerator, replace=True)
        assert registry.get_generator_class("vo") is BusinessGenerator

    def test_alias_conflicts(self):
        registry = LayerRegistry()
        registry.register("a", DummyGenerator, aliases=["x"])

        with pytest.raises(RegistryError, match="already points"):
            registry.register("b", DummyGenerator, aliases=["x"])
        with pytest.raises(RegistryError, match="conflicts"):
            registry.register("c", DummyGenerator, aliases=["a"])

    def test_unregister_drops_aliases(self):
        registry = LayerRegistry()
        registry.register("a", DummyGenerator, aliases=["x", "y"])

        registry.unregister("a")

        assert not registry.is_supported("a")
        assert not registry.is_supported("x")
        assert registry.list_layers() == []
