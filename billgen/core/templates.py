"""
Template engine wrapper and output sink for code generation.

Provides a simple interface for Jinja2 template rendering with filters
for Java code generation, and writes rendered text in the legacy
encoding the target framework expects.
"""

import codecs
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

from ..logging_config import get_logger
from .exceptions import OutputWriteError, TemplateError
from .naming import upper_first

logger = get_logger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
DEFAULT_ENCODING = "gbk"


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files; defaults to
                the templates shipped with the package
        """
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir), encoding="utf-8")
        else:
            logger.warning("Template directory not found: %s", self.template_dir)
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._env.filters["upper_first"] = upper_first
        self._env.filters["java_string"] = self._java_string_filter
        self._env.filters["xml_attr"] = self._xml_attr_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Template id relative to the template directory
            context: Variables to pass to template

        Returns:
            Rendered template content

        Raises:
            TemplateError: Template missing, malformed, or context incomplete
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except TemplateSyntaxError as e:
            raise TemplateError(
                f"Syntax error in template {template_name} line {e.lineno}: {e.message}"
            ) from e
        except UndefinedError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e.message}"
            ) from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except (TemplateSyntaxError, UndefinedError) as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template, shadowing any file of the same name.

        Args:
            name: Template name
            content: Template content
        """
        loader = self._env.loader
        if not isinstance(loader, DictLoader):
            if isinstance(loader, ChoiceLoader) and isinstance(
                loader.loaders[0], DictLoader
            ):
                loader.loaders[0].mapping[name] = content
                return
            self._env.loader = ChoiceLoader([DictLoader({name: content}), loader])
            return

        loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    # Template filters for code generation

    @staticmethod
    def _java_string_filter(value: Any) -> str:
        """Escape a value for use inside a Java string literal."""
        text = "" if value is None else str(value)
        return text.replace("\\", "\\\\").replace('"', '\\"')

    @staticmethod
    def _xml_attr_filter(value: Any) -> str:
        """Escape a value for use inside an XML attribute."""
        text = "" if value is None else str(value)
        return (
            text.replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
        )


class FileSink:
    """Writes rendered files to disk in a fixed character encoding."""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        codecs.lookup(encoding)
        self.encoding = encoding

    def write(self, path: Path, text: str, encoding: Optional[str] = None) -> Path:
        """
        Write text to path, creating parent directories.

        Args:
            path: Destination file
            text: Content to write
            encoding: Overrides the sink's encoding

        Returns:
            The written path

        Raises:
            OutputWriteError: Directory creation, encoding or write failure
        """
        path = Path(path)
        encoding = encoding or self.encoding
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding=encoding, errors="strict", newline="") as f:
                f.write(text)
        except UnicodeEncodeError as e:
            raise OutputWriteError(
                f"Cannot encode {path.name} as {encoding}: {e.reason}"
            ) from e
        except OSError as e:
            raise OutputWriteError(f"Failed to write {path}: {e}") from e

        logger.debug("Wrote %s (%s)", path, encoding)
        return path
