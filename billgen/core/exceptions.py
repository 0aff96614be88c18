"""
Exception hierarchy for bill code generation.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class TemplateError(GeneratorError):
    """Template missing, malformed, or referencing an undefined value."""

    pass


class OutputWriteError(GeneratorError):
    """Generated file could not be written."""

    pass


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""

    pass


class ConfigValidationError(ConfigError):
    """Bill configuration is missing required information."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class GenerationCancelled(GeneratorError):
    """Run stopped at a stage boundary on request."""

    pass
