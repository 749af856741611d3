"""
Exception hierarchy for component generation.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class SchemaError(GeneratorError):
    """Unknown component type or field kind, or an invalid descriptor."""

    pass


class RenderError(GeneratorError):
    """Internal inconsistency detected while rendering artifacts."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ValidationError(GeneratorError):
    """A user-correctable problem with one input field."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
