"""Exceptions raised by the form engine.

Rule violations are never raised; they are reported through
``ValidationResult`` and ``FormState.errors``.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from form_engine.guardrails.config_guardrails import ConfigDiagnostic


class FormEngineError(Exception):
    """Base class for form engine errors."""


class SchemaCompileError(FormEngineError, ValueError):
    """Raised by strict compilation when a form config has diagnostics."""

    def __init__(self, diagnostics: list["ConfigDiagnostic"]):
        self.diagnostics = diagnostics
        lines = "\n".join(f"  - {d.field_name}: {d.message}" for d in diagnostics)
        super().__init__(f"Invalid form configuration:\n{lines}")


class UnknownFieldError(FormEngineError, KeyError):
    """Raised when a value is set for a field the form does not declare."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"No field named '{self.name}' in this form"
