"""
Guardrails for the form engine.

Compile-time checks for form configurations.
"""

from form_engine.guardrails.config_guardrails import (
    ConfigDiagnostic,
    lint_fields,
)

__all__ = [
    "ConfigDiagnostic",
    "lint_fields",
]
