"""
Data models for the form engine.

This module contains Pydantic models for:
- Declarative field and form configuration
- Validation results
"""

from form_engine.models.field_model import (
    FieldConfig,
    FieldOption,
    FieldType,
    FormConfig,
    RuleKind,
    ValidationRule,
)
from form_engine.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Configuration
    "FieldConfig",
    "FieldOption",
    "FieldType",
    "FormConfig",
    "RuleKind",
    "ValidationRule",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
