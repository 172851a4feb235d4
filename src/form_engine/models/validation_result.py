"""
Validation result models for form validation.

These models carry the outcome of running a compiled schema against a
form's current values.
"""

from typing import Any

from pydantic import BaseModel, Field


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_name: str = Field(..., description="Name of the field with error")
    error_type: str = Field(..., description="Rule kind that failed, or 'type' for a coercion failure")
    message: str = Field(..., description="Human-readable error message")
    received: Any | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """Result of validating a whole form."""

    is_valid: bool = Field(..., description="Whether the form data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="First violation per invalid field"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Coerced data if valid"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_error(self, field_name: str) -> FieldValidationError | None:
        """Get the error for a specific field, if any."""
        for error in self.errors:
            if error.field_name == field_name:
                return error
        return None

    def to_error_dict(self) -> dict[str, str]:
        """Convert errors to a dict mapping field names to error messages."""
        return {error.field_name: error.message for error in self.errors}
