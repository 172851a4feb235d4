"""
Config guardrails for the form engine.

These checks inspect a form configuration before it is compiled. The
compiler tolerates everything reported here (incompatible or malformed
rules become no-ops, duplicate names are last-write-wins); the lint
makes those silent degradations visible.
"""

from collections import Counter
from typing import Iterable, Literal

from pydantic import BaseModel, Field

from form_engine.guardrails.constants import (
    DUPLICATE_NAME,
    INCOMPATIBLE_RULE,
    INVALID_FIELD_NAME,
    MALFORMED_RULE_VALUE,
    MAX_FIELD_NAME_LENGTH,
    MISSING_OPTIONS,
    REDUNDANT_OPTIONAL,
    UNKNOWN_FIELD_TYPE,
    VALID_FIELD_NAME,
)
from form_engine.models.field_model import FieldConfig, FieldType, RuleKind
from form_engine.rules import is_rule_applicable, rule_argument_is_valid


class ConfigDiagnostic(BaseModel):
    """One problem found in a form configuration."""

    field_name: str = Field(..., description="Field the diagnostic refers to")
    code: str = Field(..., description="Diagnostic code")
    message: str = Field(..., description="Human-readable description")
    severity: Literal["error", "warning"] = Field(default="error")


def _check_field_name(name: str) -> tuple[bool, str | None]:
    """Validate a field name."""
    if not name:
        return False, "Field name cannot be empty"
    if len(name) > MAX_FIELD_NAME_LENGTH:
        return False, "Field name too long"
    if not VALID_FIELD_NAME.match(name):
        return False, "Invalid characters in field name"
    return True, None


def _check_rules(field: FieldConfig) -> list[ConfigDiagnostic]:
    diagnostics = []

    for rule in field.validation_rules:
        if rule.kind in (RuleKind.REQUIRED, RuleKind.OPTIONAL):
            continue
        if not is_rule_applicable(rule.kind, field.type):
            diagnostics.append(ConfigDiagnostic(
                field_name=field.name,
                code=INCOMPATIBLE_RULE,
                message=f"'{rule.kind.value}' rule has no effect on a {field.type.value} field",
            ))
        elif not rule_argument_is_valid(rule):
            diagnostics.append(ConfigDiagnostic(
                field_name=field.name,
                code=MALFORMED_RULE_VALUE,
                message=f"'{rule.kind.value}' rule has unusable value {rule.value!r}",
            ))

    if field.has_rule(RuleKind.OPTIONAL) and field.has_rule(RuleKind.REQUIRED):
        diagnostics.append(ConfigDiagnostic(
            field_name=field.name,
            code=REDUNDANT_OPTIONAL,
            message="'optional' rule is ignored on a required field",
            severity="warning",
        ))

    return diagnostics


def lint_fields(fields: Iterable[FieldConfig]) -> list[ConfigDiagnostic]:
    """
    Report problems in a list of field configs without raising.

    Checks:
    1. Field names are identifiers and unique
    2. Field types are known
    3. Rules apply to the field type and carry a usable value
    4. Choice fields have options
    """
    fields = list(fields)
    diagnostics: list[ConfigDiagnostic] = []

    counts = Counter(field.name for field in fields)
    for name, count in counts.items():
        if count > 1:
            diagnostics.append(ConfigDiagnostic(
                field_name=name,
                code=DUPLICATE_NAME,
                message=f"Field name defined {count} times; only the last definition is used",
            ))

    for field in fields:
        is_valid, error = _check_field_name(field.name)
        if not is_valid:
            diagnostics.append(ConfigDiagnostic(
                field_name=field.name,
                code=INVALID_FIELD_NAME,
                message=error,
            ))

        if not isinstance(field.type, FieldType):
            diagnostics.append(ConfigDiagnostic(
                field_name=field.name,
                code=UNKNOWN_FIELD_TYPE,
                message=f"Unknown field type {field.type!r}; the field is not validated or rendered",
            ))
            continue

        diagnostics.extend(_check_rules(field))

        if field.type in (FieldType.SELECT, FieldType.RADIO) and not field.options:
            diagnostics.append(ConfigDiagnostic(
                field_name=field.name,
                code=MISSING_OPTIONS,
                message=f"{field.type.value} field has no options",
                severity="warning",
            ))

    return diagnostics
