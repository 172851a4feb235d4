"""
Schema compiler.

Turns an ordered list of ``FieldConfig`` into a ``CompiledSchema``: one
independent ``FieldValidator`` per distinct field name. Compilation never
fails by default; rules that do not apply to a field's type, or whose
value is malformed, are dropped. Strict compilation reports them instead.

Usage:
    from form_engine.compiler import compile_schema

    schema = compile_schema(fields)
    outcome = schema["email"].validate("")
    if outcome.error:
        print(outcome.error.message)
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from form_engine.config import get_config
from form_engine.exceptions import SchemaCompileError
from form_engine.guardrails.config_guardrails import lint_fields
from form_engine.models.field_model import FieldConfig, FieldType, RuleKind
from form_engine.models.validation_result import FieldValidationError, ValidationResult
from form_engine.rules import (
    BOOLEAN,
    BaseValidator,
    CoercionError,
    RuleCheck,
    base_validator_for,
    build_rule_check,
)

logger = logging.getLogger(__name__)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


@dataclass(frozen=True)
class FieldOutcome:
    """Result of validating one raw value: the coerced value or the first error."""

    value: Any = None
    error: FieldValidationError | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FieldValidator:
    """
    Predicate + coercion for a single field.

    Evaluation order: optional-field coercion ("" -> None), the required
    check, base type coercion, then the type-applicable rules in declared
    order. The first failure is the only error reported.
    """

    name: str
    label: str
    field_type: FieldType | str
    base: BaseValidator
    checks: tuple[RuleCheck, ...] = ()
    required_message: str | None = None

    @property
    def required(self) -> bool:
        return self.required_message is not None

    def _fail(self, error_type: str, message: str, received: Any) -> FieldOutcome:
        return FieldOutcome(
            error=FieldValidationError(
                field_name=self.name,
                error_type=error_type,
                message=message,
                received=received,
            )
        )

    def validate(self, raw: Any) -> FieldOutcome:
        value = raw
        if not self.required and value == "":
            value = None

        if _is_empty(value):
            if self.required:
                return self._fail(RuleKind.REQUIRED.value, self.required_message, raw)
            return FieldOutcome(value=None)

        try:
            value = self.base.coerce(value)
        except CoercionError:
            return self._fail("type", f"{self.label} must be a valid {self.base.name}", raw)

        # A required toggle must be switched on
        if self.required and self.base is BOOLEAN and value is False:
            return self._fail(RuleKind.REQUIRED.value, self.required_message, raw)

        for check in self.checks:
            if not check(value):
                return self._fail(check.kind.value, check.message, raw)

        return FieldOutcome(value=value)


class CompiledSchema(Mapping):
    """Immutable mapping of field name to its ``FieldValidator``."""

    def __init__(self, validators: Mapping[str, FieldValidator]):
        self._validators = MappingProxyType(dict(validators))

    def __getitem__(self, name: str) -> FieldValidator:
        return self._validators[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def __repr__(self) -> str:
        return f"CompiledSchema({list(self._validators)})"

    def validate_field(self, name: str, raw: Any) -> FieldOutcome:
        return self._validators[name].validate(raw)

    def validate(self, values: Mapping[str, Any]) -> ValidationResult:
        """
        Validate a value map; every field is checked independently.

        Missing names validate as ``None``. Coerced ``None`` values are left
        out of ``validated_data``.
        """
        errors: list[FieldValidationError] = []
        coerced: dict[str, Any] = {}

        for name, validator in self._validators.items():
            outcome = validator.validate(values.get(name))
            if outcome.error is not None:
                errors.append(outcome.error)
            elif outcome.value is not None:
                coerced[name] = outcome.value

        is_valid = not errors
        return ValidationResult(
            is_valid=is_valid,
            errors=errors,
            validated_data=coerced if is_valid else None,
        )


def compile_field(field: FieldConfig) -> FieldValidator:
    """Build the validator for one field from its type and rules."""
    required_message = None
    checks: list[RuleCheck] = []

    for rule in field.validation_rules:
        if rule.kind == RuleKind.REQUIRED:
            if required_message is None:
                required_message = rule.message
            continue
        check = build_rule_check(rule, field.type)
        if check is not None:
            checks.append(check)

    return FieldValidator(
        name=field.name,
        label=field.label,
        field_type=field.type,
        base=base_validator_for(field.type),
        checks=tuple(checks),
        required_message=required_message,
    )


class SchemaCompiler:
    """
    Compiles field configs into a ``CompiledSchema``.

    Duplicate field names are last-write-wins. With ``strict=True`` the
    fields are linted first and any diagnostic raises ``SchemaCompileError``.
    """

    def __init__(self, strict: bool | None = None):
        config = get_config()
        self.strict = config.strict_compile if strict is None else strict

    def compile(self, fields: Iterable[FieldConfig]) -> CompiledSchema:
        fields = list(fields)

        if self.strict:
            errors = [d for d in lint_fields(fields) if d.severity == "error"]
            if errors:
                raise SchemaCompileError(errors)

        validators: dict[str, FieldValidator] = {}
        for field in fields:
            if field.name in validators:
                logger.debug(f"Field '{field.name}' redefined; keeping the later definition")
            validators[field.name] = compile_field(field)

        logger.debug(f"Compiled schema with {len(validators)} field(s)")
        return CompiledSchema(validators)


def compile_schema(fields: Iterable[FieldConfig], strict: bool | None = None) -> CompiledSchema:
    """Convenience function to compile a list of field configs."""
    return SchemaCompiler(strict=strict).compile(fields)
