"""
Rule vocabulary for schema compilation.

This module owns the two tables the compiler folds fields through:
- ``BASE_VALIDATORS``: field type -> base value domain (string, number,
  date, boolean) with its coercion
- ``RULE_COMPATIBILITY``: rule kind -> field types the rule takes effect on

Rules attached to an incompatible type, or carrying a malformed value,
build to ``None`` and are dropped by the compiler.
"""

import logging
import math
import re
from dataclasses import dataclass
from functools import partial
from datetime import date
from typing import Any, Callable

from email_validator import EmailNotValidError, validate_email
from pydantic import NonNegativeInt, TypeAdapter, ValidationError

from form_engine.models.field_model import FieldType, RuleKind, ValidationRule

logger = logging.getLogger(__name__)


_STRING_TYPES = frozenset({
    FieldType.TEXT,
    FieldType.EMAIL,
    FieldType.PASSWORD,
    FieldType.SELECT,
    FieldType.RADIO,
    FieldType.TEXTAREA,
})

_TEXT_ENTRY_TYPES = frozenset({
    FieldType.TEXT,
    FieldType.PASSWORD,
    FieldType.EMAIL,
    FieldType.TEXTAREA,
})

# ``required`` applies to every type, including ones outside FieldType,
# and is handled by the compiler before this table is consulted.
RULE_COMPATIBILITY: dict[RuleKind, frozenset[FieldType]] = {
    RuleKind.REQUIRED: frozenset(FieldType),
    RuleKind.OPTIONAL: frozenset(),
    RuleKind.EMAIL: frozenset({FieldType.EMAIL, FieldType.TEXT}),
    RuleKind.MIN: frozenset({FieldType.NUMBER}),
    RuleKind.MAX: frozenset({FieldType.NUMBER}),
    RuleKind.MIN_LENGTH: _TEXT_ENTRY_TYPES,
    RuleKind.MAX_LENGTH: _TEXT_ENTRY_TYPES,
    RuleKind.PATTERN: _TEXT_ENTRY_TYPES,
}


def is_rule_applicable(kind: RuleKind, field_type: FieldType | str) -> bool:
    """Whether a rule of ``kind`` takes effect on a field of ``field_type``."""
    if kind == RuleKind.REQUIRED:
        return True
    return field_type in RULE_COMPATIBILITY.get(kind, frozenset())


class CoercionError(ValueError):
    """A raw value cannot be converted to the field's base type."""


_NUMBER = TypeAdapter(int | float)
_DATE = TypeAdapter(date)
_BOOLEAN = TypeAdapter(bool)
_LENGTH = TypeAdapter(NonNegativeInt)


def _coerce_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise CoercionError(f"expected a string, got {type(value).__name__}")


def _coerce_number(value: Any) -> int | float:
    if isinstance(value, bool):
        raise CoercionError("expected a number, got bool")
    if isinstance(value, str):
        value = value.strip()
    try:
        number = _NUMBER.validate_python(value)
    except ValidationError as e:
        raise CoercionError(str(e)) from e
    if isinstance(number, float) and math.isnan(number):
        raise CoercionError("expected a number, got NaN")
    return number


def _coerce_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return _DATE.validate_python(value)
    except ValidationError as e:
        raise CoercionError(str(e)) from e


def _coerce_boolean(value: Any) -> bool:
    try:
        return _BOOLEAN.validate_python(value)
    except ValidationError as e:
        raise CoercionError(str(e)) from e


def _passthrough(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class BaseValidator:
    """Value domain of a field: a name and a coercion into that domain."""

    name: str
    coerce: Callable[[Any], Any]


STRING = BaseValidator("string", _coerce_string)
NUMBER = BaseValidator("number", _coerce_number)
DATE = BaseValidator("date", _coerce_date)
BOOLEAN = BaseValidator("boolean", _coerce_boolean)
MIXED = BaseValidator("mixed", _passthrough)

BASE_VALIDATORS: dict[FieldType, BaseValidator] = {
    **{field_type: STRING for field_type in _STRING_TYPES},
    FieldType.NUMBER: NUMBER,
    FieldType.DATE: DATE,
    FieldType.CHECKBOX: BOOLEAN,
}


def base_validator_for(field_type: FieldType | str) -> BaseValidator:
    """Base validator for a field type; unrecognized types pass through."""
    return BASE_VALIDATORS.get(field_type, MIXED)


@dataclass(frozen=True)
class RuleCheck:
    """A compiled, type-applicable rule: a predicate over the coerced value."""

    kind: RuleKind
    message: str
    test: Callable[[Any], bool]

    def __call__(self, value: Any) -> bool:
        return self.test(value)


def _is_email(value: str) -> bool:
    # Bare addresses only; "Name <addr>" is rejected
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _at_least(bound, value) -> bool:
    return value >= bound


def _at_most(bound, value) -> bool:
    return value <= bound


def _length_at_least(bound: int, value: str) -> bool:
    return len(value) >= bound


def _length_at_most(bound: int, value: str) -> bool:
    return len(value) <= bound


def _matches(pattern: re.Pattern, value: str) -> bool:
    return pattern.search(value) is not None


def _numeric_bound(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    try:
        return _NUMBER.validate_python(value)
    except ValidationError:
        return None


def _length_bound(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return _LENGTH.validate_python(value)
    except ValidationError:
        return None


def _compile_pattern(value: Any) -> re.Pattern | None:
    if not isinstance(value, str):
        return None
    try:
        return re.compile(value)
    except re.error:
        return None


def rule_argument_is_valid(rule: ValidationRule) -> bool:
    """Whether the rule's ``value`` is usable for its kind."""
    if rule.kind in (RuleKind.MIN, RuleKind.MAX):
        return _numeric_bound(rule.value) is not None
    if rule.kind in (RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH):
        return _length_bound(rule.value) is not None
    if rule.kind == RuleKind.PATTERN:
        return _compile_pattern(rule.value) is not None
    return True


def build_rule_check(rule: ValidationRule, field_type: FieldType | str) -> RuleCheck | None:
    """
    Build the check for one rule on a field of ``field_type``.

    Returns None for ``required`` and ``optional`` (handled by the
    compiler), for rules that do not apply to the type, and for rules
    whose value is malformed.
    """
    if rule.kind in (RuleKind.REQUIRED, RuleKind.OPTIONAL):
        return None
    if not is_rule_applicable(rule.kind, field_type):
        logger.debug(f"Ignoring '{rule.kind.value}' rule on {getattr(field_type, 'value', field_type)} field")
        return None
    if not rule_argument_is_valid(rule):
        logger.debug(f"Ignoring '{rule.kind.value}' rule with malformed value {rule.value!r}")
        return None

    kind = rule.kind
    if kind == RuleKind.EMAIL:
        test = _is_email
    elif kind == RuleKind.MIN:
        test = partial(_at_least, _numeric_bound(rule.value))
    elif kind == RuleKind.MAX:
        test = partial(_at_most, _numeric_bound(rule.value))
    elif kind == RuleKind.MIN_LENGTH:
        test = partial(_length_at_least, _length_bound(rule.value))
    elif kind == RuleKind.MAX_LENGTH:
        test = partial(_length_at_most, _length_bound(rule.value))
    elif kind == RuleKind.PATTERN:
        test = partial(_matches, _compile_pattern(rule.value))
    else:
        return None

    return RuleCheck(kind=kind, message=rule.message, test=test)
