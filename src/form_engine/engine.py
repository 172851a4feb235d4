"""
Form engine: field state, validation and submission.

``FormState`` is an immutable value object. ``initial_state``,
``set_value`` and ``validate_all`` are pure functions returning a new
state; ``FormEngine`` holds the current state for one mounted form and
drives the submission state machine::

    IDLE -> VALIDATING -> INVALID -> IDLE
                       -> VALID -> (submit handler) -> IDLE

Usage:
    engine = FormEngine(LOGIN_FORM, on_submit=handle_login)
    engine.set_value("email", "user@example.com")
    result = engine.submit()
    if not result.is_valid:
        print(engine.errors)
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from form_engine.compiler import CompiledSchema, SchemaCompiler
from form_engine.exceptions import UnknownFieldError
from form_engine.models.field_model import FieldConfig, FormConfig
from form_engine.models.validation_result import ValidationResult
from form_engine.tracing import form_span, form_trace

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[dict[str, Any]], Any]


class FormStatus(str, Enum):
    """Submission lifecycle of a mounted form."""

    IDLE = "idle"
    VALIDATING = "validating"
    INVALID = "invalid"
    VALID = "valid"


def _frozen(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class FormState:
    """Current values and error messages of one form, keyed by field name."""

    values: Mapping[str, Any] = field(default_factory=dict)
    errors: Mapping[str, str] = field(default_factory=dict)
    status: FormStatus = FormStatus.IDLE

    def __post_init__(self):
        object.__setattr__(self, "values", _frozen(self.values))
        object.__setattr__(self, "errors", _frozen(self.errors))

    @property
    def is_valid(self) -> bool:
        return not self.errors


def initial_state(fields: Iterable[FieldConfig]) -> FormState:
    """Seed values from each field's default, in field order."""
    values: dict[str, Any] = {}
    for field_config in fields:
        values[field_config.name] = field_config.initial_value()
    return FormState(values=values)


def set_value(state: FormState, name: str, value: Any) -> FormState:
    """Return a state with ``name`` set to ``value``. Does not validate."""
    if name not in state.values:
        raise UnknownFieldError(name)
    return replace(state, values={**state.values, name: value})


def validate_all(schema: CompiledSchema, state: FormState) -> tuple[FormState, ValidationResult]:
    """
    Run the compiled schema over the current values.

    Each invalid field gets its first violated rule's message; fields that
    pass lose any previous error.
    """
    result = schema.validate(state.values)
    return replace(state, errors=result.to_error_dict()), result


class FormEngine:
    """
    Stateful engine for one mounted form.

    Owns the compiled schema and the current ``FormState``. Validation is
    deferred to ``submit`` (or an explicit ``validate_all``); ``set_value``
    only records input.
    """

    def __init__(
        self,
        form: FormConfig | Iterable[FieldConfig],
        on_submit: SubmitHandler | None = None,
        compiler: SchemaCompiler | None = None,
    ):
        """
        Mount a form.

        Args:
            form: A FormConfig, or a bare list of field configs.
            on_submit: Handler called with the validated value map. Defaults
                to ``form.on_submit`` when a FormConfig is given.
            compiler: Compiler to build the schema with (default settings
                from config when omitted).
        """
        if isinstance(form, FormConfig):
            self.form = form
        else:
            self.form = FormConfig(fields=tuple(form))

        self.on_submit = on_submit or self.form.on_submit
        self.schema = (compiler or SchemaCompiler()).compile(self.form.fields)
        self._state = initial_state(self.form.fields)
        self.history: list[FormStatus] = [FormStatus.IDLE]

    @property
    def fields(self) -> tuple[FieldConfig, ...]:
        return self.form.fields

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def status(self) -> FormStatus:
        return self._state.status

    @property
    def values(self) -> Mapping[str, Any]:
        return self._state.values

    @property
    def errors(self) -> Mapping[str, str]:
        return self._state.errors

    def _transition(self, status: FormStatus) -> None:
        logger.debug(f"Form status {self._state.status.value} -> {status.value}")
        self._state = replace(self._state, status=status)
        self.history.append(status)

    def set_value(self, name: str, value: Any) -> None:
        self._state = set_value(self._state, name, value)

    def validate_all(self) -> ValidationResult:
        """Validate every field and update the error map."""
        self._state, result = validate_all(self.schema, self._state)
        return result

    def submit(self) -> ValidationResult:
        """
        Validate and, if every field passes, hand the coerced values to the
        submit handler.

        The handler is called at most once per submit and only when the form
        is valid. Exceptions it raises propagate to the caller after the
        engine has returned to IDLE.

        Returns:
            ValidationResult of the validation pass.
        """
        with form_trace("submit", metadata={"title": self.form.title or ""}):
            self._transition(FormStatus.VALIDATING)
            with form_span("validate_all", data={"fields": len(self.schema)}):
                result = self.validate_all()

            if not result.is_valid:
                self._transition(FormStatus.INVALID)
                logger.info(f"Submit blocked: {result.error_count} invalid field(s)")
                self._transition(FormStatus.IDLE)
                return result

            self._transition(FormStatus.VALID)
            try:
                if self.on_submit is None:
                    logger.warning("Form is valid but no submit handler is set")
                else:
                    with form_span("submit_handler"):
                        self.on_submit(result.validated_data)
            finally:
                self._transition(FormStatus.IDLE)

        return result

    def reset(self) -> None:
        """Restore default values and clear errors."""
        self._state = initial_state(self.form.fields)
