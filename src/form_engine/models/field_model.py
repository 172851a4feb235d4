"""
Declarative field models for the form engine.

A form is described by an ordered list of ``FieldConfig`` records. The
models accept the camelCase keys used by JSON form configs
(``validationRules``, ``defaultValue``, ``submitButtonText``) as well as
their snake_case names, and are frozen so a compiled schema can never
drift from the config it was built from.

Rule kinds are a closed vocabulary (``RuleKind``). A rule that names an
unknown kind fails the whole config at parse time with a pydantic
``ValidationError``, which the tools report as a ``config_error``. Only
rules of a known kind degrade to no-ops: a malformed value or a type it
does not apply to.
"""

from enum import Enum
from typing import Any, Callable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FieldType(str, Enum):
    """Input type of a field; selects the base validator and the control."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    TEXTAREA = "textarea"


class RuleKind(str, Enum):
    """Kind of a validation rule."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    EMAIL = "email"
    MIN = "min"
    MAX = "max"
    PATTERN = "pattern"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"


_MODEL_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


class FieldOption(BaseModel):
    """One choice of a select or radio field."""

    model_config = _MODEL_CONFIG

    label: str = Field(..., description="Text shown for the choice")
    value: str | int | float = Field(..., description="Value bound when chosen")


class ValidationRule(BaseModel):
    """A named constraint with the message surfaced when it is violated."""

    model_config = _MODEL_CONFIG

    kind: RuleKind = Field(
        ...,
        validation_alias=AliasChoices("kind", "type"),
        description="Rule kind",
    )
    value: Any | None = Field(
        default=None,
        description="Rule argument (bound, length or regex); absent for required/optional/email",
    )
    message: str = Field(..., description="Error message shown on violation")


class FieldConfig(BaseModel):
    """Declarative description of one form field."""

    model_config = _MODEL_CONFIG

    name: str = Field(..., description="Field identifier, unique within a form")
    label: str = Field(..., description="Human-readable label")
    type: FieldType = Field(..., description="Input type")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    options: tuple[FieldOption, ...] | None = Field(
        default=None, description="Choices for select and radio fields"
    )
    validation_rules: tuple[ValidationRule, ...] = Field(
        default=(), description="Rules applied in declared order"
    )
    default_value: Any | None = Field(default=None, description="Initial value")

    def empty_value(self) -> Any:
        """Type-appropriate value for a field with nothing entered."""
        if self.type == FieldType.CHECKBOX:
            return False
        return ""

    def initial_value(self) -> Any:
        """Value the field is seeded with when a form is mounted."""
        if self.default_value is None:
            return self.empty_value()
        return self.default_value

    def has_rule(self, kind: RuleKind) -> bool:
        return any(rule.kind == kind for rule in self.validation_rules)


# JSON Schema type and format per field type, for schema export
_JSON_TYPES: dict[FieldType, tuple[str, str | None]] = {
    FieldType.TEXT: ("string", None),
    FieldType.EMAIL: ("string", "email"),
    FieldType.PASSWORD: ("string", "password"),
    FieldType.NUMBER: ("number", None),
    FieldType.DATE: ("string", "date"),
    FieldType.SELECT: ("string", None),
    FieldType.CHECKBOX: ("boolean", None),
    FieldType.RADIO: ("string", None),
    FieldType.TEXTAREA: ("string", None),
}

_JSON_RULE_KEYWORDS: dict[RuleKind, str] = {
    RuleKind.MIN: "minimum",
    RuleKind.MAX: "maximum",
    RuleKind.MIN_LENGTH: "minLength",
    RuleKind.MAX_LENGTH: "maxLength",
    RuleKind.PATTERN: "pattern",
}


class FormConfig(BaseModel):
    """
    A complete form: ordered fields plus the external submit handler.

    Field order determines seeding and rendering order. ``on_submit`` is
    called with the validated value map after a successful submit; it is
    never serialized.
    """

    model_config = _MODEL_CONFIG

    title: str | None = Field(default=None, description="Form title")
    fields: tuple[FieldConfig, ...] = Field(..., description="Ordered form fields")
    submit_button_text: str | None = Field(default=None, description="Submit button text")
    on_submit: Callable[[dict[str, Any]], Any] | None = Field(
        default=None, exclude=True, repr=False
    )

    def to_json_schema(self) -> dict[str, Any]:
        """Export as JSON Schema dict."""
        from form_engine.rules import is_rule_applicable

        properties = {}
        required = []

        for field in self.fields:
            json_type, json_format = _JSON_TYPES.get(field.type, ("string", None))
            prop: dict[str, Any] = {
                "type": json_type,
                "title": field.label,
            }
            if json_format:
                prop["format"] = json_format
            if field.options:
                prop["enum"] = [option.value for option in field.options]
            if field.default_value is not None:
                prop["default"] = field.default_value
            # Only rules that take effect on this type are exported
            for rule in field.validation_rules:
                keyword = _JSON_RULE_KEYWORDS.get(rule.kind)
                if keyword and rule.value is not None and is_rule_applicable(rule.kind, field.type):
                    prop[keyword] = rule.value

            properties[field.name] = prop

            if field.has_rule(RuleKind.REQUIRED):
                required.append(field.name)

        return {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "type": "object",
            "title": self.title,
            "properties": properties,
            "required": required,
        }

    def to_ui_schema(self) -> dict[str, Any]:
        """Export as UI Schema dict."""
        ui_schema: dict[str, Any] = {}

        for field in self.fields:
            field_ui: dict[str, Any] = {"ui:widget": field.type.value}
            if field.placeholder:
                field_ui["ui:placeholder"] = field.placeholder
            ui_schema[field.name] = field_ui

        return ui_schema
