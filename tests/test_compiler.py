"""Tests for schema compilation and per-field validation."""

from datetime import date

import pytest

from form_engine.compiler import SchemaCompiler, compile_schema
from form_engine.exceptions import SchemaCompileError
from form_engine.models.field_model import (
    FieldConfig,
    FieldOption,
    FieldType,
    RuleKind,
    ValidationRule,
)
from form_engine.rules import BASE_VALIDATORS, MIXED, is_rule_applicable


def make_field(name, field_type, *rules, **kwargs) -> FieldConfig:
    return FieldConfig(
        name=name,
        label=kwargs.pop("label", name.title()),
        type=field_type,
        validation_rules=[
            ValidationRule(kind=kind, value=value, message=message)
            for kind, value, message in rules
        ],
        **kwargs,
    )


REQUIRED = ("required", None, "This field is required")


class TestCompiledSchema:
    """Tests for the compiled schema mapping."""

    def test_one_validator_per_field(self):
        """Test each field name gets exactly one validator."""
        schema = compile_schema([
            make_field("email", "email"),
            make_field("age", "number"),
        ])
        assert list(schema) == ["email", "age"]
        assert len(schema) == 2

    def test_duplicate_name_last_definition_wins(self):
        """Test a later field with the same name replaces the earlier one."""
        schema = compile_schema([
            make_field("code", "text", REQUIRED),
            make_field("code", "text"),
        ])
        assert len(schema) == 1
        assert schema["code"].required is False
        assert schema.validate({"code": ""}).is_valid

    def test_strict_rejects_duplicates(self):
        """Test strict compilation reports duplicate names."""
        with pytest.raises(SchemaCompileError) as exc_info:
            SchemaCompiler(strict=True).compile([
                make_field("code", "text"),
                make_field("code", "number"),
            ])
        assert [d.code for d in exc_info.value.diagnostics] == ["duplicate_name"]

    def test_strict_rejects_incompatible_rule(self):
        """Test strict compilation reports rules with no effect."""
        with pytest.raises(SchemaCompileError):
            SchemaCompiler(strict=True).compile([
                make_field("plan", "select", ("pattern", "^p", "Bad plan"),
                           options=[FieldOption(label="Pro", value="pro")]),
            ])

    def test_schema_is_read_only(self):
        """Test the compiled schema cannot be modified."""
        schema = compile_schema([make_field("email", "email")])
        with pytest.raises(TypeError):
            schema["email"] = None


class TestTypeGating:
    """Tests for rule applicability by field type."""

    def test_every_field_type_has_a_base_validator(self):
        """Test the base validator table covers every field type."""
        assert set(BASE_VALIDATORS) == set(FieldType)

    def test_required_applies_everywhere(self):
        """Test required applies to all types, including unknown ones."""
        assert all(is_rule_applicable(RuleKind.REQUIRED, t) for t in FieldType)
        assert is_rule_applicable(RuleKind.REQUIRED, "color")

    def test_pattern_on_select_has_no_effect(self):
        """Test a pattern rule on a select never changes validity."""
        with_pattern = compile_schema([
            make_field("plan", "select", ("pattern", "^zzz$", "Bad plan")),
        ])
        without_pattern = compile_schema([make_field("plan", "select")])
        for value in ["", "basic", "pro", "zzz"]:
            assert (
                with_pattern.validate({"plan": value}).is_valid
                == without_pattern.validate({"plan": value}).is_valid
            )

    def test_min_on_text_has_no_effect(self):
        """Test numeric bounds are ignored on text fields."""
        schema = compile_schema([make_field("nickname", "text", ("min", 5, "Too small"))])
        assert schema.validate({"nickname": "ab"}).is_valid

    def test_email_rule_on_text(self):
        """Test the email rule applies to text fields."""
        schema = compile_schema([make_field("contact", "text", ("email", None, "Bad email"))])
        result = schema.validate({"contact": "not-an-email"})
        assert result.to_error_dict() == {"contact": "Bad email"}

    def test_email_rule_rejects_display_name(self):
        """Test the email rule only accepts a bare address."""
        schema = compile_schema([make_field("email", "email", ("email", None, "Bad email"))])
        result = schema.validate({"email": "Jane Doe <jane@gmail.com>"})
        assert result.to_error_dict() == {"email": "Bad email"}
        assert schema.validate({"email": "jane@gmail.com"}).validated_data == {"email": "jane@gmail.com"}

    @pytest.mark.parametrize("value", ["jane", "jane@", "@gmail.com", "jane doe@gmail.com", "jane@@gmail.com"])
    def test_email_rule_rejects_malformed(self, value):
        """Test malformed addresses fail the email rule."""
        schema = compile_schema([make_field("email", "email", ("email", None, "Bad email"))])
        assert schema.validate({"email": value}).to_error_dict() == {"email": "Bad email"}

    def test_max_length_bound_is_inclusive(self):
        """Test maxLength accepts exactly the bound and rejects one more."""
        schema = compile_schema([make_field("code", "text", ("maxLength", 5, "At most 5 characters"))])
        assert schema.validate({"code": "abcde"}).is_valid
        assert schema.validate({"code": "abcdef"}).to_error_dict() == {"code": "At most 5 characters"}

    def test_email_rule_on_password_has_no_effect(self):
        """Test the email rule is ignored on password fields."""
        schema = compile_schema([make_field("secret", "password", ("email", None, "Bad email"))])
        assert schema.validate({"secret": "hunter22"}).is_valid

    def test_malformed_rule_value_is_ignored(self):
        """Test rules with unusable values degrade to no-ops."""
        schema = compile_schema([
            make_field("code", "text", ("pattern", "[unclosed", "Bad code"), ("minLength", "many", "Short")),
        ])
        assert schema.validate({"code": "x"}).is_valid


class TestOptionality:
    """Tests for fields without a required rule."""

    def test_empty_string_passes_and_is_absent(self):
        """Test an empty optional value passes every rule and is dropped."""
        schema = compile_schema([
            make_field("website", "text", ("minLength", 5, "Too short"), ("pattern", "^https://", "Use https")),
            make_field("age", "number", ("min", 18, "Too young")),
            make_field("born", "date"),
        ])
        result = schema.validate({"website": "", "age": "", "born": ""})
        assert result.is_valid
        assert result.validated_data == {}

    def test_missing_value_passes(self):
        """Test a field absent from the value map passes when optional."""
        schema = compile_schema([make_field("nickname", "text", ("minLength", 3, "Too short"))])
        assert schema.validate({}).is_valid

    def test_optional_rule_is_informational(self):
        """Test the optional rule has no effect of its own."""
        schema = compile_schema([
            make_field("bio", "textarea", ("optional", None, "ignored"), ("maxLength", 5, "Too long")),
        ])
        assert schema.validate({"bio": ""}).is_valid
        assert schema.validate({"bio": "far too long"}).to_error_dict() == {"bio": "Too long"}

    def test_non_empty_optional_value_is_checked(self):
        """Test rules still apply once an optional field has a value."""
        schema = compile_schema([make_field("website", "text", ("minLength", 5, "Too short"))])
        assert schema.validate({"website": "ab"}).to_error_dict() == {"website": "Too short"}


class TestPrecedence:
    """Tests for which message wins when several rules fail."""

    def test_required_before_min_length(self):
        """Test an empty required value only reports the required message."""
        schema = compile_schema([
            make_field("password", "password", ("minLength", 8, "Too short"), ("required", None, "Password is required")),
        ])
        assert schema.validate({"password": ""}).to_error_dict() == {"password": "Password is required"}

    def test_declared_order_after_required(self):
        """Test the first failing rule in declared order wins."""
        schema = compile_schema([
            make_field(
                "username",
                "text",
                REQUIRED,
                ("pattern", "^[a-z]+$", "Lowercase letters only"),
                ("minLength", 5, "At least 5 characters"),
            ),
        ])
        assert schema.validate({"username": "AB"}).to_error_dict() == {"username": "Lowercase letters only"}
        assert schema.validate({"username": "ab"}).to_error_dict() == {"username": "At least 5 characters"}


class TestBaseTypes:
    """Tests for base type coercion."""

    def test_number_coercion(self):
        """Test numeric strings are coerced to numbers."""
        schema = compile_schema([make_field("qty", "number")])
        assert schema.validate({"qty": "12"}).validated_data == {"qty": 12}
        assert schema.validate({"qty": "2.5"}).validated_data == {"qty": 2.5}

    def test_number_type_error(self):
        """Test a non-numeric value reports a type error."""
        schema = compile_schema([make_field("qty", "number", label="Quantity")])
        result = schema.validate({"qty": "lots"})
        error = result.get_field_error("qty")
        assert error.error_type == "type"
        assert error.message == "Quantity must be a valid number"

    def test_min_and_max(self):
        """Test numeric bounds are inclusive."""
        schema = compile_schema([
            make_field("age", "number", ("min", 18, "Must be 18 or older"), ("max", 120, "Too old")),
        ])
        assert schema.validate({"age": 12}).to_error_dict() == {"age": "Must be 18 or older"}
        assert schema.validate({"age": 18}).is_valid
        assert schema.validate({"age": 121}).to_error_dict() == {"age": "Too old"}

    def test_date_coercion(self):
        """Test ISO date strings become dates."""
        schema = compile_schema([make_field("born", "date", label="Birthday")])
        assert schema.validate({"born": "2001-02-03"}).validated_data == {"born": date(2001, 2, 3)}
        assert schema.validate({"born": "someday"}).to_error_dict() == {"born": "Birthday must be a valid date"}

    def test_string_accepts_numbers(self):
        """Test numeric option values are bound as strings."""
        schema = compile_schema([make_field("level", "radio")])
        assert schema.validate({"level": 3}).validated_data == {"level": "3"}

    def test_required_checkbox_must_be_checked(self):
        """Test a required checkbox fails when unchecked."""
        schema = compile_schema([make_field("terms", "checkbox", ("required", None, "Accept the terms"))])
        assert schema.validate({"terms": False}).to_error_dict() == {"terms": "Accept the terms"}
        assert schema.validate({"terms": True}).validated_data == {"terms": True}

    def test_optional_checkbox_keeps_false(self):
        """Test an unchecked optional checkbox passes with False."""
        schema = compile_schema([make_field("newsletter", "checkbox")])
        assert schema.validate({"newsletter": False}).validated_data == {"newsletter": False}

    def test_unknown_type_passes_through(self):
        """Test a type outside FieldType gets the passthrough validator."""
        field = FieldConfig.model_construct(
            name="color",
            label="Color",
            type="color",
            validation_rules=(
                ValidationRule(kind="required", message="Pick a color"),
                ValidationRule(kind="minLength", value=10, message="ignored"),
            ),
        )
        schema = compile_schema([field])
        assert schema["color"].base is MIXED
        assert schema.validate({"color": ""}).to_error_dict() == {"color": "Pick a color"}
        assert schema.validate({"color": "#fff"}).validated_data == {"color": "#fff"}
