"""Tests for form state, validation and the submission state machine."""

import pytest

from form_engine.engine import (
    FormEngine,
    FormState,
    FormStatus,
    initial_state,
    set_value,
    validate_all,
)
from form_engine.compiler import compile_schema
from form_engine.exceptions import UnknownFieldError
from form_engine.models.field_model import FieldConfig, FormConfig, ValidationRule
from form_engine.samples import CONTACT_FORM, LOGIN_FORM, REGISTRATION_FORM


class Recorder:
    """Submit handler that records every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, data):
        self.calls.append(data)


def valid_registration(engine: FormEngine) -> None:
    engine.set_value("firstName", "Ada")
    engine.set_value("lastName", "Lovelace")
    engine.set_value("email", "ada@gmail.com")
    engine.set_value("password", "analytical")
    engine.set_value("confirmPassword", "analytical")
    engine.set_value("userType", "personal")
    engine.set_value("agreeToTerms", True)


class TestPureState:
    """Tests for the pure state functions."""

    def test_initial_state_seeds_defaults(self):
        """Test values are seeded from defaults or empty values."""
        state = initial_state(LOGIN_FORM.fields)
        assert dict(state.values) == {"email": "", "password": "", "rememberMe": False}
        assert dict(state.errors) == {}
        assert state.status == FormStatus.IDLE

    def test_set_value_returns_new_state(self):
        """Test set_value leaves the original state untouched."""
        state = initial_state(LOGIN_FORM.fields)
        updated = set_value(state, "email", "jane@gmail.com")
        assert updated.values["email"] == "jane@gmail.com"
        assert state.values["email"] == ""

    def test_set_value_does_not_validate(self):
        """Test setting a value leaves the error map alone."""
        state = FormState(values={"email": ""}, errors={"email": "Email is required"})
        updated = set_value(state, "email", "still-bad")
        assert dict(updated.errors) == {"email": "Email is required"}

    def test_set_unknown_field(self):
        """Test setting a value for an undeclared field."""
        state = initial_state(LOGIN_FORM.fields)
        with pytest.raises(UnknownFieldError):
            set_value(state, "username", "jane")

    def test_state_is_immutable(self):
        """Test state mappings cannot be modified in place."""
        state = initial_state(LOGIN_FORM.fields)
        with pytest.raises(TypeError):
            state.values["email"] = "x"

    def test_validate_all_clears_fixed_fields(self):
        """Test a field that now passes loses its previous error."""
        schema = compile_schema(LOGIN_FORM.fields)
        state = initial_state(LOGIN_FORM.fields)
        state, result = validate_all(schema, state)
        assert set(state.errors) == {"email", "password"}

        state = set_value(state, "email", "jane@gmail.com")
        state, result = validate_all(schema, state)
        assert dict(state.errors) == {"password": "Password is required"}
        assert not result.is_valid


class TestScenarios:
    """End-to-end submissions of the sample forms."""

    def test_login_empty(self):
        """Test submitting an empty login form."""
        handler = Recorder()
        engine = FormEngine(LOGIN_FORM, on_submit=handler)
        result = engine.submit()

        assert not result.is_valid
        assert dict(engine.errors) == {
            "email": "Email is required",
            "password": "Password is required",
        }
        assert handler.calls == []

    def test_login_bad_email_and_short_password(self):
        """Test format and length rules after the required check."""
        engine = FormEngine(LOGIN_FORM, on_submit=Recorder())
        engine.set_value("email", "jane")
        engine.set_value("password", "short")
        engine.submit()
        assert dict(engine.errors) == {
            "email": "Please enter a valid email",
            "password": "Password must be at least 8 characters",
        }

    def test_login_valid(self):
        """Test a valid login reaches the handler with coerced data."""
        handler = Recorder()
        engine = FormEngine(LOGIN_FORM, on_submit=handler)
        engine.set_value("email", "jane@gmail.com")
        engine.set_value("password", "correct horse")
        result = engine.submit()

        assert result.is_valid
        assert handler.calls == [{
            "email": "jane@gmail.com",
            "password": "correct horse",
            "rememberMe": False,
        }]

    def test_registration_terms_unchecked(self):
        """Test an unchecked required checkbox blocks registration."""
        handler = Recorder()
        engine = FormEngine(REGISTRATION_FORM, on_submit=handler)
        valid_registration(engine)
        engine.set_value("agreeToTerms", False)
        engine.submit()

        assert dict(engine.errors) == {
            "agreeToTerms": "You must agree to the terms and conditions",
        }
        assert handler.calls == []

    def test_registration_valid(self):
        """Test a complete registration is submitted once."""
        handler = Recorder()
        engine = FormEngine(REGISTRATION_FORM, on_submit=handler)
        valid_registration(engine)
        engine.submit()
        assert len(handler.calls) == 1
        assert handler.calls[0]["userType"] == "personal"

    def test_contact_message_length(self):
        """Test the textarea minimum length."""
        engine = FormEngine(CONTACT_FORM, on_submit=Recorder())
        engine.set_value("message", "short")
        engine.submit()
        assert engine.errors["message"] == "Message must be at least 10 characters"

        engine.set_value("message", "this message is long enough")
        engine.submit()
        assert "message" not in engine.errors

    def test_numeric_bound(self):
        """Test a number field with a minimum."""
        form = FormConfig(fields=[
            FieldConfig(
                name="age",
                label="Age",
                type="number",
                validation_rules=[ValidationRule(kind="min", value=18, message="You must be 18 or older")],
            ),
        ])
        engine = FormEngine(form, on_submit=Recorder())
        engine.set_value("age", 12)
        engine.submit()
        assert dict(engine.errors) == {"age": "You must be 18 or older"}

        engine.set_value("age", 25)
        engine.submit()
        assert dict(engine.errors) == {}

    def test_optional_empty_value_is_absent(self):
        """Test an empty optional field is left out of the submitted data."""
        handler = Recorder()
        engine = FormEngine(
            [FieldConfig(name="nickname", label="Nickname", type="text"),
             FieldConfig(name="city", label="City", type="text")],
            on_submit=handler,
        )
        engine.set_value("city", "Lyon")
        engine.submit()
        assert handler.calls == [{"city": "Lyon"}]


class TestStateMachine:
    """Tests for submission status transitions."""

    def test_invalid_submit_transitions(self):
        """Test an invalid submit goes through INVALID back to IDLE."""
        engine = FormEngine(LOGIN_FORM, on_submit=Recorder())
        engine.submit()
        assert engine.history == [
            FormStatus.IDLE,
            FormStatus.VALIDATING,
            FormStatus.INVALID,
            FormStatus.IDLE,
        ]
        assert engine.status == FormStatus.IDLE

    def test_valid_submit_transitions(self):
        """Test a valid submit goes through VALID back to IDLE."""
        statuses = []
        engine = FormEngine(LOGIN_FORM)
        engine.on_submit = lambda data: statuses.append(engine.status)
        engine.set_value("email", "jane@gmail.com")
        engine.set_value("password", "correct horse")
        engine.submit()

        assert statuses == [FormStatus.VALID]
        assert engine.history[-3:] == [FormStatus.VALIDATING, FormStatus.VALID, FormStatus.IDLE]

    def test_handler_error_propagates(self):
        """Test handler exceptions reach the caller and the form returns to IDLE."""
        def failing_handler(data):
            raise RuntimeError("backend unavailable")

        engine = FormEngine(LOGIN_FORM, on_submit=failing_handler)
        engine.set_value("email", "jane@gmail.com")
        engine.set_value("password", "correct horse")
        with pytest.raises(RuntimeError, match="backend unavailable"):
            engine.submit()
        assert engine.status == FormStatus.IDLE

    def test_handler_from_form_config(self):
        """Test the FormConfig's own handler is used by default."""
        handler = Recorder()
        form = FormConfig(
            fields=[FieldConfig(name="q", label="Query", type="text")],
            on_submit=handler,
        )
        FormEngine(form).submit()
        assert handler.calls == [{}]

    def test_submit_without_handler(self):
        """Test a valid form without a handler still completes."""
        engine = FormEngine([FieldConfig(name="q", label="Query", type="text")])
        assert engine.submit().is_valid
        assert engine.status == FormStatus.IDLE

    def test_reset(self):
        """Test reset restores defaults and clears errors."""
        engine = FormEngine(LOGIN_FORM, on_submit=Recorder())
        engine.set_value("email", "jane")
        engine.submit()
        engine.reset()
        assert engine.values["email"] == ""
        assert dict(engine.errors) == {}
