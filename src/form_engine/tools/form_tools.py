"""
Form tools.

Deterministic helpers that take a form config and values as JSON and
return JSON, plus ``function_tool`` wrappers so agents can call them.
"""

import json
from typing import Any

from agents import RunContextWrapper, function_tool
from pydantic import ValidationError

from form_engine.compiler import compile_schema
from form_engine.engine import FormEngine
from form_engine.guardrails import lint_fields
from form_engine.models.field_model import FormConfig
from form_engine.renderer import render_form
from form_engine.samples import SAMPLE_FORMS


def _json_error(error_type: str, message: str) -> str:
    return json.dumps({
        "is_valid": False,
        "errors": [{
            "field_name": "_config",
            "error_type": error_type,
            "message": message,
        }],
        "validated_data": None,
    })


def load_form_config(form_config: dict[str, Any] | str) -> FormConfig:
    """
    Load a FormConfig from a dict, a JSON string, or a sample form name.

    Raises:
        ValueError: If the config cannot be parsed.
    """
    if isinstance(form_config, str):
        if form_config in SAMPLE_FORMS:
            return SAMPLE_FORMS[form_config]
        form_config = json.loads(form_config)
    if isinstance(form_config, list):
        form_config = {"fields": form_config}
    return FormConfig.model_validate(form_config)


def load_form_data(form_data_json: str | None) -> dict[str, Any]:
    """
    Parse a JSON object of field values.

    Raises:
        ValueError: If the JSON is invalid or not an object.
    """
    form_data = json.loads(form_data_json or "{}")
    if not isinstance(form_data, dict):
        raise ValueError(f"Form data must be a JSON object, got {type(form_data).__name__}")
    return form_data


def validate_form_data(form_config_json: str, form_data_json: str) -> str:
    """Validate form data against a form config; returns a ValidationResult as JSON."""
    try:
        form = load_form_config(form_config_json)
        form_data = load_form_data(form_data_json)
    except json.JSONDecodeError as e:
        return _json_error("parse_error", f"Invalid JSON: {str(e)}")
    except ValidationError as e:
        return _json_error("config_error", f"Invalid form config: {str(e)}")
    except ValueError as e:
        return _json_error("parse_error", str(e))

    result = compile_schema(form.fields).validate(form_data)
    return result.model_dump_json(indent=2)


def describe_form(form_config_json: str, form_data_json: str | None = None) -> str:
    """Describe the controls a form renders as, bound to optional values; returns JSON."""
    form = load_form_config(form_config_json)
    engine = FormEngine(form)
    for name, value in load_form_data(form_data_json).items():
        engine.set_value(name, value)

    rendered = render_form(engine)
    return json.dumps({
        "title": rendered.title,
        "submitButtonText": rendered.submit_button_text,
        "controls": [
            {
                "name": control.name,
                "label": control.label,
                "kind": control.kind.value,
                "inputType": control.input_type,
                "value": control.value,
                "placeholder": control.placeholder,
                "choices": [
                    {"label": choice.label, "value": choice.value, "selected": choice.selected}
                    for choice in control.choices
                ],
            }
            for control in rendered.controls
        ],
        "jsonSchema": form.to_json_schema(),
        "uiSchema": form.to_ui_schema(),
    }, indent=2, default=str)


def lint_form(form_config_json: str) -> str:
    """Lint a form config; returns a list of diagnostics as JSON."""
    form = load_form_config(form_config_json)
    return json.dumps(
        [diagnostic.model_dump() for diagnostic in lint_fields(form.fields)],
        indent=2,
    )


@function_tool
async def validate_form_data_tool(
    ctx: RunContextWrapper[Any],
    form_config_json: str,
    form_data_json: str,
) -> str:
    """
    Validate form data against a declarative form config.

    Args:
        form_config_json: JSON form config ({"fields": [...]}) or a sample
            form name ("login", "registration", "contact").
        form_data_json: JSON object of field values.
            Example: {"email": "user@example.com", "password": "secret123"}

    Returns:
        JSON string containing validation results:
        - is_valid: boolean indicating if data is valid
        - errors: first violated rule per invalid field
        - validated_data: coerced data if valid, null if invalid
    """
    return validate_form_data(form_config_json, form_data_json)


@function_tool
async def describe_form_tool(
    ctx: RunContextWrapper[Any],
    form_config_json: str,
    form_data_json: str | None = None,
) -> str:
    """
    Describe the controls of a form and export its JSON Schema.

    Args:
        form_config_json: JSON form config or a sample form name.
        form_data_json: Optional JSON object of current field values.

    Returns:
        JSON string with the form title, controls and schemas.
    """
    return describe_form(form_config_json, form_data_json)


@function_tool
async def lint_form_tool(
    ctx: RunContextWrapper[Any],
    form_config_json: str,
) -> str:
    """
    Report problems in a form config (duplicate names, rules with no effect).

    Args:
        form_config_json: JSON form config or a sample form name.

    Returns:
        JSON list of diagnostics.
    """
    return lint_form(form_config_json)
