"""
Form Engine: declarative forms, compiled validation, gated submission.

Describe fields once, compile them into per-field validators, and let the
engine hold values, derive error messages and call your handler only with
fully validated, coerced data.

Simple Usage:
    from form_engine import FormConfig, FormEngine

    form = FormConfig.model_validate({
        "title": "Login",
        "fields": [
            {
                "name": "email",
                "label": "Email",
                "type": "email",
                "validationRules": [
                    {"type": "required", "message": "Email is required"},
                    {"type": "email", "message": "Please enter a valid email"},
                ],
            },
        ],
    })

    engine = FormEngine(form, on_submit=print)
    engine.set_value("email", "user@example.com")
    engine.submit()

Rendering:
    from form_engine import render_form

    rendered = render_form(engine)
    for control in rendered.controls:
        print(control.kind, control.name, control.error)

Diagnostics:
    from form_engine import lint_fields

    for diagnostic in lint_fields(form.fields):
        print(diagnostic.field_name, diagnostic.message)
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
from form_engine.compiler import (
    CompiledSchema,
    FieldValidator,
    SchemaCompiler,
    compile_schema,
)
from form_engine.engine import (
    FormEngine,
    FormState,
    FormStatus,
    initial_state,
    set_value,
    validate_all,
)
from form_engine.renderer import (
    ControlContract,
    ControlKind,
    RenderedForm,
    render,
    render_form,
)
from form_engine.guardrails import (
    ConfigDiagnostic,
    lint_fields,
)
from form_engine.exceptions import (
    FormEngineError,
    SchemaCompileError,
    UnknownFieldError,
)
from form_engine.tracing import (
    setup_tracing,
    disable_tracing,
)

__all__ = [
    # Configuration models
    "FieldConfig",
    "FieldOption",
    "FieldType",
    "FormConfig",
    "RuleKind",
    "ValidationRule",
    # Compilation
    "CompiledSchema",
    "FieldValidator",
    "SchemaCompiler",
    "compile_schema",
    # Engine
    "FormEngine",
    "FormState",
    "FormStatus",
    "initial_state",
    "set_value",
    "validate_all",
    # Validation
    "ValidationResult",
    "FieldValidationError",
    # Rendering
    "ControlContract",
    "ControlKind",
    "RenderedForm",
    "render",
    "render_form",
    # Diagnostics
    "ConfigDiagnostic",
    "lint_fields",
    # Errors
    "FormEngineError",
    "SchemaCompileError",
    "UnknownFieldError",
    # Tracing
    "setup_tracing",
    "disable_tracing",
]

__version__ = "0.1.0"
