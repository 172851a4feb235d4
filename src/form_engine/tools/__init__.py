"""
Function tools for the form engine.

These tools can be used by agents to validate and inspect forms.
"""

from form_engine.tools.form_tools import (
    describe_form,
    describe_form_tool,
    lint_form,
    lint_form_tool,
    load_form_config,
    load_form_data,
    validate_form_data,
    validate_form_data_tool,
)

__all__ = [
    "validate_form_data_tool",
    "describe_form_tool",
    "lint_form_tool",
    "validate_form_data",  # Core helpers
    "describe_form",
    "lint_form",
    "load_form_config",
    "load_form_data",
]
