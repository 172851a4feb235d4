"""
MCP tool definitions for the form engine.

Each handler takes the tool arguments as a dict and returns a
JSON-serializable dict.
"""

import json
import logging
from typing import Any, Callable

from form_engine.mcp_server import session_store
from form_engine.renderer import render_form
from form_engine.tools.form_tools import (
    describe_form,
    lint_form,
    load_form_config,
    validate_form_data,
)

logger = logging.getLogger("form-engine-mcp")


def _form_arg(arguments: dict[str, Any]) -> str:
    form = arguments.get("form")
    if form is None:
        raise ValueError("'form' is required")
    return form if isinstance(form, str) else json.dumps(form)


def mcp_validate_form(arguments: dict[str, Any]) -> dict[str, Any]:
    return json.loads(validate_form_data(
        _form_arg(arguments),
        json.dumps(arguments.get("values", {})),
    ))


def mcp_describe_form(arguments: dict[str, Any]) -> dict[str, Any]:
    return json.loads(describe_form(
        _form_arg(arguments),
        json.dumps(arguments.get("values", {})),
    ))


def mcp_lint_form(arguments: dict[str, Any]) -> dict[str, Any]:
    return {"diagnostics": json.loads(lint_form(_form_arg(arguments)))}


def _session_view(session_id: str) -> dict[str, Any]:
    engine = session_store.get_form(session_id)
    rendered = render_form(engine)
    return {
        "session_id": session_id,
        "status": engine.status.value,
        "values": dict(engine.values),
        "errors": dict(engine.errors),
        "fields": [control.name for control in rendered.controls],
    }


def mcp_mount_form(arguments: dict[str, Any]) -> dict[str, Any]:
    form = load_form_config(_form_arg(arguments))
    session_id = session_store.mount_form(form, arguments.get("session_id"))
    logger.info(f"Mounted form '{form.title or 'untitled'}' as session {session_id}")
    return _session_view(session_id)


def mcp_set_field_value(arguments: dict[str, Any]) -> dict[str, Any]:
    session_id = arguments["session_id"]
    engine = session_store.get_form(session_id)
    engine.set_value(arguments["name"], arguments.get("value"))
    return _session_view(session_id)


def mcp_submit_form(arguments: dict[str, Any]) -> dict[str, Any]:
    session_id = arguments["session_id"]
    result = session_store.get_form(session_id).submit()
    view = _session_view(session_id)
    view["submitted"] = result.is_valid
    view["data"] = session_store.get_submission(session_id) if result.is_valid else None
    return view


def mcp_unmount_form(arguments: dict[str, Any]) -> dict[str, Any]:
    session_id = arguments["session_id"]
    unmounted = session_store.unmount_form(session_id)
    if unmounted:
        logger.info(f"Unmounted session {session_id}")
    return {"session_id": session_id, "unmounted": unmounted}


TOOL_HANDLERS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    "validate_form": mcp_validate_form,
    "describe_form": mcp_describe_form,
    "lint_form": mcp_lint_form,
    "mount_form": mcp_mount_form,
    "set_field_value": mcp_set_field_value,
    "submit_form": mcp_submit_form,
    "unmount_form": mcp_unmount_form,
}

_FORM_PROPERTY = {
    "description": (
        "Form config object {title?, fields: [...], submitButtonText?}, "
        "or a sample form name: login, registration, contact"
    ),
    "oneOf": [{"type": "object"}, {"type": "string"}],
}

_VALUES_PROPERTY = {
    "type": "object",
    "description": "Field values keyed by field name",
}


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "validate_form",
            "description": "Validate field values against a declarative form config. "
                           "Returns the first violated rule per invalid field, or the coerced data.",
            "inputSchema": {
                "type": "object",
                "properties": {"form": _FORM_PROPERTY, "values": _VALUES_PROPERTY},
                "required": ["form"],
            },
        },
        {
            "name": "describe_form",
            "description": "Describe the controls a form renders as and export its JSON Schema.",
            "inputSchema": {
                "type": "object",
                "properties": {"form": _FORM_PROPERTY, "values": _VALUES_PROPERTY},
                "required": ["form"],
            },
        },
        {
            "name": "lint_form",
            "description": "Report problems in a form config: duplicate names, invalid names, "
                           "rules that have no effect on their field type.",
            "inputSchema": {
                "type": "object",
                "properties": {"form": _FORM_PROPERTY},
                "required": ["form"],
            },
        },
        {
            "name": "mount_form",
            "description": "Mount a form and get a session id for set_field_value, submit_form "
                           "and unmount_form.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "form": _FORM_PROPERTY,
                    "session_id": {"type": "string", "description": "Optional session id to use"},
                },
                "required": ["form"],
            },
        },
        {
            "name": "set_field_value",
            "description": "Set one field's value on a mounted form. Does not validate.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "session_id": {"type": "string"},
                    "name": {"type": "string", "description": "Field name"},
                    "value": {"description": "New value"},
                },
                "required": ["session_id", "name", "value"],
            },
        },
        {
            "name": "submit_form",
            "description": "Validate a mounted form and, if valid, record its data as submitted.",
            "inputSchema": {
                "type": "object",
                "properties": {"session_id": {"type": "string"}},
                "required": ["session_id"],
            },
        },
        {
            "name": "unmount_form",
            "description": "Unmount a form and discard its values and submission.",
            "inputSchema": {
                "type": "object",
                "properties": {"session_id": {"type": "string"}},
                "required": ["session_id"],
            },
        },
    ]
