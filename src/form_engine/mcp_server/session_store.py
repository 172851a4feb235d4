"""
In-memory store of forms mounted through the MCP server.

Each session owns one FormEngine; a successful submit records the
validated data as the session's submission.
"""

import uuid
from typing import Any

from form_engine.engine import FormEngine
from form_engine.models.field_model import FormConfig

# Key: session_id, Value: mounted form
form_sessions: dict[str, FormEngine] = {}

# Key: session_id, Value: validated data of the last successful submit
submissions: dict[str, dict[str, Any]] = {}


def mount_form(form: FormConfig, session_id: str | None = None) -> str:
    """Mount a form and return its session id."""
    session_id = session_id or str(uuid.uuid4()).replace("-", "")

    def record_submission(data: dict[str, Any]) -> None:
        submissions[session_id] = data

    form_sessions[session_id] = FormEngine(form, on_submit=record_submission)
    submissions.pop(session_id, None)
    return session_id


def get_form(session_id: str) -> FormEngine:
    """
    Get the mounted form for a session.

    Raises:
        KeyError: If no form is mounted under ``session_id``.
    """
    try:
        return form_sessions[session_id]
    except KeyError:
        raise KeyError(f"No form mounted for session '{session_id}'") from None


def get_submission(session_id: str) -> dict[str, Any] | None:
    return submissions.get(session_id)


def unmount_form(session_id: str) -> bool:
    """Discard a session's form and submission. Returns False if nothing was mounted."""
    submissions.pop(session_id, None)
    return form_sessions.pop(session_id, None) is not None
