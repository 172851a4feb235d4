"""
Field renderer dispatch.

Maps each ``FieldType`` to one of five control contracts and binds it to
a value, an error and a change callback. No validation happens here: a
control only reflects the engine's state and emits change events.

A field whose type is not in ``CONTROL_KINDS`` renders nothing (``render``
returns None); this only happens for configs built without validation.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any, Callable

from form_engine.config import get_config
from form_engine.models.field_model import FieldConfig, FieldType
from form_engine.rules import BOOLEAN

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[Any], None]


class ControlKind(str, Enum):
    """Interaction contract a field is rendered as."""

    SINGLE_LINE = "single_line"
    MULTI_LINE = "multi_line"
    SELECT = "select"
    TOGGLE = "toggle"
    RADIO_GROUP = "radio_group"


CONTROL_KINDS: dict[FieldType, ControlKind] = {
    FieldType.TEXT: ControlKind.SINGLE_LINE,
    FieldType.EMAIL: ControlKind.SINGLE_LINE,
    FieldType.PASSWORD: ControlKind.SINGLE_LINE,
    FieldType.NUMBER: ControlKind.SINGLE_LINE,
    FieldType.DATE: ControlKind.SINGLE_LINE,
    FieldType.TEXTAREA: ControlKind.MULTI_LINE,
    FieldType.SELECT: ControlKind.SELECT,
    FieldType.CHECKBOX: ControlKind.TOGGLE,
    FieldType.RADIO: ControlKind.RADIO_GROUP,
}


@dataclass(frozen=True)
class ControlChoice:
    """One selectable item of a select or radio group."""

    label: str
    value: str
    selected: bool = False


@dataclass(frozen=True)
class ControlContract:
    """What a rendering primitive receives for one field."""

    kind: ControlKind
    name: str
    label: str
    value: Any
    on_change: ChangeHandler = field(repr=False, compare=False)
    error: str | None = None
    placeholder: str = ""
    input_type: str | None = None
    choices: tuple[ControlChoice, ...] = ()
    empty_choice_label: str | None = None
    rows: int | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def emit(self, value: Any) -> None:
        """
        Forward a change event to the bound handler.

        A toggle parses its value as a boolean, so "false" and "0" uncheck it.

        Raises:
            ValueError: If a toggle receives a value that is not a boolean.
        """
        if self.kind == ControlKind.TOGGLE:
            value = BOOLEAN.coerce(value)
        self.on_change(value)

    def choose(self, value: Any) -> None:
        """
        Select one of the control's choices.

        Choice values are bound as strings. A select also accepts ``""``,
        its "no selection" sentinel.

        Raises:
            ValueError: If the control has no choices or ``value`` is not one of them.
        """
        if self.kind not in (ControlKind.SELECT, ControlKind.RADIO_GROUP):
            raise ValueError(f"{self.kind.value} control has no choices")
        value = str(value)
        allowed = {choice.value for choice in self.choices}
        if self.kind == ControlKind.SELECT:
            allowed.add("")
        if value not in allowed:
            raise ValueError(f"'{value}' is not a choice of field '{self.name}'")
        self.on_change(value)


def _choices(field_config: FieldConfig, current_value: Any) -> tuple[ControlChoice, ...]:
    selected = "" if current_value is None else str(current_value)
    return tuple(
        ControlChoice(
            label=option.label,
            value=str(option.value),
            selected=str(option.value) == selected,
        )
        for option in field_config.options or ()
    )


def render(
    field_config: FieldConfig,
    current_value: Any,
    error: str | None,
    on_change: ChangeHandler,
) -> ControlContract | None:
    """Build the control contract for one field, or None for an unknown type."""
    kind = CONTROL_KINDS.get(field_config.type)
    if kind is None:
        logger.debug(f"No control for field '{field_config.name}' of type {field_config.type!r}")
        return None

    config = get_config()
    common = dict(
        kind=kind,
        name=field_config.name,
        label=field_config.label,
        on_change=on_change,
        error=error,
        placeholder=field_config.placeholder or "",
    )

    if kind == ControlKind.SINGLE_LINE:
        return ControlContract(
            value=current_value,
            input_type=FieldType(field_config.type).value,
            **common,
        )
    if kind == ControlKind.MULTI_LINE:
        return ControlContract(value=current_value, rows=config.textarea_rows, **common)
    if kind == ControlKind.SELECT:
        return ControlContract(
            value=current_value,
            choices=_choices(field_config, current_value),
            empty_choice_label=config.select_placeholder,
            **common,
        )
    if kind == ControlKind.TOGGLE:
        return ControlContract(value=bool(current_value), **common)
    return ControlContract(
        value=current_value,
        choices=_choices(field_config, current_value),
        **common,
    )


@dataclass(frozen=True)
class RenderedForm:
    """A mounted form's controls, in field order, plus its submit action."""

    title: str | None
    controls: tuple[ControlContract, ...]
    submit_button_text: str
    on_submit: Callable[[], Any] = field(repr=False, compare=False)

    def control(self, name: str) -> ControlContract:
        for control in self.controls:
            if control.name == name:
                return control
        raise KeyError(name)


def render_form(engine) -> RenderedForm:
    """
    Render every field of a ``FormEngine`` bound to its current state.

    Change events go to ``engine.set_value``; the submit action is
    ``engine.submit``. Render again after a change to pick up new state.
    """
    controls = []
    seen: set[str] = set()
    for field_config in engine.fields:
        # Duplicate names share one value; render the definition that was compiled
        if field_config.name in seen:
            continue
        seen.add(field_config.name)
        compiled = _last_definition(engine.fields, field_config.name)
        control = render(
            compiled,
            engine.values.get(compiled.name),
            engine.errors.get(compiled.name),
            partial(engine.set_value, compiled.name),
        )
        if control is not None:
            controls.append(control)

    return RenderedForm(
        title=engine.form.title,
        controls=tuple(controls),
        submit_button_text=engine.form.submit_button_text or get_config().default_submit_text,
        on_submit=engine.submit,
    )


def _last_definition(fields: tuple[FieldConfig, ...], name: str) -> FieldConfig:
    for field_config in reversed(fields):
        if field_config.name == name:
            return field_config
    raise KeyError(name)
