"""
Reusable Form Field Components for schema-driven forms

Provides Streamlit-based field renderers that:
- Map a field definition + current answer + current error to a widget
- Support text, tel, email, textarea, date, dropdown, radio and checkbox
- Report every edit through a single on_change(field_id, value) callback
- Never write answers themselves; the form controller owns the state

The mapping itself (build_field_view, toggle_option) is pure so it can be
tested without a running Streamlit script.
"""

from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import streamlit as st
from pydantic import BaseModel

from config.form_schema import (
    CHOICE_TYPES,
    TEXT_LIKE_TYPES,
    AnswerSet,
    AnswerValue,
    ErrorSet,
    FieldOption,
    FieldType,
    FormField,
    FormSection,
)

OnFieldChange = Callable[[str, AnswerValue], None]

DATE_MIN = date(1900, 1, 1)
DATE_MAX = date(2100, 12, 31)


# =============================================================================
# FIELD VIEWS
# =============================================================================

class WidgetKind(str, Enum):
    TEXT_INPUT = "text_input"
    TEXT_AREA = "text_area"
    DATE_INPUT = "date_input"
    SELECTBOX = "selectbox"
    RADIO = "radio"
    CHECKBOX_GROUP = "checkbox_group"


WIDGET_KINDS = {
    FieldType.TEXT: WidgetKind.TEXT_INPUT,
    FieldType.TEL: WidgetKind.TEXT_INPUT,
    FieldType.EMAIL: WidgetKind.TEXT_INPUT,
    FieldType.TEXTAREA: WidgetKind.TEXT_AREA,
    FieldType.DATE: WidgetKind.DATE_INPUT,
    FieldType.DROPDOWN: WidgetKind.SELECTBOX,
    FieldType.RADIO: WidgetKind.RADIO,
    FieldType.CHECKBOX: WidgetKind.CHECKBOX_GROUP,
}


class FieldView(BaseModel):
    """Everything needed to draw one field."""
    field_id: str
    field_type: FieldType
    kind: WidgetKind
    label: str
    title: str = ""
    required: bool = False
    placeholder: Optional[str] = None
    max_chars: Optional[int] = None
    options: List[FieldOption] = []
    text_value: str = ""
    selected_index: Optional[int] = None
    checked_values: List[str] = []
    error: Optional[str] = None
    test_id: Optional[str] = None


def get_field_key(field_id: str, prefix: str = "form") -> str:
    """Generate unique session state key for a field."""
    return f"{prefix}_{field_id}"


def display_label(field: FormField) -> str:
    """Field label with the required marker."""
    return f"{field.label} *" if field.required else field.label


def group_heading(view: FieldView) -> str:
    """Bold heading for a checkbox group; the required marker stays outside the bold."""
    return f"**{view.title}** \\*" if view.required else f"**{view.title}**"


def build_field_view(
    field: FormField,
    value: Any = "",
    error: Optional[str] = None,
) -> Optional[FieldView]:
    """
    Describe the widget for a field.

    Returns:
        A FieldView, or None for a field type this renderer does not know
    """
    field_type = field.field_type
    if field_type is None:
        return None

    kind = WIDGET_KINDS[field_type]
    options = list(field.options or []) if field_type in CHOICE_TYPES else []

    view = FieldView(
        field_id=field.field_id,
        field_type=field_type,
        kind=kind,
        label=display_label(field),
        title=field.label,
        required=field.required,
        placeholder=field.placeholder,
        options=options,
        error=error or None,
        test_id=field.data_test_id,
    )

    if field_type in TEXT_LIKE_TYPES:
        view.text_value = value if isinstance(value, str) else ""
        # Min length is left to section validation
        view.max_chars = field.max_length

    elif field_type == FieldType.DATE:
        view.text_value = value if isinstance(value, str) else ""

    elif kind in (WidgetKind.SELECTBOX, WidgetKind.RADIO):
        values = [opt.value for opt in options]
        # No default selection until the user picks one
        view.selected_index = values.index(value) if isinstance(value, str) and value in values else None
        if kind == WidgetKind.SELECTBOX and not view.placeholder:
            view.placeholder = "Select an option"

    elif field_type == FieldType.CHECKBOX:
        view.checked_values = list(value) if isinstance(value, list) else []

    return view


def toggle_option(current: Any, option_value: str, checked: bool) -> List[str]:
    """
    Apply one checkbox click to the list of selected values.

    Checking appends the value when not already present, unchecking removes
    one occurrence. The list keeps click order, not option order.
    """
    values = list(current) if isinstance(current, list) else []
    if checked:
        if option_value not in values:
            values.append(option_value)
    elif option_value in values:
        values.remove(option_value)
    return values


def parse_date(value: str) -> Optional[date]:
    """ISO date text to a date, None when empty or malformed."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


# =============================================================================
# WIDGET CALLBACKS
# =============================================================================

def _seed_widget(key: str, value: Any) -> None:
    """
    Put the answer into the widget key before the widget is created.
    Streamlit drops widget keys of fields not drawn on the last run, so
    coming back to a section restores values from the answers here.
    """
    if key not in st.session_state:
        st.session_state[key] = value


def _emit_text(key: str, field_id: str, on_change: OnFieldChange) -> None:
    on_change(field_id, st.session_state.get(key) or "")


def _emit_date(key: str, field_id: str, on_change: OnFieldChange) -> None:
    value = st.session_state.get(key)
    on_change(field_id, value.isoformat() if value else "")


def _emit_choice(key: str, field_id: str, on_change: OnFieldChange) -> None:
    value = st.session_state.get(key)
    on_change(field_id, value if value is not None else "")


def _emit_toggle(
    key: str,
    field_id: str,
    option_value: str,
    current: List[str],
    on_change: OnFieldChange,
) -> None:
    checked = bool(st.session_state.get(key))
    on_change(field_id, toggle_option(current, option_value, checked))


# =============================================================================
# FIELD RENDERERS
# =============================================================================

def render_text_field(view: FieldView, on_change: OnFieldChange, prefix: str = "form") -> None:
    """Render a single-line or multi-line text input."""
    key = get_field_key(view.field_id, prefix)
    _seed_widget(key, view.text_value)

    widget = st.text_area if view.kind == WidgetKind.TEXT_AREA else st.text_input
    widget(
        view.label,
        key=key,
        placeholder=view.placeholder or "",
        max_chars=view.max_chars,
        on_change=_emit_text,
        args=(key, view.field_id, on_change),
    )


def render_date_field(view: FieldView, on_change: OnFieldChange, prefix: str = "form") -> None:
    """Render a date picker; answers are stored as ISO text."""
    key = get_field_key(view.field_id, prefix)
    _seed_widget(key, parse_date(view.text_value))

    st.date_input(
        view.label,
        key=key,
        min_value=DATE_MIN,
        max_value=DATE_MAX,
        format="YYYY-MM-DD",
        on_change=_emit_date,
        args=(key, view.field_id, on_change),
    )


def render_select_field(view: FieldView, on_change: OnFieldChange, prefix: str = "form") -> None:
    """Render a dropdown or a radio group over the option values."""
    key = get_field_key(view.field_id, prefix)
    values = [opt.value for opt in view.options]
    labels: Dict[str, str] = {opt.value: opt.label for opt in view.options}
    selected = values[view.selected_index] if view.selected_index is not None else None
    _seed_widget(key, selected)

    if view.kind == WidgetKind.SELECTBOX:
        st.selectbox(
            view.label,
            options=values,
            key=key,
            format_func=lambda v: labels.get(v, v),
            placeholder=view.placeholder or "Select an option",
            on_change=_emit_choice,
            args=(key, view.field_id, on_change),
        )
    else:
        st.radio(
            view.label,
            options=values,
            key=key,
            format_func=lambda v: labels.get(v, v),
            on_change=_emit_choice,
            args=(key, view.field_id, on_change),
        )


def render_checkbox_field(view: FieldView, on_change: OnFieldChange, prefix: str = "form") -> None:
    """Render one checkbox per option; the answer is the list of checked values."""
    key = get_field_key(view.field_id, prefix)

    st.markdown(group_heading(view))
    for option in view.options:
        option_key = f"{key}__{option.value}"
        _seed_widget(option_key, option.value in view.checked_values)
        st.checkbox(
            option.label,
            key=option_key,
            on_change=_emit_toggle,
            args=(option_key, view.field_id, option.value, view.checked_values, on_change),
        )


RENDERERS = {
    WidgetKind.TEXT_INPUT: render_text_field,
    WidgetKind.TEXT_AREA: render_text_field,
    WidgetKind.DATE_INPUT: render_date_field,
    WidgetKind.SELECTBOX: render_select_field,
    WidgetKind.RADIO: render_select_field,
    WidgetKind.CHECKBOX_GROUP: render_checkbox_field,
}


def render_field(
    field: FormField,
    value: Any,
    error: Optional[str],
    on_change: OnFieldChange,
    prefix: str = "form",
) -> bool:
    """
    Render a field based on its type.

    Returns:
        False when the field type is unknown and nothing was drawn
    """
    view = build_field_view(field, value, error)
    if view is None:
        return False

    with st.container(key=view.test_id or f"{prefix}-field-{view.field_id}"):
        RENDERERS[view.kind](view, on_change, prefix)
        if view.error:
            st.error(view.error)
    return True


def render_form_section(
    section: FormSection,
    answers: AnswerSet,
    errors: ErrorSet,
    on_change: OnFieldChange,
    prefix: str = "form",
) -> int:
    """
    Render a section title, description and all of its fields.

    Returns:
        Number of fields drawn
    """
    st.markdown(f"### {section.title}")
    if section.description:
        st.caption(section.description)

    drawn = 0
    for field in section.fields:
        if render_field(
            field,
            answers.get(field.field_id, ""),
            errors.get(field.field_id),
            on_change,
            prefix,
        ):
            drawn += 1
    return drawn


def clear_field_widgets(prefix: str = "form") -> None:
    """Drop every widget key created by these renderers."""
    for key in [k for k in st.session_state.keys() if str(k).startswith(f"{prefix}_")]:
        del st.session_state[key]
