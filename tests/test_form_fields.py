"""
Test Suite: Field Renderer Mapping

Tests:
1. Widget kind per field type
2. Current answer -> widget state (text, select, radio, checkbox)
3. Unknown field types are skipped
4. Checkbox toggling keeps click order
"""

import sys
import os
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.form_schema import FieldType, FormField
from frontend.form_fields import (
    RENDERERS,
    WIDGET_KINDS,
    WidgetKind,
    build_field_view,
    display_label,
    get_field_key,
    group_heading,
    parse_date,
    toggle_option,
)

OPTIONS = [
    {"value": "A", "label": "Alpha"},
    {"value": "B", "label": "Beta"},
    {"value": "C", "label": "Gamma"},
]


def make_field(type, **kwargs) -> FormField:
    return FormField(field_id="f", type=type, label="Field", **kwargs)


def test_every_type_has_a_widget():
    """Test all field types map to a widget with a renderer."""
    print("\nTEST 1: Widget Kinds")
    print("-" * 40)

    for field_type in FieldType:
        kind = WIDGET_KINDS[field_type]
        assert kind in RENDERERS
        print(f"   {field_type.value:10} -> {kind.value}")

    assert WIDGET_KINDS[FieldType.TEL] == WidgetKind.TEXT_INPUT
    assert WIDGET_KINDS[FieldType.TEXTAREA] == WidgetKind.TEXT_AREA
    assert WIDGET_KINDS[FieldType.DROPDOWN] == WidgetKind.SELECTBOX

    print(" PASSED: Widget kinds")


def test_labels_and_keys():
    """Test the required marker and widget key format."""
    assert display_label(make_field("text", required=True)) == "Field *"
    assert display_label(make_field("text")) == "Field"
    assert get_field_key("email", "form") == "form_email"


def test_text_view():
    """Test text fields show the answer and enforce only maxLength."""
    field = make_field("email", placeholder="you@example.com", min_length=3, max_length=40,
                       data_test_id="email-input")
    view = build_field_view(field, "ann@example.com", "Bad email")

    assert view.kind == WidgetKind.TEXT_INPUT
    assert view.text_value == "ann@example.com"
    assert view.max_chars == 40
    assert view.placeholder == "you@example.com"
    assert view.error == "Bad email"
    assert view.test_id == "email-input"


def test_text_view_ignores_non_string_answer():
    """Test a list answer does not leak into a text widget."""
    view = build_field_view(make_field("text"), ["A"])
    assert view.text_value == ""


def test_dropdown_view():
    """Test a dropdown selects the stored option and has a placeholder."""
    field = make_field("dropdown", options=OPTIONS)

    view = build_field_view(field, "B")
    assert view.kind == WidgetKind.SELECTBOX
    assert view.selected_index == 1
    assert view.placeholder == "Select an option"

    assert build_field_view(field, "").selected_index is None
    assert build_field_view(field, "Z").selected_index is None


def test_radio_view():
    """Test a radio group starts with nothing selected."""
    field = make_field("radio", options=OPTIONS)

    assert build_field_view(field, "").selected_index is None
    assert build_field_view(field, "C").selected_index == 2
    assert [opt.label for opt in build_field_view(field).options] == ["Alpha", "Beta", "Gamma"]


def test_checkbox_view():
    """Test checkbox groups reflect the selected values."""
    field = make_field("checkbox", options=OPTIONS)

    assert build_field_view(field, ["C", "A"]).checked_values == ["C", "A"]
    assert build_field_view(field, "").checked_values == []


def test_date_view():
    """Test dates carry ISO text."""
    view = build_field_view(make_field("date"), "2001-02-03")
    assert view.kind == WidgetKind.DATE_INPUT
    assert view.text_value == "2001-02-03"


def test_unknown_type_is_skipped():
    """Test a field of unknown type produces no view."""
    assert build_field_view(make_field("slider"), "5") is None


def test_empty_error_is_none():
    """Test an empty error string is not shown."""
    assert build_field_view(make_field("text"), "x", "").error is None


# ============================================================================
# CHECKBOX TOGGLING
# ============================================================================

def test_toggle_keeps_click_order():
    """Test selecting B then A yields ["B", "A"]."""
    print("\nTEST 4: Checkbox Toggling")
    print("-" * 40)

    values = toggle_option([], "B", True)
    values = toggle_option(values, "A", True)
    assert values == ["B", "A"]

    print(" PASSED: Click order kept")


def test_toggle_does_not_duplicate():
    """Test selecting an already selected option changes nothing."""
    assert toggle_option(["A"], "A", True) == ["A"]


def test_toggle_deselect():
    """Test deselecting removes exactly one occurrence."""
    assert toggle_option(["B", "A", "C"], "A", False) == ["B", "C"]
    assert toggle_option(["A", "A"], "A", False) == ["A"]
    assert toggle_option(["B"], "A", False) == ["B"]


def test_toggle_from_non_list():
    """Test a missing answer starts a new list."""
    assert toggle_option("", "A", True) == ["A"]
    assert toggle_option(None, "A", False) == []


def test_toggle_does_not_mutate_input():
    """Test the current answer list is left unchanged."""
    current = ["A"]
    toggle_option(current, "B", True)
    assert current == ["A"]


def test_parse_date():
    """Test ISO text parsing for the date picker."""
    assert parse_date("2001-02-03") == date(2001, 2, 3)
    assert parse_date("") is None
    assert parse_date("03/02/2001") is None


def test_checkbox_group_heading():
    """Test the required marker sits outside the bold heading."""
    required = build_field_view(make_field("checkbox", required=True, options=OPTIONS))
    assert required.title == "Field"
    assert group_heading(required) == "**Field** \\*"
    assert "***" not in group_heading(required)

    optional = build_field_view(make_field("checkbox", options=OPTIONS))
    assert group_heading(optional) == "**Field**"


def test_options_only_for_choice_types():
    """Test options declared on a text field are not carried to the widget."""
    view = build_field_view(make_field("text", options=OPTIONS), "x")
    assert view.options == []
    assert view.text_value == "x"
