"""
Test Suite: Streamlit Pages

Runs frontend/app.py with streamlit's AppTest against an in-process form
service, driving real widgets:
1. Login hands over to the form page
2. Checkbox clicks keep click order
3. Failed Next shows field errors; editing clears them
4. Previous restores text, radio and checkbox widgets
5. Submit reaches the success page
6. A fetch failure routes back to login
"""

import sys
import os

import pytest
from streamlit.testing.v1 import AppTest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from config.form_schema import FormSchema, IdentityRecord
from backend import form_api
from backend.form_api import FormAPIError
from backend.form_controller import FormState
from frontend.session import (
    CONTROLLER_KEY,
    PAGE_FORM,
    PAGE_KEY,
    PAGE_LOGIN,
    PAGE_SUCCESS,
    ROLL_NUMBER_KEY,
    USER_NAME_KEY,
)

APP_PATH = os.path.join(PROJECT_ROOT, "frontend", "app.py")

FORM = {
    "formTitle": "Club Signup",
    "sections": [
        {
            "title": "About You",
            "fields": [
                {"fieldId": "name", "type": "text", "label": "Name", "required": True,
                 "validation": {"message": "Please enter your name"}},
                {"fieldId": "year", "type": "radio", "label": "Year",
                 "options": [{"value": "1", "label": "1"}, {"value": "2", "label": "2"}]},
                {"fieldId": "interests", "type": "checkbox", "label": "Interests", "required": True,
                 "options": [{"value": "A", "label": "A"}, {"value": "B", "label": "B"}]},
            ],
        },
        {
            "title": "Anything Else",
            "fields": [
                {"fieldId": "about", "type": "textarea", "label": "About", "maxLength": 50},
            ],
        },
    ],
}


class FakeFormService:
    """Stands in for FormAPIClient inside the running app."""

    def __init__(self, form=None, error=None):
        self.form = form
        self.error = error
        self.registered = []

    def register_identity(self, roll_number, name):
        self.registered.append((roll_number, name))
        return IdentityRecord(rollNumber=roll_number, name=name)

    def fetch_schema(self, roll_number):
        if self.error:
            raise self.error
        return self.form


@pytest.fixture
def service(monkeypatch):
    service = FakeFormService(form=FormSchema.model_validate(FORM))
    monkeypatch.setattr(form_api, "_client", service)
    return service


def open_form() -> AppTest:
    """Start the app on the form page for a logged-in user."""
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state[PAGE_KEY] = PAGE_FORM
    at.session_state[ROLL_NUMBER_KEY] = "R-1"
    at.session_state[USER_NAME_KEY] = "Ann"
    at.run()
    assert not at.exception
    return at


def markdown_values(at: AppTest) -> list:
    return [m.value for m in at.markdown]


def error_values(at: AppTest) -> list:
    return [e.value for e in at.error]


def controller(at: AppTest):
    return at.session_state[CONTROLLER_KEY]


def fill_first_section(at: AppTest) -> None:
    at.text_input(key="form_name").input("Ann").run()
    at.radio(key="form_year").set_value("2").run()
    at.checkbox(key="form_interests__B").check().run()


# ============================================================================
# TESTS
# ============================================================================

def test_login_opens_form(service):
    """Test a successful login registers the user and loads the form."""
    print("\nTEST 1: Login")
    print("-" * 40)

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    assert "## Student Login" in markdown_values(at)

    at.text_input(key="login_roll_number").input("R-1")
    at.text_input(key="login_name").input("Ann")
    next(b for b in at.button if b.label == "Login").click().run()

    assert not at.exception
    assert service.registered == [("R-1", "Ann")]
    assert at.session_state[PAGE_KEY] == PAGE_FORM
    assert "## Club Signup" in markdown_values(at)
    assert "### About You" in markdown_values(at)
    print(" PASSED: Login")


def test_required_checkbox_heading(service):
    """Test a required checkbox group heading keeps the bold and the marker."""
    at = open_form()
    values = markdown_values(at)

    assert "**Interests** \\*" in values
    assert "**Interests ***" not in values


def test_checkbox_click_order(service):
    """Test clicking B then A stores ["B", "A"]; unchecking removes B."""
    print("\nTEST 2: Checkbox Click Order")
    print("-" * 40)

    at = open_form()
    at.checkbox(key="form_interests__B").check().run()
    at.checkbox(key="form_interests__A").check().run()
    assert controller(at).answers["interests"] == ["B", "A"]

    at.checkbox(key="form_interests__B").uncheck().run()
    assert controller(at).answers["interests"] == ["A"]
    print(" PASSED: Click order kept")


def test_failed_next_shows_errors(service):
    """Test Next on an empty section shows errors and editing clears one."""
    print("\nTEST 3: Field Errors")
    print("-" * 40)

    at = open_form()
    at.button(key="next_button").click().run()

    assert controller(at).section_index == 0
    assert "Please enter your name" in error_values(at)
    assert "This field is required" in error_values(at)

    at.text_input(key="form_name").input("Ann").run()

    assert "Please enter your name" not in error_values(at)
    assert "This field is required" in error_values(at)
    assert set(controller(at).errors) == {"interests"}
    print(" PASSED: Field errors")


def test_previous_restores_widgets(service):
    """Test coming back to a section shows the stored answers."""
    print("\nTEST 4: Previous")
    print("-" * 40)

    at = open_form()
    fill_first_section(at)
    at.button(key="next_button").click().run()

    assert controller(at).section_index == 1
    assert "### Anything Else" in markdown_values(at)

    at.button(key="prev_button").click().run()

    assert controller(at).section_index == 0
    assert at.text_input(key="form_name").value == "Ann"
    assert at.radio(key="form_year").value == "2"
    assert at.checkbox(key="form_interests__B").value is True
    assert at.checkbox(key="form_interests__A").value is False
    print(" PASSED: Previous")


def test_submit_reaches_success_page(service):
    """Test a valid last section submits and shows the confirmation."""
    print("\nTEST 5: Submit")
    print("-" * 40)

    at = open_form()
    fill_first_section(at)
    at.button(key="next_button").click().run()
    at.text_area(key="form_about").input("Chess").run()
    at.button(key="submit_button").click().run()

    assert not at.exception
    assert controller(at).state == FormState.DONE
    assert controller(at).session.submitted_answers == {
        "name": "Ann",
        "year": "2",
        "interests": ["B"],
        "about": "Chess",
    }
    assert at.session_state[PAGE_KEY] == PAGE_SUCCESS
    assert any("Thank you, Ann!" in value for value in markdown_values(at))
    print(" PASSED: Submit")


def test_fetch_failure_returns_to_login(service):
    """Test a failed schema fetch sends the user back to login."""
    service.error = FormAPIError("No user found", status_code=404)

    at = open_form()

    assert at.session_state[PAGE_KEY] == PAGE_LOGIN
    assert "## Student Login" in markdown_values(at)
    assert any("No user found" in toast.value for toast in at.toast)
