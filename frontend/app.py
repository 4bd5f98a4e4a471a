"""
Streamlit Frontend for the Dynamic Form

Pages:
- Login: register roll number + name with the form service
- Form: the section-by-section wizard driven by the fetched schema
- Success: confirmation after the answers are submitted

Run with:  streamlit run frontend/app.py
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import streamlit as st

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import settings, validate_settings
from backend.form_api import FormAPIError, get_form_api_client
from backend.form_controller import FormController, FormState, Notification, NotificationVariant
from frontend.form_fields import clear_field_widgets, render_form_section
from frontend.session import (
    PAGE_FORM,
    PAGE_LOGIN,
    PAGE_SUCCESS,
    CONTROLLER_KEY,
    clear_session,
    get_form_controller,
    get_page,
    get_roll_number,
    get_user_name,
    go_to,
    init_session_state,
    pop_toasts,
    queue_toasts,
    save_identity,
)

LOG_LEVEL = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================

def validate_login_input(roll_number: str, name: str) -> Optional[str]:
    """Both login fields must be non-blank."""
    if not roll_number.strip() or not name.strip():
        return "Please enter both roll number and name"
    return None


def show_toast(note: Notification) -> None:
    icon = "⚠️" if note.variant == NotificationVariant.DESTRUCTIVE else "✅"
    st.toast(f"**{note.title}**: {note.description}", icon=icon)


def show_toasts() -> None:
    """Show notifications queued by the previous run."""
    for note in pop_toasts():
        show_toast(note)


# =============================================================================
# LOGIN PAGE
# =============================================================================

def render_login_page() -> None:
    """Render the login page."""
    st.markdown("## Student Login")
    st.caption("Enter your details to continue")

    with st.form("login_form"):
        roll_number = st.text_input(
            "Roll Number",
            placeholder="Enter your roll number",
            key="login_roll_number",
        )
        name = st.text_input(
            "Full Name",
            placeholder="Enter your full name",
            key="login_name",
        )
        submitted = st.form_submit_button("Login", type="primary", use_container_width=True)

    if not submitted:
        return

    error = validate_login_input(roll_number, name)
    if error:
        show_toast(Notification(title="Error", description=error,
                                variant=NotificationVariant.DESTRUCTIVE))
        return

    try:
        with st.spinner("Logging in..."):
            get_form_api_client().register_identity(roll_number, name)
    except FormAPIError as e:
        show_toast(Notification(title="Error", description=e.message,
                                variant=NotificationVariant.DESTRUCTIVE))
        return

    save_identity(roll_number, name)
    clear_field_widgets(settings.SESSION_PREFIX)
    st.session_state[CONTROLLER_KEY] = FormController()
    queue_toasts([Notification(title="Success", description="User created successfully")])
    go_to(PAGE_FORM)
    st.rerun()


# =============================================================================
# FORM PAGE
# =============================================================================

def render_navigation(controller: FormController) -> None:
    """Previous / Next / Submit buttons."""
    st.markdown("---")
    col1, col2, col3 = st.columns([1, 1, 1])

    with col1:
        if not controller.is_first_section:
            if st.button("← Previous", use_container_width=True, key="prev_button"):
                controller.previous()
                st.rerun()

    with col3:
        if not controller.is_last_section:
            if st.button("Next →", type="primary", use_container_width=True, key="next_button"):
                controller.next()
                queue_toasts(controller.drain_notifications())
                st.rerun()
        else:
            if st.button("Submit Form", type="primary", use_container_width=True, key="submit_button"):
                if controller.submit():
                    go_to(PAGE_SUCCESS)
                queue_toasts(controller.drain_notifications())
                st.rerun()


def render_form_page() -> None:
    """Render the wizard for the logged-in user."""
    controller = get_form_controller()

    if controller.state == FormState.LOADING:
        with st.spinner("Loading form..."):
            controller.load(get_form_api_client(), get_roll_number())

    if controller.state == FormState.ERROR:
        queue_toasts(controller.drain_notifications())
        controller.restart()
        go_to(PAGE_LOGIN)
        st.rerun()
        return

    if controller.state == FormState.DONE:
        go_to(PAGE_SUCCESS)
        st.rerun()
        return

    queue_toasts(controller.drain_notifications())

    form = controller.form
    section = controller.current_section
    if form is None or section is None:
        st.error("Failed to load form data")
        return

    st.markdown(f"## {form.form_title}")
    st.progress(
        controller.progress,
        text=f"Section {controller.section_index + 1} of {controller.section_count}",
    )

    render_form_section(
        section,
        controller.answers,
        controller.errors,
        controller.on_field_change,
        prefix=settings.SESSION_PREFIX,
    )

    render_navigation(controller)


# =============================================================================
# SUCCESS PAGE
# =============================================================================

def render_success_page() -> None:
    """Render the submission confirmation."""
    user_name = get_user_name()
    if not user_name:
        go_to(PAGE_LOGIN)
        st.rerun()
        return

    st.markdown("## ✅ Form Submitted Successfully!")
    st.markdown(
        f"Thank you, {user_name}! Your form has been submitted successfully. "
        "The form data has been logged to the console."
    )

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        if st.button("Start New Form", use_container_width=True):
            clear_session()
            st.rerun()


# =============================================================================
# MAIN APP
# =============================================================================

PAGES = {
    PAGE_LOGIN: render_login_page,
    PAGE_FORM: render_form_page,
    PAGE_SUCCESS: render_success_page,
}


def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="Dynamic Form",
        page_icon="📝",
        layout="centered",
        initial_sidebar_state="collapsed"
    )
    init_session_state()

    is_valid, issues = validate_settings()
    if not is_valid:
        for issue in issues:
            logger.warning(f"[Config] {issue}")
        st.warning("Configuration issues: " + "; ".join(issues))

    show_toasts()

    page = get_page()
    PAGES.get(page, render_login_page)()


if __name__ == "__main__":
    main()
