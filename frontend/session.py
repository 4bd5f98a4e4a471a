"""
Session state helpers for the Streamlit pages.

Holds the identity handed from the login page to the form page, the
current page, and the per-session FormController.
"""

from typing import Optional

import streamlit as st

from backend.form_controller import FormController

ROLL_NUMBER_KEY = "rollNumber"
USER_NAME_KEY = "userName"
PAGE_KEY = "page"
CONTROLLER_KEY = "wizard_controller"

PAGE_LOGIN = "login"
PAGE_FORM = "form"
PAGE_SUCCESS = "success"


def init_session_state() -> None:
    """Initialize page routing state."""
    if PAGE_KEY not in st.session_state:
        st.session_state[PAGE_KEY] = PAGE_LOGIN


def save_identity(roll_number: str, name: str) -> None:
    """Remember who logged in; the form page reads the roll number."""
    st.session_state[ROLL_NUMBER_KEY] = roll_number
    st.session_state[USER_NAME_KEY] = name


def get_roll_number() -> Optional[str]:
    return st.session_state.get(ROLL_NUMBER_KEY)


def get_user_name() -> Optional[str]:
    return st.session_state.get(USER_NAME_KEY)


def get_page() -> str:
    return st.session_state.get(PAGE_KEY, PAGE_LOGIN)


def go_to(page: str) -> None:
    st.session_state[PAGE_KEY] = page


def get_form_controller() -> FormController:
    """Get this session's form controller, creating it on first use."""
    if CONTROLLER_KEY not in st.session_state:
        st.session_state[CONTROLLER_KEY] = FormController()
    return st.session_state[CONTROLLER_KEY]


def clear_session() -> None:
    """Forget the identity, the answers and every widget value."""
    for key in list(st.session_state.keys()):
        del st.session_state[key]
    st.session_state[PAGE_KEY] = PAGE_LOGIN


# =============================================================================
# TOASTS
# =============================================================================

TOASTS_KEY = "pending_toasts"


def queue_toasts(notifications: list) -> None:
    """Keep notifications so they survive a page switch (st.rerun)."""
    st.session_state.setdefault(TOASTS_KEY, []).extend(notifications)


def pop_toasts() -> list:
    return st.session_state.pop(TOASTS_KEY, [])
