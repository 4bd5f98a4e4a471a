"""
Form Controller - the section-by-section wizard state machine.

States: LOADING -> ACTIVE(section_index) -> SUBMITTING -> DONE, with
LOADING -> ERROR when there is no identity or the schema fetch fails.

All mutable state lives in a FormSession so the controller can be driven
from Streamlit (one session per browser tab) or directly from tests.
"""

import json
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from config.form_schema import AnswerSet, AnswerValue, ErrorSet, FormSchema, FormSection
from backend.form_api import FormAPIError
from backend.form_validator import validate_section

logger = logging.getLogger(__name__)


# ============================================================================
# ENUMS & MODELS
# ============================================================================

class FormState(str, Enum):
    """Lifecycle of a form session."""
    LOADING = "loading"
    ERROR = "error"
    ACTIVE = "active"
    SUBMITTING = "submitting"
    DONE = "done"


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """A transient message for the page layer to show (toast)."""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


class FormSession(BaseModel):
    """Everything the wizard knows about one user's progress."""
    state: FormState = FormState.LOADING
    form: Optional[FormSchema] = None
    section_index: int = 0
    answers: Dict[str, AnswerValue] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)
    notifications: List[Notification] = Field(default_factory=list)
    error_message: Optional[str] = None
    submitted_answers: Optional[Dict[str, AnswerValue]] = None


class SchemaGateway(Protocol):
    def fetch_schema(self, roll_number: str) -> FormSchema: ...


SubmissionSink = Callable[[AnswerSet], None]


class InvalidTransitionError(RuntimeError):
    """Raised when an action is not allowed in the current state."""
    pass


def log_submission(answers: AnswerSet) -> None:
    """Default submission sink: write the collected answers to the log."""
    logger.info(f"Form submission data: {json.dumps(answers, ensure_ascii=False)}")


# ============================================================================
# CONTROLLER
# ============================================================================

class FormController:
    """
    Drives navigation and submission through the section validator.

    Errors are recomputed from scratch on every next()/submit(), only for
    the current section. Going back to an earlier section therefore shows no
    errors for it until it is validated again.
    """

    def __init__(
        self,
        session: Optional[FormSession] = None,
        submission_sink: Optional[SubmissionSink] = None,
    ):
        self.session = session if session is not None else FormSession()
        self.submission_sink = submission_sink or log_submission

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> FormState:
        return self.session.state

    @property
    def form(self) -> Optional[FormSchema]:
        return self.session.form

    @property
    def section_index(self) -> int:
        return self.session.section_index

    @property
    def answers(self) -> AnswerSet:
        return self.session.answers

    @property
    def errors(self) -> ErrorSet:
        return self.session.errors

    @property
    def section_count(self) -> int:
        return self.session.form.section_count if self.session.form else 0

    @property
    def current_section(self) -> Optional[FormSection]:
        if not self.session.form:
            return None
        return self.session.form.get_section(self.session.section_index)

    @property
    def is_first_section(self) -> bool:
        return self.session.section_index == 0

    @property
    def is_last_section(self) -> bool:
        return self.section_count > 0 and self.session.section_index == self.section_count - 1

    @property
    def progress(self) -> float:
        """Fraction of the wizard reached, (index + 1) / section_count."""
        if not self.section_count:
            return 0.0
        return (self.session.section_index + 1) / self.section_count

    def get_value(self, field_id: str) -> AnswerValue:
        """Current answer for a field, empty string when unanswered."""
        return self.session.answers.get(field_id, "")

    def get_error(self, field_id: str) -> Optional[str]:
        return self.session.errors.get(field_id)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> None:
        self.session.notifications.append(
            Notification(title=title, description=description, variant=variant)
        )

    def drain_notifications(self) -> List[Notification]:
        """Return pending notifications and clear the queue."""
        pending = list(self.session.notifications)
        self.session.notifications.clear()
        return pending

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _require_state(self, *allowed: FormState) -> None:
        if self.session.state not in allowed:
            raise InvalidTransitionError(
                f"Action not allowed in state '{self.session.state.value}'"
            )

    def _fail_loading(self, message: str) -> FormState:
        self.session.state = FormState.ERROR
        self.session.error_message = message
        self._notify("Error", message, NotificationVariant.DESTRUCTIVE)
        logger.warning(f"[FormController] Load failed: {message}")
        return self.session.state

    def load(self, gateway: SchemaGateway, roll_number: Optional[str]) -> FormState:
        """
        Fetch the schema for the stored identity.

        LOADING -> ACTIVE(0) on success, LOADING -> ERROR otherwise.
        """
        self._require_state(FormState.LOADING)

        if not roll_number:
            return self._fail_loading("Please login first")

        try:
            form = gateway.fetch_schema(roll_number)
        except FormAPIError as e:
            return self._fail_loading(e.message or "Failed to fetch form")

        if form.section_count == 0:
            return self._fail_loading("Failed to load form data")

        self.session.form = form
        self.session.section_index = 0
        self.session.error_message = None
        self.session.state = FormState.ACTIVE
        logger.info(f"[FormController] Loaded '{form.form_title}' for {roll_number}")
        return self.session.state

    def on_field_change(self, field_id: str, value: AnswerValue) -> None:
        """Store an answer (last write wins) and drop that field's error."""
        self._require_state(FormState.ACTIVE)

        self.session.answers[field_id] = value
        if field_id in self.session.errors:
            del self.session.errors[field_id]

    def _validate_current(self) -> bool:
        section = self.current_section
        errors, is_valid = validate_section(section, self.session.answers)
        self.session.errors = errors
        return is_valid

    def next(self) -> bool:
        """
        Validate the current section and advance when it is valid.

        Returns:
            Whether the section was valid
        """
        self._require_state(FormState.ACTIVE)

        if not self._validate_current():
            self._notify(
                "Validation Error",
                "Please fix the errors before proceeding",
                NotificationVariant.DESTRUCTIVE,
            )
            return False

        if not self.is_last_section:
            self.session.section_index += 1
        return True

    def previous(self) -> None:
        """Go back one section (floored at 0) without validating."""
        self._require_state(FormState.ACTIVE)
        self.session.section_index = max(0, self.session.section_index - 1)

    def submit(self) -> bool:
        """
        Validate the last section and, when valid, hand every answer to the
        submission sink. Earlier sections are not re-validated.

        Returns:
            Whether the submission went through
        """
        self._require_state(FormState.ACTIVE)
        if not self.is_last_section:
            raise InvalidTransitionError("submit() is only available on the last section")

        if not self._validate_current():
            self._notify(
                "Validation Error",
                "Please fix the errors before submitting",
                NotificationVariant.DESTRUCTIVE,
            )
            return False

        self.session.state = FormState.SUBMITTING
        submitted = dict(self.session.answers)
        self.submission_sink(submitted)

        self.session.submitted_answers = submitted
        self.session.state = FormState.DONE
        self._notify("Form Submitted", "Check the console for the submitted data")
        return True

    def restart(self) -> None:
        """Discard all progress and return to LOADING."""
        self.session = FormSession()
