"""
Section Validator - Local validation of one form section at a time.

Provides:
- Required / minimum length / maximum length checks per field
- Section validation producing a field_id -> message mapping

Checks run in declaration order and are independent: a field that fails
more than one check keeps the message of the last failing check.
Only the fields of the given section are examined.
"""

from typing import Any, Optional, Tuple

from config.form_schema import (
    AnswerSet,
    ErrorSet,
    FormField,
    FormSection,
    DEFAULT_REQUIRED_MESSAGE,
)


# ============================================================================
# FIELD CHECKS
# ============================================================================

def is_empty_answer(value: Any) -> bool:
    """An answer counts as missing when absent, an empty string or an empty list."""
    if value is None:
        return True
    if isinstance(value, str) and value == "":
        return True
    if isinstance(value, list) and len(value) == 0:
        return True
    return False


def check_required(field: FormField, value: Any) -> Tuple[bool, Optional[str]]:
    """
    Check a required field has an answer.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if field.required and is_empty_answer(value):
        return False, field.validation_message or DEFAULT_REQUIRED_MESSAGE
    return True, None


def check_min_length(field: FormField, value: Any) -> Tuple[bool, Optional[str]]:
    """
    Check a non-empty string answer reaches minLength.
    Empty strings are left to the required check.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if field.min_length is None:
        return True, None
    if isinstance(value, str) and value != "" and len(value) < field.min_length:
        return False, f"Minimum {field.min_length} characters required"
    return True, None


def check_max_length(field: FormField, value: Any) -> Tuple[bool, Optional[str]]:
    """
    Check a string answer does not exceed maxLength.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if field.max_length is None:
        return True, None
    if isinstance(value, str) and len(value) > field.max_length:
        return False, f"Maximum {field.max_length} characters allowed"
    return True, None


FIELD_CHECKS = (check_required, check_min_length, check_max_length)


def validate_field(field: FormField, value: Any) -> Optional[str]:
    """
    Run every check against one field.

    Returns:
        The surfaced error message (last failing check wins), or None
    """
    error = None
    for check in FIELD_CHECKS:
        is_valid, message = check(field, value)
        if not is_valid:
            error = message
    return error


# ============================================================================
# SECTION VALIDATION
# ============================================================================

def validate_section(section: FormSection, answers: AnswerSet) -> Tuple[ErrorSet, bool]:
    """
    Validate the fields of one section against the full answer set.

    Args:
        section: Section whose fields are checked
        answers: All collected answers (other sections are ignored)

    Returns:
        Tuple of (errors_by_field_id, is_valid)
    """
    errors: ErrorSet = {}

    for field in section.fields:
        error = validate_field(field, answers.get(field.field_id))
        if error:
            errors[field.field_id] = error

    return errors, len(errors) == 0
