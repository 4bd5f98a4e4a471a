# Config module
from .settings import settings, validate_settings
from .form_schema import (
    FieldType,
    FieldOption,
    FieldValidation,
    FormField,
    FormSection,
    FormSchema,
    FormResponse,
    IdentityRecord,
    AnswerValue,
    AnswerSet,
    ErrorSet,
    TEXT_LIKE_TYPES,
    CHOICE_TYPES,
    DEFAULT_REQUIRED_MESSAGE,
    parse_form_response,
    load_form_file,
    get_sample_form_path,
)

__all__ = [
    "settings",
    "validate_settings",
    "FieldType",
    "FieldOption",
    "FieldValidation",
    "FormField",
    "FormSection",
    "FormSchema",
    "FormResponse",
    "IdentityRecord",
    "AnswerValue",
    "AnswerSet",
    "ErrorSet",
    "TEXT_LIKE_TYPES",
    "CHOICE_TYPES",
    "DEFAULT_REQUIRED_MESSAGE",
    "parse_form_response",
    "load_form_file",
    "get_sample_form_path",
]
