"""
Form Schema Models

Provides:
- Pydantic models for the remote form definition (sections, fields, options)
- Answer / error type aliases shared by the validator and controller
- Loading helpers for schema payloads and bundled JSON files
"""

import json
from enum import Enum
from pathlib import Path
from typing import Optional, List, Dict, Any, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS & ALIASES
# =============================================================================

class FieldType(str, Enum):
    TEXT = "text"
    TEL = "tel"
    EMAIL = "email"
    TEXTAREA = "textarea"
    DATE = "date"
    DROPDOWN = "dropdown"
    RADIO = "radio"
    CHECKBOX = "checkbox"


# Field types whose answers are a single free-text string
TEXT_LIKE_TYPES = {FieldType.TEXT, FieldType.TEL, FieldType.EMAIL, FieldType.TEXTAREA}

# Field types that carry an option list
CHOICE_TYPES = {FieldType.DROPDOWN, FieldType.RADIO, FieldType.CHECKBOX}

AnswerValue = Union[str, List[str], bool]
AnswerSet = Dict[str, AnswerValue]
ErrorSet = Dict[str, str]

DEFAULT_REQUIRED_MESSAGE = "This field is required"


# =============================================================================
# FIELD MODELS
# =============================================================================

class FieldOption(BaseModel):
    """A selectable option of a dropdown, radio or checkbox field."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    value: str
    label: str
    data_test_id: Optional[str] = Field(None, alias="dataTestId")


class FieldValidation(BaseModel):
    """Validation overrides sent with a field."""
    model_config = ConfigDict(frozen=True)

    message: Optional[str] = None


class FormField(BaseModel):
    """Definition of a single form field."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    field_id: str = Field(..., alias="fieldId")
    # Kept as a plain string so unknown types load and are skipped at render time
    type: str
    label: str = ""
    required: bool = False
    placeholder: Optional[str] = None
    min_length: Optional[int] = Field(None, alias="minLength")
    max_length: Optional[int] = Field(None, alias="maxLength")
    options: Optional[List[FieldOption]] = None
    validation: Optional[FieldValidation] = None
    message_override: Optional[str] = Field(None, alias="validationMessage")
    data_test_id: Optional[str] = Field(None, alias="dataTestId")

    @property
    def field_type(self) -> Optional[FieldType]:
        """The declared type, or None when the service sent an unknown one."""
        try:
            return FieldType(self.type)
        except ValueError:
            return None

    @property
    def validation_message(self) -> Optional[str]:
        """Custom required-field message, if the schema provides one."""
        if self.validation and self.validation.message:
            return self.validation.message
        return self.message_override

    @property
    def option_values(self) -> List[str]:
        return [opt.value for opt in (self.options or [])]


class FormSection(BaseModel):
    """A titled group of fields shown as one wizard step."""
    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    fields: List[FormField] = []


class FormSchema(BaseModel):
    """Complete form definition: a title plus ordered sections."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    form_title: str = Field(..., alias="formTitle")
    sections: List[FormSection]

    @model_validator(mode="after")
    def _check_unique_field_ids(self) -> "FormSchema":
        seen = set()
        for section in self.sections:
            for field in section.fields:
                if field.field_id in seen:
                    raise ValueError(
                        f"Duplicate fieldId '{field.field_id}' in section '{section.title}'"
                    )
                seen.add(field.field_id)
        return self

    @property
    def section_count(self) -> int:
        return len(self.sections)

    def get_section(self, index: int) -> Optional[FormSection]:
        """Get a section by position."""
        if 0 <= index < len(self.sections):
            return self.sections[index]
        return None

    def get_all_fields(self) -> List[FormField]:
        """Get every field across all sections, in display order."""
        fields = []
        for section in self.sections:
            fields.extend(section.fields)
        return fields

    def get_field(self, field_id: str) -> Optional[FormField]:
        for field in self.get_all_fields():
            if field.field_id == field_id:
                return field
        return None


class FormResponse(BaseModel):
    """Envelope returned by the form service's get-form endpoint."""
    model_config = ConfigDict(extra="allow")

    message: Optional[str] = None
    form: FormSchema


class IdentityRecord(BaseModel):
    """A registered user as acknowledged by the form service."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    roll_number: str = Field(..., alias="rollNumber")
    name: str
    message: Optional[str] = None


# =============================================================================
# LOADING HELPERS
# =============================================================================

def parse_form_response(payload: Dict[str, Any]) -> FormSchema:
    """
    Parse a get-form payload into a FormSchema.

    Raises:
        pydantic.ValidationError: if the payload does not match the schema
    """
    return FormResponse.model_validate(payload).form


def load_form_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a raw get-form payload from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Form definition not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_sample_form_path() -> Path:
    """Path of the bundled sample form used by the dev service."""
    return Path(__file__).parent / "sample_form.json"
