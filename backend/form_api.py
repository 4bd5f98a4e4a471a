"""
Form Service Client - registration and schema retrieval over HTTP.

Talks to the remote form service:
- POST /create-user   {rollNumber, name}
- GET  /get-form      ?rollNumber=...

Non-2xx responses are expected to carry {"message": "..."}; that message is
surfaced verbatim. Network and parse failures surface a generic message.
No retries, no caching.
"""

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from config.settings import settings
from config.form_schema import FormSchema, IdentityRecord, parse_form_response

logger = logging.getLogger(__name__)

CREATE_USER_FAILED = "Failed to create user"
GET_FORM_FAILED = "Failed to get form data"


class FormAPIError(Exception):
    """Raised when a form service call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: requests.Response, fallback: str) -> str:
    """Pull {"message": ...} out of an error body, else use the fallback."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class FormAPIClient:
    """
    Client for the form service.

    One instance per Streamlit session is enough; it holds a
    requests.Session for connection reuse.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.FORM_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> Any:
        """Send a request and return the decoded JSON body of a 2xx response."""
        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.warning(f"[FormAPI] {method} {url} failed: {e}")
            raise FormAPIError(fallback) from e

        if not response.ok:
            message = _error_message(response, fallback)
            logger.warning(f"[FormAPI] {method} {url} -> {response.status_code}: {message}")
            raise FormAPIError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"[FormAPI] {method} {url} returned invalid JSON: {e}")
            raise FormAPIError(fallback, status_code=response.status_code) from e

    def register_identity(self, roll_number: str, name: str) -> IdentityRecord:
        """
        Register a user with the form service.

        Raises:
            FormAPIError: with the server message, or a generic one
        """
        body = self._request(
            "POST",
            "/create-user",
            CREATE_USER_FAILED,
            json={"rollNumber": roll_number, "name": name},
        )
        logger.info(f"[FormAPI] Registered identity {roll_number}")

        record = {"rollNumber": roll_number, "name": name}
        if isinstance(body, dict):
            record.update(body)
        try:
            return IdentityRecord.model_validate(record)
        except ValidationError as e:
            logger.warning(f"[FormAPI] Unexpected create-user payload: {e}")
            raise FormAPIError(CREATE_USER_FAILED) from e

    def fetch_schema(self, roll_number: str) -> FormSchema:
        """
        Fetch the form definition for a registered user.

        Raises:
            FormAPIError: with the server message, or a generic one
        """
        body = self._request(
            "GET",
            "/get-form",
            GET_FORM_FAILED,
            params={"rollNumber": roll_number},
        )

        try:
            schema = parse_form_response(body)
        except ValidationError as e:
            logger.warning(f"[FormAPI] Invalid form payload for {roll_number}: {e}")
            raise FormAPIError(GET_FORM_FAILED) from e

        logger.info(
            f"[FormAPI] Fetched form '{schema.form_title}' "
            f"({schema.section_count} sections) for {roll_number}"
        )
        return schema


# ============================================================================
# MODULE-LEVEL INSTANCE
# ============================================================================

_client = None


def get_form_api_client() -> FormAPIClient:
    """Get singleton form service client."""
    global _client
    if _client is None:
        _client = FormAPIClient()
    return _client
