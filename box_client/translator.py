"""
Translation of failed API responses into typed errors.

This module turns a completed HTTP response into an APIResponseError whose
message summarizes the status, the request identifiers and the error code
and message reported by the API.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
import json
import logging
import httpx

from .exceptions import APIResponseError
from .headers import ResponseHeaders

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_ID_HEADER = "BOX-REQUEST-ID"
DEFAULT_ERROR_MESSAGE = "The API returned an error code"


@dataclass(frozen=True)
class ResponseDescriptor:
    """
    A completed HTTP response.

    Attributes:
        status_code: HTTP status code
        headers: Case-insensitive response headers
        body: Raw body text or bytes, empty when the response had none
    """

    status_code: int
    headers: ResponseHeaders = field(default_factory=ResponseHeaders)
    body: Union[str, bytes, None] = ""

    def __post_init__(self):
        if not isinstance(self.headers, ResponseHeaders):
            object.__setattr__(self, "headers", ResponseHeaders(self.headers))

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "ResponseDescriptor":
        """Build a descriptor from a fully read httpx response."""
        return cls(
            status_code=response.status_code,
            headers=ResponseHeaders(response.headers),
            body=response.text,
        )

    @property
    def text(self) -> str:
        """Body as text; bytes are decoded as UTF-8 with replacement."""
        if self.body is None:
            return ""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return self.body


def _load_json_object(body: Union[str, bytes, None]) -> Optional[Dict[str, Any]]:
    """Parse a body as a JSON object, returning None when it is not one."""
    if not body:
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Error body is not valid UTF-8, skipping JSON parsing")
            return None

    if not body.strip():
        return None

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Error body is not JSON: {e}")
        return None

    if not isinstance(data, dict):
        logger.debug(f"Error body is JSON {type(data).__name__}, not an object")
        return None

    return data


def _string_field(data: Dict[str, Any], name: str) -> Optional[str]:
    """Read a field as a non-empty string; other shapes count as absent."""
    value = data.get(name)
    # bool is an int subclass but never a meaningful identifier
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True)
class ErrorPayload:
    """
    Structured fields of a JSON error body.

    Every field is optional; a body without them is not a parse failure.

    Attributes:
        status: The status echoed in the body
        code: Error code, or the ``error`` field when ``code`` is missing
        message: Error message, or ``error_description`` when ``message``
            is missing
        request_id: Request identifier assigned by the API
        help_url: Link to documentation about the error
        context_info: Extra details, passed through untouched
    """

    status: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None
    request_id: Optional[str] = None
    help_url: Optional[str] = None
    context_info: Any = None

    @classmethod
    def from_body(cls, body: Union[str, bytes, None]) -> "ErrorPayload":
        """
        Extract the structured fields of an error body.

        Args:
            body: Raw response body

        Returns:
            The parsed payload; empty when the body is not a JSON object
        """
        data = _load_json_object(body)
        if data is None:
            return cls()

        code = _string_field(data, "code")
        if code is None:
            code = _string_field(data, "error")

        message = _string_field(data, "message")
        if message is None:
            message = _string_field(data, "error_description")

        return cls(
            status=_string_field(data, "status"),
            code=code,
            message=message,
            request_id=_string_field(data, "request_id"),
            help_url=_string_field(data, "help_url"),
            context_info=data.get("context_info"),
        )


def compose_request_id(inner_id: Optional[str], outer_id: Optional[str]) -> str:
    """
    Combine the body and header request identifiers.

    Args:
        inner_id: Identifier from the JSON body
        outer_id: Identifier from the response header

    Returns:
        ``inner.outer``, ``.outer``, ``inner``, or an empty string
    """
    if inner_id and outer_id:
        return f"{inner_id}.{outer_id}"
    if outer_id:
        return f".{outer_id}"
    if inner_id:
        return inner_id
    return ""


def compose_message(
    status_code: int,
    request_id: str = "",
    code: Optional[str] = None,
    message: Optional[str] = None,
    prefix: str = DEFAULT_ERROR_MESSAGE,
) -> str:
    """
    Build the human-readable error message.

    Example:
        >>> compose_message(409, "5678", "item_name_in_use", "Name taken")
        'The API returned an error code [409 | 5678] item_name_in_use - Name taken'
    """
    text = f"{prefix} [{status_code}"
    if request_id:
        text += f" | {request_id}"
    text += "]"
    if code:
        text += f" {code}"
    if message:
        text += f" - {message}"
    return text


def translate(
    descriptor: ResponseDescriptor,
    request_id_header: str = DEFAULT_REQUEST_ID_HEADER,
    prefix: str = DEFAULT_ERROR_MESSAGE,
) -> APIResponseError:
    """
    Convert a failed response into an APIResponseError.

    Translation never raises: bodies that are empty, not JSON or not a JSON
    object simply yield no structured fields.

    Args:
        descriptor: The completed response
        request_id_header: Header carrying the platform request identifier
        prefix: Leading text of the composed message

    Returns:
        The error describing the response
    """
    payload = ErrorPayload.from_body(descriptor.body)
    outer_id = descriptor.headers.first(request_id_header) or None
    request_id = compose_request_id(payload.request_id, outer_id)

    message = compose_message(
        descriptor.status_code,
        request_id=request_id,
        code=payload.code,
        message=payload.message,
        prefix=prefix,
    )

    return APIResponseError(
        message,
        response_code=descriptor.status_code,
        raw_response_body=descriptor.text,
        headers=descriptor.headers,
        request_id=request_id,
        payload=payload,
    )


def raise_for_status(
    response: httpx.Response,
    request_id_header: str = DEFAULT_REQUEST_ID_HEADER,
    prefix: str = DEFAULT_ERROR_MESSAGE,
) -> None:
    """
    Raise an APIResponseError for a non-2xx response.

    Args:
        response: HTTP response to check
        request_id_header: Header carrying the platform request identifier
        prefix: Leading text of the error message

    Raises:
        APIResponseError: If the status code is not in the 2xx range
    """
    if response.is_success:
        return

    error = translate(
        ResponseDescriptor.from_httpx(response),
        request_id_header=request_id_header,
        prefix=prefix,
    )
    logger.warning(error.message)
    raise error