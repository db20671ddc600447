"""
Exception hierarchy for the Box REST client.

This module defines the error raised when the API answers with a
non-success status, plus the transport failures of the clients.
"""

from typing import Optional, TYPE_CHECKING

from .headers import HeadersInput, ResponseHeaders

if TYPE_CHECKING:
    from .translator import ErrorPayload


class ClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str):
        """
        Initialize a ClientError.

        Args:
            message: Error message
        """
        super().__init__(message)

    @property
    def message(self) -> str:
        """The error message; always equal to ``str(error)``."""
        return self.args[0]


class APIResponseError(ClientError):
    """
    The API responded with a non-success status.

    Instances are built by :func:`box_client.translator.translate` and are
    read-only once constructed.

    Example:
        >>> try:
        ...     client.get("/folders/0")
        ... except APIResponseError as e:
        ...     print(e.response_code, e.request_id, e.raw_response_body)
    """

    def __init__(
        self,
        message: str,
        response_code: int,
        raw_response_body: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
        request_id: str = "",
        payload: Optional["ErrorPayload"] = None,
    ):
        """
        Initialize an APIResponseError.

        Args:
            message: Composed human-readable message
            response_code: HTTP status code of the response
            raw_response_body: Response body text, empty when absent
            headers: Response headers
            request_id: Request identifier fragment, empty when unknown
            payload: Structured fields parsed from the body
        """
        super().__init__(message)
        self._response_code = response_code
        self._raw_response_body = raw_response_body or ""
        self._headers = (
            headers if isinstance(headers, ResponseHeaders) else ResponseHeaders(headers)
        )
        self._request_id = request_id
        self._payload = payload

    @property
    def response_code(self) -> int:
        return self._response_code

    @property
    def raw_response_body(self) -> str:
        return self._raw_response_body

    @property
    def headers(self) -> ResponseHeaders:
        return self._headers

    @property
    def request_id(self) -> str:
        return self._request_id

    @property
    def payload(self) -> Optional["ErrorPayload"]:
        return self._payload

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(response_code={self._response_code!r}, "
            f"message={self.message!r})"
        )


class ConnectionError(ClientError):
    """Network connectivity issues."""

    pass


class TimeoutError(ClientError):
    """Request timeout exceeded."""

    pass
