"""
Box REST Client - typed errors for failed Box API responses.

This library turns non-success API responses into APIResponseError values
whose message carries the status code, the request identifiers and the
error code and message reported by the API.

Example (synchronous):
    >>> from box_client import Client, APIResponseError
    >>> with Client(headers={"Authorization": "Bearer token"}) as client:
    ...     try:
    ...         client.get("/users/12345")
    ...     except APIResponseError as e:
    ...         print(e.message)
    The API returned an error code [403 | 22222.11111] Forbidden

Example (translating a response you already have):
    >>> from box_client import ResponseDescriptor, translate
    >>> error = translate(ResponseDescriptor(500, {}, "<html></html>"))
    >>> error.message
    'The API returned an error code [500]'
"""

from .client import Client
from .async_client import AsyncClient
from .exceptions import (
    ClientError,
    APIResponseError,
    ConnectionError,
    TimeoutError,
)
from .headers import ResponseHeaders
from .translator import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_REQUEST_ID_HEADER,
    ErrorPayload,
    ResponseDescriptor,
    compose_message,
    compose_request_id,
    raise_for_status,
    translate,
)
from .config import ClientConfig, TimeoutConfig

__version__ = "0.1.0"

__all__ = [
    # Clients
    "Client",
    "AsyncClient",
    # Exceptions
    "ClientError",
    "APIResponseError",
    "ConnectionError",
    "TimeoutError",
    # Translation
    "ResponseHeaders",
    "ResponseDescriptor",
    "ErrorPayload",
    "compose_message",
    "compose_request_id",
    "translate",
    "raise_for_status",
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_REQUEST_ID_HEADER",
    # Configuration
    "ClientConfig",
    "TimeoutConfig",
    # Version
    "__version__",
]
