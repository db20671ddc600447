"""
Synchronous Box API client.

This module provides a thin synchronous transport whose failed responses are
raised as APIResponseError.
"""

from typing import Optional, Dict, Any, Union
import httpx
import logging

from .config import ClientConfig, TimeoutConfig, DEFAULT_BASE_URL
from .translator import raise_for_status
from .exceptions import (
    ConnectionError as ClientConnectionError,
    TimeoutError as ClientTimeoutError,
)

logger = logging.getLogger(__name__)


def build_config(
    base_url: str,
    headers: Optional[Dict[str, str]],
    timeout: Optional[Union[float, TimeoutConfig]],
    **options,
) -> ClientConfig:
    """Create a ClientConfig from client constructor arguments."""
    if timeout is None:
        timeout_config = TimeoutConfig()
    elif isinstance(timeout, (int, float)):
        timeout_config = TimeoutConfig(
            connect=timeout, read=timeout, write=timeout, pool=timeout
        )
    else:
        timeout_config = timeout

    return ClientConfig(
        base_url=base_url,
        headers=headers or {},
        timeout=timeout_config,
        **options,
    )


class Client:
    """
    Synchronous Box API client.

    Non-2xx responses raise APIResponseError with a message such as
    ``The API returned an error code [409 | 5678.abc] item_name_in_use - ...``.

    Example:
        >>> with Client(headers={"Authorization": "Bearer token"}) as client:
        ...     folder = client.get("/folders/0").json()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
        verify_ssl: bool = True,
        max_redirects: int = 20,
        raise_for_status_enabled: bool = True,
        **options,
    ):
        """
        Initialize the synchronous client.

        Args:
            base_url: Root URL for all API requests
            headers: Default headers applied to all requests
            timeout: Timeout configuration (seconds or TimeoutConfig)
            verify_ssl: Whether to verify SSL certificates
            max_redirects: Maximum number of redirects to follow
            raise_for_status_enabled: Whether to raise APIResponseError for
                non-2xx responses
            **options: Other ClientConfig fields, such as request_id_header
        """
        self.config = build_config(
            base_url,
            headers,
            timeout,
            verify_ssl=verify_ssl,
            max_redirects=max_redirects,
            **options,
        )
        self.raise_for_status_enabled = raise_for_status_enabled

        # Initialize httpx client (lazily created)
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the underlying httpx client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.base_url,
                headers=self.config.headers,
                timeout=self.config.timeout.to_httpx_timeout(),
                verify=self.config.verify_ssl,
                max_redirects=self.config.max_redirects,
            )
        return self._client

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and clean up resources."""
        self.close()
        return False

    def close(self):
        """Close the client and clean up resources."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
        follow_redirects: bool = True,
    ) -> httpx.Response:
        """
        Make an HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: URL path (relative to base_url)
            params: Query parameters
            headers: Request headers
            json: JSON request body
            content: Raw request body
            timeout: Request timeout override
            follow_redirects: Whether to follow redirects

        Returns:
            HTTP response

        Raises:
            APIResponseError: For non-2xx responses (if raise_for_status_enabled)
            ConnectionError: For network connectivity issues
            TimeoutError: For request timeouts
        """
        request = self.client.build_request(
            method=method,
            url=url,
            params=params,
            headers=self.config.merge_headers(headers),
            json=json,
            content=content,
            timeout=self.config.merge_timeout(timeout),
        )

        try:
            logger.debug(f"{request.method} {request.url}")
            response = self.client.send(request, follow_redirects=follow_redirects)
        except httpx.ConnectError as e:
            logger.error(f"Connection error: {e}")
            raise ClientConnectionError(str(e)) from e
        except httpx.TimeoutException as e:
            logger.error(f"Timeout: {e}")
            raise ClientTimeoutError(str(e)) from e

        logger.info(f"{request.method} {request.url} -> {response.status_code}")

        if self.raise_for_status_enabled:
            raise_for_status(
                response,
                request_id_header=self.config.request_id_header,
                prefix=self.config.error_message,
            )

        return response

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a GET request."""
        return self.request("GET", url, params=params, headers=headers, timeout=timeout)

    def post(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a POST request."""
        return self.request(
            "POST",
            url,
            params=params,
            headers=headers,
            json=json,
            content=content,
            timeout=timeout,
        )

    def put(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a PUT request."""
        return self.request(
            "PUT",
            url,
            params=params,
            headers=headers,
            json=json,
            content=content,
            timeout=timeout,
        )

    def patch(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a PATCH request."""
        return self.request(
            "PATCH",
            url,
            params=params,
            headers=headers,
            json=json,
            content=content,
            timeout=timeout,
        )

    def delete(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a DELETE request."""
        return self.request(
            "DELETE", url, params=params, headers=headers, timeout=timeout
        )
