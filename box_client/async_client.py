"""
Asynchronous Box API client.

This module provides the asyncio counterpart of :class:`box_client.Client`.
"""

from typing import Optional, Dict, Any, Union
import httpx
import logging

from .client import build_config
from .config import TimeoutConfig, DEFAULT_BASE_URL
from .translator import raise_for_status
from .exceptions import (
    ConnectionError as ClientConnectionError,
    TimeoutError as ClientTimeoutError,
)

logger = logging.getLogger(__name__)


class AsyncClient:
    """
    Asynchronous Box API client.

    Example:
        >>> async with AsyncClient(headers={"Authorization": "Bearer token"}) as client:
        ...     response = await client.get("/users/me")
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
        Initialize the asynchronous client.

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
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx async client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                headers=self.config.headers,
                timeout=self.config.timeout.to_httpx_timeout(),
                verify=self.config.verify_ssl,
                max_redirects=self.config.max_redirects,
            )
        return self._client

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

    async def aclose(self):
        """Close the client and clean up resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
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
            response = await self.client.send(
                request, follow_redirects=follow_redirects
            )
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

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request(
            "GET", url, params=params, headers=headers, timeout=timeout
        )

    async def post(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request(
            "POST",
            url,
            params=params,
            headers=headers,
            json=json,
            content=content,
            timeout=timeout,
        )

    async def put(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request(
            "PUT",
            url,
            params=params,
            headers=headers,
            json=json,
            content=content,
            timeout=timeout,
        )

    async def patch(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request(
            "PATCH",
            url,
            params=params,
            headers=headers,
            json=json,
            content=content,
            timeout=timeout,
        )

    async def delete(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[Union[float, TimeoutConfig]] = None,
    ) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request(
            "DELETE", url, params=params, headers=headers, timeout=timeout
        )
