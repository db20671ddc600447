"""
Configuration classes for the Box REST client.

This module provides configuration management for client instances.
"""

from typing import Optional, Dict, Union
from dataclasses import dataclass, field
import httpx

from .translator import DEFAULT_ERROR_MESSAGE, DEFAULT_REQUEST_ID_HEADER

DEFAULT_BASE_URL = "https://api.box.com/2.0"


@dataclass
class TimeoutConfig:
    """Per-phase timeouts in seconds for calls to the Box API; None disables one."""

    connect: Optional[float] = 5.0
    read: Optional[float] = 30.0
    write: Optional[float] = 30.0
    pool: Optional[float] = 5.0

    def to_httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.connect,
            read=self.read,
            write=self.write,
            pool=self.pool,
        )


@dataclass
class ClientConfig:
    """
    Configuration for client instances.

    Attributes:
        base_url: Root URL for all API requests
        headers: Default headers applied to all requests
        timeout: Timeout configuration
        verify_ssl: Whether to verify SSL certificates
        max_redirects: Maximum number of redirects to follow
        request_id_header: Response header carrying the platform request id
        error_message: Leading text of API error messages
    """

    base_url: str = DEFAULT_BASE_URL
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    verify_ssl: bool = True
    max_redirects: int = 20
    request_id_header: str = DEFAULT_REQUEST_ID_HEADER
    error_message: str = DEFAULT_ERROR_MESSAGE

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ValueError("base_url is required")

        if not self.request_id_header:
            raise ValueError("request_id_header must not be empty")

        # Ensure base_url doesn't end with a slash
        if self.base_url.endswith("/"):
            self.base_url = self.base_url.rstrip("/")

    def merge_headers(self, request_headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        """Default headers overlaid with the headers of a single call."""
        headers = self.headers.copy()
        if request_headers:
            headers.update(request_headers)
        return headers

    def merge_timeout(
        self, request_timeout: Optional[Union[float, TimeoutConfig]]
    ) -> httpx.Timeout:
        """Resolve a per-call timeout override (seconds or TimeoutConfig)."""
        if request_timeout is None:
            return self.timeout.to_httpx_timeout()

        if isinstance(request_timeout, (int, float)):
            return httpx.Timeout(request_timeout)

        return request_timeout.to_httpx_timeout()
