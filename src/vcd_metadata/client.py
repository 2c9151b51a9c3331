"""vCloud Director client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from lxml import etree

from vcd_metadata.codec import from_bytes, local_name, parse_error, parse_task, to_bytes
from vcd_metadata.exceptions import (
    VCDAPIError,
    VCDAuthenticationError,
    VCDConnectionError,
    VCDNotFoundError,
    VCDValidationError,
)
from vcd_metadata.resources.metadata import MetadataResource
from vcd_metadata.task import Task

if TYPE_CHECKING:
    from vcd_metadata.settings import VCDSettings

logger = logging.getLogger(__name__)


class VCDClient:
    """vCloud Director API client.

    Executes XML requests against the legacy ``/api`` endpoint of a vCloud
    Director installation and hands out ``Task`` handles for asynchronous
    operations.

    Example:
        >>> async with VCDClient("https://vcd.example.com/api", token="...") as client:
        ...     metadata = await client.metadata.get("https://vcd.example.com/api/vApp/vm-1")
        ...     print(metadata.keys())

    Args:
        base_url: API root URL, e.g. ``https://vcd.example.com/api``
        token: Bearer token of an already established session
        api_version: API version requested in the ``Accept`` header
        timeout: Request timeout in seconds (default: 30)
        verify: Verify TLS certificates
        task_poll_interval: Seconds between task status polls
        task_timeout: Default deadline in seconds when waiting for a task
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        api_version: str = "36.0",
        timeout: float = 30.0,
        verify: bool = True,
        task_poll_interval: float = 2.0,
        task_timeout: float = 300.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.api_version = api_version
        self.timeout = timeout
        self.task_poll_interval = task_poll_interval
        self.task_timeout = task_timeout

        headers = {
            "User-Agent": "vcd-metadata/0.1.0",
            "Accept": f"application/*+xml;version={api_version}",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            verify=verify,
        )

        self.metadata = MetadataResource(self)

    @classmethod
    def from_settings(cls, settings: VCDSettings | None = None) -> VCDClient:
        """Build a client from ``VCD_*`` environment settings."""
        if settings is None:
            from vcd_metadata.settings import VCDSettings

            settings = VCDSettings()
        return cls(
            settings.url,
            settings.token,
            api_version=settings.api_version,
            timeout=settings.timeout,
            verify=settings.verify_ssl,
            task_poll_interval=settings.task_poll_interval,
            task_timeout=settings.task_timeout,
        )

    async def __aenter__(self) -> VCDClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def request(
        self,
        method: str,
        href: str,
        *,
        content_type: str | None = None,
        body: Any = None,
    ) -> Any:
        """Make an HTTP request to the vCloud Director API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            href: Absolute resource URL, or a path relative to ``base_url``
            content_type: MIME type of ``body``
            body: lxml element to send as the request body

        Returns:
            Parsed XML root element, or None for an empty response

        Raises:
            VCDAuthenticationError: If authentication fails (401, 403)
            VCDNotFoundError: If resource not found (404)
            VCDValidationError: If request validation fails (400, 422)
            VCDAPIError: For other API errors
            VCDConnectionError: If connection fails
        """
        headers = {}
        content = None
        if body is not None:
            content = to_bytes(body)
            if content_type:
                headers["Content-Type"] = content_type

        logger.debug(f"{method} {href}")
        try:
            response = await self._client.request(
                method=method,
                url=href,
                headers=headers,
                content=content,
            )
        except httpx.HTTPError as e:
            raise VCDConnectionError(f"Failed to connect to vCloud Director API: {e}") from e

        if response.status_code >= 400:
            self._handle_error_response(response)

        if not response.content.strip():
            return None
        try:
            return from_bytes(response.content)
        except etree.XMLSyntaxError as e:
            raise VCDAPIError(
                f"Invalid XML in response from {method} {href}: {e}",
                response.status_code,
                response.text,
            ) from e

    async def execute_task_request(
        self,
        method: str,
        href: str,
        *,
        content_type: str | None = None,
        body: Any = None,
    ) -> Task:
        """Make a request whose response is a vCloud Director ``Task``.

        Returns:
            Task handle for the accepted operation
        """
        element = await self.request(method, href, content_type=content_type, body=body)
        if element is None or local_name(element) != "Task":
            raise VCDAPIError(f"Expected a Task in response to {method} {href}")
        task = Task(self, parse_task(element))
        logger.debug(f"Task {task.href} created ({task.status})")
        return task

    async def get_task(self, href: str) -> Task:
        """Get a task by its href."""
        element = await self.request("GET", href)
        if element is None:
            raise VCDAPIError(f"Empty response when reading task {href}")
        return Task(self, parse_task(element))

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Handle error responses from the API."""
        error: dict[str, Any] = {}
        try:
            error = parse_error(from_bytes(response.content))
            message = error["message"] or f"API request failed with status {response.status_code}"
        except (etree.XMLSyntaxError, ValueError):
            message = f"API request failed with status {response.status_code}"

        kwargs = {
            "major_error_code": error.get("major_error_code"),
            "minor_error_code": error.get("minor_error_code"),
        }
        logger.debug(f"API error {response.status_code}: {message}")

        if response.status_code in (401, 403):
            raise VCDAuthenticationError(message, response.status_code, response.text, **kwargs)
        elif response.status_code == 404:
            raise VCDNotFoundError(message, response.status_code, response.text, **kwargs)
        elif response.status_code in (400, 422):
            raise VCDValidationError(message, response.status_code, response.text, **kwargs)
        else:
            raise VCDAPIError(message, response.status_code, response.text, **kwargs)
