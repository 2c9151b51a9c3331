"""Metadata resource API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING
from urllib.parse import quote

from vcd_metadata.codec import build_metadata, build_metadata_value, parse_metadata, parse_metadata_value
from vcd_metadata.exceptions import VCDAPIError, VCDValidationError
from vcd_metadata.models import (
    MIME_METADATA,
    MIME_METADATA_VALUE,
    Metadata,
    MetadataDomain,
    MetadataDomainTag,
    MetadataTypedValue,
    MetadataValue,
    MetadataVisibility,
)

if TYPE_CHECKING:
    from vcd_metadata.client import VCDClient
    from vcd_metadata.task import Task

logger = logging.getLogger(__name__)


def metadata_key_href(href: str, key: str, is_system: bool = False) -> str:
    """Build ``<href>/metadata/[SYSTEM/]<key>``."""
    path = f"{href.rstrip('/')}/metadata/"
    if is_system:
        path += "SYSTEM/"
    return path + quote(key, safe="")


class MetadataResource:
    """Metadata resource manager.

    Reads and writes the metadata of any entity addressed by its href. Every
    mutation returns a ``Task``; the ``*_and_wait`` variants block on it.
    """

    def __init__(self, client: VCDClient):
        self.client = client

    async def get_by_key(self, href: str, key: str, *, is_system: bool = False) -> MetadataValue:
        """Get the metadata value stored under a key.

        Args:
            href: Entity href
            key: Metadata key
            is_system: Read from the SYSTEM domain instead of GENERAL

        Returns:
            Metadata value

        Raises:
            VCDNotFoundError: If the entity has no such key

        Example:
            >>> value = await client.metadata.get_by_key(vm_href, "env")
            >>> value.typed_value.value
            'prod'
        """
        element = await self.client.request("GET", metadata_key_href(href, key, is_system))
        if element is None:
            raise VCDAPIError(f"error retrieving metadata by key {key}: empty response")
        return parse_metadata_value(element)

    async def get(self, href: str) -> Metadata:
        """Get all metadata entries of an entity, in every domain.

        Example:
            >>> metadata = await client.metadata.get(vm_href)
            >>> metadata.keys()
            ['env', 'owner']
        """
        element = await self.client.request("GET", f"{href.rstrip('/')}/metadata/")
        if element is None:
            return Metadata()
        return parse_metadata(element)

    async def add(
        self,
        href: str,
        key: str,
        value: str,
        typed_value: str,
        visibility: str,
        *,
        is_system: bool = False,
    ) -> Task:
        """Add or overwrite a single metadata entry.

        SYSTEM entries keep the requested visibility. GENERAL entries are
        always sent as READWRITE, whatever visibility was requested.

        Args:
            href: Entity href
            key: Metadata key
            value: Literal value
            typed_value: One of ``MetadataTypedValueKind``
            visibility: One of ``MetadataVisibility``
            is_system: Write to the SYSTEM domain instead of GENERAL

        Returns:
            Task of the operation

        Raises:
            VCDValidationError: If the server rejects the domain/visibility pairing

        Example:
            >>> task = await client.metadata.add(vm_href, "env", "prod", "MetadataStringValue", "READWRITE")
            >>> await task.wait()
        """
        if is_system:
            domain = MetadataDomainTag(domain=MetadataDomain.SYSTEM, visibility=visibility)
        else:
            domain = MetadataDomainTag(domain=MetadataDomain.GENERAL, visibility=MetadataVisibility.READWRITE)

        payload = MetadataValue(
            typed_value=MetadataTypedValue(xsi_type=typed_value, value=value),
            domain=domain,
        )

        try:
            task = await self.client.execute_task_request(
                "PUT",
                metadata_key_href(href, key, is_system),
                content_type=MIME_METADATA_VALUE,
                body=build_metadata_value(payload),
            )
        except VCDAPIError as e:
            # The server reports invalid pairings as "[ <request id> ] visibility"
            if str(e).endswith("visibility"):
                raise VCDValidationError(
                    f"error adding metadata with key {key}: visibility cannot be {visibility} "
                    f"when domain is {domain.domain}: {e}",
                    e.status_code,
                    e.response_text,
                    major_error_code=e.major_error_code,
                    minor_error_code=e.minor_error_code,
                    original=e,
                ) from e
            raise

        logger.debug(f"Add metadata {domain.domain}/{key} on {href}: task {task.href}")
        return task

    async def add_and_wait(
        self,
        href: str,
        key: str,
        value: str,
        typed_value: str,
        visibility: str,
        *,
        is_system: bool = False,
    ) -> None:
        """Add a metadata entry and wait for the task to finish."""
        task = await self.add(href, key, value, typed_value, visibility, is_system=is_system)
        await task.wait()
        logger.info(f"Added metadata {key} on {href}")

    async def merge(self, href: str, entries: Mapping[str, MetadataValue]) -> Task:
        """Update existing entries and create missing ones in a single request.

        Domain and visibility are sent exactly as given for each entry.

        Args:
            href: Entity href
            entries: Mapping of metadata key to value

        Returns:
            Task of the operation

        Example:
            >>> task = await client.metadata.merge(vm_href, {
            ...     "env": MetadataValue.of("prod"),
            ...     "replicas": MetadataValue.of("3", "MetadataNumberValue"),
            ... })
        """
        task = await self.client.execute_task_request(
            "POST",
            f"{href.rstrip('/')}/metadata",
            content_type=MIME_METADATA,
            body=build_metadata(entries),
        )
        logger.debug(f"Merge {len(entries)} metadata entries on {href}: task {task.href}")
        return task

    async def merge_and_wait(self, href: str, entries: Mapping[str, MetadataValue]) -> None:
        """Merge metadata entries and wait for the task to finish."""
        task = await self.merge(href, entries)
        await task.wait()
        logger.info(f"Merged {len(entries)} metadata entries on {href}")

    async def delete(self, href: str, key: str, *, is_system: bool = False) -> Task:
        """Delete the metadata entry stored under a key.

        Deleting a key that does not exist is an error.
        """
        task = await self.client.execute_task_request("DELETE", metadata_key_href(href, key, is_system))
        logger.debug(f"Delete metadata {key} on {href}: task {task.href}")
        return task

    async def delete_and_wait(self, href: str, key: str, *, is_system: bool = False) -> None:
        """Delete a metadata entry and wait for the task to finish."""
        task = await self.delete(href, key, is_system=is_system)
        await task.wait()
        logger.info(f"Deleted metadata {key} on {href}")
