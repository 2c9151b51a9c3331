"""Entities that carry metadata.

Every entity kind supports the same metadata contract; the kinds only differ in
which href the requests target. ``metadata_href`` is used for reads and
``metadata_write_href`` for mutations.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vcd_metadata.client import VCDClient
    from vcd_metadata.models import Metadata, MetadataValue
    from vcd_metadata.task import Task

_UUID_RE = re.compile(r"[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{12}")


def get_admin_url(href: str) -> str:
    """Turn ``.../api/...`` into ``.../api/admin/...``."""
    if "/api/admin/" in href:
        return href
    return href.replace("/api/", "/api/admin/", 1)


def extract_uuid(value: str) -> str:
    """Return the last UUID found in a URN or href, or an empty string."""
    matches = _UUID_RE.findall(value)
    return matches[-1] if matches else ""


class MetadataEntity:
    """An entity whose metadata can be read."""

    def __init__(self, client: VCDClient, href: str):
        self.client = client
        self.href = href

    def __repr__(self) -> str:
        return f"{type(self).__name__}(href={self.href!r})"

    @property
    def metadata_href(self) -> str:
        return self.href

    @property
    def metadata_write_href(self) -> str:
        return self.metadata_href

    async def get_metadata_by_key(self, key: str, is_system: bool = False) -> MetadataValue:
        """Get the metadata value stored under a key."""
        return await self.client.metadata.get_by_key(self.metadata_href, key, is_system=is_system)

    async def get_metadata(self) -> Metadata:
        """Get all metadata entries."""
        return await self.client.metadata.get(self.metadata_href)


class WritableMetadataEntity(MetadataEntity):
    """An entity whose metadata can be read and modified."""

    async def add_metadata_entry_async(
        self,
        key: str,
        value: str,
        typed_value: str,
        visibility: str,
        is_system: bool = False,
    ) -> Task:
        return await self.client.metadata.add(
            self.metadata_write_href, key, value, typed_value, visibility, is_system=is_system
        )

    async def add_metadata_entry(
        self,
        key: str,
        value: str,
        typed_value: str,
        visibility: str,
        is_system: bool = False,
    ) -> None:
        """Add a metadata entry and wait for the task to finish."""
        await self.client.metadata.add_and_wait(
            self.metadata_write_href, key, value, typed_value, visibility, is_system=is_system
        )

    async def merge_metadata_async(self, entries: Mapping[str, MetadataValue]) -> Task:
        return await self.client.metadata.merge(self.metadata_write_href, entries)

    async def merge_metadata(self, entries: Mapping[str, MetadataValue]) -> None:
        """Update present entries, create missing ones and wait for the task to finish."""
        await self.client.metadata.merge_and_wait(self.metadata_write_href, entries)

    async def delete_metadata_entry_async(self, key: str, is_system: bool = False) -> Task:
        return await self.client.metadata.delete(self.metadata_write_href, key, is_system=is_system)

    async def delete_metadata_entry(self, key: str, is_system: bool = False) -> None:
        """Delete a metadata entry and wait for the task to finish."""
        await self.client.metadata.delete_and_wait(self.metadata_write_href, key, is_system=is_system)


# ─── Read-only entities ──────────────────────────────────


class Vdc(MetadataEntity):
    """Organization VDC, tenant view. Use ``AdminVdc`` to modify metadata."""


class Catalog(MetadataEntity):
    """Catalog, tenant view. Use ``AdminCatalog`` to modify metadata."""


class Org(MetadataEntity):
    """Organization, tenant view. Use ``AdminOrg`` to modify metadata."""


# ─── Writable entities ───────────────────────────────────


class VM(WritableMetadataEntity):
    pass


class AdminVdc(WritableMetadataEntity):
    pass


class ProviderVdc(WritableMetadataEntity):
    """Provider VDC. Requires system administrator privileges."""


class VApp(WritableMetadataEntity):
    pass


class VAppTemplate(WritableMetadataEntity):
    pass


class MediaRecord(WritableMetadataEntity):
    pass


class Media(WritableMetadataEntity):
    pass


class AdminCatalog(WritableMetadataEntity):
    pass


class AdminOrg(WritableMetadataEntity):
    """Organization, administrator view. Requires system administrator privileges."""


class Disk(WritableMetadataEntity):
    """Independent disk."""


class CatalogItem(WritableMetadataEntity):
    pass


class OrgVdcNetwork(WritableMetadataEntity):
    """Org VDC network. Mutations go through the admin API."""

    @property
    def metadata_write_href(self) -> str:
        return get_admin_url(self.href)


class OpenApiOrgVdcNetwork(WritableMetadataEntity):
    """Org VDC network known by its OpenAPI URN.

    Metadata still lives on the XML API, so the href is derived from the UUID
    in the URN. Networks that belong to a VDC Group are not reachable this way.
    """

    def __init__(self, client: VCDClient, network_id: str):
        self.network_id = network_id
        super().__init__(client, f"{client.base_url}/network/{extract_uuid(network_id)}")

    @property
    def metadata_write_href(self) -> str:
        return f"{self.client.base_url}/admin/network/{extract_uuid(self.network_id)}"
