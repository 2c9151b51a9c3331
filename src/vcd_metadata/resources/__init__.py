"""vCloud Director SDK resource modules."""

from __future__ import annotations

from vcd_metadata.resources.entities import (
    VM,
    AdminCatalog,
    AdminOrg,
    AdminVdc,
    Catalog,
    CatalogItem,
    Disk,
    Media,
    MediaRecord,
    MetadataEntity,
    OpenApiOrgVdcNetwork,
    Org,
    OrgVdcNetwork,
    ProviderVdc,
    VApp,
    VAppTemplate,
    Vdc,
    WritableMetadataEntity,
    extract_uuid,
    get_admin_url,
)
from vcd_metadata.resources.metadata import MetadataResource

__all__ = [
    "VM",
    "AdminCatalog",
    "AdminOrg",
    "AdminVdc",
    "Catalog",
    "CatalogItem",
    "Disk",
    "Media",
    "MediaRecord",
    "MetadataEntity",
    "MetadataResource",
    "OpenApiOrgVdcNetwork",
    "Org",
    "OrgVdcNetwork",
    "ProviderVdc",
    "VApp",
    "VAppTemplate",
    "Vdc",
    "WritableMetadataEntity",
    "extract_uuid",
    "get_admin_url",
]
