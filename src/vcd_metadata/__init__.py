"""vCloud Director metadata SDK.

Python client for reading and writing metadata on vCloud Director entities.
"""

from __future__ import annotations

from vcd_metadata.client import VCDClient
from vcd_metadata.exceptions import (
    VCDAPIError,
    VCDAuthenticationError,
    VCDConnectionError,
    VCDError,
    VCDNotFoundError,
    VCDTaskError,
    VCDTaskTimeoutError,
    VCDValidationError,
)
from vcd_metadata.models import (
    Metadata,
    MetadataDomain,
    MetadataDomainTag,
    MetadataEntry,
    MetadataTypedValue,
    MetadataTypedValueKind,
    MetadataValue,
    MetadataVisibility,
    TaskRecord,
    TaskStatus,
)
from vcd_metadata.task import Task

__version__ = "0.1.0"

__all__ = [
    "VCDClient",
    "Task",
    "Metadata",
    "MetadataDomain",
    "MetadataDomainTag",
    "MetadataEntry",
    "MetadataTypedValue",
    "MetadataTypedValueKind",
    "MetadataValue",
    "MetadataVisibility",
    "TaskRecord",
    "TaskStatus",
    "VCDError",
    "VCDAPIError",
    "VCDAuthenticationError",
    "VCDConnectionError",
    "VCDNotFoundError",
    "VCDTaskError",
    "VCDTaskTimeoutError",
    "VCDValidationError",
]
