"""vCloud Director metadata and task models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

XML_NAMESPACE_VCLOUD = "http://www.vmware.com/vcloud/v1.5"
XML_NAMESPACE_XSI = "http://www.w3.org/2001/XMLSchema-instance"

MIME_METADATA = "application/vnd.vmware.vcloud.metadata+xml"
MIME_METADATA_VALUE = "application/vnd.vmware.vcloud.metadata.value+xml"


class MetadataDomain(StrEnum):
    """Metadata namespaces."""

    GENERAL = "GENERAL"
    SYSTEM = "SYSTEM"


class MetadataVisibility(StrEnum):
    """Read/write policy of a metadata entry."""

    READONLY = "READONLY"
    PRIVATE = "PRIVATE"  # shown as "Hidden" in the UI
    READWRITE = "READWRITE"


class MetadataTypedValueKind(StrEnum):
    """xsi:type values accepted for a metadata TypedValue."""

    STRING = "MetadataStringValue"
    NUMBER = "MetadataNumberValue"
    DATETIME = "MetadataDateTimeValue"
    BOOLEAN = "MetadataBooleanValue"


class TaskStatus(StrEnum):
    """Lifecycle states of a vCloud Director task."""

    QUEUED = "queued"
    PRE_RUNNING = "preRunning"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"
    CANCELED = "canceled"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.SUCCESS, TaskStatus.ERROR, TaskStatus.CANCELED, TaskStatus.ABORTED)


class MetadataTypedValue(BaseModel):
    """Typed metadata value."""

    xsi_type: str = MetadataTypedValueKind.STRING
    value: str


class MetadataDomainTag(BaseModel):
    """Domain and visibility of a metadata entry."""

    domain: str = MetadataDomain.GENERAL
    visibility: str = MetadataVisibility.READWRITE


class MetadataValue(BaseModel):
    """A single metadata value, as read from or written to a key."""

    typed_value: MetadataTypedValue
    domain: MetadataDomainTag | None = None
    href: str | None = None

    @classmethod
    def of(
        cls,
        value: str,
        typed_value: str = MetadataTypedValueKind.STRING,
        *,
        domain: str = MetadataDomain.GENERAL,
        visibility: str = MetadataVisibility.READWRITE,
    ) -> MetadataValue:
        """Shortcut for building a value to pass to a merge."""
        return cls(
            typed_value=MetadataTypedValue(xsi_type=typed_value, value=value),
            domain=MetadataDomainTag(domain=domain, visibility=visibility),
        )


class MetadataEntry(BaseModel):
    """A keyed metadata entry of an entity."""

    key: str
    typed_value: MetadataTypedValue
    domain: MetadataDomainTag | None = None
    href: str | None = None


class Metadata(BaseModel):
    """All metadata entries of one entity."""

    entries: list[MetadataEntry] = Field(default_factory=list)
    href: str | None = None

    def get(self, key: str, domain: str | None = None) -> MetadataEntry | None:
        for entry in self.entries:
            if entry.key != key:
                continue
            if domain is None or (entry.domain is not None and entry.domain.domain == domain):
                return entry
        return None

    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]


class TaskRecord(BaseModel):
    """Snapshot of a vCloud Director task."""

    href: str
    id: str | None = None
    name: str | None = None
    operation: str | None = None
    operation_name: str | None = None
    status: TaskStatus = TaskStatus.QUEUED
    progress: int | None = None
    error_message: str | None = None
    start_time: str | None = None
    end_time: str | None = None
