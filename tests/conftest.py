"""Shared test fixtures with canned vCloud Director XML documents."""

from __future__ import annotations

from collections.abc import Callable

import pytest

BASE_URL = "https://vcd.example.com/api"
VM_HREF = f"{BASE_URL}/vApp/vm-8c2b5f6e-3f1d-4c4a-9a7e-0c6d1b2e3f40"
TASK_HREF = f"{BASE_URL}/task/5e7a1c2d-9b3f-4e8a-a1b2-c3d4e5f60718"

NS = 'xmlns="http://www.vmware.com/vcloud/v1.5" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"'


def _task_xml(status: str = "running", error: str | None = None, href: str = TASK_HREF) -> str:
    error_element = ""
    if error is not None:
        error_element = f'<Error majorErrorCode="500" message="{error}" minorErrorCode="INTERNAL_SERVER_ERROR"/>'
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<Task {NS} status="{status}" name="task" operationName="metadataUpdate" '
        f'operation="Updating metadata" id="urn:vcloud:task:5e7a1c2d-9b3f-4e8a-a1b2-c3d4e5f60718" '
        f'href="{href}" startTime="2024-02-08T10:00:00.000Z">'
        f"<Progress>{100 if status == 'success' else 0}</Progress>"
        f"{error_element}"
        "</Task>"
    )


def _error_xml(message: str, major: int = 400, minor: str = "BAD_REQUEST") -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<Error {NS} majorErrorCode="{major}" message="{message}" minorErrorCode="{minor}"/>'
    )


def _metadata_value_xml(value: str, xsi_type: str = "MetadataStringValue", domain: str = "GENERAL",
                        visibility: str = "READWRITE") -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f"<MetadataValue {NS}>"
        f'<Domain visibility="{visibility}">{domain}</Domain>'
        f'<TypedValue xsi:type="{xsi_type}"><Value>{value}</Value></TypedValue>'
        "</MetadataValue>"
    )


def _metadata_xml(entries: list[tuple[str, str, str, str, str]]) -> str:
    """Entries are (key, value, xsi_type, domain, visibility)."""
    body = "".join(
        f'<MetadataEntry href="{VM_HREF}/metadata/{key}">'
        f'<Domain visibility="{visibility}">{domain}</Domain>'
        f"<Key>{key}</Key>"
        f'<TypedValue xsi:type="{xsi_type}"><Value>{value}</Value></TypedValue>'
        "</MetadataEntry>"
        for key, value, xsi_type, domain, visibility in entries
    )
    return f'<?xml version="1.0" encoding="UTF-8"?><Metadata {NS} href="{VM_HREF}/metadata">{body}</Metadata>'


@pytest.fixture
def task_xml() -> Callable[..., str]:
    return _task_xml


@pytest.fixture
def error_xml() -> Callable[..., str]:
    return _error_xml


@pytest.fixture
def metadata_value_xml() -> Callable[..., str]:
    return _metadata_value_xml


@pytest.fixture
def metadata_xml() -> Callable[..., str]:
    return _metadata_xml
