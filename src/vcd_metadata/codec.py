"""XML payloads exchanged with the vCloud Director API.

Builds the ``MetadataValue`` and ``Metadata`` request bodies and parses the
metadata, ``Task`` and ``Error`` documents returned by the server. Parsing is
namespace-agnostic: children are matched by local name.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lxml import etree
from lxml.builder import ElementMaker

from vcd_metadata.models import (
    XML_NAMESPACE_VCLOUD,
    XML_NAMESPACE_XSI,
    Metadata,
    MetadataDomainTag,
    MetadataEntry,
    MetadataTypedValue,
    MetadataValue,
    TaskRecord,
)

XSI_TYPE = f"{{{XML_NAMESPACE_XSI}}}type"

_parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False)

E = ElementMaker(
    namespace=XML_NAMESPACE_VCLOUD,
    nsmap={None: XML_NAMESPACE_VCLOUD, "xsi": XML_NAMESPACE_XSI},
    makeelement=_parser.makeelement,
)


# ─── Builders ────────────────────────────────────────────


def _domain_element(domain: MetadataDomainTag) -> Any:
    return E.Domain(str(domain.domain), visibility=str(domain.visibility))


def _typed_value_element(typed_value: MetadataTypedValue) -> Any:
    return E.TypedValue(E.Value(typed_value.value), {XSI_TYPE: str(typed_value.xsi_type)})


def build_metadata_value(value: MetadataValue) -> Any:
    """Build a ``<MetadataValue>`` body for a single-key PUT."""
    children = []
    if value.domain is not None:
        children.append(_domain_element(value.domain))
    children.append(_typed_value_element(value.typed_value))
    return E.MetadataValue(*children)


def build_metadata(entries: Mapping[str, MetadataValue]) -> Any:
    """Build a ``<Metadata>`` body holding one ``<MetadataEntry>`` per item."""
    root = E.Metadata()
    for key, value in entries.items():
        entry = E.MetadataEntry()
        if value.domain is not None:
            entry.append(_domain_element(value.domain))
        entry.append(E.Key(key))
        entry.append(_typed_value_element(value.typed_value))
        root.append(entry)
    return root


def to_bytes(element: Any) -> bytes:
    return etree.tostring(element, xml_declaration=True, encoding="UTF-8")


def from_bytes(content: bytes) -> Any:
    return etree.fromstring(content, parser=_parser)


# ─── Parsers ─────────────────────────────────────────────


def local_name(element: Any) -> str:
    return etree.QName(element).localname


def _child(element: Any, name: str) -> Any | None:
    for child in element:
        if isinstance(child.tag, str) and local_name(child) == name:
            return child
    return None


def _children(element: Any, name: str) -> list[Any]:
    return [child for child in element if isinstance(child.tag, str) and local_name(child) == name]


def _parse_typed_value(element: Any | None) -> MetadataTypedValue:
    if element is None:
        return MetadataTypedValue(value="")
    xsi_type = element.get(XSI_TYPE, "")
    # Some servers qualify the type with a prefix, e.g. "vcloud:MetadataStringValue"
    xsi_type = xsi_type.rsplit(":", 1)[-1]
    value = _child(element, "Value")
    return MetadataTypedValue(xsi_type=xsi_type, value=(value.text or "") if value is not None else "")


def _parse_domain(element: Any | None) -> MetadataDomainTag | None:
    if element is None:
        return None
    return MetadataDomainTag(
        domain=(element.text or "").strip(),
        visibility=element.get("visibility", ""),
    )


def parse_metadata_value(element: Any) -> MetadataValue:
    """Parse a ``<MetadataValue>`` document."""
    return MetadataValue(
        typed_value=_parse_typed_value(_child(element, "TypedValue")),
        domain=_parse_domain(_child(element, "Domain")),
        href=element.get("href"),
    )


def parse_metadata(element: Any) -> Metadata:
    """Parse a ``<Metadata>`` document into all of its entries."""
    entries = []
    for item in _children(element, "MetadataEntry"):
        key = _child(item, "Key")
        entries.append(
            MetadataEntry(
                key=(key.text or "") if key is not None else "",
                typed_value=_parse_typed_value(_child(item, "TypedValue")),
                domain=_parse_domain(_child(item, "Domain")),
                href=item.get("href"),
            )
        )
    return Metadata(entries=entries, href=element.get("href"))


def parse_error(element: Any) -> dict[str, Any]:
    """Parse an ``<Error>`` element into message and error codes."""
    major = element.get("majorErrorCode")
    return {
        "message": element.get("message", ""),
        "major_error_code": int(major) if major and major.isdigit() else None,
        "minor_error_code": element.get("minorErrorCode"),
    }


def parse_task(element: Any) -> TaskRecord:
    """Parse a ``<Task>`` document."""
    progress = _child(element, "Progress")
    error = _child(element, "Error")
    return TaskRecord(
        href=element.get("href", ""),
        id=element.get("id"),
        name=element.get("name"),
        operation=element.get("operation"),
        operation_name=element.get("operationName"),
        status=element.get("status", "queued"),
        progress=int(progress.text) if progress is not None and (progress.text or "").isdigit() else None,
        error_message=parse_error(error)["message"] if error is not None else None,
        start_time=element.get("startTime"),
        end_time=element.get("endTime"),
    )
