"""
Huawei Dongle Client - XML Payloads

Helpers for the device's XML bodies: detecting the ``<error>`` envelope, reading
``<response>`` records and serializing ``<request>`` documents.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Mapping, Union

from .exceptions import ResponseParseError

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


@dataclass(frozen=True)
class Success:
    """Response body without a device error envelope."""

    payload: str


@dataclass(frozen=True)
class Failure:
    """Device error envelope: ``<error><code>..</code><message>..</message></error>``."""

    code: int
    message: str = ""


ApiOutcome = Union[Success, Failure]


def parse_outcome(text: str) -> ApiOutcome:
    """Inspect a response body for the device error envelope."""
    if "<error>" not in text or "<code>" not in text:
        return Success(text)

    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError:
        return Success(text)

    if root.tag != "error":
        return Success(text)

    try:
        code = int((root.findtext("code") or "").strip())
    except ValueError:
        return Success(text)

    return Failure(code, (root.findtext("message") or "").strip())


def parse_response_element(text: str) -> ET.Element:
    """Parse a ``<response>`` document and return its root element.

    Raises:
        ResponseParseError: If the body is not XML or not a ``<response>`` document
    """
    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError as e:
        raise ResponseParseError(f"Invalid XML response: {e}", response_text=text)

    if root.tag != "response":
        raise ResponseParseError(
            f"Unexpected root element <{root.tag}>", response_text=text
        )
    return root


def element_fields(element: ET.Element) -> dict[str, str]:
    """Text of the direct children of ``element``, keyed by tag."""
    return {child.tag: (child.text or "").strip() for child in element}


def parse_response_fields(text: str) -> dict[str, str]:
    """Read the direct children of a ``<response>`` document into a dict.

    Raises:
        ResponseParseError: If the body is not XML or not a ``<response>`` document
    """
    return element_fields(parse_response_element(text))


def is_ok_response(text: str) -> bool:
    """True for the device's ``<response>OK</response>`` acknowledgement."""
    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError:
        return False
    return root.tag == "response" and (root.text or "").strip() == "OK"


def _append_fields(parent: ET.Element, fields: Mapping[str, object]) -> None:
    for name, value in fields.items():
        if isinstance(value, Mapping):
            _append_fields(ET.SubElement(parent, name), value)
        elif isinstance(value, (list, tuple)):
            for item in value:
                ET.SubElement(parent, name).text = str(item)
        else:
            ET.SubElement(parent, name).text = "" if value is None else str(value)


def build_request(fields: Mapping[str, object]) -> str:
    """Serialize a mapping into the device's ``<request>`` document.

    Mapping values become nested elements and list values repeat their tag,
    e.g. ``{"Phones": {"Phone": ["1", "2"]}}``.
    """
    root = ET.Element("request")
    _append_fields(root, fields)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")
