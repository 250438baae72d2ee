"""
Label Codec: LabelInfo.xml <-> LabelSet.

Document format:
    <?xml version="1.0" encoding="utf-8" standalone="yes"?>
    <clbl:labelList xmlns:clbl="http://schemas.microsoft.com/office/2020/mipLabelMetadata">
      <clbl:label id="{...}" enabled="1" method="Privileged" siteId="{...}" contentBits="0" removed="0"/>
    </clbl:labelList>

Decoding is lenient: elements are matched on local name, missing attributes
become empty strings and an unparsable document yields an empty LabelSet
(unless strict=True). Encoding always produces the exact form Office writes:
fixed attribute order, braces around id and siteId, no whitespace.
"""

import logging
import os
import re
from typing import List
from xml.sax.saxutils import escape

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, fromstring

from sensitivity_labels.errors import XmlDecodeError
from sensitivity_labels.model import Label, LabelSet, strip_braces

logger = logging.getLogger(__name__)

LABEL_NAMESPACE = "http://schemas.microsoft.com/office/2020/mipLabelMetadata"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8" standalone="yes"?>'

# Characters a parser would normalise away inside attribute values
_ATTR_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}

# Anything outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _attr(value: str) -> str:
    return escape(value, _ATTR_ENTITIES)


def validate_label(label: Label) -> None:
    """
    Check that every field of label can be stored in an XML 1.0 document.

    Raises:
        ValueError: If a field holds a character XML 1.0 cannot represent
    """
    for name, value in (
        ("id", label.id), ("siteId", label.site_id), ("enabled", label.enabled),
        ("method", label.method), ("contentBits", label.content_bits),
        ("removed", label.removed),
    ):
        match = _INVALID_XML_CHARS.search(value)
        if match:
            raise ValueError(
                f"label {name} contains a character not allowed in XML: {match.group()!r}"
            )


def decode_label_info(data: bytes, strict: bool = False) -> LabelSet:
    """
    Parse a label document into a LabelSet.

    Args:
        data: Raw document bytes
        strict: Raise XmlDecodeError instead of returning an empty LabelSet

    Returns:
        LabelSet with one Label per label element, in document order

    Raises:
        XmlDecodeError: Only when strict and the document is unusable
    """
    try:
        root = fromstring(data)
    except (ParseError, DefusedXmlException) as e:
        if strict:
            raise XmlDecodeError(f"malformed label document: {e}")
        logger.warning("Ignoring malformed label document: %s", e)
        return LabelSet()

    if _local_name(root.tag) != "labelList":
        if strict:
            raise XmlDecodeError(f"unexpected root element: {_local_name(root.tag)}")
        logger.warning("Ignoring label document with root element %s", root.tag)
        return LabelSet()

    labels: List[Label] = []
    for element in root:
        if not isinstance(element.tag, str) or _local_name(element.tag) != "label":
            continue
        labels.append(Label(
            id=strip_braces(element.get("id", "")),
            site_id=strip_braces(element.get("siteId", "")),
            enabled=element.get("enabled", ""),
            method=element.get("method", ""),
            content_bits=element.get("contentBits", ""),
            removed=element.get("removed", ""),
        ))

    logger.debug("Decoded %d label(s)", len(labels))
    return LabelSet(tuple(labels))


def encode_label_info(labels: LabelSet) -> str:
    """
    Serialize a LabelSet to the canonical document text.

    An empty LabelSet produces a labelList element with no children.

    Raises:
        ValueError: If a label field cannot be represented in XML 1.0
    """
    parts = [
        XML_DECLARATION,
        f'<clbl:labelList xmlns:clbl="{LABEL_NAMESPACE}">',
    ]
    for label in labels:
        validate_label(label)
        parts.append(
            f'<clbl:label id="{{{_attr(label.id)}}}" enabled="{_attr(label.enabled)}" '
            f'method="{_attr(label.method)}" siteId="{{{_attr(label.site_id)}}}" '
            f'contentBits="{_attr(label.content_bits)}" removed="{_attr(label.removed)}"/>'
        )
    parts.append("</clbl:labelList>")
    return "".join(parts)


def read_label_info(path: str, strict: bool = False) -> LabelSet:
    """Read and decode the label document at path."""
    logger.debug("open: %s", path)
    with open(path, "rb") as f:
        data = f.read()
    return decode_label_info(data, strict=strict)


def write_label_info(path: str, labels: LabelSet) -> None:
    """Encode labels and write them to path, creating parent directories."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(encode_label_info(labels))
    logger.debug("Wrote %d label(s) to %s", len(labels), path)
