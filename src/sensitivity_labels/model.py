"""
Core Label Model Objects

Defines the data structures that flow through the label pipeline:
    - Label (one sensitivity-label record)
    - LabelSet (ordered records from one label document)
    - FileLabelResult (outcome of processing one container file)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about XML, zip files or the console
        - Are immutable once built
        - Hold field values verbatim as strings
"""

from dataclasses import dataclass, field
from typing import Iterator, Tuple


# Fixed values written for every caller-initiated label assignment
DEFAULT_ENABLED = "1"
DEFAULT_METHOD = "Privileged"
DEFAULT_CONTENT_BITS = "0"
DEFAULT_REMOVED = "0"


@dataclass(frozen=True)
class Label:
    """
    One sensitivity-label record.

    Properties:
        id:
            Label identifier, conventionally a UUID.
            Stored without the enclosing braces used in the document.

        site_id:
            Identifier of the tenant that issued the label (same shape as id).

        enabled:
            "0" or "1"

        method:
            Assignment method, free text (e.g. "Privileged", "Standard")

        content_bits:
            String-encoded integer flags for content markings

        removed:
            "0" or "1"

    All values are kept exactly as read. Only a "set" operation replaces
    records, and then only through `new_label`.
    """

    id: str = ""
    site_id: str = ""
    enabled: str = ""
    method: str = ""
    content_bits: str = ""
    removed: str = ""


@dataclass(frozen=True)
class LabelSet:
    """
    Ordered sequence of Label records as they appear in a label document.

    An empty LabelSet is a valid "no labels" document.
    """

    labels: Tuple[Label, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[Label]:
        return iter(self.labels)

    def __bool__(self) -> bool:
        return bool(self.labels)

    def ids(self) -> Tuple[str, ...]:
        return tuple(label.id for label in self.labels)


@dataclass(frozen=True)
class FileLabelResult:
    """
    Result of processing one container file.

    Properties:
        file_path:
            Path of the processed file, as discovered

        label_info:
            True when the label document is present
            (after a set, True because the document was written)

        labels:
            LabelSet found, or the LabelSet applied by a set

    Created once per processed file and only consumed for reporting.
    """

    file_path: str
    label_info: bool
    labels: LabelSet = field(default_factory=LabelSet)

    @property
    def labeled(self) -> bool:
        return bool(self.labels)


def new_label(label_id: str, tenant_id: str) -> Label:
    """
    Build the record written by a set operation.

    Args:
        label_id: Sensitivity label identifier, with or without braces
        tenant_id: Tenant identifier, with or without braces

    Returns:
        Label with the fixed enabled/method/contentBits/removed values
    """
    return Label(
        id=strip_braces(label_id),
        site_id=strip_braces(tenant_id),
        enabled=DEFAULT_ENABLED,
        method=DEFAULT_METHOD,
        content_bits=DEFAULT_CONTENT_BITS,
        removed=DEFAULT_REMOVED,
    )


def strip_braces(value: str) -> str:
    """Remove one enclosing pair of {} braces, if present."""
    if len(value) >= 2 and value.startswith("{") and value.endswith("}"):
        return value[1:-1]
    return value
