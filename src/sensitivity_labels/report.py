"""
Report lines for processed files.

    LabelInfo FilePath NumLabels Labels
    true ./123.xlsx 1 [3de9faa6-9fe1-49b3-9a08-227a296b54a6 d5fe813e-0caa-432a-b2ac-d555aa91bd1c]
"""

from typing import Optional

from sensitivity_labels.model import FileLabelResult, Label
from sensitivity_labels.resolve import LabelNames

DELIMITER = " "
HEADER_FIELDS = ("LabelInfo", "FilePath", "NumLabels", "Labels")


def format_header() -> str:
    return DELIMITER.join(HEADER_FIELDS)


def format_label(label: Label, names: Optional[LabelNames] = None) -> str:
    """Render one label as `id siteId`, braces removed, names substituted."""
    label_id, site_id = label.id, label.site_id
    if names is not None:
        label_id = names.label_name(label_id)
        site_id = names.tenant_name(site_id)
    text = f"{label_id} {site_id}"
    return text.replace("{", "").replace("}", "")


def format_result(result: FileLabelResult, names: Optional[LabelNames] = None) -> str:
    labels = ", ".join(format_label(label, names) for label in result.labels)
    return DELIMITER.join([
        "true" if result.label_info else "false",
        result.file_path,
        str(len(result.labels)),
        f"[{labels}]",
    ])
