"""
ID-to-name lookup for report output.

Resolve file format (JSON, or YAML when the file ends in .yml/.yaml):

    {
      "labels":  {"3de9faa6-9fe1-49b3-9a08-227a296b54a6": "Confidential"},
      "tenants": {"d5fe813e-0caa-432a-b2ac-d555aa91bd1c": "Contoso"}
    }

Identifiers match with braces stripped and ignoring case.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from sensitivity_labels.model import strip_braces

logger = logging.getLogger(__name__)


def _normalize_id(value: str) -> str:
    return strip_braces(value.strip()).lower()


@dataclass
class LabelNames:
    """Display names for label and tenant identifiers."""
    labels: Dict[str, str] = field(default_factory=dict)
    tenants: Dict[str, str] = field(default_factory=dict)

    def label_name(self, label_id: str) -> str:
        return self.labels.get(_normalize_id(label_id), label_id)

    def tenant_name(self, tenant_id: str) -> str:
        return self.tenants.get(_normalize_id(tenant_id), tenant_id)

    def __len__(self) -> int:
        return len(self.labels) + len(self.tenants)


def label_names_from_dict(d: Dict[str, Any] | None) -> LabelNames:
    d = d or {}
    return LabelNames(
        labels={_normalize_id(str(k)): str(v) for k, v in (d.get("labels") or {}).items()},
        tenants={_normalize_id(str(k)): str(v) for k, v in (d.get("tenants") or {}).items()},
    )


def load_label_names(path: str) -> LabelNames:
    """
    Load a resolve file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not a mapping document
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    if os.path.splitext(path)[1].lower() in (".yml", ".yaml"):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML in {path}: {e}")
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON in {path}: {e}")

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping with 'labels' and 'tenants'")
    names = label_names_from_dict(data)
    logger.debug("loaded labelConfig: %s (%d entries)", path, len(names))
    return names


def try_load_label_names(path: Optional[str]) -> Optional[LabelNames]:
    """
    Load a resolve file, or return None when it cannot be used.

    A missing or unparsable file only disables name substitution.
    """
    if not path:
        return None
    if not os.path.isfile(path):
        logger.warning("Skipping ID resolution, unable to parse reference: %s", path)
        return None
    try:
        return load_label_names(path)
    except (OSError, ValueError) as e:
        logger.warning("Skipping ID resolution, unable to parse reference: %s (%s)", path, e)
        return None
