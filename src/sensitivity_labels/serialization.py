"""
Serialization helpers for label results.

Provides JSON/YAML output via an intermediate dict representation, used
for the end-of-run summary. Keys are kept stable and explicit.
"""
from __future__ import annotations

import json
from collections import Counter
from typing import Any, Dict, Iterable, List

import yaml

from sensitivity_labels.model import FileLabelResult, Label, LabelSet


def label_to_dict(label: Label) -> Dict[str, Any]:
    return {
        "id": label.id,
        "site_id": label.site_id,
        "enabled": label.enabled,
        "method": label.method,
        "content_bits": label.content_bits,
        "removed": label.removed,
    }


def label_from_dict(d: Dict[str, Any]) -> Label:
    return Label(
        id=d.get("id", ""),
        site_id=d.get("site_id", ""),
        enabled=d.get("enabled", ""),
        method=d.get("method", ""),
        content_bits=d.get("content_bits", ""),
        removed=d.get("removed", ""),
    )


def result_to_dict(r: FileLabelResult) -> Dict[str, Any]:
    return {
        "file_path": r.file_path,
        "label_info": r.label_info,
        "labels": [label_to_dict(label) for label in r.labels],
    }


def result_from_dict(d: Dict[str, Any]) -> FileLabelResult:
    return FileLabelResult(
        file_path=d["file_path"],
        label_info=bool(d.get("label_info", False)),
        labels=LabelSet(tuple(label_from_dict(x) for x in d.get("labels", []))),
    )


def summary_to_dict(results: Iterable[FileLabelResult]) -> Dict[str, Any]:
    """
    Aggregate a run's results.

    Returns:
        files: number of processed files
        with_label_info: files carrying a label document
        labeled: files with at least one label
        labels: label id -> number of files carrying it
        results: per-file dicts
    """
    results = list(results)
    counts: Counter = Counter()
    for r in results:
        for label_id in set(r.labels.ids()):
            counts[label_id] += 1
    return {
        "files": len(results),
        "with_label_info": sum(1 for r in results if r.label_info),
        "labeled": sum(1 for r in results if r.labeled),
        "labels": dict(sorted(counts.items())),
        "results": [result_to_dict(r) for r in results],
    }


def results_from_summary(d: Dict[str, Any]) -> List[FileLabelResult]:
    return [result_from_dict(r) for r in d.get("results", [])]


def summary_to_json(results: Iterable[FileLabelResult]) -> str:
    return json.dumps(summary_to_dict(results), indent=2)


def summary_to_yaml(results: Iterable[FileLabelResult]) -> str:
    return yaml.safe_dump(summary_to_dict(results), sort_keys=False)


def summary_from_yaml(s: str) -> Dict[str, Any]:
    return yaml.safe_load(s)
