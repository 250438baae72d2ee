"""
Tests for result serialization and the run summary.
"""

import json

from sensitivity_labels.model import FileLabelResult, Label, LabelSet, new_label
from sensitivity_labels.serialization import (
    result_from_dict,
    result_to_dict,
    results_from_summary,
    summary_from_yaml,
    summary_to_dict,
    summary_to_json,
    summary_to_yaml,
)


def build_results():
    return [
        FileLabelResult("a.docx", True, LabelSet((new_label("A", "T"), Label(id="B", site_id="T")))),
        FileLabelResult("b.xlsx", True, LabelSet((new_label("A", "T"),))),
        FileLabelResult("c.pptx", True),
        FileLabelResult("d.docx", False),
    ]


def test_summary_counts():
    summary = summary_to_dict(build_results())
    assert summary["files"] == 4
    assert summary["with_label_info"] == 3
    assert summary["labeled"] == 2
    assert summary["labels"] == {"A": 2, "B": 1}


def test_result_dict_roundtrip():
    result = build_results()[0]
    assert result_from_dict(result_to_dict(result)) == result


def test_json_summary():
    data = json.loads(summary_to_json(build_results()))
    assert data["results"][0]["labels"][0]["method"] == "Privileged"
    assert results_from_summary(data) == build_results()


def test_yaml_summary():
    data = summary_from_yaml(summary_to_yaml(build_results()))
    assert data == summary_to_dict(build_results())
    assert list(data)[:4] == ["files", "with_label_info", "labeled", "labels"]


def test_empty_summary():
    summary = summary_to_dict([])
    assert summary == {"files": 0, "with_label_info": 0, "labeled": 0, "labels": {}, "results": []}
