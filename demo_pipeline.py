#!/usr/bin/env python3
"""
Complete Pipeline Demo: container → labels → set → summary

Shows the full workflow on a throwaway document:
1. Build a minimal .docx without labels
2. Read its labels
3. Preview a set with dry-run
4. Apply the label and read it back
5. Print the run summary
"""

import tempfile
import zipfile
from pathlib import Path

from sensitivity_labels.config import Config
from sensitivity_labels.pipeline import run
from sensitivity_labels.report import format_header, format_result
from sensitivity_labels.serialization import summary_to_yaml

LABEL_ID = "3de9faa6-9fe1-49b3-9a08-227a296b54a6"
TENANT_ID = "d5fe813e-0caa-432a-b2ac-d555aa91bd1c"


def build_document(path: Path) -> None:
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", "<Types/>")
        zf.writestr("word/document.xml", "<w:document/>")


def show(title, results):
    print(f"\n{title}")
    print("-" * 80)
    print(f"   {format_header()}")
    for result in results:
        print(f"   {format_result(result)}")


def main():
    with tempfile.TemporaryDirectory() as workdir:
        doc = Path(workdir) / "report.docx"
        build_document(doc)
        config = Config(tmp_dir=str(Path(workdir) / "tmp"))

        print("=" * 80)
        print("SENSITIVITY LABEL PIPELINE DEMO")
        print("=" * 80)

        show("1. GET (unlabeled)", run("get", str(doc), config))

        dry = Config(tmp_dir=config.tmp_dir, dry_run=True)
        show("2. SET --dry-run", run("set", str(doc), dry, label_id=LABEL_ID, tenant_id=TENANT_ID))
        show("   GET after dry-run", run("get", str(doc), config))

        run("set", str(doc), config, label_id=LABEL_ID, tenant_id=TENANT_ID)
        results = run("get", str(doc), config)
        show("3. GET after SET", results)

        print("\n4. SUMMARY")
        print("-" * 80)
        print(summary_to_yaml(results))

        with zipfile.ZipFile(doc) as zf:
            print("5. docMetadata/LabelInfo.xml")
            print("-" * 80)
            print(zf.read("docMetadata/LabelInfo.xml").decode("utf-8"))

        print("=" * 80)


if __name__ == "__main__":
    main()
