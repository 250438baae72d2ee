"""
Shared fixtures: small Office-like zip containers built in-test.
"""

import struct
import zipfile

import pytest

LABEL_ID = "3de9faa6-9fe1-49b3-9a08-227a296b54a6"
SITE_ID = "d5fe813e-0caa-432a-b2ac-d555aa91bd1c"

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types"/>'
)

LABEL_INFO = (
    '<?xml version="1.0" encoding="utf-8" standalone="yes"?>'
    '<clbl:labelList xmlns:clbl="http://schemas.microsoft.com/office/2020/mipLabelMetadata">'
    f'<clbl:label id="{{{LABEL_ID}}}" enabled="1" method="Standard" siteId="{{{SITE_ID}}}" '
    'contentBits="2" removed="0"/>'
    '</clbl:labelList>'
)


def write_container(path, label_info=None, extra=None):
    """Write a minimal container, optionally with docMetadata/LabelInfo.xml."""
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", CONTENT_TYPES)
        zf.writestr("word/", "")
        zf.writestr("word/document.xml", "<w:document/>")
        if label_info is not None:
            zf.writestr("docMetadata/LabelInfo.xml", label_info)
        for name, data in (extra or {}).items():
            zf.writestr(name, data)
    return path


def corrupt_entry(path, name):
    """Overwrite the compressed data of one entry, leaving the zip directory intact."""
    with zipfile.ZipFile(path) as zf:
        info = zf.getinfo(name)
    with open(path, "r+b") as f:
        f.seek(info.header_offset + 26)
        name_len, extra_len = struct.unpack("<HH", f.read(4))
        f.seek(info.header_offset + 30 + name_len + extra_len)
        # 0xff starts a final deflate block of the reserved type 3
        f.write(b"\xff" * info.compress_size)
    return path


@pytest.fixture
def labeled_docx(tmp_path):
    return write_container(tmp_path / "labeled.docx", label_info=LABEL_INFO)


@pytest.fixture
def unlabeled_docx(tmp_path):
    return write_container(tmp_path / "plain.docx")
