"""
Tests for container extraction, packing and atomic replacement.

Extraction must refuse entries that escape the destination (zip-slip) and
write nothing in that case. Packing must produce root-relative,
forward-slash entry names for files only.
"""

import os
import stat
import zipfile

import pytest

from sensitivity_labels.archive import extract_archive, pack_directory, write_atomic
from sensitivity_labels.errors import ArchiveFormatError, ArchiveTraversalError
from sensitivity_labels.locator import check_label_info_path

from conftest import LABEL_INFO, corrupt_entry, write_container


class TestExtract:

    def test_extracts_files_and_directories(self, tmp_path, labeled_docx):
        dest = tmp_path / "out" / "nested"
        files = extract_archive(labeled_docx, dest)

        assert (dest / "[Content_Types].xml").is_file()
        assert (dest / "word").is_dir()
        assert (dest / "word" / "document.xml").read_text() == "<w:document/>"
        assert (dest / "docMetadata" / "LabelInfo.xml").read_text() == LABEL_INFO
        assert len(files) == 3

    def test_source_is_not_modified(self, tmp_path, labeled_docx):
        before = labeled_docx.read_bytes()
        extract_archive(labeled_docx, tmp_path / "out")
        assert labeled_docx.read_bytes() == before

    @pytest.mark.parametrize("name", ["../../evil.txt", "a/../../evil.txt", "/abs/evil.txt"])
    def test_traversal_rejected(self, tmp_path, name):
        archive = write_container(tmp_path / "evil.docx", extra={name: "pwned"})
        dest = tmp_path / "work" / "dest"

        with pytest.raises(ArchiveTraversalError) as exc_info:
            extract_archive(archive, dest)

        assert exc_info.value.path == name
        assert not (tmp_path / "evil.txt").exists()
        assert not (tmp_path / "work" / "evil.txt").exists()
        assert not dest.exists()

    def test_dot_dot_inside_root_is_allowed(self, tmp_path):
        archive = write_container(tmp_path / "ok.docx", extra={"a/../b.txt": "fine"})
        dest = tmp_path / "dest"
        extract_archive(archive, dest)
        assert (dest / "b.txt").read_text() == "fine"

    def test_not_a_zip(self, tmp_path):
        bogus = tmp_path / "bogus.docx"
        bogus.write_text("this is not a zip file")
        with pytest.raises(ArchiveFormatError):
            extract_archive(bogus, tmp_path / "dest")

    def test_corrupt_entry_data(self, tmp_path, labeled_docx):
        corrupt_entry(labeled_docx, "word/document.xml")
        with pytest.raises(ArchiveFormatError, match="word/document.xml"):
            extract_archive(labeled_docx, tmp_path / "dest")

    def test_missing_source(self, tmp_path):
        with pytest.raises(OSError):
            extract_archive(tmp_path / "missing.docx", tmp_path / "dest")


class TestPack:

    def test_entries_are_relative_files_only(self, tmp_path):
        root = tmp_path / "root"
        (root / "sub" / "deeper").mkdir(parents=True)
        (root / "empty").mkdir()
        (root / "top.xml").write_text("top")
        (root / "sub" / "deeper" / "leaf.xml").write_text("leaf")

        data = pack_directory(root)

        archive = tmp_path / "packed.zip"
        archive.write_bytes(data)
        with zipfile.ZipFile(archive) as zf:
            assert sorted(zf.namelist()) == ["sub/deeper/leaf.xml", "top.xml"]
            assert zf.read("sub/deeper/leaf.xml") == b"leaf"

    def test_deterministic_order(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        for name in ["b.xml", "a.xml", "c.xml"]:
            (root / name).write_text(name)
        archive = tmp_path / "packed.zip"
        archive.write_bytes(pack_directory(root))
        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == ["a.xml", "b.xml", "c.xml"]

    def test_extract_then_pack_preserves_content(self, tmp_path, labeled_docx):
        dest = tmp_path / "dest"
        extract_archive(labeled_docx, dest)
        repacked = tmp_path / "repacked.docx"
        repacked.write_bytes(pack_directory(dest))

        with zipfile.ZipFile(labeled_docx) as original, zipfile.ZipFile(repacked) as copy:
            original_files = {n for n in original.namelist() if not n.endswith("/")}
            assert set(copy.namelist()) == original_files
            for name in original_files:
                assert copy.read(name) == original.read(name)

    def test_empty_directory(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        archive = tmp_path / "empty.zip"
        archive.write_bytes(pack_directory(root))
        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == []


class TestWriteAtomic:

    def test_replaces_content(self, tmp_path):
        target = tmp_path / "file.bin"
        target.write_bytes(b"old")
        write_atomic(target, b"new")
        assert target.read_bytes() == b"new"
        assert os.listdir(tmp_path) == ["file.bin"]

    def test_preserves_mode(self, tmp_path):
        target = tmp_path / "file.bin"
        target.write_bytes(b"old")
        os.chmod(target, 0o640)
        write_atomic(target, b"new")
        assert stat.S_IMODE(os.stat(target).st_mode) == 0o640

    def test_creates_missing_file(self, tmp_path):
        target = tmp_path / "new.bin"
        write_atomic(target, b"data")
        assert target.read_bytes() == b"data"

    def test_failure_leaves_original(self, tmp_path):
        target = tmp_path / "file.bin"
        target.write_bytes(b"old")
        with pytest.raises(OSError):
            write_atomic(tmp_path / "missing-dir" / "file.bin", b"new")
        assert target.read_bytes() == b"old"


class TestLocator:

    def test_present(self, tmp_path, labeled_docx):
        dest = tmp_path / "dest"
        extract_archive(labeled_docx, dest)
        exists, path = check_label_info_path(str(dest))
        assert exists
        assert path == os.path.join(str(dest), "docMetadata", "LabelInfo.xml")

    def test_absent_still_returns_path(self, tmp_path, unlabeled_docx):
        dest = tmp_path / "dest"
        extract_archive(unlabeled_docx, dest)
        exists, path = check_label_info_path(str(dest))
        assert not exists
        assert path.endswith(os.path.join("docMetadata", "LabelInfo.xml"))
