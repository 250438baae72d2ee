"""
Per-file processing cycle and run driver.

For each container:
    1. Extract into a private working directory
    2. Locate docMetadata/LabelInfo.xml
    3. get: decode the labels
       set: write the new labels, repack, replace the container
    4. Remove the working directory (unless Config.keep_tmp)

Files are processed one at a time. The first error stops the run.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
import zipfile
from typing import Callable, Iterator, List, Optional

from sensitivity_labels.archive import extract_archive
from sensitivity_labels.codec import read_label_info, validate_label
from sensitivity_labels.config import Config
from sensitivity_labels.discovery import list_extension_files
from sensitivity_labels.errors import ArchiveFormatError, PathError
from sensitivity_labels.locator import check_label_info_path
from sensitivity_labels.model import FileLabelResult, LabelSet, new_label
from sensitivity_labels.mutator import set_labels

logger = logging.getLogger(__name__)

COMMANDS = ("get", "set")


@contextlib.contextmanager
def working_directory(file_path: str, config: Config) -> Iterator[str]:
    """
    Provide a fresh extraction directory for one container.

    The directory is removed on every exit path unless config.keep_tmp.
    """
    if config.tmp_dir:
        os.makedirs(config.tmp_dir, exist_ok=True)
    prefix = "_" + os.path.basename(file_path) + "_"
    unzip_dir = tempfile.mkdtemp(prefix=prefix, dir=config.tmp_dir)
    logger.debug("tmpUnzipDir: %s", unzip_dir)
    try:
        yield unzip_dir
    finally:
        if config.keep_tmp:
            logger.debug("Keeping %s", unzip_dir)
        else:
            shutil.rmtree(unzip_dir, ignore_errors=True)
            logger.debug("Removed %s", unzip_dir)


def get_file_labels(file_path: str, config: Config) -> FileLabelResult:
    """Read the labels of one container."""
    with working_directory(file_path, config) as unzip_dir:
        extract_archive(file_path, unzip_dir)
        exists, label_info_path = check_label_info_path(unzip_dir)
        if not exists:
            logger.debug("LabelInfo.xml not found in %s", file_path)
            return FileLabelResult(file_path=file_path, label_info=False)
        labels = read_label_info(label_info_path, strict=config.strict)
        return FileLabelResult(file_path=file_path, label_info=True, labels=labels)


def set_file_labels(file_path: str, new_labels: LabelSet, config: Config) -> FileLabelResult:
    """
    Replace the labels of one container with new_labels.

    In dry-run mode nothing is extracted or written; the container is only
    checked to be a zip file.
    """
    if config.dry_run:
        if not zipfile.is_zipfile(file_path):
            raise ArchiveFormatError(f"{file_path}: not a valid zip archive")
        applied = set_labels("", file_path, "", new_labels, dry_run=True)
        return FileLabelResult(file_path=file_path, label_info=True, labels=applied)

    with working_directory(file_path, config) as unzip_dir:
        extract_archive(file_path, unzip_dir)
        exists, label_info_path = check_label_info_path(unzip_dir)
        if not exists:
            logger.debug("LabelInfo.xml not found in %s, creating it", file_path)
        applied = set_labels(unzip_dir, file_path, label_info_path, new_labels)
        return FileLabelResult(file_path=file_path, label_info=True, labels=applied)


def process_file(
    file_path: str,
    config: Config,
    new_labels: Optional[LabelSet] = None,
) -> FileLabelResult:
    """Run get (new_labels is None) or set on a single container."""
    if new_labels is None:
        return get_file_labels(file_path, config)
    return set_file_labels(file_path, new_labels, config)


def discover_files(path: str, config: Config) -> List[str]:
    """
    Resolve the files a run operates on.

    A file path is used as-is whatever its extension; a directory is
    searched for accepted extensions.

    Raises:
        PathError: If path does not exist
    """
    if os.path.isdir(path):
        return list_extension_files(path, recursive=config.recursive, extensions=config.extensions)
    if os.path.isfile(path):
        return [path]
    raise PathError(f"no such file or directory: {path}")


def run(
    command: str,
    path: str,
    config: Config,
    label_id: Optional[str] = None,
    tenant_id: Optional[str] = None,
    on_result: Optional[Callable[[FileLabelResult], None]] = None,
) -> List[FileLabelResult]:
    """
    Execute a get or set command over a file or directory.

    Args:
        command: "get" or "set"
        path: File or directory
        config: Run options
        label_id: Label to apply (set only)
        tenant_id: Tenant to apply (set only)
        on_result: Called with each result as soon as it is available

    Returns:
        All results, in processing order

    Raises:
        ValueError: On an unknown command, missing set arguments or a set
            value XML 1.0 cannot hold
        LabelsError / OSError: On the first failing file
    """
    if command not in COMMANDS:
        raise ValueError(f"unsupported command {command}")

    new_labels = None
    if command == "set":
        if not label_id or not tenant_id:
            raise ValueError("set requires a labelId and a tenantId")
        new_labels = LabelSet((new_label(label_id, tenant_id),))
        for label in new_labels:
            validate_label(label)

    files = discover_files(path, config)
    results: List[FileLabelResult] = []
    for file_path in files:
        result = process_file(file_path, config, new_labels)
        results.append(result)
        if on_result is not None:
            on_result(result)
    return results
