"""Label Mutator: write new labels, repack, replace the original container."""

import logging

from sensitivity_labels.archive import pack_directory, write_atomic
from sensitivity_labels.codec import write_label_info
from sensitivity_labels.model import LabelSet

logger = logging.getLogger(__name__)


def set_labels(
    unzip_dir: str,
    file_path: str,
    label_info_path: str,
    new_labels: LabelSet,
    dry_run: bool = False,
) -> LabelSet:
    """
    Apply a replacement LabelSet to an extracted container.

    Steps:
        1. Overwrite (or create) the label document in unzip_dir
        2. Pack unzip_dir into an in-memory archive
        3. Atomically replace file_path with that archive

    The original file is only touched by step 3, so any failure before it
    leaves the container unchanged.

    Args:
        unzip_dir: Extraction root of file_path
        file_path: Container file to replace
        label_info_path: Label document path inside unzip_dir
        new_labels: LabelSet to write
        dry_run: Skip every filesystem change and only report new_labels

    Returns:
        The LabelSet that was (or, in dry-run, would have been) applied
    """
    if dry_run:
        logger.debug("dry-run: not writing %d label(s) to %s", len(new_labels), file_path)
        return new_labels

    write_label_info(label_info_path, new_labels)
    archive = pack_directory(unzip_dir)
    write_atomic(file_path, archive)
    logger.info("Set %d label(s) on %s", len(new_labels), file_path)
    return new_labels
