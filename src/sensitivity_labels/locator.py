"""Locate the label-metadata document inside an extracted container."""

import logging
import os
from typing import Tuple

logger = logging.getLogger(__name__)

LABEL_INFO_PATH = "docMetadata/LabelInfo.xml"


def check_label_info_path(root: str) -> Tuple[bool, str]:
    """
    Report whether `docMetadata/LabelInfo.xml` exists under root.

    The match is case-sensitive on case-sensitive filesystems.

    Args:
        root: Extraction root directory

    Returns:
        (exists, path). The path is returned even when the file is absent,
        so a set operation knows where to write it.
    """
    path = os.path.join(root, *LABEL_INFO_PATH.split("/"))
    exists = os.path.isfile(path)
    logger.debug("checkLabelInfo %s -> %s", path, exists)
    return exists, path
