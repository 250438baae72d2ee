"""File Discovery: enumerate Office containers by extension."""

import logging
import os
from typing import Iterable, List

from sensitivity_labels.errors import PathError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".docx", ".xlsx", ".pptx")


def file_extension(filename: str) -> str:
    """Suffix from the last dot of the final path element, dot included."""
    name = os.path.basename(filename)
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def has_extension(filename: str, extensions: Iterable[str]) -> bool:
    """Case-sensitive match of the final extension of filename.

    A bare ".docx" counts as having the ".docx" extension.
    """
    return file_extension(filename) in tuple(extensions)


def list_extension_files(
    root: str,
    recursive: bool = False,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> List[str]:
    """
    List regular files under root whose extension is accepted.

    Args:
        root: Directory to search
        recursive: Walk the whole subtree instead of root's children only
        extensions: Accepted extensions, including the dot

    Returns:
        File paths (joined onto root), sorted by directory then name

    Raises:
        PathError: If root does not exist or cannot be read
    """
    extensions = tuple(extensions)
    if not os.path.isdir(root):
        raise PathError(f"no such directory: {root}")

    files: List[str] = []

    if not recursive:
        try:
            names = sorted(os.listdir(root))
        except OSError as e:
            raise PathError(f"cannot read directory {root}: {e}")
        for name in names:
            path = os.path.join(root, name)
            if os.path.isfile(path) and has_extension(name, extensions):
                files.append(path)
    else:
        def _on_error(e: OSError) -> None:
            raise PathError(f"cannot read directory {e.filename}: {e}")

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            dirnames.sort()
            for name in sorted(filenames):
                path = os.path.join(dirpath, name)
                if os.path.isfile(path) and has_extension(name, extensions):
                    files.append(path)

    logger.debug("Found %d file(s) in %s (recursive=%s)", len(files), root, recursive)
    return files
