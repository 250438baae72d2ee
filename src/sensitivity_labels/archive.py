"""
Zip container handling: safe extraction, repacking and atomic replacement.

Extraction refuses any entry whose cleaned destination leaves the
extraction root (zip-slip). Packing builds the whole archive in memory so
the original file is only touched by the final atomic replace.
"""

from __future__ import annotations

import contextlib
import io
import logging
import os
import shutil
import tempfile
import zipfile
import zlib
from typing import List, Tuple, Union

from sensitivity_labels.errors import ArchiveFormatError, ArchiveTraversalError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _resolve_member(dest_root: str, name: str) -> str:
    """Return the cleaned destination of an entry, or raise on traversal."""
    target = os.path.normpath(os.path.join(dest_root, name))
    if not target.startswith(dest_root + os.sep):
        raise ArchiveTraversalError(name)
    return target


def _plan_extraction(zf: zipfile.ZipFile, dest_root: str) -> List[Tuple[zipfile.ZipInfo, str]]:
    """
    Resolve every entry before anything is written.

    A single bad entry aborts the archive with nothing extracted.
    """
    plan = []
    for info in zf.infolist():
        name = info.filename.replace("\\", "/")
        if info.is_dir() and os.path.normpath(os.path.join(dest_root, name)) == dest_root:
            # Entry for the archive root itself
            continue
        plan.append((info, _resolve_member(dest_root, name)))
    return plan


def extract_archive(src: PathLike, dest: PathLike) -> List[str]:
    """
    Unpack a zip container into a working directory.

    Args:
        src: Path of the container file
        dest: Extraction root (created with parents if absent)

    Returns:
        Extracted file paths, in archive order

    Raises:
        ArchiveFormatError: If src is not a valid zip file or an entry's data
            cannot be decompressed
        ArchiveTraversalError: If an entry escapes dest
        OSError: On any filesystem failure (already extracted entries remain)
    """
    try:
        zf = zipfile.ZipFile(src, "r")
    except zipfile.BadZipFile as e:
        raise ArchiveFormatError(f"{src}: not a valid zip archive ({e})")

    dest_root = os.path.normpath(os.path.abspath(dest))
    extracted: List[str] = []

    with zf:
        plan = _plan_extraction(zf, dest_root)
        os.makedirs(dest_root, exist_ok=True)

        for info, target in plan:
            if info.is_dir():
                os.makedirs(target, exist_ok=True)
                continue
            os.makedirs(os.path.dirname(target), exist_ok=True)
            try:
                with zf.open(info) as source, open(target, "wb") as out:
                    shutil.copyfileobj(source, out)
            except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError,
                    zlib.error, EOFError, RuntimeError) as e:
                raise ArchiveFormatError(f"{src}: cannot read entry {info.filename} ({e})") from e
            extracted.append(target)

    logger.debug("Extracted %d file(s) from %s -> %s", len(extracted), src, dest_root)
    return extracted


def pack_directory(root: PathLike) -> bytes:
    """
    Build a zip archive from every regular file under root.

    Entry names are root-relative with forward slashes. Directories are not
    stored as entries. Walk order is sorted, so the same tree always yields
    the same entry order.

    Args:
        root: Directory to pack

    Returns:
        The complete archive as bytes
    """
    root = os.path.abspath(root)
    buffer = io.BytesIO()

    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for filename in sorted(filenames):
                full_path = os.path.join(dirpath, filename)
                if not os.path.isfile(full_path):
                    continue
                arcname = os.path.relpath(full_path, root).replace(os.sep, "/")
                zf.write(full_path, arcname)

    data = buffer.getvalue()
    logger.debug("Packed %s into %d bytes", root, len(data))
    return data


def write_atomic(path: PathLike, data: bytes) -> None:
    """
    Replace the contents of path with data in one step.

    Data goes to a temporary file in the same directory, is flushed to disk
    and then renamed over path. On failure path is left as it was.
    """
    path = os.fspath(path)
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=directory)

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(path):
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except OSError:
        with contextlib.suppress(OSError):
            os.unlink(tmp)
        raise

    logger.debug("Wrote %d bytes -> %s", len(data), path)
