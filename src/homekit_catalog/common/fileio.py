"""Crash-safe file and directory writes.

A partially written catalog file or output tree must never replace a
previously valid one, so both helpers write into a staging location next to
the target and swap it in with ``os.replace``.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path


def _umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_text_atomic(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` through a temporary sibling file.

    Parent directories are created as needed.

    Raises
    ------
        OSError: If the directory cannot be created or the file written.

    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        # mkstemp creates 0600 files
        os.chmod(tmp_path, 0o666 & ~_umask())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def replace_directory(output_dir: Path, files: Mapping[str, str]) -> None:
    """Replace ``output_dir`` with a tree holding exactly ``files``.

    Args:
    ----
        output_dir: Directory to replace. Existing contents are discarded.
        files: Mapping of POSIX-style relative paths to file contents.

    Raises:
    ------
        OSError: If the staging tree cannot be written or swapped in.

    """
    output_dir = output_dir.resolve()
    output_dir.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f".{output_dir.name}.staging-", dir=output_dir.parent))
    try:
        for relative, content in files.items():
            target = staging.joinpath(*relative.split("/"))
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8", newline="\n")
        # mkdtemp creates 0700 directories
        os.chmod(staging, 0o777 & ~_umask())
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        raise

    backup: Path | None = None
    if output_dir.exists():
        backup = Path(tempfile.mkdtemp(prefix=f".{output_dir.name}.old-", dir=output_dir.parent))
        # mkdtemp created the directory; os.replace needs the name free on Windows
        backup.rmdir()
        os.replace(output_dir, backup)
    try:
        os.replace(staging, output_dir)
    except BaseException:
        if backup is not None:
            os.replace(backup, output_dir)
        shutil.rmtree(staging, ignore_errors=True)
        raise
    if backup is not None:
        shutil.rmtree(backup, ignore_errors=True)
