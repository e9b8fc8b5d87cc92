"""Writing rendered file sets to disk.

Two policies exist.  ``create_files`` never clobbers a path that already
exists, so user edits to program sources survive a re-run.
``override_or_create_files`` truncates and rewrites, for files the tool owns.
Neither is transactional: a failure partway through leaves whatever was
already written on disk.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path

from ..errors import MaterializeError
from .models import FileEntry, FileSet, OverwritePolicy


async def create_files(root: Path, entries: Iterable[FileEntry]) -> list[Path]:
    """Create every entry under *root* that does not exist yet.

    Entries whose name has no ``.`` are directories; their content is
    ignored.  Existing paths are skipped silently.

    Returns:
        The paths that were created.
    """
    written: list[Path] = []
    for entry in entries:
        path = root / entry.relative_path
        if path.exists():
            continue
        try:
            if entry.is_directory:
                await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
            else:
                await asyncio.to_thread(_write_file, path, entry.content)
        except OSError as exc:
            raise MaterializeError(path, exc) from exc
        written.append(path)
    return written


async def override_or_create_files(root: Path, entries: Iterable[FileEntry]) -> list[Path]:
    """Write every entry under *root*, replacing existing content.

    Returns:
        The paths that were written.
    """
    written: list[Path] = []
    for entry in entries:
        path = root / entry.relative_path
        try:
            await asyncio.to_thread(_write_file, path, entry.content)
        except OSError as exc:
            raise MaterializeError(path, exc) from exc
        written.append(path)
    return written


async def materialize(root: Path, file_set: FileSet) -> list[Path]:
    """Write a rendered file set, honouring each entry's overwrite policy.

    Entries keep their catalog order within each policy group; create-only
    entries go first so overwrite entries may land inside directories they
    declare.
    """
    create = [e for e in file_set.entries if e.overwrite_policy is OverwritePolicy.CREATE_IF_ABSENT]
    overwrite = [e for e in file_set.entries if e.overwrite_policy is OverwritePolicy.ALWAYS_OVERWRITE]
    written = await create_files(root, create)
    written += await override_or_create_files(root, overwrite)
    return written


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
