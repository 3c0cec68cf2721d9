"""Copying of XML sidecar files into a bucket's output folder."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from reconv.errors import CopyError, ProgressError, ProgressTrackerError
from reconv.progress import ProgressSystem, Stage

log = logging.getLogger(__name__)


def copy_file(file: str | Path, destination: str | Path) -> None:
    """Copy ``file`` into ``destination``, leaving an existing copy untouched."""
    source = Path(file)
    try:
        source_file = open(source, "rb")
    except OSError as err:
        raise CopyError(f"Failed to open source file: {err}") from err

    with source_file:
        target = Path(destination) / source.name
        if target.exists():
            return
        try:
            dest_file = open(target, "wb")
        except OSError as err:
            raise CopyError(f"Failed to create destination file: {err}") from err
        with dest_file:
            try:
                shutil.copyfileobj(source_file, dest_file)
            except OSError as err:
                raise CopyError(f"Failed to copy file: {err}") from err


async def copy_files(
    files: Iterable[str | Path],
    destination: str | Path,
    folder_name: str,
    tracker: ProgressSystem | None = None,
) -> None:
    """Copy every file into ``destination``, reporting each to ``tracker``."""
    log.info("Copying files [%s]", folder_name)
    for file in files:
        path = Path(file)
        copy_file(path, destination)
        if tracker is None:
            continue
        log.info("Updating tracker for file : %s [%s]", path, folder_name)
        try:
            await tracker.update_progress(folder_name, Stage.XML, path.name.lower())
        except ProgressError as err:
            raise ProgressTrackerError(err) from err