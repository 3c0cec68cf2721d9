"""Sorting of input files into buckets by date and session."""

from __future__ import annotations

import datetime as _dt
import os
from collections.abc import Iterable
from pathlib import Path

from reconv.bucket import Bucket, BucketBuilder
from reconv.errors import SorterError
from reconv.fileext import FileExt
from reconv.timestamp import Datetime


def _modified_time(path: Path) -> _dt.datetime:
    try:
        mtime = os.stat(path).st_mtime
    except OSError as err:
        raise SorterError() from err
    return _dt.datetime.fromtimestamp(mtime)


def sink(files: Iterable[str | Path], need_sorting: bool) -> dict[str, Bucket]:
    """Sort ``files`` into buckets keyed by title.

    With ``need_sorting`` each file is filed by its modification date and
    recording session; otherwise every file goes under today's date. Files
    ending in ``.xml`` and ``.mp4`` (any case) are kept; other files still
    create their bucket but are not added to it.
    """
    builders: dict[str, BucketBuilder] = {}
    now = _dt.datetime.now()

    for item in files:
        path = Path(item)
        if need_sorting:
            title = str(Datetime.from_datetime(_modified_time(path)).need_session())
        else:
            title = str(Datetime.from_datetime(now))

        builder = builders.setdefault(title, BucketBuilder(title))

        suffix = path.suffix
        file_type = suffix[1:].lower() if suffix else "unknown"
        if file_type == "xml":
            builder.add_xml(path)
        elif file_type == "mp4":
            builder.add_video(FileExt.from_path(path))

    return {title: builder.freeze() for title, builder in builders.items()}