"""Groups of XML and video files that share a folder title."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from reconv.fileext import FileExt


@dataclass(frozen=True)
class Bucket:
    """An immutable set of XML and video files filed under one title."""

    title: str = ""
    xml_files: tuple[Path, ...] = ()
    video_files: tuple[FileExt, ...] = ()

    def into_parts(self) -> tuple[str, tuple[Path, ...], tuple[FileExt, ...]]:
        """Return the title, the XML files and the video files."""
        return self.title, self.xml_files, self.video_files


@dataclass
class BucketBuilder:
    """Collects files for a bucket before it is frozen."""

    title: str
    _xml_files: list[Path] = field(default_factory=list, init=False, repr=False)
    _video_files: list[FileExt] = field(default_factory=list, init=False, repr=False)

    def add_xml(self, file: str | Path) -> None:
        """Add an XML sidecar file."""
        self._xml_files.append(Path(file))

    def add_video(self, file: FileExt) -> None:
        """Add a video file."""
        self._video_files.append(file)

    def freeze(self) -> Bucket:
        """Return an immutable bucket holding the files added so far."""
        return Bucket(
            title=self.title,
            xml_files=tuple(self._xml_files),
            video_files=tuple(self._video_files),
        )