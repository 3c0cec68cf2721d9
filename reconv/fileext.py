"""A file path split into parent, file name and extension."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileExt:
    """A file path held as its parent directory, file name and extension.

    ``file_name`` is the full final component, extension included;
    ``extension`` has no leading dot and is empty when there is none.
    """

    parent: Path
    file_name: str
    extension: str

    @classmethod
    def from_path(cls, path: str | Path) -> "FileExt":
        """Split ``path`` into its parts."""
        path = Path(path)
        name = path.name
        suffix = path.suffix
        return cls(
            parent=path.parent,
            file_name=name,
            extension=suffix[1:] if suffix else "",
        )

    def path_without_extension(self) -> Path:
        """Join the parent with the stored file name."""
        return self.parent / self.file_name

    def path_with_extension(self) -> Path:
        """Join the parent with the file name, its extension set to ``extension``."""
        path = self.path_without_extension()
        if not path.name:
            return path
        return path.with_suffix(f".{self.extension}" if self.extension else "")