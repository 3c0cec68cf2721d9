"""Exception hierarchy for sorting, progress tracking and conversion."""

from __future__ import annotations


class ProgressError(Exception):
    """A message could not be delivered to the progress monitor."""


class UpdateSignalFailed(ProgressError):
    """An update message for a file could not be sent."""

    def __init__(self, file: str, folder: str) -> None:
        super().__init__(f"Update signal failed at {file}[{folder}]")
        self.file = file
        self.folder = folder


class CreateSignalFailed(ProgressError):
    """A create message for a folder could not be sent."""

    def __init__(self, folder: str) -> None:
        super().__init__(f"Create signal failed at {folder}")
        self.folder = folder


class DoneSignalFailed(ProgressError):
    """A done message for a folder could not be sent."""

    def __init__(self, folder: str) -> None:
        super().__init__(f"Done signal failed at {folder}")
        self.folder = folder


class SorterError(Exception):
    """Sorting input files into buckets failed."""

    def __init__(self, message: str = "io") -> None:
        super().__init__(message)


class WrongDatetimeError(SorterError):
    """A file's timestamp could not be turned into a bucket title."""

    def __init__(self) -> None:
        super().__init__("wrong datetime")


class ConverterError(Exception):
    """Base class for conversion failures."""


class NotExistingInputOutputDir(ConverterError):
    """The input or output directory does not exist."""

    def __init__(self) -> None:
        super().__init__("Input or Output dir are invalid")


class CouldNotCreateDir(ConverterError):
    """An output directory could not be created."""


class CopyError(ConverterError):
    """Copying a file failed."""


class ReadDirError(ConverterError):
    """The input directory could not be listed."""


class FfmpegError(ConverterError):
    """ffmpeg could not be started or exited with an error."""


class ConverterHasNoTaskAvailable(ConverterError):
    """Conversion was started before a task was prepared."""

    def __init__(self) -> None:
        super().__init__("Internal Error")


class SinkerError(ConverterError):
    """Sorting files into buckets failed."""

    @classmethod
    def from_sorter(cls, error: SorterError) -> "SinkerError":
        """Wrap a sorter error, keeping its message."""
        wrapped = cls(str(error))
        wrapped.__cause__ = error
        return wrapped


class ProgressTrackerError(ConverterError):
    """A progress message could not be delivered."""

    def __init__(self, cause: ProgressError) -> None:
        super().__init__(str(cause))
        self.cause = cause