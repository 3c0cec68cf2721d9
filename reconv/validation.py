"""Validation of the values entered when setting up a conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

_U32_MAX = 2**32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)


class ValidationError(Enum):
    """A problem found with an entered value."""

    INPUT_DIR_EMPTY = "input_dir_empty"
    OUTPUT_DIR_EMPTY = "output_dir_empty"
    AUDIO_BITRATE_PARSE_ERROR = "audio_bitrate_parse_error"
    VIDEO_BITRATE_PARSE_ERROR = "video_bitrate_parse_error"

    def __str__(self) -> str:
        if self in (
            ValidationError.AUDIO_BITRATE_PARSE_ERROR,
            ValidationError.VIDEO_BITRATE_PARSE_ERROR,
        ):
            return "Only numbers are allowed"
        return "Internal Error"


def _parse_unsigned(text: str) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    number = int(text)
    return number if number <= _U32_MAX else None


@dataclass
class Validation:
    """Checks entered values and remembers the last error for each field."""

    audio_bitrate_error: ValidationError | None = None
    video_bitrate_error: ValidationError | None = None
    input_dir_error: ValidationError | None = None
    output_dir_error: ValidationError | None = None

    def validate_audio_bitrate(self, value: str | None) -> int | None:
        """Parse an audio bitrate; empty text counts as zero."""
        if value is None:
            return None
        if value == "":
            return 0
        number = _parse_unsigned(value)
        if number is None:
            self.audio_bitrate_error = ValidationError.AUDIO_BITRATE_PARSE_ERROR
            return None
        self.audio_bitrate_error = None
        return number

    def validate_video_bitrate(self, value: str | None) -> int | None:
        """Parse a video bitrate; empty text counts as zero."""
        if value is None:
            return None
        if value == "":
            return 0
        number = _parse_unsigned(value)
        if number is None:
            self.video_bitrate_error = ValidationError.VIDEO_BITRATE_PARSE_ERROR
            return None
        self.video_bitrate_error = None
        return number

    def validate_input_dir(self, value: Path | None) -> Path | None:
        """Pass the input folder through, noting an error if none was chosen."""
        if value is None:
            self.input_dir_error = ValidationError.INPUT_DIR_EMPTY
        return value

    def validate_output_dir(self, value: Path | None) -> Path | None:
        """Pass the output folder through, noting an error if none was chosen."""
        if value is None:
            self.output_dir_error = ValidationError.OUTPUT_DIR_EMPTY
        return value