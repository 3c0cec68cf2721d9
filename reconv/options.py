"""ffmpeg options and conversion settings, with their serialised form."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from reconv.arg import Arg

T = TypeVar("T")

_U32_MAX = 2**32 - 1


class _OptionEnum(Enum):
    """An enum whose members carry a serialised key and an ffmpeg text."""

    def __init__(self, key: str, text: str) -> None:
        self.key = key
        self.text = text

    def __str__(self) -> str:
        return self.text

    @classmethod
    def from_key(cls, key: str):
        """Return the member serialised as ``key``."""
        for member in cls:
            if member.key == key:
                return member
        raise ValueError(f"unknown {cls.__name__} value: {key!r}")


class Resolution(_OptionEnum):
    R720P = ("r720P", "1280x720")
    R1080P = ("r1080P", "1920x1080")
    R1440P = ("r1440P", "2560x1440")
    R4K = ("r4K", "4096x2160")


class AudioCodec(_OptionEnum):
    FLAC = ("flac", "flac")
    AAC = ("aac", "aac")
    IPCM = ("ipcm", "pcm_s24be")


class PictureFormat(_OptionEnum):
    PF42210B = ("pf42210B", "yuv422p10le")
    PF4228B = ("pf4228B", "yuv422p")
    PF42010B = ("pf42010B", "yuv420p10le")
    PF4208B = ("pf4208B", "yuv420p")


class VideoCodec(_OptionEnum):
    H264 = ("h264", "libx264")
    H264_NVENC = ("h264NVENC", "h264_nvenc")
    H264_AMF = ("h264AMF", "h264_amf")
    H264_QSV = ("h264QSV", "h264_qsv")
    H265 = ("h265", "libx265")
    H265_NVENC = ("h265NVENC", "hevc_nvenc")
    H265_AMF = ("h265AMF", "hevc_amf")
    H265_QSV = ("h265QSV", "hevc_qsv")
    CINEFORM = ("cineForm", "cfhd")
    PRORES = ("prores", "prores")


class OutputExtension(_OptionEnum):
    DEFAULT = ("default", "mkv")
    MKV = ("mkv", "mkv")
    MOV = ("mov", "mov")
    MP4 = ("mp4", "mp4")
    MP3 = ("mp3", "mp3")


class HwAccel(_OptionEnum):
    CUDA = ("cuda", "cuda")
    DIRECTX = ("directx", "d3d11va")
    VAAPI = ("vaapi", "vaapi")
    VULKAN = ("vulkan", "vulkan")


def _load_value(raw: Any, kind: type) -> Any:
    if isinstance(kind, type) and issubclass(kind, _OptionEnum):
        return kind.from_key(raw)
    if kind is int:
        if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw <= _U32_MAX:
            raise ValueError(f"expected an unsigned 32-bit integer, got {raw!r}")
        return raw
    return kind(raw)


def _dump_value(value: Any) -> Any:
    return value.key if isinstance(value, _OptionEnum) else value


@dataclass(frozen=True)
class ArgsType(Generic[T]):
    """Either keep the source's setting or use a custom value."""

    content: T | None = None
    is_custom: bool = False

    @classmethod
    def match_source(cls) -> "ArgsType[T]":
        """Keep whatever the source uses."""
        return cls()

    @classmethod
    def custom(cls, value: T) -> "ArgsType[T]":
        """Use ``value``."""
        return cls(value, True)

    def to_option(self) -> T | None:
        """Return the custom value, or ``None`` when matching the source."""
        return self.content if self.is_custom else None

    def __str__(self) -> str:
        return str(self.content) if self.is_custom else "copy"

    def to_dict(self) -> dict[str, Any]:
        """Serialise as a tagged mapping."""
        if not self.is_custom:
            return {"type": "matchSource"}
        return {"type": "custom", "content": _dump_value(self.content)}

    @classmethod
    def from_dict(cls, data: dict[str, Any], kind: type) -> "ArgsType":
        """Load from a tagged mapping whose content is of ``kind``."""
        tag = data.get("type") if isinstance(data, dict) else None
        if tag == "matchSource":
            return cls.match_source()
        if tag == "custom":
            if "content" not in data:
                raise ValueError("custom value has no content")
            return cls.custom(_load_value(data["content"], kind))
        raise ValueError(f"unknown argument type: {tag!r}")


def _field(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as err:
        raise ValueError(f"missing field: {key}") from err


@dataclass(frozen=True)
class FfmpegOptions:
    """Settings that become an ffmpeg command line."""

    resolution: ArgsType[Resolution]
    hwaccel: HwAccel | None
    audio_codec: ArgsType[AudioCodec]
    video_codec: ArgsType[VideoCodec]
    audio_bitrate: ArgsType[int]
    video_bitrate: ArgsType[int]
    picture_format: ArgsType[PictureFormat]
    output_extension: OutputExtension

    def build(self) -> tuple[list[str], int, int]:
        """Return the arguments and the offsets where input and output go."""
        args: list[str] = []

        if self.hwaccel is not None:
            args += Arg("hwaccel").value(str(self.hwaccel)).build()
            if self.video_codec.to_option() is VideoCodec.H264_NVENC:
                args += Arg("hwaccel_output_format").value("auto").build()

        args += Arg("i").build()
        input_offset = len(args)

        if self.resolution.is_custom:
            scale = "".join(
                Arg("scale")
                .without_dash()
                .value(str(self.resolution))
                .with_value_spacer("= ")
                .build()
            )
            flags = "".join(
                Arg("flags").without_dash().value("lanczos").with_value_spacer("=").build()
            )
            filter_value = "".join(
                Arg(scale).without_dash().value(flags).with_value_spacer(":").build()
            )
            args += Arg("vf").value(filter_value).build()

        codec, bitrate = self.video_codec, self.video_bitrate
        if codec.is_custom and bitrate.is_custom:
            args += Arg("c:v").value(str(codec.content)).build()
            args += Arg("b:v").value(f"{bitrate.content}k").build()
        elif not codec.is_custom and not bitrate.is_custom:
            args += Arg("c:v").value(str(codec)).build()
        elif bitrate.is_custom:
            args += Arg("b:a").value(f"{bitrate.content}k").build()
        else:
            args += Arg("c:v").value(str(codec.content)).build()

        codec, bitrate = self.audio_codec, self.audio_bitrate
        if codec.is_custom and bitrate.is_custom:
            args += Arg("c:a").value(str(codec.content)).build()
            args += Arg("b:a").value(f"{bitrate.content}k").build()
        elif not codec.is_custom and not bitrate.is_custom:
            args += Arg("c:a").value("copy").build()
        elif bitrate.is_custom:
            args += Arg("b:a").value(f"{bitrate.content}k").build()
        else:
            args += Arg("c:a").value(str(codec.content)).build()

        return args, input_offset, len(args)

    def build_with_io(
        self, input_path: str | os.PathLike[str], output_path: str | os.PathLike[str]
    ) -> list[str]:
        """Return the full argument list for converting one file."""
        args, input_offset, _ = self.build()
        args.insert(input_offset, os.fspath(input_path))
        args.append(os.fspath(output_path))
        return args

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camel-case keys."""
        return {
            "resolution": self.resolution.to_dict(),
            "hwaccel": None if self.hwaccel is None else self.hwaccel.key,
            "audioCodec": self.audio_codec.to_dict(),
            "videoCodec": self.video_codec.to_dict(),
            "audioBitrate": self.audio_bitrate.to_dict(),
            "videoBitrate": self.video_bitrate.to_dict(),
            "pictureFormat": self.picture_format.to_dict(),
            "outputExtension": self.output_extension.key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FfmpegOptions":
        """Load from the mapping produced by ``to_dict``."""
        hwaccel = _field(data, "hwaccel")
        return cls(
            resolution=ArgsType.from_dict(_field(data, "resolution"), Resolution),
            hwaccel=None if hwaccel is None else HwAccel.from_key(hwaccel),
            audio_codec=ArgsType.from_dict(_field(data, "audioCodec"), AudioCodec),
            video_codec=ArgsType.from_dict(_field(data, "videoCodec"), VideoCodec),
            audio_bitrate=ArgsType.from_dict(_field(data, "audioBitrate"), int),
            video_bitrate=ArgsType.from_dict(_field(data, "videoBitrate"), int),
            picture_format=ArgsType.from_dict(_field(data, "pictureFormat"), PictureFormat),
            output_extension=OutputExtension.from_key(_field(data, "outputExtension")),
        )


@dataclass(frozen=True)
class ConverterOptions:
    """Where to read from, where to write to, and how to convert."""

    input_dir: Path
    output_dir: Path
    need_sorting: bool
    ffmpeg_options: FfmpegOptions

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_dir", Path(self.input_dir))
        object.__setattr__(self, "output_dir", Path(self.output_dir))

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camel-case keys."""
        return {
            "inputDir": str(self.input_dir),
            "outputDir": str(self.output_dir),
            "needSorting": self.need_sorting,
            "ffmpegOptions": self.ffmpeg_options.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConverterOptions":
        """Load from the mapping produced by ``to_dict``."""
        need_sorting = _field(data, "needSorting")
        if not isinstance(need_sorting, bool):
            raise ValueError(f"needSorting must be a boolean, got {need_sorting!r}")
        return cls(
            input_dir=Path(_field(data, "inputDir")),
            output_dir=Path(_field(data, "outputDir")),
            need_sorting=need_sorting,
            ffmpeg_options=FfmpegOptions.from_dict(_field(data, "ffmpegOptions")),
        )