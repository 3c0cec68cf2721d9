"""Choices offered when setting up a conversion, and their core equivalents.

The first member of each choice enum is its default. Members iterate in the
order they are offered to the user.
"""

from __future__ import annotations

from enum import Enum

from reconv.options import ArgsType
from reconv.options import AudioCodec as _CoreAudioCodec
from reconv.options import HwAccel as _CoreHwAccel
from reconv.options import OutputExtension as _CoreOutputExtension
from reconv.options import VideoCodec as _CoreVideoCodec


class _Choice(Enum):
    """An enum whose value is the label shown for it."""

    def __str__(self) -> str:
        return self.value


class AudioCodec(_Choice):
    """Audio codecs offered to the user."""

    FLAC = "flac"
    AAC = "aac"
    IPCM = "ipcm"

    def to_args(self) -> ArgsType[_CoreAudioCodec]:
        """Return the matching custom core codec."""
        return ArgsType.custom(_AUDIO_TO_CORE[self])

    @classmethod
    def from_core(cls, value: _CoreAudioCodec) -> "AudioCodec":
        """Map a core codec to a choice, falling back to FLAC."""
        for choice, core in _AUDIO_TO_CORE.items():
            if core is value:
                return choice
        return cls.FLAC


_AUDIO_TO_CORE = {
    AudioCodec.FLAC: _CoreAudioCodec.FLAC,
    AudioCodec.AAC: _CoreAudioCodec.AAC,
    AudioCodec.IPCM: _CoreAudioCodec.IPCM,
}


class VideoCodec(_Choice):
    """Video codec families offered to the user."""

    H264 = "h264"
    H265 = "h265"
    CINEFORM = "cineform"
    PRORES = "prores"

    def to_args(self) -> ArgsType[_CoreVideoCodec]:
        """Return the matching custom core codec (software encoder)."""
        return ArgsType.custom(_VIDEO_TO_CORE[self])

    @classmethod
    def from_core(cls, value: _CoreVideoCodec) -> "VideoCodec":
        """Map a core codec, hardware encoders included, to its family."""
        return _CORE_TO_VIDEO.get(value, cls.H264)


_VIDEO_TO_CORE = {
    VideoCodec.H264: _CoreVideoCodec.H264,
    VideoCodec.H265: _CoreVideoCodec.H265,
    VideoCodec.CINEFORM: _CoreVideoCodec.CINEFORM,
    VideoCodec.PRORES: _CoreVideoCodec.PRORES,
}

_CORE_TO_VIDEO = {
    _CoreVideoCodec.H264: VideoCodec.H264,
    _CoreVideoCodec.H264_NVENC: VideoCodec.H264,
    _CoreVideoCodec.H264_QSV: VideoCodec.H264,
    _CoreVideoCodec.H264_AMF: VideoCodec.H264,
    _CoreVideoCodec.H265: VideoCodec.H265,
    _CoreVideoCodec.H265_NVENC: VideoCodec.H265,
    _CoreVideoCodec.H265_QSV: VideoCodec.H265,
    _CoreVideoCodec.H265_AMF: VideoCodec.H265,
    _CoreVideoCodec.CINEFORM: VideoCodec.CINEFORM,
    _CoreVideoCodec.PRORES: VideoCodec.PRORES,
}


class HwAccel(_Choice):
    """Hardware acceleration choices, including none."""

    NONE = "none"
    CUDA = "cuda"
    DIRECTX = "directX"
    VAAPI = "vaapi"
    VULKAN = "vulkan"

    def to_core(self) -> _CoreHwAccel | None:
        """Return the core setting, or ``None`` for no acceleration."""
        return _HW_TO_CORE.get(self)

    @classmethod
    def from_core(cls, value: _CoreHwAccel | None) -> "HwAccel":
        """Map a core setting (or ``None``) to a choice."""
        for choice, core in _HW_TO_CORE.items():
            if core is value:
                return choice
        return cls.NONE


_HW_TO_CORE = {
    HwAccel.CUDA: _CoreHwAccel.CUDA,
    HwAccel.DIRECTX: _CoreHwAccel.DIRECTX,
    HwAccel.VAAPI: _CoreHwAccel.VAAPI,
    HwAccel.VULKAN: _CoreHwAccel.VULKAN,
}


class OutputExtension(_Choice):
    """Output containers offered to the user."""

    MKV = "mkv"
    MOV = "mov"
    MP3 = "mp3"
    MP4 = "mp4"

    def to_core(self) -> _CoreOutputExtension:
        """Return the core extension."""
        return _EXT_TO_CORE[self]

    @classmethod
    def from_core(cls, value: _CoreOutputExtension) -> "OutputExtension":
        """Map a core extension to a choice; the default becomes MKV."""
        for choice, core in _EXT_TO_CORE.items():
            if core is value:
                return choice
        return cls.MKV


_EXT_TO_CORE = {
    OutputExtension.MKV: _CoreOutputExtension.MKV,
    OutputExtension.MOV: _CoreOutputExtension.MOV,
    OutputExtension.MP3: _CoreOutputExtension.MP3,
    OutputExtension.MP4: _CoreOutputExtension.MP4,
}


class ToggleType(Enum):
    """Which optional setting a switch turns on or off."""

    AC = "audio_codec"
    VC = "video_codec"
    AB = "audio_bitrate"
    VB = "video_bitrate"
    OEX = "output_extension"