import pytest

from reconv import options as core
from reconv.options import ArgsType
from reconv.setup_types import AudioCodec, HwAccel, OutputExtension, VideoCodec


@pytest.mark.parametrize(
    "choice, expected",
    [
        (AudioCodec.FLAC, core.AudioCodec.FLAC),
        (AudioCodec.AAC, core.AudioCodec.AAC),
        (AudioCodec.IPCM, core.AudioCodec.IPCM),
    ],
)
def test_audio_codec_to_args(choice, expected):
    assert choice.to_args() == ArgsType.custom(expected)


@pytest.mark.parametrize("choice", list(AudioCodec))
def test_audio_codec_round_trip(choice):
    assert AudioCodec.from_core(choice.to_args().to_option()) is choice


@pytest.mark.parametrize(
    "choice, expected",
    [
        (VideoCodec.H264, core.VideoCodec.H264),
        (VideoCodec.H265, core.VideoCodec.H265),
        (VideoCodec.CINEFORM, core.VideoCodec.CINEFORM),
        (VideoCodec.PRORES, core.VideoCodec.PRORES),
    ],
)
def test_video_codec_to_args(choice, expected):
    assert choice.to_args() == ArgsType.custom(expected)


@pytest.mark.parametrize("choice", list(VideoCodec))
def test_video_codec_round_trip(choice):
    assert VideoCodec.from_core(choice.to_args().to_option()) is choice


@pytest.mark.parametrize(
    "codec, family",
    [
        (core.VideoCodec.H264_NVENC, VideoCodec.H264),
        (core.VideoCodec.H264_QSV, VideoCodec.H264),
        (core.VideoCodec.H264_AMF, VideoCodec.H264),
        (core.VideoCodec.H265_NVENC, VideoCodec.H265),
        (core.VideoCodec.H265_QSV, VideoCodec.H265),
        (core.VideoCodec.H265_AMF, VideoCodec.H265),
    ],
)
def test_hardware_encoders_map_to_family(codec, family):
    assert VideoCodec.from_core(codec) is family


def test_hwaccel_none_has_no_core_setting():
    assert HwAccel.NONE.to_core() is None
    assert HwAccel.from_core(None) is HwAccel.NONE


@pytest.mark.parametrize(
    "choice, expected",
    [
        (HwAccel.CUDA, core.HwAccel.CUDA),
        (HwAccel.DIRECTX, core.HwAccel.DIRECTX),
        (HwAccel.VAAPI, core.HwAccel.VAAPI),
        (HwAccel.VULKAN, core.HwAccel.VULKAN),
    ],
)
def test_hwaccel_round_trip(choice, expected):
    assert choice.to_core() is expected
    assert HwAccel.from_core(expected) is choice


@pytest.mark.parametrize("choice", list(OutputExtension))
def test_output_extension_round_trip(choice):
    assert OutputExtension.from_core(choice.to_core()) is choice


def test_output_extension_default_becomes_mkv():
    assert OutputExtension.from_core(core.OutputExtension.DEFAULT) is OutputExtension.MKV


def test_output_extension_offer_order():
    offered = list(OutputExtension)
    expected = [
        OutputExtension.from_core(core.OutputExtension.MKV),
        OutputExtension.from_core(core.OutputExtension.MOV),
        OutputExtension.from_core(core.OutputExtension.MP3),
        OutputExtension.from_core(core.OutputExtension.MP4),
    ]
    assert offered == expected


def test_labels():
    assert str(HwAccel.from_core(core.HwAccel.DIRECTX)) == "directX"
    assert str(AudioCodec.from_core(core.AudioCodec.IPCM)) == "ipcm"
    assert str(VideoCodec.from_core(core.VideoCodec.CINEFORM)) == "cineform"
    assert str(OutputExtension.from_core(core.OutputExtension.MP3)) == "mp3"


def test_defaults_come_first():
    assert next(iter(AudioCodec)).to_args() == ArgsType.custom(core.AudioCodec.FLAC)
    assert next(iter(VideoCodec)).to_args() == ArgsType.custom(core.VideoCodec.H264)
    assert next(iter(HwAccel)).to_core() is None
    assert next(iter(OutputExtension)).to_core() is core.OutputExtension.MKV