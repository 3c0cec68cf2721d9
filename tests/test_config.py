import json

import pytest

from reconv.config import Config, ConfigError, default_config_path
from reconv.options import (
    ArgsType,
    AudioCodec,
    ConverterOptions,
    FfmpegOptions,
    HwAccel,
    OutputExtension,
    VideoCodec,
)


def _options(tmp_path) -> ConverterOptions:
    ffmpeg = FfmpegOptions(
        resolution=ArgsType.match_source(),
        hwaccel=HwAccel.CUDA,
        audio_codec=ArgsType.custom(AudioCodec.AAC),
        video_codec=ArgsType.custom(VideoCodec.H265_NVENC),
        audio_bitrate=ArgsType.custom(320),
        video_bitrate=ArgsType.match_source(),
        picture_format=ArgsType.match_source(),
        output_extension=OutputExtension.MOV,
    )
    return ConverterOptions(tmp_path / "in", tmp_path / "out", True, ffmpeg)


def test_default_path_file_name():
    assert default_config_path().name == "config.json"


def test_load_missing_creates_default(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = Config.load(path)
    assert config.last_saved is None
    assert config.saved_path == path
    assert json.loads(path.read_text(encoding="utf-8")) == {"last_saved": None}


def test_round_trip(tmp_path):
    path = tmp_path / "config.json"
    options = _options(tmp_path)
    config = Config.load(path)
    config.update_last_saved_and_save(options)

    reloaded = Config.load(path)
    assert reloaded.last_saved == options
    assert reloaded.saved_path == path


def test_unchanged_options_are_not_rewritten(tmp_path):
    path = tmp_path / "config.json"
    options = _options(tmp_path)
    config = Config.load(path)
    config.update_last_saved_and_save(options)
    path.unlink()

    config.update_last_saved_and_save(options)
    assert not path.exists()

    changed = ConverterOptions(
        options.input_dir, options.output_dir, False, options.ffmpeg_options
    )
    config.update_last_saved_and_save(changed)
    assert Config.load(path).last_saved == changed


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to deserialize JSON"):
        Config.load(path)


def test_invalid_options_raise(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"last_saved": {"inputDir": "x"}}), encoding="utf-8")
    with pytest.raises(ConfigError):
        Config.load(path)


def test_save_into_file_parent_fails(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    config = Config(saved_path=blocker / "config.json")
    with pytest.raises(ConfigError):
        config.save()