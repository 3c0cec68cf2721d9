import asyncio
import datetime as dt
import os
from pathlib import Path

import pytest

from reconv.converter import Converter, State, create_directory_with_permissions
from reconv.errors import (
    ConverterHasNoTaskAvailable,
    CouldNotCreateDir,
    NotExistingInputOutputDir,
    ReadDirError,
)
from reconv.options import (
    ArgsType,
    AudioCodec,
    ConverterOptions,
    FfmpegOptions,
    OutputExtension,
    VideoCodec,
)
from reconv.progress import ProgressSystem, Stage

TITLE = "241106B"


def _ffmpeg_options() -> FfmpegOptions:
    return FfmpegOptions(
        resolution=ArgsType.match_source(),
        hwaccel=None,
        audio_codec=ArgsType.custom(AudioCodec.FLAC),
        video_codec=ArgsType.custom(VideoCodec.H264),
        audio_bitrate=ArgsType.match_source(),
        video_bitrate=ArgsType.custom(10000),
        picture_format=ArgsType.match_source(),
        output_extension=OutputExtension.MKV,
    )


def _input_with_xml(tmp_path: Path) -> Path:
    source = tmp_path / "in"
    source.mkdir()
    xml = source / "a.xml"
    xml.write_text("<clip/>")
    stamp = dt.datetime(2024, 11, 6, 19, 0, 23).timestamp()
    os.utime(xml, (stamp, stamp))
    return source


def _options(source: Path, target: Path) -> ConverterOptions:
    return ConverterOptions(source, target, True, _ffmpeg_options())


@pytest.mark.asyncio
async def test_prepare_task_missing_input(tmp_path):
    converter = Converter(asyncio.Event())
    with pytest.raises(NotExistingInputOutputDir):
        await converter.prepare_task(_options(tmp_path / "missing", tmp_path / "out"))
    assert converter.state is State.IDLE


@pytest.mark.asyncio
async def test_prepare_task_input_is_file(tmp_path):
    file = tmp_path / "plain.txt"
    file.write_text("x")
    converter = Converter(asyncio.Event())
    with pytest.raises(ReadDirError):
        await converter.prepare_task(_options(file, tmp_path / "out"))


@pytest.mark.asyncio
async def test_start_without_task_raises():
    converter = Converter(asyncio.Event())
    with pytest.raises(ConverterHasNoTaskAvailable):
        await converter.start_conversion(None)


@pytest.mark.asyncio
async def test_conversion_copies_xml_and_resets(tmp_path):
    source = _input_with_xml(tmp_path)
    target = tmp_path / "out"
    converter = Converter(asyncio.Event())
    options = _options(source, target)

    await converter.prepare_task(options)
    assert converter.state is State.TASK_AVAILABLE
    assert converter.options == options

    await converter.start_conversion(None)

    copied = target / f"{TITLE} 原" / "xml" / "a.xml"
    assert copied.read_text() == "<clip/>"
    assert converter.state is State.IDLE
    assert converter.stop_event is None

    with pytest.raises(ConverterHasNoTaskAvailable):
        await converter.start_conversion(None)


@pytest.mark.asyncio
async def test_reset_clears_task(tmp_path):
    source = _input_with_xml(tmp_path)
    converter = Converter(asyncio.Event())
    await converter.prepare_task(_options(source, tmp_path / "out"))
    converter.reset()
    assert converter.state is State.IDLE
    assert converter.options is None
    with pytest.raises(ConverterHasNoTaskAvailable):
        await converter.start_conversion(None)


@pytest.mark.asyncio
async def test_progress_reported_through_conversion(tmp_path):
    source = _input_with_xml(tmp_path)
    async with ProgressSystem(10) as progress_system:
        converter = Converter(asyncio.Event(), progress_system)
        await converter.prepare_task(_options(source, tmp_path / "out"))

        async def first_snapshot_with_folder():
            while True:
                snapshot = await progress_system.get_progress()
                for item in snapshot:
                    if item.folder == TITLE:
                        return item

        created = await asyncio.wait_for(first_snapshot_with_folder(), 5)
        assert created.total == 1
        assert created.count == 0
        assert created.stage is Stage.XML

        await converter.start_conversion(None)

        async def finished():
            while True:
                snapshot = await progress_system.get_progress()
                for item in snapshot:
                    if item.folder == TITLE and item.done:
                        return item

        result = await asyncio.wait_for(finished(), 5)
        assert result.stage is Stage.VIDEO
        assert result.file == ""


def test_create_directory_with_permissions(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    create_directory_with_permissions(target)
    assert target.is_dir()
    assert os.access(target, os.W_OK)
    create_directory_with_permissions(target)
    assert target.is_dir()


def test_create_directory_under_file_fails(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(CouldNotCreateDir):
        create_directory_with_permissions(blocker / "sub")