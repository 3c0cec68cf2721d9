"""Sorting a folder of recordings into buckets and converting each bucket."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import stat
from enum import Enum
from pathlib import Path

from reconv.bucket import Bucket
from reconv.copier import copy_files
from reconv.errors import (
    ConverterError,
    ConverterHasNoTaskAvailable,
    CouldNotCreateDir,
    NotExistingInputOutputDir,
    ProgressError,
    ProgressTrackerError,
    ReadDirError,
    SinkerError,
    SorterError,
)
from reconv.ffmpeg import exec_batch_ffmpeg
from reconv.options import ConverterOptions
from reconv.progress import JobInfo, ProgressSystem
from reconv.sinker import sink

log = logging.getLogger(__name__)

_OUTPUT_SUFFIX = " 原"
_XML_DIR = "xml"


class State(Enum):
    """Whether a converter has a prepared task."""

    IDLE = "idle"
    TASK_AVAILABLE = "task_available"


def create_directory_with_permissions(path: str | os.PathLike[str]) -> None:
    """Create ``path`` and its parents and make it writable."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
        mode = path.stat().st_mode
        path.chmod(stat.S_IMODE(mode) | stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH)
    except OSError as err:
        raise CouldNotCreateDir(str(err)) from err


class Converter:
    """Prepares buckets from an input folder and converts them."""

    def __init__(
        self,
        stop_event: asyncio.Event | None,
        progress_system: ProgressSystem | None = None,
    ) -> None:
        self.stop_event = stop_event
        self.progress_system = progress_system
        self.options: ConverterOptions | None = None
        self.state = State.IDLE
        self._buckets: list[tuple[str, Bucket]] | None = None

    def reset(self) -> None:
        """Forget the prepared options and the stop event."""
        self.options = None
        self.state = State.IDLE
        self.stop_event = None

    async def prepare_task(self, options: ConverterOptions) -> None:
        """Sort the input folder into buckets and register them for tracking."""
        input_dir = Path(options.input_dir)
        if not input_dir.exists():
            raise NotExistingInputOutputDir()

        try:
            entries = list(input_dir.iterdir())
        except OSError as err:
            raise ReadDirError(str(err)) from err

        try:
            buckets = list(sink(entries, options.need_sorting).items())
        except SorterError as err:
            raise SinkerError.from_sorter(err) from err

        if self.progress_system is not None:
            for title, bucket in buckets:
                job_info = JobInfo(title, len(bucket.video_files), len(bucket.xml_files))
                try:
                    await self.progress_system.create_tracker(job_info)
                except ProgressError as err:
                    raise ProgressTrackerError(err) from err

        self._buckets = buckets
        self.options = options
        self.state = State.TASK_AVAILABLE

    async def start_conversion(
        self, ffmpeg_executable: str | os.PathLike[str] | None = None
    ) -> None:
        """Convert every prepared bucket; failures of single buckets are logged."""
        if self.state is not State.TASK_AVAILABLE or self._buckets is None:
            raise ConverterHasNoTaskAvailable()
        if self.options is None or self.stop_event is None:
            raise ConverterHasNoTaskAvailable()

        options = self.options
        stop_event = self.stop_event
        progress_system = self.progress_system
        log.info(
            "Converting started with options : %s",
            json.dumps(options.to_dict(), ensure_ascii=False),
        )

        buckets, self._buckets = self._buckets, None
        semaphore = asyncio.Semaphore(os.cpu_count() or 2)

        async def run_bucket(name: str, bucket: Bucket) -> None:
            log.info("Spawning new task for bucket : %s", name)
            async with semaphore:
                try:
                    await self._convert(
                        options, bucket, stop_event, ffmpeg_executable, progress_system
                    )
                except ConverterError as err:
                    log.error("Bucket %s failed: %s", name, err)

        await asyncio.gather(*(run_bucket(name, bucket) for name, bucket in buckets))

        self.state = State.IDLE
        self.stop_event = None

    @staticmethod
    async def _convert(
        options: ConverterOptions,
        bucket: Bucket,
        stop_event: asyncio.Event,
        ffmpeg_executable: str | os.PathLike[str] | None,
        progress_system: ProgressSystem | None,
    ) -> None:
        folder_name, xml_files, video_files = bucket.into_parts()
        log.info("Converting files in bucket : %s", folder_name)

        output = Path(options.output_dir) / f"{folder_name}{_OUTPUT_SUFFIX}"
        xml_dir = output / _XML_DIR
        for directory in (output, xml_dir):
            try:
                create_directory_with_permissions(directory)
            except CouldNotCreateDir as err:
                log.error("Failed to create directory %s: %s", directory, err)
                raise

        try:
            await copy_files(xml_files, xml_dir, folder_name, progress_system)
        except ConverterError as err:
            log.error("Failed to copy files: %s", err)
            raise
        log.info("done copying files in bucket : %s", folder_name)

        await exec_batch_ffmpeg(
            video_files,
            output,
            options.ffmpeg_options,
            stop_event,
            ffmpeg_executable,
            progress_system,
            folder_name,
        )
        log.info("done converting files in bucket : %s", folder_name)

        if progress_system is not None:
            try:
                await progress_system.done(folder_name)
            except ProgressError as err:
                raise ProgressTrackerError(err) from err