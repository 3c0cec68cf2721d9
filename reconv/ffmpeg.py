"""Running ffmpeg over a bucket's video files."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from collections.abc import Iterable
from pathlib import Path

from reconv.errors import FfmpegError, ProgressError, ProgressTrackerError
from reconv.fileext import FileExt
from reconv.options import FfmpegOptions
from reconv.progress import ProgressSystem, Stage

log = logging.getLogger(__name__)

_CREATE_NO_WINDOW = 0x08000000
_MAX_PARALLEL = 2


async def _spawn(
    source: FileExt,
    destination: Path,
    options: FfmpegOptions,
    ffmpeg_executable: str | os.PathLike[str] | None,
) -> asyncio.subprocess.Process:
    output = (destination / source.file_name).with_suffix(f".{options.output_extension}")
    args = options.build_with_io(source.path_with_extension(), output)
    log.info("executing with : %s", args)

    program = os.fspath(ffmpeg_executable) if ffmpeg_executable is not None else "ffmpeg"
    extra = {"creationflags": _CREATE_NO_WINDOW} if sys.platform == "win32" else {}
    try:
        return await asyncio.create_subprocess_exec(
            program,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            **extra,
        )
    except OSError as err:
        raise FfmpegError(f"Failed to execute ffmpeg: {err!r}") from err


async def _convert_one(
    file: FileExt,
    destination: Path,
    options: FfmpegOptions,
    stop_event: asyncio.Event,
    ffmpeg_executable: str | os.PathLike[str] | None,
    progress_system: ProgressSystem | None,
    folder_name: str,
    semaphore: asyncio.Semaphore,
) -> None:
    file_name = file.file_name.lower()
    async with semaphore:
        if stop_event.is_set():
            return
        process = await _spawn(file, destination, options, ffmpeg_executable)
        communicate = asyncio.ensure_future(process.communicate())
        stopper = asyncio.ensure_future(stop_event.wait())
        try:
            done, _ = await asyncio.wait(
                {communicate, stopper}, return_when=asyncio.FIRST_COMPLETED
            )
            if communicate not in done:
                log.info("Killing execution for file : %s", file_name)
                return
            _, stderr = communicate.result()
        finally:
            for waiter in (communicate, stopper):
                if not waiter.done():
                    waiter.cancel()
            if process.returncode is None:
                process.kill()
                await process.wait()

    if process.returncode != 0:
        err_output = stderr.decode("utf-8", errors="replace")
        log.error("File : %s[%s]\nstderr : %s\n", file_name, folder_name, err_output)
        raise FfmpegError(err_output)

    if progress_system is not None:
        try:
            await progress_system.update_progress(folder_name, Stage.VIDEO, file_name)
        except ProgressError as err:
            raise ProgressTrackerError(err) from err


async def exec_batch_ffmpeg(
    files: Iterable[FileExt],
    destination: str | os.PathLike[str],
    options: FfmpegOptions,
    stop_event: asyncio.Event,
    ffmpeg_executable: str | os.PathLike[str] | None = None,
    progress_system: ProgressSystem | None = None,
    folder_name: str = "",
) -> None:
    """Convert every file into ``destination``, two at a time.

    Setting ``stop_event`` kills running conversions and returns. The first
    failing conversion cancels the rest and its error is raised.
    """
    log.info("converting with options : %s [%s]", options.build(), folder_name)
    destination = Path(destination)
    semaphore = asyncio.Semaphore(_MAX_PARALLEL)
    pending = {
        asyncio.ensure_future(
            _convert_one(
                file,
                destination,
                options,
                stop_event,
                ffmpeg_executable,
                progress_system,
                folder_name,
                semaphore,
            )
        )
        for file in files
    }
    stop_waiter = asyncio.ensure_future(stop_event.wait())
    try:
        while pending:
            done, _ = await asyncio.wait(
                pending | {stop_waiter}, return_when=asyncio.FIRST_COMPLETED
            )
            if stop_waiter in done:
                return
            for task in done:
                pending.discard(task)
                error = task.exception()
                if error is not None:
                    log.error("Error executing : %r", error)
                    raise error
    finally:
        stop_waiter.cancel()
        if not stop_event.is_set():
            for task in pending:
                task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)