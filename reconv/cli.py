"""Command line that sorts and converts a folder of recordings."""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from tqdm import tqdm

from reconv.converter import Converter
from reconv.errors import ConverterError
from reconv.options import (
    ArgsType,
    AudioCodec,
    ConverterOptions,
    FfmpegOptions,
    HwAccel,
    OutputExtension,
    VideoCodec,
)
from reconv.progress import ProgressSystem

_UPDATE_INTERVAL_MS = 200
_SHUTDOWN_GRACE = 5.0
_BAR_FORMAT = "{desc:40} {bar:30} {n_fmt:>7}/{total_fmt:7}"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse ``-i INPUT -o OUTPUT``."""
    parser = argparse.ArgumentParser(
        prog="reconv", description="Sort recordings into sessions and convert them."
    )
    parser.add_argument("-i", dest="input", type=Path, required=True, help="input folder")
    parser.add_argument("-o", dest="output", type=Path, required=True, help="output folder")
    return parser.parse_args(argv)


def default_ffmpeg_options() -> FfmpegOptions:
    """The conversion settings the command line uses."""
    return FfmpegOptions(
        resolution=ArgsType.match_source(),
        hwaccel=HwAccel.CUDA,
        audio_codec=ArgsType.custom(AudioCodec.FLAC),
        video_codec=ArgsType.custom(VideoCodec.H264_NVENC),
        audio_bitrate=ArgsType.match_source(),
        video_bitrate=ArgsType.custom(10000),
        picture_format=ArgsType.match_source(),
        output_extension=OutputExtension.MKV,
    )


async def _show_progress(progress_system: ProgressSystem, stop: asyncio.Event) -> None:
    bars: dict[str, tqdm] = {}
    try:
        while (snapshot := await progress_system.get_progress()) is not None:
            if snapshot and all(item.done for item in snapshot):
                stop.set()
                break
            if stop.is_set():
                break
            for item in snapshot:
                bar = bars.get(item.folder)
                if bar is None:
                    bar = tqdm(total=item.total, position=len(bars), bar_format=_BAR_FORMAT)
                    bar.update(item.count)
                    bars[item.folder] = bar
                    continue
                if bar.total != item.total:
                    bar.total = item.total
                bar.n = item.count
                bar.set_description(f"[{item.folder}] {item.file}", refresh=False)
                bar.refresh()
    finally:
        for bar in bars.values():
            bar.close()
    print("DONE")


def _install_interrupt(stop: asyncio.Event) -> Callable[[], None]:
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, stop.set)
    except (NotImplementedError, RuntimeError, ValueError):
        return lambda: None
    return lambda: loop.remove_signal_handler(signal.SIGINT)


async def run(input_dir: str | Path, output_dir: str | Path) -> None:
    """Convert ``input_dir`` into ``output_dir`` while showing progress bars."""
    stop = asyncio.Event()
    progress_system = ProgressSystem(_UPDATE_INTERVAL_MS)
    converter = Converter(stop, progress_system)
    options = ConverterOptions(
        Path(input_dir), Path(output_dir), True, default_ffmpeg_options()
    )

    async def convert() -> None:
        await converter.prepare_task(options)
        await converter.start_conversion(None)

    remove_interrupt = _install_interrupt(stop)
    display = asyncio.ensure_future(_show_progress(progress_system, stop))
    try:
        try:
            await convert()
        except BaseException:
            stop.set()
            display.cancel()
            await asyncio.gather(display, return_exceptions=True)
            raise
        await asyncio.wait({display}, timeout=_SHUTDOWN_GRACE)
        stop.set()
        await display
    finally:
        remove_interrupt()
        progress_system.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``reconv`` command."""
    args = parse_args(argv)
    try:
        asyncio.run(run(args.input, args.output))
    except ConverterError as err:
        print(f"reconv: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())