# reconv

`reconv` takes a folder of camera recordings and does two things with it:

1. It sorts the XML sidecar files and MP4 videos into session folders.
2. It converts the videos with `ffmpeg`.

## Sorting

Only files ending in `.xml` or `.mp4` (in any case) are used. Files are grouped by
the time they were last modified. Each group gets a title made of two parts: the
date as `YYMMDD`, then a session letter.

| Session | Time          |
|---------|---------------|
| A       | 07:30 – 11:30 |
| B       | 12:30 – 16:30 |
| C       | 17:00 – 20:30 |

On Wednesdays the evening session is labelled `B`. A file modified outside every
session gets the date alone as its title.

Each group is written to `<output>/<title> 原/`:

- XML files are copied into its `xml/` subfolder. A file that already exists there
  is left as it is.
- Videos are converted into the group folder itself. The output file has the
  extension chosen in the options.

## Installation

```
pip install .
```

`ffmpeg` must be on your `PATH`.

## Command line

```
reconv -i /path/to/recordings -o /path/to/output
```

- A progress bar is shown for each session folder. `DONE` is printed when the work
  ends.
- Press Ctrl+C to stop. This kills every running ffmpeg process.
- The options used come from `reconv.cli.default_ffmpeg_options()`:
  - CUDA decoding
  - NVENC H.264 video at 10000k
  - FLAC audio
  - MKV output
- The command exits with status 1 and prints the message if the input folder does
  not exist or cannot be read.

## Library use

### Building an ffmpeg command line

`reconv.options` builds the command line:

```python
from pathlib import Path
from reconv.options import (
    ArgsType, AudioCodec, VideoCodec, OutputExtension, FfmpegOptions,
)

ffmpeg_options = FfmpegOptions(
    resolution=ArgsType.match_source(),
    hwaccel=None,
    audio_codec=ArgsType.custom(AudioCodec.FLAC),
    video_codec=ArgsType.custom(VideoCodec.H264_QSV),
    audio_bitrate=ArgsType.match_source(),
    video_bitrate=ArgsType.custom(10000),
    picture_format=ArgsType.match_source(),
    output_extension=OutputExtension.MKV,
)
print(ffmpeg_options.build_with_io(Path("in.mp4"), Path("out.mkv")))
# ['-i', 'in.mp4', '-c:v', 'h264_qsv', '-b:v', '10000k', '-c:a', 'flac', 'out.mkv']
```

`FfmpegOptions` and `ConverterOptions` both have `to_dict` and `from_dict`. These
turn the options into a JSON-ready mapping with camel-case keys, and back again.

### Running a conversion

`reconv.converter.Converter` does the whole job:

- `prepare_task` sorts the input folder.
- `start_conversion` copies the XML files and runs ffmpeg.

The buckets are converted in parallel. Within one bucket, two videos are converted
at a time. If one bucket fails, the failure is logged and the other buckets go on.

```python
import asyncio
from pathlib import Path
from reconv.cli import default_ffmpeg_options
from reconv.converter import Converter
from reconv.options import ConverterOptions
from reconv.progress import ProgressSystem

async def convert() -> None:
    stop = asyncio.Event()          # set it to kill running ffmpeg processes
    progress = ProgressSystem(200)  # snapshot interval in milliseconds
    converter = Converter(stop, progress)
    await converter.prepare_task(
        ConverterOptions(Path("in"), Path("out"), True, default_ffmpeg_options())
    )
    await converter.start_conversion()
    progress.close()

asyncio.run(convert())
```

### Watching progress

`ProgressSystem.get_progress()` waits for the next snapshot and returns a tuple of
`Progress` items, one per folder. It returns `None` once the monitor has stopped.
A `ProgressSystem` must be created inside a running event loop.

### Errors

Errors are subclasses of `reconv.errors.ConverterError`, for example:

- `NotExistingInputOutputDir`
- `CopyError`
- `FfmpegError`

### Saved settings

`reconv.config.Config` saves the last-used `ConverterOptions` as JSON. The file is
in the user's config directory; `default_config_path()` gives its location.
`get_config()` loads it, and creates it the first time.

### Helpers for an options form

These modules check and map the values a user enters. They are not used by the
command line:

- `reconv.setup_types` holds the codec, hardware-acceleration and extension choices
  offered to a user. It maps them to and from the core options.
- `reconv.validation` checks bitrate text and folder choices.
- `reconv.extensions` holds small helpers for optional values.

## What it does not do

There is no graphical interface. The only way to set options at the command line is
through `-i` and `-o`; the codec and bitrate settings are fixed. Other settings
require using the library.