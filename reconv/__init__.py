"""Sort recordings into session folders and batch-convert them with ffmpeg."""

__version__ = "0.1.0"