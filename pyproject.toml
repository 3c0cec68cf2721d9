[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reconv"
version = "0.1.0"
description = "Sort camera recordings into dated session folders and batch-convert videos with ffmpeg"
requires-python = ">=3.10"
keywords = ["ffmpeg", "video", "conversion", "batch", "sorting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Conversion",
]
dependencies = [
    "platformdirs",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
reconv = "reconv.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["reconv"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
