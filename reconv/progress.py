"""Progress tracking for conversion jobs, driven by a background monitor."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from reconv.errors import CreateSignalFailed, DoneSignalFailed, UpdateSignalFailed

log = logging.getLogger(__name__)

_MESSAGE_CAPACITY = 600
_PROGRESS_CAPACITY = 30


class Stage(str, Enum):
    """The phase a folder's job is in."""

    XML = "Xml"
    VIDEO = "Video"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class JobInfo:
    """How many files a folder's job has to handle."""

    folder_name: str
    total_video: int
    total_xml: int


@dataclass(frozen=True)
class Progress:
    """A snapshot of one folder's progress."""

    folder: str
    file: str
    count: int
    stage: Stage
    error_count: int
    total: int
    done: bool


@dataclass(frozen=True)
class CreateMessage:
    """Start tracking a folder."""

    job_info: JobInfo


@dataclass(frozen=True)
class UpdateMessage:
    """One more file of a folder has been handled."""

    folder_name: str
    working_file: str
    action: Stage


@dataclass(frozen=True)
class DoneMessage:
    """A folder's job has finished."""

    folder_name: str


Message = Union[CreateMessage, UpdateMessage, DoneMessage]


class _JobStatus(Enum):
    STARTING = "starting"
    PENDING = "pending"
    DONE = "done"


def _u8(value: int) -> int:
    return value % 256


class ProgressTracker:
    """Counts the XML and video files handled for one folder."""

    def __init__(self, job_info: JobInfo) -> None:
        self.job_info = job_info
        self._current_file = ""
        self._current_xml = 0
        self._current_video = 0
        self._status = _JobStatus.PENDING
        self._stage = Stage.XML
        self._errored: list[tuple[str, str]] = []

    def progress(self) -> Progress:
        """Return a snapshot of the current stage's progress."""
        if self._stage is Stage.XML:
            count, total = self._current_xml, self.job_info.total_xml
        else:
            count, total = self._current_video, self.job_info.total_video
        return Progress(
            folder=self.job_info.folder_name,
            file=self._current_file,
            count=_u8(count),
            stage=self._stage,
            error_count=_u8(len(self._errored)),
            total=_u8(total),
            done=self._status is _JobStatus.DONE,
        )

    def _update(self, stage: Stage, working_file: str) -> None:
        info = self.job_info
        if self._status is _JobStatus.PENDING:
            self._status = _JobStatus.STARTING
        if self._current_video == info.total_video and self._current_xml == info.total_xml:
            self._status = _JobStatus.DONE

        if stage is Stage.XML:
            if self._current_xml == info.total_xml:
                raise ValueError("XML COPYING HAD BEEN DONE")
            self._current_xml += 1
            if self._current_xml == info.total_xml:
                self._stage = Stage.VIDEO
        else:
            if self._current_video == info.total_video:
                raise ValueError("The things had been Done")
            self._current_video += 1

        self._current_file = working_file

    def update_xml(self, working_file: str) -> None:
        """Record one more copied XML file; raise ValueError if all are done."""
        self._update(Stage.XML, working_file)

    def update_video(self, working_file: str) -> None:
        """Record one more converted video; raise ValueError if all are done."""
        self._update(Stage.VIDEO, working_file)

    def set_done(self) -> None:
        """Mark the job as finished."""
        self._status = _JobStatus.DONE


class ProgressMonitor:
    """Applies messages to trackers and publishes snapshots at an interval.

    Putting ``None`` on the message queue stops the monitor.
    """

    def __init__(
        self,
        message_queue: asyncio.Queue,
        progress_queue: asyncio.Queue,
        update_interval: float,
    ) -> None:
        if update_interval <= 0:
            raise ValueError("update interval must be positive")
        self._messages = message_queue
        self._progress = progress_queue
        self._interval = update_interval
        self._trackers: dict[str, ProgressTracker] = {}

    def _handle(self, message: Message) -> None:
        if isinstance(message, CreateMessage):
            key = message.job_info.folder_name
            self._trackers.setdefault(key, ProgressTracker(message.job_info))
        elif isinstance(message, UpdateMessage):
            tracker = self._trackers.get(message.folder_name)
            if tracker is None:
                return
            if message.action is Stage.XML:
                tracker.update_xml(message.working_file)
            else:
                tracker.update_video(message.working_file)
        elif isinstance(message, DoneMessage):
            tracker = self._trackers.get(message.folder_name)
            if tracker is not None:
                tracker.set_done()

    async def start(self) -> None:
        """Run until ``None`` arrives on the message queue."""
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            remaining = next_tick - loop.time()
            if remaining <= 0:
                snapshot = tuple(tracker.progress() for tracker in self._trackers.values())
                await self._progress.put(snapshot)
                next_tick += self._interval
                continue
            try:
                message = await asyncio.wait_for(self._messages.get(), remaining)
            except asyncio.TimeoutError:
                continue
            if message is None:
                break
            self._handle(message)


def _report_failure(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        log.error("progress monitor stopped: %r", task.exception())


class ProgressSystem:
    """Owns a progress monitor task and the queues that talk to it.

    Must be created inside a running event loop. ``update_interval`` is in
    milliseconds.
    """

    def __init__(self, update_interval: int) -> None:
        self._messages: asyncio.Queue = asyncio.Queue(maxsize=_MESSAGE_CAPACITY)
        self._progress: asyncio.Queue = asyncio.Queue(maxsize=_PROGRESS_CAPACITY)
        monitor = ProgressMonitor(self._messages, self._progress, update_interval / 1000)
        self._task = asyncio.get_running_loop().create_task(monitor.start())
        self._task.add_done_callback(_report_failure)

    async def _send(self, message: Message, error: Exception) -> None:
        if self._task.done():
            raise error
        await self._messages.put(message)

    async def create_tracker(self, job_info: JobInfo) -> None:
        """Start tracking the folder described by ``job_info``."""
        await self._send(CreateMessage(job_info), CreateSignalFailed(job_info.folder_name))

    async def update_progress(self, folder_name: str, stage: Stage, working_file: str) -> None:
        """Report that ``working_file`` of ``folder_name`` finished ``stage``."""
        await self._send(
            UpdateMessage(folder_name, working_file, stage),
            UpdateSignalFailed(working_file, folder_name),
        )

    async def done(self, folder_name: str) -> None:
        """Mark ``folder_name`` as finished."""
        await self._send(DoneMessage(folder_name), DoneSignalFailed(folder_name))

    async def get_progress(self) -> tuple[Progress, ...] | None:
        """Wait for the next snapshot; ``None`` once the monitor has stopped."""
        if not self._progress.empty():
            return self._progress.get_nowait()
        if self._task.done():
            return None
        getter = asyncio.ensure_future(self._progress.get())
        try:
            done, _ = await asyncio.wait(
                {getter, self._task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            if not getter.done():
                getter.cancel()
        if getter in done and not getter.cancelled():
            return getter.result()
        return None

    def close(self) -> None:
        """Stop the monitor."""
        self._task.cancel()

    async def __aenter__(self) -> "ProgressSystem":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()