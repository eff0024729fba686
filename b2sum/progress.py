"""
Progress rendering — rich live progress bars on stderr.

Usage::

    tracker = ProgressTracker(total_files=3)
    tracker.start()

    with tracker.file("video.mp4", size=104857600) as fp:
        for chunk in ...:
            fp.advance(len(chunk))

    tracker.stop()

Standard output is never touched, so checksum lines stay clean.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)


class FileProgress:
    """Per-file handle yielded by ProgressTracker.file(); counts hashed bytes."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        self._progress = progress
        self._task_id = task_id
        self.hashed = 0

    def advance(self, n: int) -> None:
        self.hashed += n
        self._progress.advance(self._task_id, n)

    def finish(self) -> None:
        # Pipes have no known size; pin the bar to what was actually read.
        self._progress.update(self._task_id, total=self.hashed or None, completed=self.hashed)


class _NullFileProgress:
    def __init__(self) -> None:
        self.hashed = 0

    def advance(self, n: int) -> None:
        self.hashed += n

    def finish(self) -> None: ...


class ProgressTracker:
    """Live per-file hashing progress using Rich."""

    def __init__(self, total_files: int | None = None, console: Console | None = None) -> None:
        self.total_files = total_files
        self.done = 0
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold cyan]BLAKE2b[/] ({task.fields[position]})"),
            BarColumn(bar_width=None),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            TextColumn("[dim]{task.fields[filename]}"),
            console=console or Console(stderr=True),
            transient=True,
            expand=True,
        )

    def _position(self) -> str:
        if self.total_files is None:
            return str(self.done + 1)
        return f"{self.done + 1}/{self.total_files}"

    def start(self) -> None:
        self._progress.start()

    def stop(self) -> None:
        self._progress.stop()

    @contextmanager
    def file(self, filename: str, size: int | None) -> Generator[FileProgress, None, None]:
        """Context manager for hashing a single file."""
        task_id = self._progress.add_task(
            "hash",
            total=size,
            filename=filename,
            position=self._position(),
        )
        fp = FileProgress(self._progress, task_id)
        try:
            yield fp
        finally:
            fp.finish()
            self.done += 1
            self._progress.remove_task(task_id)


class NullProgress:
    """Drop-in no-op replacement when --progress is not given."""

    def start(self) -> None: ...
    def stop(self) -> None: ...

    @contextmanager
    def file(self, filename: str, size: int | None) -> Generator[_NullFileProgress, None, None]:
        fp = _NullFileProgress()
        try:
            yield fp
        finally:
            fp.finish()
