"""Clock services answering the player's "time" command.

Two implementations share the ClockService interface:

- SystemClock formats the local time and returns it directly.
- FileHandoffClock spawns a one-shot worker task that writes the timestamp to
  a file while holding a lock, joins it, then reads the file back inside its
  own critical section. The lock serializes access to the file; the join
  already orders the write before the read.

Both raise ClockError when the time cannot be obtained, formatted or exchanged.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .config import Config
from .errors import ClockError


def format_timestamp(moment: datetime) -> str:
    """Format like `` 1:03pm, Tuesday, September 13, 2016``.

    Hour is 12-hour, space padded to two characters; am/pm is lowercase.
    """
    hour = moment.hour % 12 or 12
    meridiem = "am" if moment.hour < 12 else "pm"
    return (
        f"{hour:>2}:{moment.minute:02d}{meridiem}, "
        f"{moment.strftime('%A')}, {moment.strftime('%B')} {moment.day:02d}, {moment.year}"
    )


class ClockService(ABC):
    """Provides a formatted current-time string on demand."""

    @abstractmethod
    async def current_time(self) -> str:
        """Return the formatted local time (no trailing newline).

        Raises:
            ClockError: If the time cannot be produced
        """
        pass


def _read_now(now: Callable[[], datetime]) -> str:
    try:
        return format_timestamp(now())
    except (OverflowError, OSError, ValueError) as exc:
        raise ClockError(f"Local time error: {exc}") from exc


class SystemClock(ClockService):
    """Returns the timestamp in memory, no external medium involved."""

    def __init__(self, now: Optional[Callable[[], datetime]] = None) -> None:
        self._now = now or datetime.now

    async def current_time(self) -> str:
        return _read_now(self._now)


class FileHandoffClock(ClockService):
    """Worker writes the timestamp file under a lock; the caller reads it back."""

    def __init__(
        self,
        path: Path | str | None = None,
        *,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.path = Path(path) if path is not None else Config.TIME_FILE
        self._now = now or datetime.now
        self._lock = asyncio.Lock()

    async def current_time(self) -> str:
        worker = asyncio.create_task(self._write_time_file())
        await worker

        async with self._lock:
            return await asyncio.to_thread(self._read_time_file)

    async def _write_time_file(self) -> None:
        async with self._lock:
            stamp = _read_now(self._now)
            try:
                await asyncio.to_thread(self.path.write_text, stamp + "\n", "utf-8")
            except OSError as exc:
                raise ClockError(f"Could not write time file {self.path}: {exc.strerror}") from exc

    def _read_time_file(self) -> str:
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                line = handle.readline()
        except OSError as exc:
            raise ClockError(f"Could not read time file {self.path}: {exc.strerror}") from exc
        return line.rstrip("\n")
