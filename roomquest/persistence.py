"""
RoomRepository interface for pluggable room-set storage.

This module provides the abstract RoomRepository interface and two concrete
implementations:
1. InMemoryRoomRepository - dict-based storage, data lost on exit (testing)
2. TextFileRoomRepository - one plain-text file per room in a generated directory

Room file format (one file per room, named ``<name>_room``):
```
ROOM NAME: Kitchen
CONNECTION 1: Attic
CONNECTION 2: Garden
CONNECTION 3: Stairs
ROOM TYPE: MID_ROOM
```

The writer always emits name, connections, type. The reader matches lines by
prefix, so field order does not matter; connections keep the order in which
they appear.

Generated directories are named ``{prefix}{pid}``. Loading without an explicit
location picks the most recently modified directory carrying the prefix.

Usage pattern:
    repository = TextFileRoomRepository(base_dir=Path("."))
    await repository.initialize()
    location = await repository.save_room_set(room_set)
    ...
    room_set = await repository.load_room_set()  # most recent directory
    await repository.close()
"""

import asyncio
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from .config import Config
from .errors import DataConsistencyError, RoomLoadError, RoomRepositoryError
from .logging_utils import log_deterministic, log_error
from .schemas import RoomRecord, RoomSet, RoomType

NAME_PREFIX = "ROOM NAME:"
CONNECTION_PREFIX = "CONNECTION"
TYPE_PREFIX = "ROOM TYPE:"


class RoomRepository(ABC):
    """Abstract base class for room-set storage.

    The generator saves one RoomSet per run; the player loads one back. Methods
    are async so file-backed implementations can push disk I/O to a worker
    thread without blocking the game loop.
    """

    async def initialize(self) -> None:
        """Prepare the backend (create directories, open handles, ...)."""
        return None

    async def close(self) -> None:
        """Release backend resources."""
        return None

    @abstractmethod
    async def save_room_set(self, room_set: RoomSet) -> str:
        """
        Persist a room set.

        Args:
            room_set: Rooms to store

        Returns:
            Identifier of the stored set (directory path or key)

        Raises:
            RoomRepositoryError: If the set cannot be written
        """
        pass

    @abstractmethod
    async def load_room_set(self, location: Optional[str] = None) -> RoomSet:
        """
        Load a room set and validate it.

        Args:
            location: Identifier returned by save_room_set. None selects the
                      most recently saved set.

        Returns:
            A RoomSet whose invariants hold

        Raises:
            RoomLoadError: If no set is available or a room cannot be read
            DataConsistencyError: If the stored rooms are malformed
        """
        pass


class InMemoryRoomRepository(RoomRepository):
    """Keeps room sets in a dict keyed by insertion counter."""

    def __init__(self) -> None:
        self.room_sets: Dict[str, RoomSet] = {}

    async def save_room_set(self, room_set: RoomSet) -> str:
        key = f"memory-{len(self.room_sets)}"
        self.room_sets[key] = room_set.model_copy(deep=True)
        return key

    async def load_room_set(self, location: Optional[str] = None) -> RoomSet:
        if not self.room_sets:
            raise RoomLoadError("No room sets have been saved")
        if location is None:
            location = list(self.room_sets)[-1]
        room_set = self.room_sets.get(location)
        if room_set is None:
            raise RoomLoadError(f"Unknown room set '{location}'")
        return room_set.model_copy(deep=True).validate_consistency()


def format_room_file(room: RoomRecord) -> str:
    """Render a room in the line-oriented text format."""
    lines = [f"{NAME_PREFIX} {room.name}"]
    for number, target in enumerate(room.connections, start=1):
        lines.append(f"{CONNECTION_PREFIX} {number}: {target}")
    if room.room_type is not None:
        lines.append(f"{TYPE_PREFIX} {room.room_type.value}")
    return "\n".join(lines) + "\n"


def parse_room_file(text: str, *, source: str = "<room file>") -> RoomRecord:
    """Parse one room file. A missing ROOM TYPE line yields ``room_type=None``.

    Raises:
        DataConsistencyError: If the name is missing or the type value is unknown
    """
    name: Optional[str] = None
    connections: List[str] = []
    room_type: Optional[RoomType] = None

    for line in text.splitlines():
        if line.startswith(NAME_PREFIX):
            name = line[len(NAME_PREFIX):].strip()
        elif line.startswith(TYPE_PREFIX):
            raw_type = line[len(TYPE_PREFIX):].strip()
            try:
                room_type = RoomType(raw_type)
            except ValueError:
                raise DataConsistencyError(
                    [f"{source}: unknown room type '{raw_type}'"]
                ) from None
        elif line.startswith(CONNECTION_PREFIX):
            _, _, target = line.partition(":")
            connections.append(target.strip())

    try:
        return RoomRecord(name=name or "", connections=connections, room_type=room_type)
    except ValidationError as exc:
        raise DataConsistencyError([f"{source}: missing or empty ROOM NAME"]) from exc


def most_recent_room_dir(base_dir: Path, prefix: str) -> Optional[Path]:
    """Return the newest (by modification time) directory whose name starts with prefix."""
    try:
        candidates = [
            entry for entry in base_dir.iterdir()
            if entry.is_dir() and entry.name.startswith(prefix)
        ]
    except OSError as exc:
        raise RoomLoadError(f"Could not open directory: {exc.strerror}", path=base_dir) from exc

    newest: Optional[Path] = None
    newest_key: Optional[Tuple[float, int, str]] = None
    for entry in candidates:
        try:
            mtime = entry.stat().st_mtime
        except FileNotFoundError:
            # Removed since the listing
            continue
        except OSError as exc:
            raise RoomLoadError(f"Could not stat directory: {exc.strerror}", path=entry) from exc
        suffix = entry.name[len(prefix):]
        key = (mtime, int(suffix) if suffix.isdigit() else -1, entry.name)
        if newest_key is None or key > newest_key:
            newest, newest_key = entry, key
    return newest


class TextFileRoomRepository(RoomRepository):
    """Stores each room set as a directory of ``<name>_room`` text files.

    Directory structure:
    ```
    {base_dir}/
      {prefix}{pid}/
        Kitchen_room
        Attic_room
        ...
    ```

    Error policy:
    - Directory creation failure is reported and saving carries on; the room
      file writes that follow then fail with RoomRepositoryError.
    - Any room file that cannot be read fails the whole load (RoomLoadError).
    - A room file that is not valid UTF-8 fails the load with DataConsistencyError.
    """

    def __init__(
        self,
        base_dir: Path | str | None = None,
        *,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        pid: Optional[int] = None,
    ) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else Config.ROOMS_BASE_DIR
        self.prefix = prefix if prefix is not None else Config.ROOMS_DIR_PREFIX
        self.suffix = suffix if suffix is not None else Config.ROOM_FILE_SUFFIX
        self.pid = pid if pid is not None else os.getpid()

    def room_dir(self) -> Path:
        return self.base_dir / f"{self.prefix}{self.pid}"

    async def save_room_set(self, room_set: RoomSet) -> str:
        directory = self.room_dir()
        try:
            await asyncio.to_thread(directory.mkdir, mode=0o755, exist_ok=True)
        except OSError as exc:
            log_error(f"Error creating directory {directory}: {exc.strerror}")

        for room in room_set.rooms:
            path = directory / f"{room.name}{self.suffix}"
            try:
                await asyncio.to_thread(path.write_text, format_room_file(room), "utf-8")
            except OSError as exc:
                raise RoomRepositoryError(
                    f"Error opening room file for writing: {exc.strerror}", path=path
                ) from exc

        log_deterministic(f"Wrote {len(room_set.rooms)} room files to {directory}")
        return str(directory)

    async def load_room_set(self, location: Optional[str] = None) -> RoomSet:
        if location is not None:
            directory = Path(location)
        else:
            directory = await asyncio.to_thread(most_recent_room_dir, self.base_dir, self.prefix)
            if directory is None:
                raise RoomLoadError(
                    f"No room directory starting with '{self.prefix}' found", path=self.base_dir
                )

        rooms = await asyncio.to_thread(self._read_rooms, directory)
        log_deterministic(f"Loaded {len(rooms)} rooms from {directory}")
        return RoomSet(rooms=rooms).validate_consistency()

    def _read_rooms(self, directory: Path) -> List[RoomRecord]:
        try:
            paths = sorted(
                entry for entry in directory.iterdir()
                if entry.is_file() and entry.name.endswith(self.suffix)
            )
        except OSError as exc:
            raise RoomLoadError(
                f"Room directory could not be opened: {exc.strerror}", path=directory
            ) from exc

        rooms: List[RoomRecord] = []
        for path in paths:
            try:
                text = path.read_text("utf-8")
            except OSError as exc:
                raise RoomLoadError(
                    f"Error opening room file: {exc.strerror}", path=path
                ) from exc
            except UnicodeDecodeError as exc:
                raise DataConsistencyError([f"{path.name}: not valid UTF-8 ({exc.reason})"]) from exc
            rooms.append(parse_room_file(text, source=path.name))
        return rooms
