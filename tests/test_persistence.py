"""Tests for room repositories and the room file format."""

import os
import random
from pathlib import Path

import pytest

from roomquest.errors import DataConsistencyError, RoomLoadError, RoomRepositoryError
from roomquest.persistence import (
    InMemoryRoomRepository,
    TextFileRoomRepository,
    format_room_file,
    most_recent_room_dir,
    parse_room_file,
)
from roomquest.rooms import ROOM_NAME_POOL, generate_room_set
from roomquest.schemas import RoomRecord, RoomType

from conftest import make_room_set


def test_format_room_file_writes_name_connections_type():
    room = RoomRecord(name="Kitchen", connections=["Attic", "Garden", "Stairs"], room_type=RoomType.MID)

    assert format_room_file(room) == (
        "ROOM NAME: Kitchen\n"
        "CONNECTION 1: Attic\n"
        "CONNECTION 2: Garden\n"
        "CONNECTION 3: Stairs\n"
        "ROOM TYPE: MID_ROOM\n"
    )


def test_parse_room_file_is_order_independent():
    text = (
        "ROOM TYPE: END_ROOM\n"
        "CONNECTION 1: Dungeon\n"
        "ROOM NAME: Attic\n"
        "CONNECTION 2: Game\n"
        "CONNECTION 3: Medical\n"
    )
    room = parse_room_file(text)
    assert room.name == "Attic"
    assert room.connections == ["Dungeon", "Game", "Medical"]
    assert room.room_type is RoomType.END


def test_parse_room_file_without_type_leaves_it_absent():
    room = parse_room_file("ROOM NAME: Attic\nCONNECTION 1: Game\n")
    assert room.room_type is None


def test_parse_room_file_rejects_unknown_type_and_missing_name():
    with pytest.raises(DataConsistencyError):
        parse_room_file("ROOM NAME: Attic\nROOM TYPE: SIDE_ROOM\n")
    with pytest.raises(DataConsistencyError):
        parse_room_file("CONNECTION 1: Game\nROOM TYPE: MID_ROOM\n")


@pytest.mark.asyncio
async def test_in_memory_repository_returns_latest_copy():
    repository = InMemoryRoomRepository()
    with pytest.raises(RoomLoadError):
        await repository.load_room_set()

    first = await repository.save_room_set(make_room_set())
    second = await repository.save_room_set(generate_room_set(random.Random(5)))

    latest = await repository.load_room_set()
    assert set(latest.names()) <= set(ROOM_NAME_POOL)
    assert (await repository.load_room_set(first)).names() == list("ABCDEFG")
    assert first != second


@pytest.mark.asyncio
async def test_text_repository_writes_one_file_per_room(tmp_path):
    room_set = generate_room_set(random.Random(11))
    repository = TextFileRoomRepository(tmp_path, prefix="rooms.", pid=4242)

    location = await repository.save_room_set(room_set)

    directory = tmp_path / "rooms.4242"
    assert location == str(directory)
    files = sorted(path.name for path in directory.iterdir())
    assert files == sorted(f"{name}_room" for name in room_set.names())

    first_room = room_set.rooms[0]
    text = (directory / f"{first_room.name}_room").read_text()
    assert text.startswith(f"ROOM NAME: {first_room.name}\n")
    assert text.endswith(f"ROOM TYPE: {first_room.room_type.value}\n")

    loaded = await repository.load_room_set()
    assert sorted(loaded.names()) == sorted(room_set.names())
    assert loaded.get(first_room.name) == first_room


@pytest.mark.asyncio
async def test_text_repository_loads_most_recent_directory(tmp_path):
    older = TextFileRoomRepository(tmp_path, prefix="rooms.", pid=1)
    newer = TextFileRoomRepository(tmp_path, prefix="rooms.", pid=2)
    await older.save_room_set(make_room_set())
    await newer.save_room_set(generate_room_set(random.Random(9)))

    os.utime(tmp_path / "rooms.1", (1_000_000, 1_000_000))
    os.utime(tmp_path / "rooms.2", (2_000_000, 2_000_000))
    (tmp_path / "unrelated").mkdir()

    assert most_recent_room_dir(tmp_path, "rooms.") == tmp_path / "rooms.2"

    os.utime(tmp_path / "rooms.1", (3_000_000, 3_000_000))
    loaded = await TextFileRoomRepository(tmp_path, prefix="rooms.").load_room_set()
    assert sorted(loaded.names()) == list("ABCDEFG")


@pytest.mark.asyncio
async def test_missing_room_directory_fails_load(tmp_path):
    repository = TextFileRoomRepository(tmp_path, prefix="rooms.")
    with pytest.raises(RoomLoadError):
        await repository.load_room_set()
    with pytest.raises(RoomLoadError):
        await repository.load_room_set(str(tmp_path / "rooms.missing"))


@pytest.mark.asyncio
async def test_malformed_room_file_fails_with_consistency_error(tmp_path):
    repository = TextFileRoomRepository(tmp_path, prefix="rooms.", pid=7)
    await repository.save_room_set(make_room_set())

    path = tmp_path / "rooms.7" / "C_room"
    path.write_text("ROOM NAME: C\nCONNECTION 1: A\nCONNECTION 2: D\nCONNECTION 3: E\n")

    with pytest.raises(DataConsistencyError) as excinfo:
        await repository.load_room_set()
    assert "room 'C' has no ROOM TYPE" in excinfo.value.problems


@pytest.mark.asyncio
async def test_unwritable_directory_raises_repository_error(tmp_path):
    # A regular file where the room directory should go: mkdir fails, then writes fail
    blocker = tmp_path / "rooms.9"
    blocker.write_text("not a directory")
    repository = TextFileRoomRepository(tmp_path, prefix="rooms.", pid=9)

    with pytest.raises(RoomRepositoryError):
        await repository.save_room_set(make_room_set())


@pytest.mark.asyncio
async def test_unreadable_room_file_fails_whole_load(tmp_path, monkeypatch):
    repository = TextFileRoomRepository(tmp_path, prefix="rooms.", pid=3)
    await repository.save_room_set(make_room_set())
    locked = tmp_path / "rooms.3" / "D_room"

    original_read_text = Path.read_text

    def read_text(self, *args, **kwargs):
        if self == locked:
            raise PermissionError(13, "Permission denied", str(self))
        return original_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", read_text)

    with pytest.raises(RoomLoadError) as excinfo:
        await repository.load_room_set()
    assert excinfo.value.path == locked


@pytest.mark.asyncio
async def test_non_utf8_room_file_fails_with_consistency_error(tmp_path):
    repository = TextFileRoomRepository(tmp_path, prefix="rooms.", pid=4)
    await repository.save_room_set(make_room_set())
    (tmp_path / "rooms.4" / "C_room").write_bytes(b"ROOM NAME: C\xff\xfe\n")

    with pytest.raises(DataConsistencyError) as excinfo:
        await repository.load_room_set()
    assert any("C_room: not valid UTF-8" in problem for problem in excinfo.value.problems)


def test_most_recent_room_dir_breaks_mtime_ties_by_pid(tmp_path):
    for name in ("rooms.9", "rooms.10"):
        (tmp_path / name).mkdir()
        os.utime(tmp_path / name, (1_000_000, 1_000_000))

    assert most_recent_room_dir(tmp_path, "rooms.") == tmp_path / "rooms.10"


def test_most_recent_room_dir_skips_vanished_directory(tmp_path, monkeypatch):
    (tmp_path / "rooms.1").mkdir()
    ghost = tmp_path / "rooms.2"

    original_iterdir = Path.iterdir
    original_is_dir = Path.is_dir

    def iterdir(self):
        yield from original_iterdir(self)
        if self == tmp_path:
            yield ghost

    monkeypatch.setattr(Path, "iterdir", iterdir)
    monkeypatch.setattr(Path, "is_dir", lambda self: self == ghost or original_is_dir(self))

    assert most_recent_room_dir(tmp_path, "rooms.") == tmp_path / "rooms.1"
