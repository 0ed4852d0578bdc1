"""Shared fixtures: a small hand-built room set."""

import pytest

from roomquest.schemas import RoomRecord, RoomSet, RoomType


def make_room_set() -> RoomSet:
    """A starts and G ends; A -> B -> G is the shortest route."""
    layout = {
        "A": (["B", "C", "D"], RoomType.START),
        "B": (["A", "E", "F", "G"], RoomType.MID),
        "C": (["A", "D", "E"], RoomType.MID),
        "D": (["A", "C", "F"], RoomType.MID),
        "E": (["B", "C", "G"], RoomType.MID),
        "F": (["B", "D", "G"], RoomType.MID),
        "G": (["B", "E", "F"], RoomType.END),
    }
    return RoomSet(
        rooms=[
            RoomRecord(name=name, connections=connections, room_type=room_type)
            for name, (connections, room_type) in layout.items()
        ]
    )


@pytest.fixture
def room_set() -> RoomSet:
    return make_room_set()
