"""
Pydantic schemas for room sets.

A RoomRecord mirrors one room file: its name, its ordered connection list and
its type. Records are deliberately lenient so a reader can represent what a
malformed file actually contains (for example a missing ROOM TYPE line leaves
``room_type`` as None). RoomSet.validate_consistency() is the single place where
the room-set invariants are enforced.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .errors import DataConsistencyError
from .graph import MAX_CONNECTIONS, MIN_CONNECTIONS, ROOM_COUNT, shortest_path


class RoomType(str, Enum):
    """Role of a room in the adventure. Values are the on-disk spellings."""

    START = "START_ROOM"
    MID = "MID_ROOM"
    END = "END_ROOM"


class RoomRecord(BaseModel):
    """One room: name, connections in listing order, and type."""

    name: str = Field(..., min_length=1, description="Unique room name")
    connections: List[str] = Field(
        default_factory=list,
        description="Names of connected rooms, in the order they are listed",
    )
    room_type: Optional[RoomType] = Field(
        None, description="START/MID/END; None when the source omitted it",
    )

    @property
    def is_start(self) -> bool:
        return self.room_type == RoomType.START

    @property
    def is_end(self) -> bool:
        return self.room_type == RoomType.END


class RoomSet(BaseModel):
    """The full collection of rooms making up one adventure."""

    rooms: List[RoomRecord] = Field(default_factory=list)

    def get(self, name: str) -> Optional[RoomRecord]:
        for room in self.rooms:
            if room.name == name:
                return room
        return None

    def names(self) -> List[str]:
        return [room.name for room in self.rooms]

    def adjacency(self) -> Dict[str, List[str]]:
        return {room.name: list(room.connections) for room in self.rooms}

    def rooms_of_type(self, room_type: RoomType) -> List[RoomRecord]:
        return [room for room in self.rooms if room.room_type == room_type]

    def start_room(self) -> RoomRecord:
        starts = self.rooms_of_type(RoomType.START)
        if len(starts) != 1:
            raise DataConsistencyError([f"expected exactly one START_ROOM, found {len(starts)}"])
        return starts[0]

    def problems(self) -> List[str]:
        """List every violated invariant (empty when the set is consistent)."""
        problems: List[str] = []

        if len(self.rooms) != ROOM_COUNT:
            problems.append(f"expected {ROOM_COUNT} rooms, found {len(self.rooms)}")

        names = self.names()
        duplicates = sorted({name for name in names if names.count(name) > 1})
        for name in duplicates:
            problems.append(f"room name '{name}' appears more than once")

        by_name = {room.name: room for room in self.rooms}
        for room in self.rooms:
            if room.room_type is None:
                problems.append(f"room '{room.name}' has no ROOM TYPE")

            count = len(room.connections)
            if not MIN_CONNECTIONS <= count <= MAX_CONNECTIONS:
                problems.append(
                    f"room '{room.name}' has {count} connections, expected "
                    f"{MIN_CONNECTIONS}..{MAX_CONNECTIONS}"
                )
            if len(set(room.connections)) != count:
                problems.append(f"room '{room.name}' lists a connection twice")

            for target in room.connections:
                if target == room.name:
                    problems.append(f"room '{room.name}' connects to itself")
                    continue
                other = by_name.get(target)
                if other is None:
                    problems.append(f"room '{room.name}' connects to unknown room '{target}'")
                elif room.name not in other.connections:
                    problems.append(
                        f"connection '{room.name}' -> '{target}' is not listed by '{target}'"
                    )

        for room_type in (RoomType.START, RoomType.END):
            found = len(self.rooms_of_type(room_type))
            if found != 1:
                problems.append(f"expected exactly one {room_type.value}, found {found}")

        if not problems:
            start = self.rooms_of_type(RoomType.START)[0]
            end = self.rooms_of_type(RoomType.END)[0]
            if shortest_path(self.adjacency(), start.name, end.name) is None:
                problems.append(f"END_ROOM '{end.name}' is unreachable from '{start.name}'")

        return problems

    def validate_consistency(self) -> "RoomSet":
        """Raise DataConsistencyError unless every room-set invariant holds."""
        problems = self.problems()
        if problems:
            raise DataConsistencyError(problems)
        return self
