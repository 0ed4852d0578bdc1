"""
Room naming and typing for generated graphs.

RoomAssigner turns an anonymous RoomGraph into a RoomSet:
1. select_names() picks distinct names from ROOM_NAME_POOL
2. assign_types() labels exactly one START, one END and the rest MID
3. assemble() combines both with the graph's connections

Type assignment draws a distinct selector in 0..size-1 for every slot (by
rejection sampling), then maps selector 0 to START, the highest selector to
END and everything else to MID. Because the selectors are a permutation,
exactly one START and one END are produced for any random sequence.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .graph import GraphBuilder, RoomGraph
from .logging_utils import log_deterministic
from .schemas import RoomRecord, RoomSet, RoomType

ROOM_NAME_POOL: tuple[str, ...] = (
    "Dungeon",
    "Barracks",
    "Garden",
    "Game",
    "Medical",
    "Corridor",
    "Kitchen",
    "Stairs",
    "Basement",
    "Attic",
)


class RoomAssigner:
    """Assigns names and types to the slots of a room graph."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        name_pool: Sequence[str] = ROOM_NAME_POOL,
    ) -> None:
        if len(set(name_pool)) != len(name_pool):
            raise ValueError("Room name pool must not contain duplicates")
        self.rng = rng or random.Random()
        self.name_pool = tuple(name_pool)

    def select_names(self, count: int = 7) -> List[str]:
        """Pick ``count`` distinct names, retrying any draw that was already chosen."""
        if count > len(self.name_pool):
            raise ValueError(
                f"Cannot select {count} distinct names from a pool of {len(self.name_pool)}"
            )
        chosen: List[int] = []
        while len(chosen) < count:
            index = self.rng.randrange(len(self.name_pool))
            if index not in chosen:
                chosen.append(index)
        return [self.name_pool[index] for index in chosen]

    def assign_types(self, count: int = 7) -> List[RoomType]:
        """Return one RoomType per slot: one START, one END, the rest MID."""
        if count < 2:
            raise ValueError("A room set needs at least two rooms (START and END)")
        selectors: List[int] = []
        while len(selectors) < count:
            value = self.rng.randrange(count)
            if value not in selectors:
                selectors.append(value)

        types: List[RoomType] = []
        for value in selectors:
            if value == 0:
                types.append(RoomType.START)
            elif value == count - 1:
                types.append(RoomType.END)
            else:
                types.append(RoomType.MID)
        return types

    def assemble(self, graph: RoomGraph) -> RoomSet:
        """Build the RoomSet for ``graph``; connections follow ascending slot order."""
        names = self.select_names(graph.size)
        types = self.assign_types(graph.size)
        rooms = [
            RoomRecord(
                name=names[slot],
                connections=[names[other] for other in graph.neighbors(slot)],
                room_type=types[slot],
            )
            for slot in range(graph.size)
        ]
        room_set = RoomSet(rooms=rooms)
        log_deterministic(
            "Assigned rooms: "
            + ", ".join(f"{room.name}={room.room_type.value}" for room in rooms)
        )
        return room_set


def generate_room_set(
    rng: Optional[random.Random] = None,
    *,
    max_draws: Optional[int] = None,
) -> RoomSet:
    """Build a random graph, name and type its rooms, and validate the result."""
    rng = rng or random.Random()
    graph = GraphBuilder(rng, max_draws=max_draws).build()
    return RoomAssigner(rng).assemble(graph).validate_consistency()
