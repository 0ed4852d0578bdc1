"""Room graph container.

A room graph is an undirected adjacency structure over a fixed number of
integer slots. Names and room types are attached later by the room assigner,
so the graph itself only knows slot indices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set

ROOM_COUNT = 7
MIN_CONNECTIONS = 3
MAX_CONNECTIONS = 6


@dataclass
class RoomGraph:
    """Symmetric adjacency sets keyed by slot index."""

    size: int = ROOM_COUNT
    adjacency: Dict[int, Set[int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for slot in range(self.size):
            self.adjacency.setdefault(slot, set())

    def neighbors(self, slot: int) -> List[int]:
        """Connected slots in ascending order (the order room files list them)."""
        return sorted(self.adjacency.get(slot, set()))

    def degree(self, slot: int) -> int:
        return len(self.adjacency.get(slot, set()))

    def degrees(self) -> List[int]:
        return [self.degree(slot) for slot in range(self.size)]

    def has_edge(self, a: int, b: int) -> bool:
        return b in self.adjacency.get(a, set()) and a in self.adjacency.get(b, set())

    def connect(self, a: int, b: int) -> None:
        """Add the undirected edge (a, b). Rejects self-loops and unknown slots."""
        if a == b:
            raise ValueError(f"Slot {a} cannot connect to itself")
        if not (0 <= a < self.size and 0 <= b < self.size):
            raise ValueError(f"Slots {a}, {b} out of range 0..{self.size - 1}")
        self.adjacency[a].add(b)
        self.adjacency[b].add(a)

    def edges(self) -> List[tuple[int, int]]:
        return sorted(
            (a, b) for a, linked in self.adjacency.items() for b in linked if a < b
        )
