"""Random room graph construction.

GraphBuilder grows a graph one random edge at a time until every room has at
least MIN_CONNECTIONS neighbors. The MAX_CONNECTIONS cap is only enforced when
an edge is inserted; the completion check looks at the lower bound alone.

Both endpoints of each new edge are chosen by reject-and-retry sampling:
draw a slot uniformly, keep it only if it can still accept a connection
(and, for the second endpoint, is a different room that is not already
linked to the first). With 7 rooms and a cap of 6 a valid second endpoint
always exists whenever the first one has spare capacity, so sampling
terminates almost surely. A draw budget turns a pathological run into a
GraphGenerationError instead of a hang.
"""

from __future__ import annotations

import random
from typing import Optional

from ..config import Config
from ..errors import GraphGenerationError
from ..logging_utils import log_deterministic
from .model import MAX_CONNECTIONS, MIN_CONNECTIONS, ROOM_COUNT, RoomGraph


class GraphBuilder:
    """Builds a RoomGraph satisfying the per-room degree bounds."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        size: int = ROOM_COUNT,
        min_connections: int = MIN_CONNECTIONS,
        max_connections: int = MAX_CONNECTIONS,
        max_draws: Optional[int] = None,
    ) -> None:
        if not 0 < min_connections <= max_connections < size:
            raise ValueError(
                f"Degree bounds must satisfy 0 < min ({min_connections}) <= "
                f"max ({max_connections}) < size ({size})"
            )
        self.rng = rng or random.Random()
        self.size = size
        self.min_connections = min_connections
        self.max_connections = max_connections
        self.max_draws = max_draws if max_draws is not None else Config.GENERATION_MAX_DRAWS
        self._draws = 0

    def build(self) -> RoomGraph:
        """Return a fresh graph where every room has between min and max connections."""
        graph = RoomGraph(size=self.size)
        self._draws = 0
        edges_added = 0

        while not self.is_graph_full(graph):
            self.add_random_connection(graph)
            edges_added += 1

        log_deterministic(
            f"Built room graph: {edges_added} connections, "
            f"degrees {graph.degrees()}, {self._draws} draws"
        )
        return graph

    def is_graph_full(self, graph: RoomGraph) -> bool:
        """True once every room has reached the minimum number of connections."""
        return all(degree >= self.min_connections for degree in graph.degrees())

    def can_add_connection_from(self, graph: RoomGraph, slot: int) -> bool:
        return graph.degree(slot) < self.max_connections

    def add_random_connection(self, graph: RoomGraph) -> tuple[int, int]:
        """Connect two randomly chosen rooms and return the new edge."""
        while True:
            room_a = self._draw(graph)
            if self.can_add_connection_from(graph, room_a):
                break

        while True:
            room_b = self._draw(graph)
            if (
                self.can_add_connection_from(graph, room_b)
                and room_a != room_b
                and not graph.has_edge(room_a, room_b)
            ):
                break

        graph.connect(room_a, room_b)
        return room_a, room_b

    def _draw(self, graph: RoomGraph) -> int:
        if self._draws >= self.max_draws:
            raise GraphGenerationError(draws=self._draws, degrees=graph.degrees())
        self._draws += 1
        return self.rng.randrange(self.size)
