"""Utilities for room graphs: routing, reachability and invariant checks."""

from __future__ import annotations

from collections import deque
from typing import Hashable, List, Mapping, Optional, Sequence, Set, Tuple, TypeVar

from .model import MAX_CONNECTIONS, MIN_CONNECTIONS, RoomGraph

Node = TypeVar("Node", bound=Hashable)


def shortest_path(
    adjacency: Mapping[Node, Sequence[Node]], start: Node, goal: Node
) -> Optional[List[Node]]:
    """Return a list of nodes from start to goal using BFS.

    Works on any adjacency mapping (slot indices or room names). Returns None if
    no path exists. The path includes both start and goal.
    """

    if start == goal:
        return [start]
    visited = {start}
    # Queue stores (current_node, path_to_current_node) tuples
    queue: deque[Tuple[Node, List[Node]]] = deque([(start, [start])])

    while queue:
        node, path = queue.popleft()
        for neighbor in adjacency.get(node, ()):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            new_path = path + [neighbor]
            if neighbor == goal:
                return new_path
            queue.append((neighbor, new_path))
    return None


def reachable_from(adjacency: Mapping[Node, Sequence[Node]], start: Node) -> Set[Node]:
    """All nodes reachable from start, start included."""
    seen = {start}
    queue: deque[Node] = deque([start])
    while queue:
        node = queue.popleft()
        for neighbor in adjacency.get(node, ()):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def is_connected(graph: RoomGraph) -> bool:
    if graph.size == 0:
        return True
    adjacency = {slot: graph.neighbors(slot) for slot in range(graph.size)}
    return len(reachable_from(adjacency, 0)) == graph.size


def graph_problems(
    graph: RoomGraph,
    *,
    min_connections: int = MIN_CONNECTIONS,
    max_connections: int = MAX_CONNECTIONS,
) -> List[str]:
    """Describe every violated invariant of a generated graph (empty list when valid).

    Checks:
    1. No slot lists itself
    2. Every edge is recorded in both directions
    3. Every degree is within [min_connections, max_connections]
    4. All slots are mutually reachable
    """
    problems: List[str] = []
    for slot in range(graph.size):
        linked = graph.adjacency.get(slot, set())
        if slot in linked:
            problems.append(f"slot {slot} is connected to itself")
        for other in linked:
            if slot not in graph.adjacency.get(other, set()):
                problems.append(f"edge {slot}->{other} has no reverse edge")
        degree = len(linked)
        if not min_connections <= degree <= max_connections:
            problems.append(
                f"slot {slot} has {degree} connections, expected "
                f"{min_connections}..{max_connections}"
            )
    if not problems and not is_connected(graph):
        problems.append("graph is not connected")
    return problems
