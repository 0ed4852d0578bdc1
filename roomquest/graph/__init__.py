"""Room graph construction and analysis."""

from .model import MAX_CONNECTIONS, MIN_CONNECTIONS, ROOM_COUNT, RoomGraph
from .builder import GraphBuilder
from .helpers import graph_problems, is_connected, reachable_from, shortest_path

__all__ = [
    "RoomGraph",
    "GraphBuilder",
    "ROOM_COUNT",
    "MIN_CONNECTIONS",
    "MAX_CONNECTIONS",
    "graph_problems",
    "is_connected",
    "reachable_from",
    "shortest_path",
]
