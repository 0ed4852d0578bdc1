"""
Roomquest - random room-graph adventure.

Generate a connected set of seven rooms, store it as plain-text room files,
and walk it from the START room to the END room.

Collaborators are injected: room storage (RoomRepository), time
(ClockService) and terminal I/O (TerminalPort) all have in-memory
implementations for tests and embedding.
"""

__version__ = "0.1.0"

# Generation
from .graph import (
    GraphBuilder,
    RoomGraph,
    ROOM_COUNT,
    MIN_CONNECTIONS,
    MAX_CONNECTIONS,
    graph_problems,
    is_connected,
    shortest_path,
)
from .rooms import RoomAssigner, ROOM_NAME_POOL, generate_room_set

# Schemas
from .schemas import RoomRecord, RoomSet, RoomType

# Collaborators
from .persistence import (
    RoomRepository,
    InMemoryRoomRepository,
    TextFileRoomRepository,
    format_room_file,
    parse_room_file,
)
from .clock import ClockService, SystemClock, FileHandoffClock, format_timestamp
from .terminal import TerminalPort, ConsoleTerminal, ScriptedTerminal

# Play
from .navigation import GameResult, GameSession, NavigationEngine, NavigationState

# Errors
from .errors import (
    RoomQuestError,
    GraphGenerationError,
    RoomRepositoryError,
    RoomLoadError,
    DataConsistencyError,
    ClockError,
)

__all__ = [
    # Generation
    "GraphBuilder",
    "RoomGraph",
    "ROOM_COUNT",
    "MIN_CONNECTIONS",
    "MAX_CONNECTIONS",
    "graph_problems",
    "is_connected",
    "shortest_path",
    "RoomAssigner",
    "ROOM_NAME_POOL",
    "generate_room_set",
    # Schemas
    "RoomRecord",
    "RoomSet",
    "RoomType",
    # Collaborators
    "RoomRepository",
    "InMemoryRoomRepository",
    "TextFileRoomRepository",
    "format_room_file",
    "parse_room_file",
    "ClockService",
    "SystemClock",
    "FileHandoffClock",
    "format_timestamp",
    "TerminalPort",
    "ConsoleTerminal",
    "ScriptedTerminal",
    # Play
    "GameResult",
    "GameSession",
    "NavigationEngine",
    "NavigationState",
    # Errors
    "RoomQuestError",
    "GraphGenerationError",
    "RoomRepositoryError",
    "RoomLoadError",
    "DataConsistencyError",
    "ClockError",
]
