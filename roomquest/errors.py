"""Exception taxonomy for room generation, loading and play."""

from pathlib import Path
from typing import List, Optional


class RoomQuestError(Exception):
    """Base class for every failure the command line tools report and exit on."""


class GraphGenerationError(RoomQuestError):
    """Raised when random graph construction exhausts its draw budget."""

    def __init__(self, *, draws: int, degrees: List[int]) -> None:
        self.draws = draws
        self.degrees = degrees
        super().__init__(
            f"Room graph generation gave up after {draws} random draws "
            f"(node degrees: {degrees}). Raise GENERATION_MAX_DRAWS to allow more attempts."
        )


class RoomRepositoryError(RoomQuestError):
    """Raised when a room directory or room file cannot be created, opened or read."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class RoomLoadError(RoomRepositoryError):
    """Raised when a room set cannot be loaded in full."""


class DataConsistencyError(RoomQuestError):
    """Raised when loaded room data violates the room-set invariants.

    Collects every problem found so a malformed directory can be fixed in one pass.
    """

    def __init__(self, problems: List[str]) -> None:
        self.problems = list(problems)
        lines = ["Room data is inconsistent:"]
        lines.extend(f"  - {problem}" for problem in self.problems)
        super().__init__("\n".join(lines))


class ClockError(RoomQuestError):
    """Raised when the current time cannot be read or formatted."""
