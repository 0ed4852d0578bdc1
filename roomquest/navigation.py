"""
Navigation engine: the player's walk from the START room to the END room.

State machine:

    AWAITING_INPUT --"time"--------------> TIME_REQUESTED --> AWAITING_INPUT
    AWAITING_INPUT --connection name-----> MOVED ----------> AWAITING_INPUT
    AWAITING_INPUT --connection to END---> WON (terminal)
    AWAITING_INPUT --anything else-------> AWAITING_INPUT (not understood)

Each turn the engine prints the current room and its connections, prompts
``WHERE TO? >`` and reads one line. Input must match one of the current
room's connections exactly (case-sensitive). The room banner is skipped for
the turn that immediately follows a time request.

The engine owns one GameSession: the loaded rooms, the cursor, the step count
and the path (every room entered after the start room, in order).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .clock import ClockService, SystemClock
from .errors import DataConsistencyError
from .schemas import RoomRecord, RoomSet
from .terminal import TerminalPort

TIME_COMMAND = "time"
PROMPT = "WHERE TO? >"
NOT_UNDERSTOOD = "HUH? I DON’T UNDERSTAND THAT ROOM. TRY AGAIN."
WIN_MESSAGE = "YOU HAVE FOUND THE END ROOM. CONGRATULATIONS!"


class NavigationState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    MOVED = "moved"
    TIME_REQUESTED = "time_requested"
    WON = "won"


class GameResult(BaseModel):
    """Outcome of one play session."""

    won: bool
    steps: int = Field(..., ge=0)
    path: List[str] = Field(default_factory=list)
    final_room: str


@dataclass
class GameSession:
    """Mutable state of one walk through a room set."""

    rooms: RoomSet
    current: RoomRecord
    path: List[str] = field(default_factory=list)

    @classmethod
    def start(cls, rooms: RoomSet) -> "GameSession":
        return cls(rooms=rooms, current=rooms.start_room())

    @property
    def step_count(self) -> int:
        return len(self.path)

    def move_to(self, name: str) -> RoomRecord:
        """Advance the cursor to ``name`` and record the step."""
        target = self.rooms.get(name)
        if target is None:
            raise DataConsistencyError(
                [f"room '{self.current.name}' connects to '{name}', which was not loaded"]
            )
        self.current = target
        self.path.append(name)
        return target


def render_room(room: RoomRecord) -> str:
    """Room banner: location line plus comma-separated, period-terminated connections."""
    return (
        f"CURRENT LOCATION: {room.name}\n"
        f"POSSIBLE CONNECTIONS: {', '.join(room.connections)}.\n"
    )


def render_victory(steps: int, path: List[str]) -> str:
    lines = [WIN_MESSAGE, f"YOU TOOK {steps} STEPS. YOUR PATH TO VICTORY WAS:"]
    lines.extend(path)
    return "\n".join(lines) + "\n"


class NavigationEngine:
    """Runs the player loop over a loaded room set."""

    def __init__(
        self,
        rooms: RoomSet,
        terminal: TerminalPort,
        clock: Optional[ClockService] = None,
    ) -> None:
        self.session = GameSession.start(rooms.validate_consistency())
        self.terminal = terminal
        self.clock = clock or SystemClock()
        self.state = NavigationState.AWAITING_INPUT

    @property
    def current_room(self) -> RoomRecord:
        return self.session.current

    @property
    def step_count(self) -> int:
        return self.session.step_count

    @property
    def path(self) -> List[str]:
        return list(self.session.path)

    async def handle_input(self, text: str) -> NavigationState:
        """Apply one line of player input and return the transition taken.

        Raises:
            RuntimeError: If the session has already been won
            DataConsistencyError: If a connection names a room that was not loaded
            ClockError: If a time request fails
        """
        if self.state == NavigationState.WON:
            raise RuntimeError("The END room has already been reached")

        if text in self.current_room.connections:
            room = self.session.move_to(text)
            if room.is_end:
                self.terminal.write(render_victory(self.step_count, self.session.path))
                self.state = NavigationState.WON
            else:
                self.state = NavigationState.MOVED
        elif text == TIME_COMMAND:
            stamp = await self.clock.current_time()
            self.terminal.write(f"{stamp}\n\n")
            self.state = NavigationState.TIME_REQUESTED
        else:
            self.terminal.write(f"{NOT_UNDERSTOOD}\n\n")
            self.state = NavigationState.AWAITING_INPUT

        return self.state

    async def run(self) -> GameResult:
        """Loop until the END room is reached or input runs out."""
        while self.state != NavigationState.WON:
            if self.state != NavigationState.TIME_REQUESTED:
                self.terminal.write(render_room(self.current_room))

            line = await self.terminal.read_line(PROMPT)
            self.terminal.write("\n")
            if line is None:
                break

            await self.handle_input(line)

        return GameResult(
            won=self.state == NavigationState.WON,
            steps=self.step_count,
            path=self.path,
            final_room=self.current_room.name,
        )
