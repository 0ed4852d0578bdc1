"""Terminal ports: where the game writes text and reads player input."""

from __future__ import annotations

import asyncio
import sys
from abc import ABC, abstractmethod
from collections import deque
from typing import Iterable, List, Optional, TextIO


def strip_line_ending(line: str) -> str:
    """Drop a single trailing newline; all other characters are significant."""
    return line[:-1] if line.endswith("\n") else line


class TerminalPort(ABC):
    """Plain-text input/output used by the navigation engine."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write text verbatim (callers supply their own newlines)."""
        pass

    @abstractmethod
    async def read_line(self, prompt: str) -> Optional[str]:
        """Show ``prompt`` and return one line without its newline, or None at end of input."""
        pass


class ConsoleTerminal(TerminalPort):
    """Reads from stdin and writes to stdout (or the given streams)."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    async def read_line(self, prompt: str) -> Optional[str]:
        self.write(prompt)
        # readline blocks, so keep it off the event loop
        line = await asyncio.to_thread(self.stdin.readline)
        if line == "":
            return None
        return strip_line_ending(line)


class ScriptedTerminal(TerminalPort):
    """Replays a fixed list of inputs and records everything written.

    Useful for tests and for replaying a recorded session.
    """

    def __init__(self, inputs: Iterable[str]) -> None:
        self._inputs = deque(inputs)
        self._output: List[str] = []
        self.prompts: List[str] = []

    @property
    def transcript(self) -> str:
        return "".join(self._output)

    def write(self, text: str) -> None:
        self._output.append(text)

    async def read_line(self, prompt: str) -> Optional[str]:
        self.write(prompt)
        self.prompts.append(prompt)
        if not self._inputs:
            return None
        return strip_line_ending(self._inputs.popleft())
