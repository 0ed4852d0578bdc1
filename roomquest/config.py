"""
Roomquest Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    """Application configuration loaded from environment variables."""

    # Room set layout on disk. Generated directories are named
    # {ROOMS_DIR_PREFIX}{pid} inside ROOMS_BASE_DIR.
    ROOMS_DIR_PREFIX: str = os.getenv("ROOMS_DIR_PREFIX", "roomquest.rooms.")
    ROOMS_BASE_DIR: Path = Path(os.getenv("ROOMS_BASE_DIR", "."))
    ROOM_FILE_SUFFIX: str = "_room"

    # Timestamp artifact exchanged between the clock worker and the game loop
    TIME_FILE: Path = Path(os.getenv("TIME_FILE", "currentTime.txt"))

    # Generation
    GENERATION_MAX_DRAWS: int = int(os.getenv("GENERATION_MAX_DRAWS", "10000"))
    RANDOM_SEED: int | None = _optional_int(os.getenv("RANDOM_SEED"))

    # Logging
    VERBOSE: bool = os.getenv("ROOMQUEST_VERBOSE", "").lower() in {"1", "true", "yes"}

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if not cls.ROOMS_DIR_PREFIX:
            raise ValueError(
                "ROOMS_DIR_PREFIX must not be empty; the player locates room sets by this prefix"
            )

        if os.sep in cls.ROOMS_DIR_PREFIX:
            raise ValueError(
                "ROOMS_DIR_PREFIX must be a bare directory name prefix. "
                "Use ROOMS_BASE_DIR to choose where room sets are written."
            )

        if cls.GENERATION_MAX_DRAWS <= 0:
            raise ValueError("GENERATION_MAX_DRAWS must be a positive integer")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Roomquest Configuration:",
            f"  Rooms Base Dir: {cls.ROOMS_BASE_DIR}",
            f"  Rooms Dir Prefix: {cls.ROOMS_DIR_PREFIX}",
            f"  Time File: {cls.TIME_FILE}",
            f"  Max Generation Draws: {cls.GENERATION_MAX_DRAWS}",
            f"  Random Seed: {cls.RANDOM_SEED if cls.RANDOM_SEED is not None else 'system'}",
        ]
        return "\n".join(lines)
