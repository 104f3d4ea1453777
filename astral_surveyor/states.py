"""Game state management for Astral Surveyor."""

import enum


class GameState(enum.Enum):
    """Top-level game states."""

    TITLE = "title"
    UNIVERSE = "universe"
    SEED_INSPECTOR = "seed_inspector"
