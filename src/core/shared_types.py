"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"


class PlayerType(StrEnum):
    """Who makes the moves for one side of the board."""

    HUMAN = "human"
    DUMB = "dumb"
    SMART = "smart"
