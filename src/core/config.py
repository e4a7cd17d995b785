"""Settings for a chess session (who plays which side, AI seed, log level)"""

import logging
import os
from typing import Optional, Self

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PlayerType

ENV_PREFIX = "CHESS_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class GameSettings(BaseModel):
    white: PlayerType = PlayerType.HUMAN
    black: PlayerType = PlayerType.HUMAN
    ai_seed: Optional[int] = None
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise InvalidRequestError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> Self:
        """Read CHESS_WHITE, CHESS_BLACK, CHESS_AI_SEED and CHESS_LOG_LEVEL. Unset variables keep the defaults."""
        names = {
            "white": f"{ENV_PREFIX}WHITE",
            "black": f"{ENV_PREFIX}BLACK",
            "ai_seed": f"{ENV_PREFIX}AI_SEED",
            "log_level": f"{ENV_PREFIX}LOG_LEVEL",
        }
        values = {key: os.environ[env] for key, env in names.items() if env in os.environ}
        return cls(**values)


def configure_logging(settings: GameSettings) -> None:
    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)
