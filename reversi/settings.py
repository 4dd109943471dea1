"""Game settings and their normalization."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from reversi.game import BLACK, DEFAULT_BOARD_SIZE, PLAYERS

SUPPORTED_BOARD_SIZES = (8, 10)


def is_supported_board_size(size: object) -> bool:
    return isinstance(size, int) and not isinstance(size, bool) and size in SUPPORTED_BOARD_SIZES


class Settings(BaseModel):
    """Validated settings. An invalid field is replaced by that field's default."""

    model_config = ConfigDict(frozen=True)

    first_player: str = BLACK
    highlight_legal_moves: bool = True
    board_size: int = DEFAULT_BOARD_SIZE

    @field_validator("first_player", mode="before")
    @classmethod
    def _known_player_or_default(cls, value: Any) -> str:
        return value if value in PLAYERS else BLACK

    @field_validator("highlight_legal_moves", mode="before")
    @classmethod
    def _bool_or_default(cls, value: Any) -> bool:
        return value if isinstance(value, bool) else True

    @field_validator("board_size", mode="before")
    @classmethod
    def _supported_size_or_default(cls, value: Any) -> int:
        return value if is_supported_board_size(value) else DEFAULT_BOARD_SIZE


DEFAULT_SETTINGS = Settings()


def normalize_settings(settings: Settings | Mapping[str, Any] | None) -> Settings:
    if isinstance(settings, Settings):
        return settings
    if not isinstance(settings, Mapping):
        return DEFAULT_SETTINGS
    return Settings.model_validate(dict(settings))
