"""Configuration from the environment and controller construction."""

import logging
import os

from dotenv import load_dotenv

from reversi.settings import Settings, normalize_settings
from reversi.state import GameController

load_dotenv()

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def setup_logging(level: str | int | None = None) -> None:
    """Configure root logging once. Level defaults to REVERSI_LOG_LEVEL, then INFO."""
    root_logger = logging.getLogger()
    if getattr(root_logger, "_reversi_logging_configured", False):
        return

    if level is None:
        level = os.getenv("REVERSI_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root_logger._reversi_logging_configured = True  # type: ignore[attr-defined]


def settings_from_env() -> Settings:
    raw: dict[str, object] = {}

    first_player = os.getenv("REVERSI_FIRST_PLAYER")
    if first_player is not None:
        raw["first_player"] = first_player.strip().lower()

    board_size = os.getenv("REVERSI_BOARD_SIZE", "").strip()
    if board_size.isdigit():
        raw["board_size"] = int(board_size)

    highlight = os.getenv("REVERSI_HIGHLIGHT_LEGAL_MOVES", "").strip().lower()
    if highlight in _TRUE_VALUES:
        raw["highlight_legal_moves"] = True
    elif highlight in _FALSE_VALUES:
        raw["highlight_legal_moves"] = False

    return normalize_settings(raw)


def create_controller() -> GameController:
    setup_logging()
    return GameController(settings_from_env())
