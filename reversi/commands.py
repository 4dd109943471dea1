"""Command message routing onto a GameController."""

from __future__ import annotations

import logging

from reversi.exceptions import ReversiError
from reversi.models import (
    BoardSizesMsg,
    CommandResultMsg,
    ErrorMsg,
    GetStateMsg,
    PlayMoveMsg,
    ResetMsg,
    SetBoardSizeMsg,
    SetFirstPlayerMsg,
    StateSyncMsg,
    ToggleHighlightMsg,
    UndoMsg,
    parse_client_message,
)
from reversi.state import GameController

logger = logging.getLogger(__name__)


def handle_message(controller: GameController, data: object) -> dict:
    """Apply one raw command message and return the reply as a plain dict."""
    msg = parse_client_message(data) if isinstance(data, dict) else None
    if msg is None:
        return ErrorMsg(message="Unknown or invalid message").model_dump()

    try:
        if isinstance(msg, PlayMoveMsg):
            accepted = controller.play(msg.row, msg.col)
            return CommandResultMsg(command=msg.type, accepted=accepted).model_dump()

        elif isinstance(msg, UndoMsg):
            accepted = controller.undo()
            return CommandResultMsg(command=msg.type, accepted=accepted).model_dump()

        elif isinstance(msg, ToggleHighlightMsg):
            value = controller.toggle_highlight()
            return CommandResultMsg(command=msg.type, accepted=True, value=value).model_dump()

        elif isinstance(msg, SetFirstPlayerMsg):
            accepted = controller.set_first_player(msg.player)
            return CommandResultMsg(command=msg.type, accepted=accepted).model_dump()

        elif isinstance(msg, SetBoardSizeMsg):
            accepted = controller.set_board_size(msg.size)
            return CommandResultMsg(command=msg.type, accepted=accepted).model_dump()

        elif isinstance(msg, ResetMsg):
            controller.reset(msg.settings)
            return CommandResultMsg(command=msg.type, accepted=True).model_dump()

        elif isinstance(msg, GetStateMsg):
            return StateSyncMsg(state=controller.get_state()).model_dump()

        # Only GetBoardSizesMsg remains
        return BoardSizesMsg(sizes=controller.supported_board_sizes()).model_dump()
    except ReversiError as exc:
        logger.warning("Rejected %s command: %s", msg.type, exc)
        return ErrorMsg(message=str(exc)).model_dump()
