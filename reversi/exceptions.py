"""Errors raised for contract violations (caller bugs), not for rejected moves."""


class ReversiError(Exception):
    pass


class UnknownPlayerError(ReversiError, ValueError):
    """A player token other than "black" or "white" was supplied."""


class InvalidBoardError(ReversiError, ValueError):
    """A board size or board layout the engine cannot work with."""
