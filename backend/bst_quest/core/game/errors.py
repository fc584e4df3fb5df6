class GameError(Exception):
    """Base class for rejected game actions."""


class GameStateError(GameError):
    """Action is not valid in the current mode."""


class GameBusyError(GameError):
    """Another action (a marker walk) is still running."""
