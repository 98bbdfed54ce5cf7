"""
Game Errors

Recoverable, per-intent failures. Each carries the message reported back to
the player who sent the intent.
"""


class GameError(Exception):
    """Base class for errors reported to the originating player only."""

    default_message = "Invalid request"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidLengthError(GameError):
    default_message = "The word must be exactly 5 letters"


class InvalidWordError(GameError):
    default_message = "The word must contain only letters"


class NotYourTurnError(GameError):
    default_message = "It's not your turn"


class InvalidStateError(GameError):
    default_message = "That action is not allowed right now"


class RoomFullError(GameError):
    default_message = "Room is full"


class NotFoundError(GameError):
    default_message = "Room not found"


class CapacityError(GameError):
    default_message = "No room codes available, try again later"
