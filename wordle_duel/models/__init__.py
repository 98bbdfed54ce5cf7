"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import Attempt, Feedback, GameMode, Player, RoomStatus
from .events import Intent, Notification
from .errors import (
    GameError, InvalidLengthError, InvalidWordError, NotYourTurnError,
    InvalidStateError, RoomFullError, NotFoundError, CapacityError
)

__all__ = [
    'Attempt', 'Feedback', 'GameMode', 'Player', 'RoomStatus',
    'Intent', 'Notification',
    'GameError', 'InvalidLengthError', 'InvalidWordError', 'NotYourTurnError',
    'InvalidStateError', 'RoomFullError', 'NotFoundError', 'CapacityError'
]
