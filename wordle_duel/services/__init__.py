"""
Services Package

Contains the game logic: feedback evaluation, rooms, timers, and the room
registry.
"""

from .feedback import compute_feedback, normalize_word
from .room_registry import RoomRegistry
from .shared_room import SharedTurnRoom
from .duel_room import DuelRoom
from .turn_timer import TurnTimer
from .rematch import RematchNegotiator

__all__ = [
    'compute_feedback', 'normalize_word',
    'RoomRegistry', 'SharedTurnRoom', 'DuelRoom',
    'TurnTimer', 'RematchNegotiator'
]
