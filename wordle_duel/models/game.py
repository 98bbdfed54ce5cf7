"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Feedback(Enum):
    """Per-letter evaluation of a guess against a secret word."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    NEUTRAL = "neutral"  # Outbound hard-mode mask only, never computed


class GameMode(Enum):
    """Room variants."""
    SHARED = "shared"
    DUEL = "duel"


class RoomStatus(Enum):
    """Room lifecycle states."""
    WAITING = "waiting"
    SETUP = "setup"  # Duel rooms only
    ACTIVE = "active"
    FINISHED = "finished"
    ABANDONED = "abandoned"


HOST = "host"
GUEST = "guest"


@dataclass(frozen=True)
class Attempt:
    """One submitted guess and its computed feedback."""
    word: str
    feedback: Tuple[Feedback, ...]

    @property
    def is_win(self) -> bool:
        return all(status == Feedback.CORRECT for status in self.feedback)

    def to_dict(self) -> Dict:
        return {
            "word": self.word,
            "feedback": [status.value for status in self.feedback]
        }


@dataclass
class Player:
    """One of the two seats in a room, keyed by connection id."""
    id: str
    role: str
    connected: bool = True
    # Duel mode fields
    secret_word: Optional[str] = None
    hint: str = ""
    ready: bool = False
    grid: Tuple[Attempt, ...] = ()

    @property
    def is_host(self) -> bool:
        return self.role == HOST

    def reset_round(self) -> None:
        """Clear everything a rematch must collect again."""
        self.secret_word = None
        self.hint = ""
        self.ready = False
        self.grid = ()
