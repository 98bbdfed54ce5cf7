"""
Event Data Models

Inbound intents and outbound notifications exchanged between the Socket.IO
gateway and the rooms.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


# Inbound intent kinds
SUBMIT_GUESS = "submit_guess"
PASS_TURN = "pass_turn"
SET_SECRET_WORD = "set_secret_word"
PLAYER_READY = "player_ready"
REQUEST_REMATCH = "request_rematch"
LEAVE = "leave"


@dataclass(frozen=True)
class Intent:
    """A client request, tagged with its kind and sender connection id."""
    kind: str
    sender: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Notification:
    """A push to a single connection.

    ``payload`` is whatever the client handler expects: a plain message
    string for status events, a dict for state snapshots, a tuple sent as
    separate positional arguments, or None.
    """
    target: str
    event: str
    payload: Optional[Any] = None
