"""
Room Base

State and protocol shared by both room variants: the two player seats,
serialized intent handling, outbound notifications, the rematch handshake
and disconnect handling.
"""

import threading
import time
from typing import Callable, Dict, List, Optional

from ..models.errors import InvalidStateError, NotFoundError, RoomFullError
from ..models.events import LEAVE, REQUEST_REMATCH, Intent, Notification
from ..models.game import GUEST, HOST, GameMode, Player, RoomStatus
from ..utils.game_logger import game_logger
from .rematch import RematchNegotiator


class Room:
    """
    One two-player match addressed by a room code.

    Every public operation holds ``lock`` until its notifications have been
    handed to ``emit``, so intents against a room are processed one at a
    time and in arrival order. The lock is re-entrant because the turn timer
    re-enters through ``timer_expire``.
    """

    mode: GameMode = None
    capacity = 2

    # Outbound event names, overridden per variant
    error_event = "gameError"
    player_joined_event = "playerJoined"
    rematch_requested_event = "rematchRequested"
    disconnected_event = "opponentDisconnected"

    def __init__(self, code: str, host_id: str, emit: Callable[[Notification], None],
                 language: str = "en", scheduler=None):
        self.code = code
        self.language = language
        self.emit = emit
        self.scheduler = scheduler
        self.status = RoomStatus.WAITING
        self.players: List[Player] = [Player(id=host_id, role=HOST)]
        self.rematch = RematchNegotiator(participants=self.capacity)
        self.lock = threading.RLock()
        self.created_at = time.time()

    # ---- Seats ----

    @property
    def host(self) -> Player:
        return self.players[0]

    @property
    def guest(self) -> Optional[Player]:
        return self.players[1] if len(self.players) > 1 else None

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.capacity

    @property
    def joinable(self) -> bool:
        return self.status == RoomStatus.WAITING and not self.is_full

    def has_player(self, player_id: str) -> bool:
        return any(p.id == player_id for p in self.players)

    def get_player(self, player_id: str) -> Player:
        for player in self.players:
            if player.id == player_id:
                return player
        raise NotFoundError("You are not in this room")

    def opponent_of(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id != player_id:
                return player
        return None

    def add_guest(self, player_id: str) -> Player:
        """Seat the second player; the variant decides what happens next."""
        with self.lock:
            if self.has_player(player_id):
                raise InvalidStateError("You are already in this room")
            if self.is_full:
                raise RoomFullError()
            if self.status != RoomStatus.WAITING:
                raise InvalidStateError("The game has already started")

            guest = Player(id=player_id, role=GUEST)
            self.players.append(guest)
            game_logger.log_game_event(self.code, 'player_joined', player_id,
                                       mode=self.mode.value, role=GUEST)
            self._on_guest_joined(guest)
            return guest

    # ---- Intent dispatch ----

    def _handlers(self) -> Dict[str, Callable[[Intent], object]]:
        return {
            REQUEST_REMATCH: lambda intent: self.request_rematch(intent.sender),
            LEAVE: lambda intent: self.handle_disconnect(intent.sender),
        }

    def dispatch(self, intent: Intent):
        """Route a tagged intent to this room's serialized handler."""
        handler = self._handlers().get(intent.kind)
        if handler is None:
            raise InvalidStateError("That action is not available in this game mode")
        with self.lock:
            return handler(intent)

    # ---- Rematch ----

    def request_rematch(self, player_id: str) -> bool:
        """
        Record one side of the rematch handshake.

        Returns:
            bool: True if this request completed the handshake and the room
            was restarted
        """
        with self.lock:
            self.get_player(player_id)
            if self.status != RoomStatus.FINISHED:
                raise InvalidStateError("The game is not over yet")
            if self.rematch.has_requested(player_id):
                raise InvalidStateError("You already asked for a rematch")

            if self.rematch.request(player_id):
                self.rematch.reset()
                game_logger.log_game_event(self.code, 'rematch_started', player_id,
                                           mode=self.mode.value)
                self._restart()
                return True

            opponent = self.opponent_of(player_id)
            if opponent is not None and opponent.connected:
                self.notify(opponent.id, self.rematch_requested_event,
                            "Your opponent wants a rematch!")
            game_logger.log_game_event(self.code, 'rematch_requested', player_id)
            return False

    # ---- Disconnect ----

    def handle_disconnect(self, player_id: str) -> bool:
        """
        Abandon the room after a player leaves or loses their connection.

        Returns:
            bool: True if the room was abandoned by this call
        """
        with self.lock:
            if not self.has_player(player_id) or self.status == RoomStatus.ABANDONED:
                return False

            self.get_player(player_id).connected = False
            previous_status = self.status
            self.status = RoomStatus.ABANDONED
            self._stop_timer()

            for player in self.players:
                if player.id != player_id and player.connected:
                    self.notify(player.id, self.disconnected_event,
                                "Your opponent has disconnected.")

            game_logger.log_game_event(self.code, 'room_abandoned', player_id,
                                       previous_status=previous_status.value)
            return True

    # ---- Notifications ----

    def notify(self, target: str, event: str, payload=None) -> None:
        self.emit(Notification(target=target, event=event, payload=payload))

    def broadcast(self, event: str, payload=None) -> None:
        for player in self.players:
            if player.connected:
                self.notify(player.id, event, payload)

    def summary(self) -> Dict:
        return {
            "code": self.code,
            "mode": self.mode.value,
            "status": self.status.value,
            "language": self.language,
            "players": len(self.players),
            "max_players": self.capacity,
            "joinable": self.joinable,
            "created_at": self.created_at
        }

    # ---- Variant hooks ----

    def _on_guest_joined(self, guest: Player) -> None:
        raise NotImplementedError

    def _restart(self) -> None:
        raise NotImplementedError

    def _stop_timer(self) -> None:
        pass
