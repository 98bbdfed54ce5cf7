"""
Room Registry

Maps room codes to rooms and connections to the room they sit in. One
instance is created by the application factory and handed to the socket
handlers.
"""

import random
import threading
from typing import Callable, Dict, List, Optional

from ..config.game_settings import MAX_ROWS, ROOM_CODE_ALPHABET, pick_secret_word, resolve_language
from ..models.errors import CapacityError, InvalidStateError, NotFoundError
from ..models.events import Intent, Notification
from ..models.game import GameMode
from ..utils.game_logger import game_logger
from .duel_room import DuelRoom
from .room import Room
from .shared_room import DEFAULT_TURN_DURATION, SharedTurnRoom

MAX_CODE_ATTEMPTS = 100


class RoomRegistry:
    """
    In-memory room manager.

    The registry lock only guards the two maps; everything inside a room is
    serialized by that room's own lock.
    """

    def __init__(self, emit: Callable[[Notification], None], scheduler=None,
                 word_picker: Callable[[str], str] = pick_secret_word,
                 code_length: int = 4, default_language: str = "en",
                 max_rows: int = MAX_ROWS, duel_max_rows: Optional[int] = None,
                 turn_duration: int = DEFAULT_TURN_DURATION, hint_max_length: int = 100):
        self.emit = emit
        self.scheduler = scheduler
        self.word_picker = word_picker
        self.code_length = code_length
        self.default_language = default_language
        self.max_rows = max_rows
        self.duel_max_rows = duel_max_rows
        self.turn_duration = turn_duration
        self.hint_max_length = hint_max_length

        self.rooms: Dict[str, Room] = {}
        self.player_rooms: Dict[str, str] = {}  # player_id -> room code
        self._lock = threading.RLock()

    # ---- Lookup ----

    def get_room(self, code) -> Optional[Room]:
        if not isinstance(code, str):
            return None
        return self.rooms.get(code.strip().upper())

    def room_for_player(self, player_id: str) -> Optional[Room]:
        code = self.player_rooms.get(player_id)
        return self.rooms.get(code) if code else None

    # ---- Lifecycle ----

    def create_room(self, mode, player_id: str, language: str = None) -> str:
        """
        Creates a room with the creator seated as host.

        Args:
            mode: GameMode (or its value) selecting the room variant
            player_id: Connection id of the creator
            language: Word-list language; unknown values use the default

        Returns:
            str: The new room code
        """
        mode = GameMode(mode)
        # A connection sits in at most one room
        self.leave(player_id)

        with self._lock:
            code = self._generate_code()
            language = resolve_language(language, self.default_language)
            room = self._build_room(mode, code, player_id, language)
            self.rooms[code] = room
            self.player_rooms[player_id] = code

        game_logger.log_game_event(code, 'room_created', player_id,
                                   mode=mode.value, language=language)
        return code

    def join_room(self, code, player_id: str, mode=None) -> Room:
        """
        Seats a player as guest.

        Raises:
            NotFoundError: Unknown code, or a room of another mode
            RoomFullError: Both seats are taken
            InvalidStateError: The room is past its joinable phase
        """
        room = self.get_room(code)
        if room is None or (mode is not None and room.mode != GameMode(mode)):
            raise NotFoundError(f"Room {code} not found")

        current = self.room_for_player(player_id)
        if current is room:
            raise InvalidStateError("You are already in this room")

        # Seat first; a rejected join leaves the current room untouched
        room.add_guest(player_id)
        if current is not None:
            self._close(current, player_id)
        with self._lock:
            self.player_rooms[player_id] = room.code
        return room

    def remove_room(self, code: str) -> bool:
        """Deletes a room and its player index entries. Idempotent."""
        with self._lock:
            room = self.rooms.pop(code, None)
            if room is None:
                return False
            for player in room.players:
                if self.player_rooms.get(player.id) == code:
                    del self.player_rooms[player.id]

        game_logger.log_game_event(code, 'room_removed', 'system')
        return True

    def leave(self, player_id: str) -> bool:
        """Abandon and remove the player's room, if any."""
        room = self.room_for_player(player_id)
        if room is None:
            return False
        self._close(room, player_id)
        return True

    def disconnect(self, player_id: str) -> bool:
        """A lost connection ends the room for the remaining player."""
        return self.leave(player_id)

    # ---- Intents ----

    def dispatch(self, intent: Intent):
        """Route an intent to the sender's room."""
        room = self.room_for_player(intent.sender)
        if room is None:
            raise NotFoundError("You are not in a room")
        return room.dispatch(intent)

    def summary(self) -> Dict:
        rooms: List[Dict] = [room.summary() for room in list(self.rooms.values())]
        return {
            'success': True,
            'rooms': rooms,
            'active_rooms': len(rooms),
            'connected_players': len(self.player_rooms)
        }

    # ---- Internals ----

    def _close(self, room: Room, player_id: str) -> None:
        room.handle_disconnect(player_id)
        self.remove_room(room.code)

    def _build_room(self, mode: GameMode, code: str, player_id: str, language: str) -> Room:
        if mode == GameMode.SHARED:
            return SharedTurnRoom(
                code, player_id, self.emit,
                language=language,
                scheduler=self.scheduler,
                word_picker=self.word_picker,
                max_rows=self.max_rows,
                turn_duration=self.turn_duration
            )
        return DuelRoom(
            code, player_id, self.emit,
            language=language,
            scheduler=self.scheduler,
            max_rows=self.duel_max_rows,
            hint_max_length=self.hint_max_length
        )

    def _generate_code(self) -> str:
        if len(self.rooms) >= len(ROOM_CODE_ALPHABET) ** self.code_length:
            raise CapacityError()

        for _ in range(MAX_CODE_ATTEMPTS):
            code = ''.join(random.choices(ROOM_CODE_ALPHABET, k=self.code_length))
            if code not in self.rooms:
                return code

        raise CapacityError()
