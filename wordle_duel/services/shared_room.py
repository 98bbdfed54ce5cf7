"""
Shared-Turn Room

One server-chosen secret word and one shared grid; the two players take
turns, and a turn timer passes the turn for a player who runs out of time.
"""

from typing import Callable, Dict, Optional, Tuple

from ..config.game_settings import MAX_ROWS, pick_secret_word
from ..models.errors import InvalidStateError, NotYourTurnError
from ..models.events import PASS_TURN, SUBMIT_GUESS, Intent
from ..models.game import Attempt, GameMode, Player, RoomStatus
from ..utils.game_logger import game_logger
from .feedback import compute_feedback, normalize_word, serialize_grid
from .room import Room
from .turn_timer import TurnTimer

DEFAULT_TURN_DURATION = 45


class SharedTurnRoom(Room):
    """
    States: waiting -> active -> finished (or abandoned).

    The host always opens a round. Turns alternate after every valid guess,
    explicit pass, or timer expiry.
    """

    mode = GameMode.SHARED
    error_event = "gameError"
    player_joined_event = "playerJoined"
    rematch_requested_event = "rematchRequested"

    def __init__(self, code: str, host_id: str, emit, language: str = "en",
                 scheduler=None, word_picker: Callable[[str], str] = pick_secret_word,
                 max_rows: int = MAX_ROWS, turn_duration: int = DEFAULT_TURN_DURATION):
        super().__init__(code, host_id, emit, language=language, scheduler=scheduler)
        self.word_picker = word_picker
        self.max_rows = max_rows
        self.secret_word: Optional[str] = None
        self.grid: Tuple[Attempt, ...] = ()
        self.current_turn: Optional[str] = None
        self.winner: Optional[str] = None
        self.timer = TurnTimer(turn_duration, self.timer_expire, scheduler)

    def _handlers(self) -> Dict[str, Callable[[Intent], object]]:
        handlers = super()._handlers()
        handlers.update({
            SUBMIT_GUESS: lambda intent: self.submit_guess(intent.sender, intent.payload.get("word")),
            PASS_TURN: lambda intent: self.pass_turn(intent.sender),
        })
        return handlers

    # ---- Lifecycle ----

    def _on_guest_joined(self, guest: Player) -> None:
        self.notify(self.host.id, self.player_joined_event,
                    {"message": "An opponent joined the room!"})
        self.notify(guest.id, "roomJoined", self.code)
        self.broadcast("startGame", (self.code, [p.id for p in self.players]))
        self._start_round()

    def _start_round(self) -> None:
        self.secret_word = self.word_picker(self.language)
        self.grid = ()
        self.winner = None
        self.current_turn = self.host.id
        self.status = RoomStatus.ACTIVE
        game_logger.log_game_event(self.code, 'round_started', self.host.id,
                                   mode=self.mode.value, language=self.language)
        self.timer.start()
        self._broadcast_state()
        self._broadcast_turn()

    def _restart(self) -> None:
        self.broadcast("rematchStart", "Rematch accepted! The game starts.")
        self._start_round()

    def _stop_timer(self) -> None:
        self.timer.cancel()

    # ---- Intents ----

    def submit_guess(self, player_id: str, word) -> Attempt:
        """
        Processes a guess from the player whose turn it is.

        Returns:
            Attempt: The attempt appended to the shared grid

        Raises:
            InvalidStateError: If the game is not active
            NotYourTurnError: If it is the other player's turn
            InvalidLengthError, InvalidWordError: If the word is malformed
        """
        with self.lock:
            self._require_turn(player_id)
            guess = normalize_word(word)

            attempt = Attempt(word=guess, feedback=compute_feedback(self.secret_word, guess))
            self.grid = self.grid + (attempt,)
            self.timer.cancel()

            game_logger.log_game_event(self.code, 'guess_submitted', player_id,
                                       guess=guess, row=len(self.grid))

            if attempt.is_win:
                self._finish(winner_id=player_id)
            elif len(self.grid) >= self.max_rows:
                self._finish(winner_id=None)
            else:
                self.current_turn = self.opponent_of(player_id).id
                self.timer.start()
                self._broadcast_state()
                self._broadcast_turn()
            return attempt

    def pass_turn(self, player_id: str) -> None:
        """Explicit pass by the player whose turn it is."""
        with self.lock:
            self._require_turn(player_id)
            self._skip_turn("pass")

    def timer_expire(self, generation: Optional[int] = None) -> bool:
        """
        Implicit pass when the countdown reaches zero.

        A countdown made stale by a guess or pass that reached the lock first
        is ignored.

        Returns:
            bool: True if the turn was skipped
        """
        with self.lock:
            if self.status != RoomStatus.ACTIVE:
                return False
            if generation is not None and not self.timer.is_current(generation):
                return False
            self._skip_turn("timeout")
            return True

    # ---- Internals ----

    def _require_turn(self, player_id: str) -> None:
        self.get_player(player_id)
        if self.status != RoomStatus.ACTIVE:
            raise InvalidStateError("The game is not in progress")
        if player_id != self.current_turn:
            raise NotYourTurnError()

    def _skip_turn(self, reason: str) -> None:
        skipped = self.current_turn
        self.current_turn = self.opponent_of(skipped).id
        message = "Time's up! Passing turn..." if reason == "timeout" else "Turn passed."
        game_logger.log_game_event(self.code, 'turn_skipped', skipped, reason=reason)
        self.broadcast("turnSkipped", {"playerId": skipped, "reason": reason, "message": message})
        self.timer.start()
        self._broadcast_turn()

    def _finish(self, winner_id: Optional[str]) -> None:
        self.status = RoomStatus.FINISHED
        self.winner = winner_id
        self.current_turn = None
        self.timer.cancel()
        self.rematch.reset()

        event = 'game_won' if winner_id else 'game_lost'
        game_logger.log_game_event(self.code, event, winner_id or 'none',
                                   secret_word=self.secret_word, rows=len(self.grid))

        self._broadcast_state()
        self.broadcast("gameOver", {"winner": winner_id, "secretWord": self.secret_word})

    def _broadcast_state(self) -> None:
        self.broadcast("updateGameState", self.game_state())

    def _broadcast_turn(self) -> None:
        for player in self.players:
            if not player.connected:
                continue
            is_turn = player.id == self.current_turn
            self.notify(player.id, "updateTurnStatus", {
                "isTurn": is_turn,
                "message": "It's your turn!" if is_turn else "Opponent's turn...",
                "timeLeft": self.timer.remaining
            })

    def game_state(self) -> Dict:
        return {
            "grid": serialize_grid(self.grid),
            "currentRow": len(self.grid),
            "maxRows": self.max_rows
        }
