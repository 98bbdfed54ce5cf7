"""
Duel Room

Each player chooses a secret word (and an optional hint) for the other to
guess. Both guess at any time against independent grids; the first to hit
the opponent's word wins.
"""

from typing import Callable, Dict, Optional

from ..models.errors import InvalidStateError
from ..models.events import PLAYER_READY, SET_SECRET_WORD, SUBMIT_GUESS, Intent
from ..models.game import Attempt, GameMode, Player, RoomStatus
from ..utils.game_logger import game_logger
from .feedback import (
    compute_feedback, mask_feedback, normalize_word, progress_rows, serialize_grid
)
from .room import Room

SETUP_STATES = (RoomStatus.WAITING, RoomStatus.SETUP)


class DuelRoom(Room):
    """
    States: waiting -> setup -> active -> finished (or abandoned).

    With hints disabled (hard mode) the guesser only sees feedback for a
    winning row; every other row goes out neutral. Win detection always uses
    the true feedback.
    """

    mode = GameMode.DUEL
    error_event = "duelloError"
    player_joined_event = "duelloPlayerJoined"
    rematch_requested_event = "duelloRematchRequested"

    def __init__(self, code: str, host_id: str, emit, language: str = "en",
                 scheduler=None, max_rows: Optional[int] = None, hint_max_length: int = 100):
        super().__init__(code, host_id, emit, language=language, scheduler=scheduler)
        self.max_rows = max_rows
        self.hint_max_length = hint_max_length
        self.hints_enabled = True
        self.winner: Optional[str] = None

    def _handlers(self) -> Dict[str, Callable[[Intent], object]]:
        handlers = super()._handlers()
        handlers.update({
            SET_SECRET_WORD: lambda intent: self.set_secret_word(
                intent.sender,
                intent.payload.get("word"),
                intent.payload.get("hint", ""),
                intent.payload.get("hintsEnabled")
            ),
            PLAYER_READY: lambda intent: self.player_ready(intent.sender),
            SUBMIT_GUESS: lambda intent: self.submit_guess(intent.sender, intent.payload.get("word")),
        })
        return handlers

    # ---- Setup ----

    def _on_guest_joined(self, guest: Player) -> None:
        self.status = RoomStatus.SETUP
        self.notify(self.host.id, self.player_joined_event,
                    {"message": "An opponent joined! Choose your secret word."})
        self.notify(guest.id, "duelloRoomJoined", self.code)

    def set_secret_word(self, player_id: str, word, hint: str = "",
                        hints_enabled: Optional[bool] = None) -> None:
        """
        Store a player's secret word and hint; the host also decides whether
        feedback is shown (hints_enabled).

        Raises:
            InvalidStateError: Outside setup, or after the player is ready
            InvalidLengthError, InvalidWordError: If the word is malformed
        """
        with self.lock:
            player = self.get_player(player_id)
            if self.status not in SETUP_STATES:
                raise InvalidStateError("Secret words can only be chosen before the duel starts")
            if player.ready:
                raise InvalidStateError("Your secret word is already locked in")

            player.secret_word = normalize_word(word)
            player.hint = hint.strip()[:self.hint_max_length] if isinstance(hint, str) else ""
            if player.is_host and isinstance(hints_enabled, bool):
                self.hints_enabled = hints_enabled

            game_logger.log_game_event(self.code, 'secret_word_set', player_id,
                                       has_hint=bool(player.hint),
                                       hints_enabled=self.hints_enabled)
            self.notify(player_id, "secretWordSet", "Secret word saved!")

    def player_ready(self, player_id: str) -> bool:
        """
        Lock in a player's secret word.

        Returns:
            bool: True if this made both players ready and started the duel
        """
        with self.lock:
            player = self.get_player(player_id)
            if self.status not in SETUP_STATES:
                raise InvalidStateError("The duel has already started")
            if player.secret_word is None:
                raise InvalidStateError("Choose your secret word first")

            player.ready = True
            if self.is_full and all(p.ready for p in self.players):
                self._start_duel()
                return True

            self.notify(player_id, "waitingForOpponent", "Waiting for your opponent...")
            return False

    def _start_duel(self) -> None:
        self.status = RoomStatus.ACTIVE
        self.winner = None
        game_logger.log_game_event(self.code, 'duel_started', self.host.id,
                                   hints_enabled=self.hints_enabled)
        for player in self.players:
            opponent = self.opponent_of(player.id)
            self.notify(player.id, "duelloGameStart", {
                "opponentHint": opponent.hint,
                "hintsEnabled": self.hints_enabled
            })

    # ---- Guessing ----

    def submit_guess(self, player_id: str, word) -> Attempt:
        """
        Guess the opponent's secret word.

        Returns:
            Attempt: The unmasked attempt appended to the player's own grid
        """
        with self.lock:
            player = self.get_player(player_id)
            if self.status != RoomStatus.ACTIVE:
                raise InvalidStateError("The duel is not in progress")
            if self.max_rows is not None and len(player.grid) >= self.max_rows:
                raise InvalidStateError("You have no guesses left")

            guess = normalize_word(word)
            opponent = self.opponent_of(player_id)
            attempt = Attempt(word=guess, feedback=compute_feedback(opponent.secret_word, guess))
            player.grid = player.grid + (attempt,)

            game_logger.log_game_event(self.code, 'guess_submitted', player_id,
                                       guess=guess, row=len(player.grid))

            masked = not self.hints_enabled
            feedback = mask_feedback(attempt.feedback) if masked else attempt.feedback
            self.notify(player_id, "duelloGuessResult", {
                "word": guess,
                "ownGrid": serialize_grid(player.grid, masked=masked),
                "feedback": [f.value for f in feedback]
            })
            if opponent.connected:
                self.notify(opponent.id, "opponentGuessUpdate", {
                    "opponentGrid": progress_rows(player.grid)
                })

            if attempt.is_win:
                self._finish(winner_id=player_id)
            elif self._out_of_guesses():
                self._finish(winner_id=None)
            return attempt

    def _out_of_guesses(self) -> bool:
        if self.max_rows is None:
            return False
        return all(len(p.grid) >= self.max_rows for p in self.players)

    def _finish(self, winner_id: Optional[str]) -> None:
        self.status = RoomStatus.FINISHED
        self.winner = winner_id
        self.rematch.reset()

        game_logger.log_game_event(self.code, 'game_won' if winner_id else 'game_draw',
                                   winner_id or 'none')

        for player in self.players:
            opponent = self.opponent_of(player.id)
            won = player.id == winner_id
            if won:
                message = "You guessed the word!"
                revealed = opponent.secret_word
            elif winner_id is None:
                message = "Nobody guessed the word."
                revealed = opponent.secret_word
            else:
                message = "Your opponent guessed your word!"
                revealed = player.secret_word
            self.notify(player.id, "duelloGameOver", {
                "won": won,
                "winner": winner_id,
                "message": message,
                "secretWord": revealed,
                "ownSecretWord": player.secret_word,
                "opponentSecretWord": opponent.secret_word
            })

    # ---- Rematch ----

    def _restart(self) -> None:
        for player in self.players:
            player.reset_round()
        self.hints_enabled = True
        self.winner = None
        self.status = RoomStatus.SETUP
        self.broadcast("duelloRematchStart", "Rematch! Choose a new secret word.")
