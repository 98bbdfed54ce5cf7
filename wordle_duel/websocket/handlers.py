"""
WebSocket Event Handlers

Session gateway: turns inbound Socket.IO events into intents for the
sender's room, and room notifications into pushes to single connections.
"""

from flask import request
from flask_socketio import emit

from ..models.events import (
    LEAVE, PASS_TURN, PLAYER_READY, REQUEST_REMATCH, SET_SECRET_WORD, SUBMIT_GUESS,
    Intent, Notification
)
from ..models.game import GameMode
from ..utils.decorators import logs_user_action, reports_game_errors
from ..utils.game_logger import game_logger


def socketio_emitter(socketio):
    """Build the emit callable rooms push their notifications through."""
    def push(notification: Notification):
        if notification.payload is None:
            socketio.emit(notification.event, to=notification.target)
        elif isinstance(notification.payload, tuple):
            socketio.emit(notification.event, *notification.payload, to=notification.target)
        else:
            socketio.emit(notification.event, notification.payload, to=notification.target)
    return push


def register_websocket_handlers(socketio, registry):
    """Register all WebSocket event handlers against one room registry."""

    def dispatch(kind, payload=None):
        return registry.dispatch(Intent(kind=kind, sender=request.sid, payload=payload or {}))

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.log_user_action(request, 'connect')

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Abandon the sender's room, if any."""
        room = registry.room_for_player(request.sid)
        if room is not None:
            game_logger.log_user_action(request, 'disconnect', room.code)
            registry.disconnect(request.sid)

    # ---- Shared-turn lobby ----

    @socketio.on('createRoom')
    @logs_user_action('create_room')
    @reports_game_errors('create_room', error_event='lobbyError')
    def handle_create_room(language=None):
        """Create a shared-turn room."""
        code = registry.create_room(GameMode.SHARED, request.sid, language)
        emit('roomCreated', code)
        emit('lobbyMessage', f'Room {code} created. Waiting for your opponent...')

    @socketio.on('joinRoom')
    @logs_user_action('join_room')
    @reports_game_errors('join_room', error_event='lobbyError')
    def handle_join_room(code=None):
        """Join a shared-turn room by code."""
        registry.join_room(code, request.sid, mode=GameMode.SHARED)

    # ---- Duel lobby ----

    @socketio.on('createDuelloRoom')
    @logs_user_action('create_duel_room')
    @reports_game_errors('create_duel_room', error_event='duelloError')
    def handle_create_duel_room(language=None):
        """Create a duel room."""
        code = registry.create_room(GameMode.DUEL, request.sid, language)
        emit('duelloRoomCreated', code)

    @socketio.on('joinDuelloRoom')
    @logs_user_action('join_duel_room')
    @reports_game_errors('join_duel_room', error_event='duelloError')
    def handle_join_duel_room(code=None):
        """Join a duel room by code."""
        registry.join_room(code, request.sid, mode=GameMode.DUEL)

    @socketio.on('setSecretWord')
    @logs_user_action('set_secret_word')
    @reports_game_errors('set_secret_word')
    def handle_set_secret_word(data=None):
        """Duel setup: secret word, hint, and the host's hints choice."""
        data = data if isinstance(data, dict) else {}
        dispatch(SET_SECRET_WORD, {
            'word': data.get('word'),
            'hint': data.get('hint', ''),
            'hintsEnabled': data.get('hintsEnabled')
        })

    @socketio.on('playerReady')
    @logs_user_action('player_ready')
    @reports_game_errors('player_ready')
    def handle_player_ready(data=None):
        """Duel setup: lock in the secret word."""
        dispatch(PLAYER_READY)

    # ---- In game ----

    @socketio.on('submitWord')
    @socketio.on('submitGuess')
    @socketio.on('submitDuelloGuess')
    @logs_user_action('submit_guess')
    @reports_game_errors('submit_guess')
    def handle_submit_guess(word=None):
        """Submit a guess in either mode."""
        if isinstance(word, dict):
            word = word.get('word') or word.get('guess')
        dispatch(SUBMIT_GUESS, {'word': word})

    @socketio.on('passTurn')
    @logs_user_action('pass_turn')
    @reports_game_errors('pass_turn')
    def handle_pass_turn(data=None):
        """Shared-turn: give the turn to the opponent."""
        dispatch(PASS_TURN)

    @socketio.on('requestRematch')
    @socketio.on('duelloRematch')
    @logs_user_action('request_rematch')
    @reports_game_errors('request_rematch')
    def handle_request_rematch(data=None):
        """One side of the rematch handshake."""
        dispatch(REQUEST_REMATCH)

    @socketio.on('leaveRoom')
    @logs_user_action('leave_room')
    @reports_game_errors('leave_room')
    def handle_leave_room(data=None):
        """Explicit leave; ends the room for the opponent."""
        room = registry.room_for_player(request.sid)
        if room is None:
            return
        dispatch(LEAVE)
        registry.remove_room(room.code)
