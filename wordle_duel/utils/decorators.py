"""
Gateway Decorators

Contains decorators shared by the WebSocket event handlers.
"""

from functools import wraps
from flask import request, current_app
from flask_socketio import emit

from ..models.errors import GameError
from .game_logger import game_logger


def reports_game_errors(action, error_event=None):
    """
    Decorator reporting recoverable game errors back to the sender only.

    The error event defaults to the one used by the sender's room variant
    ('gameError' or 'duelloError'), or 'lobbyError' outside a room.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except GameError as e:
                room = current_app.room_registry.room_for_player(request.sid)
                event = error_event or (room.error_event if room else 'lobbyError')
                game_logger.log_error(request, e, action, room.code if room else None)
                emit(event, e.message)
        return decorated_function
    return decorator


def logs_user_action(action):
    """Decorator logging the inbound intent before the handler runs."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            room = current_app.room_registry.room_for_player(request.sid)
            game_logger.log_user_action(request, action, room.code if room else None)
            return f(*args, **kwargs)
        return decorated_function
    return decorator
