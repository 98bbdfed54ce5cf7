"""
Wordle Duel Server Application Package

Server-authoritative sessions for two-player word guessing: a shared-turn
mode on one common grid, and a duel mode where each player guesses the
other's secret word.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Tuple of (Flask application, SocketIO instance) with the room
        registry attached as ``app.room_registry``
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins=app.config.get('CORS_ORIGINS', '*'),
                        logger=False, engineio_logger=False)

    # Room registry owned by this app instance
    from .services.room_registry import RoomRegistry
    from .websocket.handlers import register_websocket_handlers, socketio_emitter

    registry = RoomRegistry(
        emit=socketio_emitter(socketio),
        scheduler=socketio if app.config.get('ENABLE_TURN_TIMER', True) else None,
        code_length=app.config.get('ROOM_CODE_LENGTH', 4),
        default_language=app.config.get('DEFAULT_LANGUAGE', 'en'),
        max_rows=app.config.get('MAX_ROWS', 6),
        duel_max_rows=app.config.get('DUEL_MAX_ROWS'),
        turn_duration=app.config.get('TURN_DURATION_SECONDS', 45),
        hint_max_length=app.config.get('HINT_MAX_LENGTH', 100)
    )

    # Register blueprints
    from .controllers.lobby_controller import lobby_bp
    app.register_blueprint(lobby_bp, url_prefix='/api')

    # Register WebSocket handlers
    register_websocket_handlers(socketio, registry)

    # Store shared instances for use in other modules
    app.socketio = socketio
    app.room_registry = registry

    return app, socketio
