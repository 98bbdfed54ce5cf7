"""
Wordle Duel Server - Main Entry Point

This is the main entry point for the game server.
It builds the Flask-SocketIO application and starts serving.
"""

import os
from wordle_duel import create_app
from wordle_duel.config import config
from wordle_duel.utils.game_logger import game_logger


def main():
    """Main function to create the application and start the server."""
    try:
        config_class = config[os.getenv('FLASK_ENV', 'default')]

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")
        print("✓ Room registry ready")

        game_logger.logger.info("Wordle Duel Server Starting")

        print(f"\nStarting Wordle Duel Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"Turn timer: {config_class.TURN_DURATION_SECONDS}s")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle Duel Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
