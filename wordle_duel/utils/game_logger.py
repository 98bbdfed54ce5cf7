"""
Game Logger Module for the Wordle Duel Server

This module provides structured logging for client intents, server responses,
and room events.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config
from ..models.errors import GameError
from .helpers import get_connection_identity


class GameLogger:
    """
    Centralized logging system for the game server.

    Features:
    - Intent tracking per connection (Socket.IO sid or HTTP client)
    - Server response logging
    - Room event logging (joins, guesses, wins, rematches, abandonment)
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(exist_ok=True)
        self.level = getattr(logging, str(level).upper(), logging.INFO)

        # Setup main game logger
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('wordle_duel')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        # File handler for detailed logs
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console handler for only important messages
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_info: Dict[str, Any],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                        request,
                        action: str,
                        room_code: Optional[str] = None,
                        **kwargs):
        """
        Log client intents and HTTP requests.

        Args:
            request: Flask request object (HTTP or Socket.IO context)
            action: Type of action (e.g., 'create_room', 'submit_guess')
            room_code: Room code if applicable
            **kwargs: Additional details to log
        """
        details = {
            'room_code': room_code,
            'endpoint': getattr(request, 'endpoint', None),
            **kwargs
        }

        log_message = self._create_log_entry(
            'USER_ACTION', action, get_connection_identity(request), details
        )
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Any,
                            room_code: Optional[str] = None,
                            **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            room_code: Room code if applicable
            **kwargs: Additional details to log
        """
        details = {
            'room_code': room_code,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(
            event_type, action, get_connection_identity(request), details
        )

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self,
                       room_code: Optional[str],
                       event: str,
                       player_id: str,
                       **kwargs):
        """
        Log room events (joins, guesses, wins, rematches, abandonment).

        Args:
            room_code: Room code
            event: Type of game event (e.g., 'game_won', 'turn_skipped')
            player_id: Connection id of the player involved, or 'system'
            **kwargs: Additional game details
        """
        user_info = {'sid': player_id, 'user_ip': None}

        details = {
            'room_code': room_code,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, user_info, details)
        self.logger.info(log_message)

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  room_code: Optional[str] = None):
        """
        Log errors with full context.

        Game errors are expected per-intent failures and go out at WARNING;
        anything else is logged at ERROR.
        """
        details = {
            'room_code': room_code,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }

        log_message = self._create_log_entry(
            'ERROR', action, get_connection_identity(request), details
        )
        if isinstance(error, GameError):
            self.logger.warning(log_message)
        else:
            self.logger.error(log_message)

    def _sanitize_response_data(self, data: Any) -> Any:
        """Keep response logs small and never log secret words."""
        if not isinstance(data, dict):
            return data if isinstance(data, (str, int, float, bool, type(None))) else {'data_type': type(data).__name__}

        sanitized = data.copy()
        for key in ('secretWord', 'ownSecretWord', 'opponentSecretWord'):
            if key in sanitized:
                sanitized[key] = '*****'

        if 'rooms' in sanitized and isinstance(sanitized['rooms'], list):
            sanitized['rooms'] = {'count': len(sanitized['rooms'])}

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about logged events (useful for monitoring)."""
        try:
            log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"
            if not log_file.exists():
                return {'error': 'No log file found for today'}

            stats = {
                'log_file': str(log_file),
                'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
                'total_entries': 0,
                'user_actions': 0,
                'server_responses': 0,
                'game_events': 0,
                'errors': 0
            }

            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        stats['total_entries'] += 1
                        if 'USER_ACTION' in line:
                            stats['user_actions'] += 1
                        elif 'SERVER_RESPONSE' in line:
                            stats['server_responses'] += 1
                        elif 'GAME_EVENT' in line:
                            stats['game_events'] += 1
                        elif 'ERROR' in line:
                            stats['errors'] += 1

            return stats

        except OSError as e:
            return {'error': f'Failed to get stats: {str(e)}'}


# Global logger instance
game_logger = GameLogger(log_dir=Config.LOG_DIR, level=Config.LOG_LEVEL)
