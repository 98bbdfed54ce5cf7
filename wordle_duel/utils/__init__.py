"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import reports_game_errors, logs_user_action
from .helpers import get_connection_identity
from .game_logger import game_logger

__all__ = ['reports_game_errors', 'logs_user_action', 'get_connection_identity', 'game_logger']
