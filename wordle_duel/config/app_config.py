"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


def _optional_int(name):
    value = os.getenv(name)
    return int(value) if value else None


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Room Settings
    ROOM_CODE_LENGTH = int(os.getenv('ROOM_CODE_LENGTH', 4))
    DEFAULT_LANGUAGE = os.getenv('DEFAULT_LANGUAGE', 'en')

    # Game Settings
    MAX_ROWS = int(os.getenv('MAX_ROWS', 6))
    DUEL_MAX_ROWS = _optional_int('DUEL_MAX_ROWS')  # None keeps duel grids unbounded
    TURN_DURATION_SECONDS = int(os.getenv('TURN_DURATION_SECONDS', 45))
    HINT_MAX_LENGTH = int(os.getenv('HINT_MAX_LENGTH', 100))

    # Turn timers run on Socket.IO background tasks
    ENABLE_TURN_TIMER = True

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    ENABLE_TURN_TIMER = False


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
