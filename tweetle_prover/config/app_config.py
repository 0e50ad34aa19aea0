"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _float_env(name: str, default: float) -> float:
    return float(os.getenv(name, default))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', 3001))

    # Database Settings
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'tweetle')

    # Circuit Settings
    CIRCUITS_DIR = os.getenv('CIRCUITS_DIR', os.path.join(_PROJECT_ROOT, 'circuits'))
    MAIN_CIRCUIT_NAME = os.getenv('MAIN_CIRCUIT_NAME', 'tweetle_wordle')
    COMMITMENT_CIRCUIT_NAME = os.getenv('COMMITMENT_CIRCUIT_NAME', 'tweetle_commitment')

    # External Tool Settings
    NARGO_BIN = os.getenv('NARGO_BIN', 'nargo')
    BB_BIN = os.getenv('BB_BIN', 'bb')
    GARAGA_BIN = os.getenv('GARAGA_BIN', 'garaga')
    TOOL_PATH_EXTRA = os.getenv('TOOL_PATH_EXTRA', '')
    NARGO_TIMEOUT_SECONDS = _float_env('NARGO_TIMEOUT_SECONDS', 120)
    BB_TIMEOUT_SECONDS = _float_env('BB_TIMEOUT_SECONDS', 300)
    GARAGA_TIMEOUT_SECONDS = _float_env('GARAGA_TIMEOUT_SECONDS', 120)

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')

    @classmethod
    def main_circuit_dir(cls) -> str:
        return os.path.join(cls.CIRCUITS_DIR, cls.MAIN_CIRCUIT_NAME)

    @classmethod
    def commitment_circuit_dir(cls) -> str:
        return os.path.join(cls.CIRCUITS_DIR, cls.COMMITMENT_CIRCUIT_NAME)


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


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
