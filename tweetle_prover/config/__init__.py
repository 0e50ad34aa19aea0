"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application and tool configuration (environment-based)
- game_settings.py: The ordered solution word list shared with the contract
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import WORD_LIST, word_count, word_at, validate_word_list_integrity, get_word_statistics

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Word list
    'WORD_LIST', 'word_count', 'word_at', 'validate_word_list_integrity', 'get_word_statistics'
]
