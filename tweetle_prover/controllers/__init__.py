"""
Controllers Package

Contains the HTTP blueprints.
"""

from .tournament_controller import tournament_bp

__all__ = ['tournament_bp']
