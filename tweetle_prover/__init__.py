"""
Tweetle Prover Server Application Package

Off-chain prover for commit-reveal Wordle tournaments: holds each tournament's
secret solution, commits to it and proves every clue with a ZK circuit.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from .controllers.tournament_controller import tournament_bp

    app.register_blueprint(tournament_bp)

    return app
