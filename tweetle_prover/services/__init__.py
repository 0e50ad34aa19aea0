"""
Services Package

Contains all business logic and service classes.
"""

from .commitment_service import CommitmentService
from .proof_service import ProofService
from .tournament_service import TournamentService, get_tournament_service, initialize_tournament_service
from .tournament_store import TournamentStore

__all__ = [
    'CommitmentService',
    'ProofService',
    'TournamentService', 'get_tournament_service', 'initialize_tournament_service',
    'TournamentStore'
]
