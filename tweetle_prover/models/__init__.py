"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .clue import Clue, ClueSlot
from .proof import PipelineStage, ProofArtifacts, ProofInput, ProofResult, WitnessArtifact
from .tournament import CreatedTournament, GuessProof, RevealedTournament, TournamentSecret

__all__ = [
    'Clue', 'ClueSlot',
    'PipelineStage', 'ProofArtifacts', 'ProofInput', 'ProofResult', 'WitnessArtifact',
    'CreatedTournament', 'GuessProof', 'RevealedTournament', 'TournamentSecret'
]
