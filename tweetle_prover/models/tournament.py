"""
Tournament Data Models

Contains the persisted tournament secret and the results returned by the
tournament operations.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class TournamentSecret:
    """Secret state of one tournament, written once and never mutated."""
    id: int
    solution: str
    salt: str
    word_index: int
    commitment: str
    created_at: Optional[datetime] = None

    def same_secret(self, salt: str, word_index: int, commitment: str) -> bool:
        """True if the given registration values describe this secret."""
        return (self.salt == salt
                and self.word_index == word_index
                and self.commitment == commitment)


@dataclass(frozen=True)
class CreatedTournament:
    """Everything the game master needs to submit the on-chain creation transaction."""
    commitment: str
    salt: str
    word_index: int
    packed_solution: str  # 0x-prefixed hex


@dataclass(frozen=True)
class GuessProof:
    """Proof calldata for one guess plus the plaintext clue."""
    calldata: List[str]
    clue: List[int]
    packed_clue: int
    guess: str


@dataclass(frozen=True)
class RevealedTournament:
    """Plaintext secret disclosed when a tournament is over."""
    solution: str
    word_index: int
    salt: str
    packed_solution: str  # 0x-prefixed hex
