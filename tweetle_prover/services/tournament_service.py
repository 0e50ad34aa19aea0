"""
Tournament Service

Sequences the tournament operations against the store and the circuits:

    create    pick a word, draw a salt, compute the commitment (nothing stored)
    register  persist the secret once the on-chain tournament exists
    prove     compute the clue for a guess and prove it
    reveal    disclose the stored secret after the tournament is over
"""

import secrets
from typing import Optional, Sequence

from ..config.game_settings import WORD_LIST, word_at, word_count
from ..models.proof import ProofInput
from ..models.tournament import CreatedTournament, GuessProof, RevealedTournament, TournamentSecret
from ..utils.errors import ConflictError, NotFoundError, ValidationError
from ..utils.prover_logger import prover_logger
from .clue_engine import compute_clue
from .commitment_service import CommitmentService
from .proof_service import ProofService
from .tournament_store import TournamentStore
from .word_encoder import WORD_LENGTH, bytes_of, packed_hex

SALT_BITS = 128


class TournamentService:
    """
    Core tournament service.

    This class handles:
    - Solution selection and commitment for new tournaments
    - Registration of tournament secrets after on-chain creation
    - Clue computation and proof generation for guesses
    - Revealing the solution once a tournament is over

    Ordering of the lifecycle (register before prove, reveal once) is the
    caller's responsibility; only existence and input shape are checked here.
    """

    def __init__(self,
                 store: TournamentStore,
                 commitment_service: CommitmentService,
                 proof_service: ProofService,
                 word_list: Optional[Sequence[str]] = None):
        self.store = store
        self.commitment_service = commitment_service
        self.proof_service = proof_service
        self.word_list = list(word_list) if word_list is not None else list(WORD_LIST)

    def create_tournament(self, word_index: Optional[int] = None) -> CreatedTournament:
        """
        Prepares a new tournament. Nothing is persisted until register_tournament.

        Args:
            word_index: Index of the solution word, or None for a random word

        Returns:
            CreatedTournament with the commitment, salt, word index and packed solution

        Raises:
            ValidationError: If word_index is out of range
            ExternalToolError: If the commitment circuit fails
        """
        if word_index is None:
            word_index = secrets.randbelow(word_count(self.word_list))
        word = self._word_at(word_index)
        solution = bytes_of(word)

        salt = str(secrets.randbits(SALT_BITS))
        commitment = self.commitment_service.compute_commitment(solution, salt)

        prover_logger.log_tournament_event(None, 'tournament_created', commitment=commitment)
        return CreatedTournament(
            commitment=commitment,
            salt=salt,
            word_index=word_index,
            packed_solution=packed_hex(solution),
        )

    def register_tournament(self, tournament_id: int, salt: str, word_index: int, commitment: str) -> TournamentSecret:
        """
        Persists the secret of a tournament created on-chain.

        Registering the same values again is a no-op. Registering different
        values for an id that already has a secret is refused, since guesses
        may already have been proven against the stored one.

        Raises:
            ValidationError: If any field is malformed or word_index is out of range
            ConflictError: If the id already holds a different secret
        """
        self._check_tournament_id(tournament_id)
        word = self._word_at(word_index)
        if not isinstance(salt, str) or not salt:
            raise ValidationError("Salt must be a non-empty string")
        if not isinstance(commitment, str) or not commitment:
            raise ValidationError("Commitment must be a non-empty string")

        try:
            secret = self.store.insert(tournament_id, word, salt, word_index, commitment)
        except ConflictError:
            existing = self.store.get(tournament_id)
            if existing is not None and existing.same_secret(salt, word_index, commitment):
                return existing
            raise

        prover_logger.log_tournament_event(tournament_id, 'tournament_registered', commitment=commitment)
        return secret

    def prove_guess(self, tournament_id: int, guess: str) -> GuessProof:
        """
        Computes the clue for a guess and proves it against the tournament's commitment.

        Args:
            tournament_id: On-chain tournament id
            guess: The 5-letter guess, any case

        Returns:
            GuessProof with the calldata, the clue and the normalized guess

        Raises:
            ValidationError: If the guess is not exactly 5 letters
            EncodingError: If the guess contains non-ASCII characters
            NotFoundError: If the tournament is not registered
            ProofGenerationError: If the proving pipeline fails
        """
        if not isinstance(guess, str) or len(guess.strip()) != WORD_LENGTH:
            raise ValidationError(f"Guess must be {WORD_LENGTH} letters")
        normalized_guess = guess.strip().lower()
        guess_bytes = bytes_of(normalized_guess)
        if not normalized_guess.isalpha():
            raise ValidationError("Guess must contain only letters")

        secret = self._get_secret(tournament_id)
        solution = bytes_of(secret.solution)

        clue = compute_clue(solution, guess_bytes)
        result = self.proof_service.generate_proof(ProofInput(
            solution=solution,
            salt=secret.salt,
            commitment=secret.commitment,
            guess=guess_bytes,
            clue=clue.to_list(),
            clue_packed=clue.packed,
        ))

        prover_logger.log_tournament_event(
            tournament_id, 'guess_proved',
            clue=clue.to_list(), clue_packed=clue.packed, calldata_length=len(result.calldata)
        )
        return GuessProof(
            calldata=result.calldata,
            clue=clue.to_list(),
            packed_clue=clue.packed,
            guess=normalized_guess,
        )

    def reveal_tournament(self, tournament_id: int) -> RevealedTournament:
        """
        Returns the plaintext secret of a tournament.

        Whether the tournament is over is decided on-chain and not checked here.

        Raises:
            NotFoundError: If the tournament is not registered
        """
        secret = self._get_secret(tournament_id)
        prover_logger.log_tournament_event(tournament_id, 'tournament_revealed')
        return RevealedTournament(
            solution=secret.solution,
            word_index=secret.word_index,
            salt=secret.salt,
            packed_solution=packed_hex(bytes_of(secret.solution)),
        )

    def _get_secret(self, tournament_id: int) -> TournamentSecret:
        self._check_tournament_id(tournament_id)
        secret = self.store.get(tournament_id)
        if secret is None:
            raise NotFoundError(f"Tournament {tournament_id} not found")
        return secret

    def _word_at(self, word_index: int) -> str:
        if isinstance(word_index, bool) or not isinstance(word_index, int):
            raise ValidationError("Word index must be an integer")
        try:
            return word_at(word_index, self.word_list)
        except IndexError as e:
            raise ValidationError(f"Invalid word index: {e}") from e

    @staticmethod
    def _check_tournament_id(tournament_id: int) -> None:
        if isinstance(tournament_id, bool) or not isinstance(tournament_id, int) or tournament_id < 0:
            raise ValidationError(f"Tournament id must be a non-negative integer, got {tournament_id!r}")


# Global service instance
_tournament_service = None


def get_tournament_service() -> Optional[TournamentService]:
    """Get the global tournament service instance."""
    return _tournament_service


def initialize_tournament_service(store: TournamentStore,
                                  commitment_service: CommitmentService,
                                  proof_service: ProofService,
                                  word_list: Optional[Sequence[str]] = None) -> TournamentService:
    """Initialize the global tournament service instance."""
    global _tournament_service
    _tournament_service = TournamentService(store, commitment_service, proof_service, word_list)
    return _tournament_service
