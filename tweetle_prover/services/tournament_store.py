"""
Tournament Store

Durable mapping from on-chain tournament id to the tournament's secret state,
kept in MongoDB. Each tournament is a single document keyed by its id, so
every read and write of a secret is atomic.
"""

import datetime
from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..models.tournament import TournamentSecret
from ..utils.errors import ConflictError, ValidationError
from ..utils.prover_logger import prover_logger


class TournamentStore:
    """
    MongoDB-backed store of tournament secrets.

    Secrets are always written whole; there is no field-level update.
    """

    def __init__(self,
                 mongo_uri: Optional[str] = None,
                 db_name: str = 'tweetle',
                 client: Optional[MongoClient] = None):
        """
        Initialize the store.

        Args:
            mongo_uri: MongoDB connection string, used when no client is given
            db_name: Database holding the tournaments collection
            client: An already constructed client (shared or test client)
        """
        if client is None:
            if not mongo_uri:
                raise ValueError("Either mongo_uri or client is required")
            client = MongoClient(mongo_uri, server_api=ServerApi('1'))
            # Fail fast when the database is unreachable
            client.admin.command('ping')
            prover_logger.logger.info("Connected to MongoDB")

        self.client = client
        self.db = self.client[db_name]
        self.tournaments_collection = self.db.tournaments
        self.tournaments_collection.create_index("created_at")

    def put(self, tournament_id: int, solution: str, salt: str, word_index: int, commitment: str) -> TournamentSecret:
        """
        Insert or fully replace the secret for a tournament.

        Args:
            tournament_id: On-chain tournament id
            solution: Plaintext solution word
            salt: Commitment salt
            word_index: Index of the solution in the word list
            commitment: Commitment published on-chain

        Returns:
            The stored TournamentSecret
        """
        document = self._document(tournament_id, solution, salt, word_index, commitment)
        self.tournaments_collection.replace_one({"_id": document["_id"]}, document, upsert=True)
        return self._to_secret(document)

    def insert(self, tournament_id: int, solution: str, salt: str, word_index: int, commitment: str) -> TournamentSecret:
        """
        Store the secret for a tournament that has none yet.

        Raises:
            ConflictError: If a secret is already stored for this id
        """
        document = self._document(tournament_id, solution, salt, word_index, commitment)
        try:
            self.tournaments_collection.insert_one(document)
        except DuplicateKeyError as e:
            raise ConflictError(f"Tournament {tournament_id} is already registered") from e
        return self._to_secret(document)

    def get(self, tournament_id: int) -> Optional[TournamentSecret]:
        """
        Look up the secret for a tournament.

        Returns:
            TournamentSecret, or None if nothing is stored for this id
        """
        self._check_id(tournament_id)
        document = self.tournaments_collection.find_one({"_id": tournament_id})
        if document is None:
            return None
        return self._to_secret(document)

    def _document(self, tournament_id: int, solution: str, salt: str, word_index: int, commitment: str) -> Dict[str, Any]:
        self._check_id(tournament_id)
        return {
            "_id": tournament_id,
            "solution": solution,
            "salt": salt,
            "word_index": word_index,
            "commitment": commitment,
            "created_at": datetime.datetime.now(datetime.timezone.utc),
        }

    @staticmethod
    def _check_id(tournament_id: int) -> None:
        if isinstance(tournament_id, bool) or not isinstance(tournament_id, int) or tournament_id < 0:
            raise ValidationError(f"Tournament id must be a non-negative integer, got {tournament_id!r}")

    @staticmethod
    def _to_secret(document: Dict[str, Any]) -> TournamentSecret:
        return TournamentSecret(
            id=document["_id"],
            solution=document["solution"],
            salt=document["salt"],
            word_index=document["word_index"],
            commitment=document["commitment"],
            created_at=document.get("created_at"),
        )
