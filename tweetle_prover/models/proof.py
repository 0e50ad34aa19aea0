"""
Proof Pipeline Data Models

Input of the proof pipeline and the typed artifact produced by each stage.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List


class PipelineStage(str, Enum):
    """Stages of the external proving tool chain, in execution order."""
    WITNESS = "witness"
    PROOF = "proof"
    CALLDATA = "calldata"


@dataclass(frozen=True)
class ProofInput:
    """Private and public inputs of the main circuit for one guess."""
    solution: bytes
    salt: str
    commitment: str
    guess: bytes
    clue: List[int]
    clue_packed: int


@dataclass(frozen=True)
class WitnessArtifact:
    path: Path


@dataclass(frozen=True)
class ProofArtifacts:
    proof_path: Path
    public_inputs_path: Path


@dataclass(frozen=True)
class ProofResult:
    calldata: List[str]  # felt252 values for on-chain submission
