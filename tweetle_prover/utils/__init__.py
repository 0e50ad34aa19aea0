"""
Utilities Package

Contains the error taxonomy and the structured logger.
"""

from .errors import (
    ConflictError, EncodingError, ExternalToolError, NotFoundError, ProofGenerationError,
    ProverError, ToolTimeoutError, ValidationError
)
from .prover_logger import prover_logger

__all__ = [
    'ConflictError', 'EncodingError', 'ExternalToolError', 'NotFoundError', 'ProofGenerationError',
    'ProverError', 'ToolTimeoutError', 'ValidationError', 'prover_logger'
]
