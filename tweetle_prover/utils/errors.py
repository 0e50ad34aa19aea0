"""
Prover Errors

Error taxonomy shared by the core services and the HTTP layer.
Every error carries a machine-readable ``kind`` so the request boundary can
render it as a structured failure.
"""

from typing import Any, Dict, Optional


class ProverError(Exception):
    """Base class for all errors raised by the prover core."""

    kind = "prover_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "error": self.message}


class ValidationError(ProverError):
    """Malformed or out-of-range caller input."""

    kind = "validation"


class ConflictError(ValidationError):
    """Input collides with an already persisted tournament secret."""

    kind = "conflict"


class NotFoundError(ProverError):
    """No secret is persisted for the referenced tournament id."""

    kind = "not_found"


class EncodingError(ProverError):
    """Invalid word, byte or packed-integer conversion input."""

    kind = "encoding"


class ExternalToolError(ProverError):
    """
    An external tool exited non-zero or produced unusable output.

    Args:
        stage: Name of the pipeline stage that failed (e.g. 'commitment', 'proof')
        message: Human readable description
        output: Raw tool output kept for diagnosis
    """

    kind = "external_tool"

    def __init__(self, stage: str, message: str, output: Optional[str] = None):
        super().__init__(f"[{stage}] {message}")
        self.stage = stage
        self.output = output or ""

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["stage"] = self.stage
        data["output"] = self.output
        return data


class ProofGenerationError(ExternalToolError):
    """A stage of the witness/proof/calldata pipeline failed."""

    kind = "proof_generation"


class ToolTimeoutError(ProofGenerationError):
    """An external tool did not finish within its configured timeout."""

    kind = "timeout"

    def __init__(self, stage: str, timeout: float, output: Optional[str] = None):
        super().__init__(stage, f"Timed out after {timeout} seconds", output)
        self.timeout = timeout
