"""
Commitment Service

Computes the Poseidon2 commitment to a (solution, salt) pair by executing the
commitment helper circuit with nargo.
"""

import re
from pathlib import Path
from typing import Dict, Optional, Union

from ..utils.errors import EncodingError, ExternalToolError
from .toolchain import exclusive_circuit_access, run_tool, tool_env, write_prover_toml
from .word_encoder import WORD_LENGTH

COMMITMENT_STAGE = "commitment"
_CIRCUIT_OUTPUT = re.compile(r"Circuit output:\s*(0x[0-9a-fA-F]+)")


class CommitmentService:
    """
    Runs the commitment circuit.

    The circuit is deterministic: the same solution and salt always give the
    same commitment.
    """

    def __init__(self,
                 circuit_dir: Union[str, Path],
                 nargo_bin: str = 'nargo',
                 timeout: float = 120,
                 env: Optional[Dict[str, str]] = None):
        self.circuit_dir = Path(circuit_dir)
        self.nargo_bin = nargo_bin
        self.timeout = timeout
        self.env = env if env is not None else tool_env()

    def compute_commitment(self, solution: bytes, salt: str) -> str:
        """
        Computes the commitment for a solution word and salt.

        Args:
            solution: 5 ASCII bytes of the solution
            salt: Field element as a decimal or hex string

        Returns:
            str: The commitment as 0x-prefixed hex

        Raises:
            ExternalToolError: If nargo fails or prints no circuit output
        """
        if len(solution) != WORD_LENGTH:
            raise EncodingError(f"Solution must be {WORD_LENGTH} bytes, got {len(solution)}")

        with exclusive_circuit_access(COMMITMENT_STAGE):
            write_prover_toml(self.circuit_dir, {'solution': solution, 'salt': salt})
            stdout = run_tool(
                COMMITMENT_STAGE,
                [self.nargo_bin, 'execute', '--silence-warnings'],
                timeout=self.timeout,
                cwd=self.circuit_dir,
                env=self.env,
            )

        match = _CIRCUIT_OUTPUT.search(stdout)
        if not match:
            raise ExternalToolError(COMMITMENT_STAGE, "No 'Circuit output' line in nargo output", stdout)
        return match.group(1)
