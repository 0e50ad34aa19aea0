"""
Proof Service

Generates the ZK proof and Starknet calldata for a single guess by running
the main circuit's tool chain:

    witness   nargo execute      Prover.toml      -> target/witness.gz
    proof     bb prove           witness + vk     -> target/proof_out/{proof,public_inputs}
    calldata  garaga calldata    proof + vk       -> felt list on stdout

Every stage reads what the previous one wrote, so the whole pipeline runs
under the process-wide circuit lock.
"""

import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ..models.proof import PipelineStage, ProofArtifacts, ProofInput, ProofResult, WitnessArtifact
from ..utils.errors import ProofGenerationError
from ..utils.prover_logger import prover_logger
from .calldata_parser import parse_calldata
from .toolchain import exclusive_circuit_access, run_tool, tool_env, write_prover_toml

WITNESS_NAME = 'witness'
PROOF_DIR_NAME = 'proof_out'


class ProofService:
    """
    Runs the witness -> proof -> calldata pipeline of the main circuit.

    Failures are reported as ProofGenerationError naming the failed stage.
    Nothing is retried here; callers may rerun the whole pipeline.
    """

    def __init__(self,
                 circuit_dir: Union[str, Path],
                 circuit_name: str = 'tweetle_wordle',
                 nargo_bin: str = 'nargo',
                 bb_bin: str = 'bb',
                 garaga_bin: str = 'garaga',
                 timeouts: Optional[Dict[PipelineStage, float]] = None,
                 env: Optional[Dict[str, str]] = None):
        self.circuit_dir = Path(circuit_dir)
        self.target_dir = self.circuit_dir / 'target'
        self.bytecode_path = self.target_dir / f'{circuit_name}.json'
        self.vk_path = self.target_dir / 'vk' / 'vk'
        self.witness_path = self.target_dir / f'{WITNESS_NAME}.gz'
        self.proof_dir = self.target_dir / PROOF_DIR_NAME

        self.nargo_bin = nargo_bin
        self.bb_bin = bb_bin
        self.garaga_bin = garaga_bin
        self.timeouts = {
            PipelineStage.WITNESS: 120.0,
            PipelineStage.PROOF: 300.0,
            PipelineStage.CALLDATA: 120.0,
        }
        if timeouts:
            self.timeouts.update(timeouts)
        self.env = env if env is not None else tool_env()

    def generate_proof(self, proof_input: ProofInput) -> ProofResult:
        """
        Generates chain-submittable calldata proving the clue for one guess.

        Args:
            proof_input: Solution, salt, commitment, guess and the computed clue

        Returns:
            ProofResult with the ordered felt252 calldata

        Raises:
            ProofGenerationError: If any stage fails; ToolTimeoutError on timeout
        """
        with exclusive_circuit_access('proof'):
            try:
                witness = self._generate_witness(proof_input)
                with self._fresh_proof_dir():
                    artifacts = self._prove(witness)
                    calldata = self._encode_calldata(artifacts)
            finally:
                self.witness_path.unlink(missing_ok=True)

        prover_logger.logger.info(f"Proof generated: {len(calldata)} calldata felts")
        return ProofResult(calldata=calldata)

    def _generate_witness(self, proof_input: ProofInput) -> WitnessArtifact:
        stage = PipelineStage.WITNESS
        write_prover_toml(self.circuit_dir, {
            'solution': proof_input.solution,
            'salt': proof_input.salt,
            'commitment': proof_input.commitment,
            'guess': proof_input.guess,
            'clue': proof_input.clue,
            'clue_packed': str(proof_input.clue_packed),
        })
        self._run(stage, [self.nargo_bin, 'execute', WITNESS_NAME, '--silence-warnings'], cwd=self.circuit_dir)

        if not self.witness_path.is_file():
            raise ProofGenerationError(stage.value, f"Witness not written to {self.witness_path}")
        return WitnessArtifact(path=self.witness_path)

    def _prove(self, witness: WitnessArtifact) -> ProofArtifacts:
        stage = PipelineStage.PROOF
        self._run(stage, [
            self.bb_bin, 'prove',
            '-s', 'ultra_honk',
            '--oracle_hash', 'keccak',
            '-b', self.bytecode_path,
            '-w', witness.path,
            '-k', self.vk_path,
            '-o', self.proof_dir,
        ])

        artifacts = ProofArtifacts(
            proof_path=self.proof_dir / 'proof',
            public_inputs_path=self.proof_dir / 'public_inputs',
        )
        for path in (artifacts.proof_path, artifacts.public_inputs_path):
            if not path.is_file():
                raise ProofGenerationError(stage.value, f"bb did not write {path}")
        return artifacts

    def _encode_calldata(self, artifacts: ProofArtifacts) -> List[str]:
        stage = PipelineStage.CALLDATA
        stdout = self._run(stage, [
            self.garaga_bin, 'calldata',
            '--system', 'ultra_keccak_zk_honk',
            '--proof', artifacts.proof_path,
            '--vk', self.vk_path,
            '--public-inputs', artifacts.public_inputs_path,
            '--format', 'array',
        ])

        calldata = parse_calldata(stdout)
        if not calldata:
            raise ProofGenerationError(stage.value, "Could not parse calldata from garaga output", stdout)
        return calldata

    @contextmanager
    def _fresh_proof_dir(self) -> Iterator[Path]:
        """bb refuses to write into an existing output directory; remove it before and after."""
        if self.proof_dir.exists():
            shutil.rmtree(self.proof_dir)
        try:
            yield self.proof_dir
        finally:
            shutil.rmtree(self.proof_dir, ignore_errors=True)

    def _run(self, stage: PipelineStage, argv, cwd: Optional[Path] = None) -> str:
        return run_tool(
            stage.value,
            argv,
            timeout=self.timeouts[stage],
            cwd=cwd,
            env=self.env,
            error_cls=ProofGenerationError,
        )
