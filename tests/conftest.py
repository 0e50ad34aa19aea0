import hashlib
import subprocess
import threading
import time
from pathlib import Path
from unittest.mock import patch

import mongomock
import pytest

from tweetle_prover.services.commitment_service import CommitmentService
from tweetle_prover.services.proof_service import ProofService
from tweetle_prover.services.tournament_service import TournamentService
from tweetle_prover.services.tournament_store import TournamentStore

CALLDATA = ["0x1", "0x2a", "12345"]


class FakeToolchain:
    """
    Stands in for nargo, bb and garaga behind subprocess.run and counts runs
    that start while another is still in progress.

    Each fake tool honours the file contract of the real one: nargo reads
    Prover.toml from its working directory, bb refuses an existing output
    directory, garaga prints calldata.
    """

    def __init__(self):
        self.calls = []
        self.threads = []
        self.fail_tool = None
        self.timeout_tool = None
        self.commitment_stdout = None
        self.garaga_stdout = "[" + ", ".join(CALLDATA) + "]"
        self.delay = 0
        self.overlaps = 0
        self._running = 0
        self._guard = threading.Lock()

    def __call__(self, argv, cwd=None, env=None, capture_output=False, text=False, timeout=None, check=False):
        tool = Path(argv[0]).name
        with self._guard:
            self.calls.append((tool, list(argv), cwd))
            self.threads.append(threading.get_ident())
            if self._running:
                self.overlaps += 1
            self._running += 1
        try:
            if self.delay:
                time.sleep(self.delay)
            return self._dispatch(tool, argv, cwd, timeout)
        finally:
            with self._guard:
                self._running -= 1

    def _dispatch(self, tool, argv, cwd, timeout):
        if tool == self.timeout_tool:
            raise subprocess.TimeoutExpired(argv, timeout, output="partial output")
        if tool == self.fail_tool:
            return subprocess.CompletedProcess(argv, 1, stdout="", stderr=f"{tool} crashed")

        if tool == 'nargo':
            return self._nargo(argv, Path(cwd))
        if tool == 'bb':
            return self._bb(argv)
        if tool == 'garaga':
            return subprocess.CompletedProcess(argv, 0, stdout=self.garaga_stdout, stderr="")
        raise FileNotFoundError(argv[0])

    def _nargo(self, argv, cwd):
        prover_toml = (cwd / 'Prover.toml').read_text()
        if 'execute' in argv and argv[2] == 'witness':
            target = cwd / 'target'
            target.mkdir(parents=True, exist_ok=True)
            (target / 'witness.gz').write_bytes(b'witness')
            return subprocess.CompletedProcess(argv, 0, stdout="[tweetle_wordle] Circuit witness successfully solved\n", stderr="")

        if self.commitment_stdout is not None:
            stdout = self.commitment_stdout
        else:
            digest = hashlib.sha256(prover_toml.encode()).hexdigest()
            stdout = f"[tweetle_commitment] Circuit witness successfully solved\n[tweetle_commitment] Circuit output: 0x{digest}\n"
        return subprocess.CompletedProcess(argv, 0, stdout=stdout, stderr="")

    def _bb(self, argv):
        out_dir = Path(argv[argv.index('-o') + 1])
        if out_dir.exists():
            return subprocess.CompletedProcess(argv, 1, stdout="", stderr="output directory exists")
        out_dir.mkdir(parents=True)
        (out_dir / 'proof').write_bytes(b'proof')
        (out_dir / 'public_inputs').write_bytes(b'inputs')
        return subprocess.CompletedProcess(argv, 0, stdout="", stderr="")

    def tools_called(self):
        return [tool for tool, _, _ in self.calls]


@pytest.fixture
def fake_tools():
    tools = FakeToolchain()
    with patch('tweetle_prover.services.toolchain.subprocess.run', side_effect=tools):
        yield tools


@pytest.fixture
def circuits_dir(tmp_path):
    commitment_dir = tmp_path / 'tweetle_commitment'
    main_dir = tmp_path / 'tweetle_wordle'
    commitment_dir.mkdir()
    (main_dir / 'target' / 'vk').mkdir(parents=True)
    (main_dir / 'target' / 'vk' / 'vk').write_bytes(b'vk')
    return tmp_path


@pytest.fixture
def commitment_service(circuits_dir):
    return CommitmentService(circuits_dir / 'tweetle_commitment', timeout=5, env={})


@pytest.fixture
def proof_service(circuits_dir):
    return ProofService(circuits_dir / 'tweetle_wordle', env={})


@pytest.fixture
def store():
    return TournamentStore(client=mongomock.MongoClient(), db_name='tweetle_test')


@pytest.fixture
def word_list():
    return ["crane", "speed", "apple", "eerie", "slate"]


@pytest.fixture
def tournament_service(store, commitment_service, proof_service, word_list):
    return TournamentService(store, commitment_service, proof_service, word_list)
