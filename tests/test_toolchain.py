import os
import subprocess
import threading
import time
from unittest.mock import patch

import pytest

from tweetle_prover.models.proof import ProofInput
from tweetle_prover.services import toolchain
from tweetle_prover.services.toolchain import (
    exclusive_circuit_access, format_prover_toml, run_tool, tool_env, write_prover_toml
)
from tweetle_prover.utils.errors import ExternalToolError, ProofGenerationError, ToolTimeoutError


def test_format_prover_toml_writes_arrays_and_quoted_strings():
    text = format_prover_toml({'solution': b'crane', 'salt': '123', 'clue': [0, 1, 2, 0, 0], 'clue_packed': '24'})
    assert text == (
        'solution = [99, 114, 97, 110, 101]\n'
        'salt = "123"\n'
        'clue = [0, 1, 2, 0, 0]\n'
        'clue_packed = "24"\n'
    )


def test_write_prover_toml(tmp_path):
    path = write_prover_toml(tmp_path, {'salt': '7'})
    assert path == tmp_path / 'Prover.toml'
    assert path.read_text() == 'salt = "7"\n'


def test_tool_env_prefixes_tool_dirs():
    env = tool_env('/opt/garaga/bin')
    entries = env['PATH'].split(os.pathsep)
    assert entries[0] == '/opt/garaga/bin'
    assert entries[1].endswith(os.path.join('.nargo', 'bin'))
    assert entries[2].endswith('.bb')


def test_run_tool_returns_stdout():
    completed = subprocess.CompletedProcess(['nargo'], 0, stdout='ok\n', stderr='')
    with patch.object(toolchain.subprocess, 'run', return_value=completed) as run:
        assert run_tool('commitment', ['nargo', 'execute'], timeout=3, cwd='/tmp') == 'ok\n'
    assert run.call_args.kwargs['timeout'] == 3
    assert run.call_args.kwargs['cwd'] == '/tmp'


def test_run_tool_non_zero_exit_carries_stage_and_output():
    completed = subprocess.CompletedProcess(['bb'], 2, stdout='partial', stderr='boom')
    with patch.object(toolchain.subprocess, 'run', return_value=completed):
        with pytest.raises(ProofGenerationError) as excinfo:
            run_tool('proof', ['bb', 'prove'], timeout=3, error_cls=ProofGenerationError)
    assert excinfo.value.stage == 'proof'
    assert 'boom' in excinfo.value.output
    assert 'partial' in excinfo.value.output


def test_run_tool_timeout_is_distinct_error():
    with patch.object(toolchain.subprocess, 'run', side_effect=subprocess.TimeoutExpired(['bb'], 3)):
        with pytest.raises(ToolTimeoutError) as excinfo:
            run_tool('proof', ['bb', 'prove'], timeout=3)
    assert excinfo.value.timeout == 3
    assert isinstance(excinfo.value, ProofGenerationError)


def test_run_tool_missing_binary():
    with patch.object(toolchain.subprocess, 'run', side_effect=FileNotFoundError('nargo')):
        with pytest.raises(ExternalToolError) as excinfo:
            run_tool('commitment', ['nargo', 'execute'], timeout=3)
    assert excinfo.value.stage == 'commitment'


def test_circuit_access_is_exclusive():
    active = []
    overlaps = []

    def worker():
        with exclusive_circuit_access('test'):
            if active:
                overlaps.append(True)
            active.append(1)
            time.sleep(0.02)
            active.pop()

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert overlaps == []


def test_commitment_and_proof_runs_are_serialized(fake_tools, commitment_service, proof_service):
    fake_tools.delay = 0.01
    proof_input = ProofInput(solution=b'crane', salt='1', commitment='0x1', guess=b'slate',
                             clue=[0, 0, 2, 0, 2], clue_packed=34)
    errors = []

    def run(job):
        try:
            job()
        except Exception as e:
            errors.append(e)

    jobs = [
        lambda: commitment_service.compute_commitment(b'crane', '7'),
        lambda: proof_service.generate_proof(proof_input),
    ] * 3
    threads = [threading.Thread(target=run, args=(job,)) for job in jobs]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert fake_tools.overlaps == 0

    # A proof's witness, proof and calldata runs follow one another with nothing in between
    sequence = list(zip(fake_tools.threads, fake_tools.tools_called()))
    witness_runs = [i for i, (_, argv, _) in enumerate(fake_tools.calls) if 'witness' in argv]
    assert len(witness_runs) == 3
    for i in witness_runs:
        thread = fake_tools.threads[i]
        assert sequence[i + 1:i + 3] == [(thread, 'bb'), (thread, 'garaga')]
