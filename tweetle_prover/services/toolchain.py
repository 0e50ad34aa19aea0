"""
External Tool Runner

Shared plumbing for invoking the Noir/Barretenberg/Garaga command line tools:
subprocess execution with timeouts, the tool search PATH, Prover.toml
formatting and the process-wide lock that guards the circuit directories.
"""

import os
import subprocess
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Sequence, Type, Union

from ..utils.errors import ExternalToolError, ToolTimeoutError
from ..utils.prover_logger import prover_logger

# The circuit directories, their Prover.toml files and target/ outputs are
# fixed paths shared by every request. Only one tool run may touch them at a time.
_circuit_lock = threading.Lock()

TomlValue = Union[str, int, Sequence[int]]


@contextmanager
def exclusive_circuit_access(operation: str) -> Iterator[None]:
    """Holds the process-wide circuit lock for the duration of the block."""
    started = time.monotonic()
    with _circuit_lock:
        waited = time.monotonic() - started
        if waited > 1:
            prover_logger.logger.info(f"{operation}: waited {waited:.1f}s for circuit lock")
        yield


def tool_env(extra_path: str = "") -> Dict[str, str]:
    """
    Environment for tool subprocesses, with the default nargo and bb
    install locations put in front of PATH.
    """
    home = os.path.expanduser('~')
    entries = [p for p in extra_path.split(os.pathsep) if p]
    entries += [os.path.join(home, '.nargo', 'bin'), os.path.join(home, '.bb')]
    env = os.environ.copy()
    env['PATH'] = os.pathsep.join(entries + [env.get('PATH', '')])
    return env


def run_tool(stage: str,
             argv: Sequence[str],
             timeout: float,
             cwd: Optional[Union[str, Path]] = None,
             env: Optional[Mapping[str, str]] = None,
             error_cls: Type[ExternalToolError] = ExternalToolError) -> str:
    """
    Runs one external tool to completion and returns its stdout.

    Args:
        stage: Stage name reported in errors and logs
        argv: Command and arguments
        timeout: Seconds to wait before killing the tool
        cwd: Working directory for the tool
        env: Environment for the tool
        error_cls: Error type raised on failure

    Raises:
        ToolTimeoutError: If the tool runs longer than timeout
        error_cls: If the tool cannot be started or exits non-zero
    """
    prover_logger.logger.info(f"[{stage}] running: {' '.join(str(a) for a in argv)}")
    started = time.monotonic()
    try:
        completed = subprocess.run(
            [str(a) for a in argv],
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ToolTimeoutError(stage, timeout, _combined_output(e.stdout, e.stderr)) from e
    except OSError as e:
        raise error_cls(stage, f"Failed to start {argv[0]}: {e}") from e

    elapsed = time.monotonic() - started
    if completed.returncode != 0:
        raise error_cls(
            stage,
            f"{argv[0]} exited with code {completed.returncode}",
            _combined_output(completed.stdout, completed.stderr),
        )

    prover_logger.logger.info(f"[{stage}] finished in {elapsed:.2f}s")
    return completed.stdout or ""


def format_prover_toml(fields: Mapping[str, TomlValue]) -> str:
    """
    Formats circuit inputs the way nargo reads them from Prover.toml:
    integer arrays as ``[1, 2, 3]`` and everything else as a quoted string.
    """
    lines = []
    for name, value in fields.items():
        if isinstance(value, (bytes, bytearray, list, tuple)):
            lines.append(f"{name} = [{', '.join(str(int(v)) for v in value)}]")
        else:
            lines.append(f'{name} = "{value}"')
    return '\n'.join(lines) + '\n'


def write_prover_toml(circuit_dir: Union[str, Path], fields: Mapping[str, TomlValue]) -> Path:
    path = Path(circuit_dir) / 'Prover.toml'
    path.write_text(format_prover_toml(fields), encoding='utf-8')
    return path


def _combined_output(stdout, stderr) -> str:
    parts = []
    for part in (stdout, stderr):
        if isinstance(part, bytes):
            part = part.decode('utf-8', errors='replace')
        if part:
            parts.append(part)
    return '\n'.join(parts)
