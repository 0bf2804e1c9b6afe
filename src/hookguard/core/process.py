"""Subprocess executor: spawn, spawn_detached, SubprocessResult."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from .errors import SpawnError

logger = logging.getLogger(__name__)

# detached children: pid -> (process, stdout buffer, stderr buffer)
_detached: dict[int, tuple[subprocess.Popen, IO[bytes], IO[bytes]]] = {}


@dataclass(frozen=True)
class SubprocessResult:
    """Exit status and raw output streams of a finished process."""

    exit_code: int
    stdout: bytes
    stderr: bytes

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def _is_windows() -> bool:
    return os.name == "nt"


def _prepare_args(args: Sequence[str]) -> list[str]:
    if isinstance(args, (str, bytes)) or not args:
        raise ValueError("args must be a non-empty sequence of strings")
    argv = [str(a) for a in args]
    if _is_windows():
        # cmd.exe needs the whole line so quoting and builtins survive
        return ["cmd.exe", "/c", subprocess.list2cmdline(argv)]
    return argv


def _start(
    argv: list[str],
    out: IO[bytes],
    err: IO[bytes],
    cwd: str | Path | None,
    env: Mapping[str, str] | None,
    detached: bool = False,
) -> subprocess.Popen:
    logger.debug("spawning %s", argv)
    try:
        return subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=out,
            stderr=err,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            start_new_session=detached and not _is_windows(),
        )
    except OSError as e:
        out.close()
        err.close()
        raise SpawnError(argv, e.strerror or str(e)) from e


def spawn(
    args: Sequence[str],
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> SubprocessResult:
    """Run *args* to completion and return its exit code and raw output.

    The first element is the executable. Arguments are never interpreted by a
    shell, except on Windows where they are joined and handed to ``cmd.exe``.
    stdout and stderr go to separate temporary files and are read back only
    after the process exits, so output size is bounded by disk, not pipes.

    Raises SpawnError if the executable cannot be started.
    """
    argv = _prepare_args(args)
    out = tempfile.TemporaryFile(prefix="hookguard-out-")
    err = tempfile.TemporaryFile(prefix="hookguard-err-")
    with out, err:
        process = _start(argv, out, err, cwd, env)
        try:
            exit_code = process.wait()
        except BaseException:
            # interrupted while waiting: don't leave the child behind
            if process.poll() is None:
                process.kill()
                process.wait()
            raise
        out.seek(0)
        err.seek(0)
        result = SubprocessResult(exit_code, out.read(), err.read())
    logger.debug("%s exited with %d", argv[0], result.exit_code)
    return result


def spawn_detached(
    args: Sequence[str],
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.Popen:
    """Start *args* in the background and return without waiting.

    Output is still captured to temporary files, which stay open until the
    child exits and :func:`reap_detached` runs. Each call first reaps children
    from earlier calls that have already exited.
    """
    argv = _prepare_args(args)
    reap_detached()
    out = tempfile.TemporaryFile(prefix="hookguard-out-")
    err = tempfile.TemporaryFile(prefix="hookguard-err-")
    process = _start(argv, out, err, cwd, env, detached=True)
    _detached[process.pid] = (process, out, err)
    return process


def reap_detached() -> int:
    """Release capture buffers of detached children that have exited."""
    reaped = 0
    for pid, (process, out, err) in list(_detached.items()):
        if process.poll() is None:
            continue
        out.close()
        err.close()
        del _detached[pid]
        reaped += 1
    return reaped
