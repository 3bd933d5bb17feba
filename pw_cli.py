# pw_cli.py
from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from pw_errors import ExternalToolFailure

log = logging.getLogger(__name__)


def _run(cmd: Sequence[str]) -> subprocess.CompletedProcess[bytes]:
    log.debug("running %s", " ".join(cmd))
    try:
        return subprocess.run(list(cmd), capture_output=True)
    except OSError as e:
        raise ExternalToolFailure(cmd[0], None, str(e)) from e


def pw_dump_bytes(exe: str = "pw-dump") -> bytes:
    p = _run([exe])
    if p.returncode != 0:
        msg = (p.stderr or p.stdout).decode("utf-8", "replace").strip()
        raise ExternalToolFailure(exe, p.returncode, msg)

    log.debug("%s returned %d bytes", exe, len(p.stdout))
    return p.stdout


def pw_cli_set_param(object_id: int, param: str, payload: str, exe: str = "pw-cli") -> None:
    """
    Run `pw-cli set-param <object_id> <param> <payload>` and wait for it.

    stdio is inherited so pw-cli's own output reaches the terminal.
    There is no timeout: a hung pw-cli blocks the caller.
    """
    cmd = [exe, "set-param", str(object_id), param, payload]
    log.debug("running %s", " ".join(cmd))
    try:
        p = subprocess.run(cmd)
    except OSError as e:
        raise ExternalToolFailure(exe, None, str(e)) from e

    if p.returncode != 0:
        raise ExternalToolFailure(exe, p.returncode)
