# external_runner.py
from __future__ import annotations
import logging, os, shutil, subprocess
from typing import NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)

NOT_FOUND = 127
NOT_EXEC  = 126


class CompletedRun(NamedTuple):
    returncode: int
    stdout: str
    stderr: str
    launched: bool = True

    @property
    def signal(self) -> Optional[int]:
        """Signal number that killed the child, or None for a normal exit."""
        return -self.returncode if self.returncode < 0 else None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def resolve_executable(cmd: str) -> Optional[str]:
    """Return absolute path to executable or None.
    If cmd contains '/', treat it as a direct path. Otherwise search PATH."""
    if "/" in cmd:
        return cmd if os.path.exists(cmd) else None
    return shutil.which(cmd)


def run_captured(argv: Sequence[str]) -> CompletedRun:
    """Run an external program to completion with stdout and stderr captured.
    Launch failures are reported as NOT_FOUND/NOT_EXEC with a message on stderr."""
    exe = resolve_executable(argv[0])
    if not exe:
        logger.debug(f"{argv[0]} not found")
        return CompletedRun(NOT_FOUND, "", f"{argv[0]}: command not found\n", launched=False)
    logger.debug(f"run_captured: {exe} with {len(argv) - 1} argument(s)")
    try:
        cp = subprocess.run([exe, *argv[1:]], capture_output=True,
                            text=True, encoding="utf-8", errors="replace")
    except PermissionError:
        return CompletedRun(NOT_EXEC, "", f"{argv[0]}: permission denied\n", launched=False)
    except FileNotFoundError:
        return CompletedRun(NOT_FOUND, "", f"{argv[0]}: no such file or directory\n", launched=False)
    logger.debug(f"{exe} exited with {cp.returncode}")
    return CompletedRun(cp.returncode, cp.stdout or "", cp.stderr or "")
