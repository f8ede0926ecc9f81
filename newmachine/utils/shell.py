import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def as_root(argv: Sequence[str]) -> list[str]:
    """
    Prefix argv with sudo unless we already run as root.
    """
    if os.geteuid() == 0:
        return list(argv)
    return ["sudo", *argv]


def run_cmd(argv: Sequence[str], *, capture: bool = True) -> CmdResult:
    """
    Run a command and always log it.

    A missing executable is reported as exit code 127, like a shell would,
    so callers only ever look at the return code. Without ``capture`` the
    child shares our terminal, which sudo needs for its password prompt.
    """
    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    try:
        if capture:
            p = subprocess.run(argv_list, capture_output=True, text=True)
        else:
            p = subprocess.run(argv_list, text=True)
    except FileNotFoundError as e:
        logger.debug("Executable not found: %s", e)
        return CmdResult(argv=argv_list, returncode=127, stdout="", stderr=str(e))

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    return CmdResult(
        argv=argv_list,
        returncode=p.returncode,
        stdout=p.stdout or "",
        stderr=p.stderr or "",
    )
