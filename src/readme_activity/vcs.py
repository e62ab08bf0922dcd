from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable

from .errors import VersionControlError

logger = logging.getLogger(__name__)

NOTHING_TO_COMMIT = "nothing to commit"


class GitRepo:
    """Runs git in a working tree with captured output."""

    def __init__(self, workdir: str | Path, runner: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        self.workdir = Path(workdir)
        self._runner = runner

    def run(self, *args: str) -> str:
        command = ["git", *args]
        quoted = " ".join(shlex.quote(part) for part in command)
        try:
            result = self._runner(command, cwd=self.workdir, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise VersionControlError(quoted, 127, str(exc)) from exc
        output = f"{result.stdout or ''}{result.stderr or ''}"
        if result.returncode != 0:
            if NOTHING_TO_COMMIT in output:
                logger.info("Nothing to commit")
                return output
            raise VersionControlError(quoted, result.returncode, output.strip())
        logger.debug("%s: %s", quoted, output.strip())
        return output

    def commit_and_push(self, path: str | Path, message: str, name: str, email: str) -> None:
        self.run("config", "--global", "user.email", email)
        self.run("config", "--global", "user.name", name)
        self.run("add", str(path))
        self.run("commit", "-m", message)
        self.run("push")
