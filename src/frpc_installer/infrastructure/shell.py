"""Thin wrapper around subprocess for running system commands."""

import shutil
import subprocess
from typing import List, Optional, Sequence

from ..exceptions import CommandError


class CommandRunner:
    """Runs external commands and raises CommandError on failure."""

    def run(
        self,
        args: Sequence[str],
        input: Optional[str] = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess:
        command: List[str] = [str(arg) for arg in args]
        try:
            result = subprocess.run(
                command,
                input=input,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise CommandError(command, 127, str(e)) from e

        if check and result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr or result.stdout)
        return result

    @staticmethod
    def which(name: str) -> Optional[str]:
        return shutil.which(name)
