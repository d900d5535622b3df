import subprocess
from typing import Iterable, List, Optional, Set

from loguru import logger

from .errors import CommandError
from .security import redact, redact_command


class CommandRunner:
    """Runs external commands one at a time and returns their stdout.

    Values registered with :meth:`add_secret` are masked in every logged
    command line and output.
    """

    def __init__(self, cwd: Optional[str] = None, secrets: Iterable[str] = ()):
        self.cwd = cwd
        self._secrets: Set[str] = {s for s in secrets if s}

    def add_secret(self, value: str):
        if value:
            self._secrets.add(value)
            # masks multi-line values line by line too
            self._secrets.update(line for line in value.splitlines() if line.strip())

    @property
    def secrets(self) -> Set[str]:
        return set(self._secrets)

    def run(self, command: List[str]) -> str:
        shown = redact_command(command, self._secrets)
        logger.info(f"$ {shown}")

        result = subprocess.run(
            command,
            cwd=self.cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
        )
        stdout = result.stdout or ""
        stderr = result.stderr or ""
        if stdout.strip():
            logger.info(redact(stdout.strip(), self._secrets))

        if result.returncode != 0:
            if stderr.strip():
                logger.warning(redact(stderr.strip(), self._secrets))
            raise CommandError(
                [redact(part, self._secrets) for part in command],
                result.returncode,
                stdout=redact(stdout, self._secrets),
                stderr=redact(stderr, self._secrets),
            )

        if stderr.strip():
            logger.debug(redact(stderr.strip(), self._secrets))
        return stdout
