"""Exceptions raised by the deployment pipeline.

Everything derives from :class:`DeployError` so the entry point can report
any failure the same way.
"""
from __future__ import annotations

from typing import List, Optional


class DeployError(Exception):
    """Base class for every failure that should fail the run."""


class InputError(DeployError):
    """A required input was not supplied."""


class CommandError(DeployError):
    """An external process exited with a non-zero status."""

    def __init__(
        self,
        command: List[str],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        executable = command[0] if command else "<empty>"
        super().__init__(
            f"The process '{executable}' failed with exit code {returncode}"
        )


class ProviderResponseError(DeployError):
    """The CLI printed something that is not the expected JSON document."""


class GitPushError(DeployError):
    """Pushing to the provider remote failed."""


class HealthTimeoutError(DeployError):
    """The new release did not become healthy in time."""


class MigrationError(DeployError):
    """Migrations failed; carries the original error message."""

    def __init__(self, message: str, baseline: int, rolled_back: bool = False):
        self.baseline = baseline
        self.rolled_back = rolled_back
        super().__init__(message)
