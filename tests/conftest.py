# tests/conftest.py
import json
import sys
from pathlib import Path
from typing import Dict, List
from unittest.mock import MagicMock

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gigalixir_action.errors import CommandError  # noqa: E402
from gigalixir_action.gigalixir import GigalixirSession  # noqa: E402
from gigalixir_action.runner import CommandRunner  # noqa: E402


class ScriptedRunner(CommandRunner):
    """
    CommandRunner that never spawns a process.

    ``responses`` maps a gigalixir subcommand (``"apps"``, ``"ps"``, ...) to
    either a string, an exception, or a list of those consumed one per call
    (the last element repeats).
    """

    def __init__(self, responses: Dict[str, object] = None):
        super().__init__()
        self.responses = dict(responses or {})
        self.commands: List[List[str]] = []

    def run(self, command: List[str]) -> str:
        self.commands.append(list(command))
        key = command[1] if command[0] == "gigalixir" and len(command) > 1 else command[0]
        response = self.responses.get(key, "")
        if isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]
        if isinstance(response, Exception):
            raise response
        return response

    def calls(self, subcommand: str) -> List[List[str]]:
        return [c for c in self.commands if len(c) > 1 and c[1] == subcommand]


def pods_json(version: int, statuses: List[str], desired: int = 1) -> str:
    return json.dumps(
        {
            "pods": [
                {"name": f"web-{i}", "version": str(version), "status": status}
                for i, status in enumerate(statuses)
            ],
            "replicas_desired": desired,
            "replicas_running": len(statuses),
        }
    )


def command_failure(subcommand: str, code: int = 1) -> CommandError:
    return CommandError(["gigalixir", subcommand], code, stderr=f"{subcommand} failed")


@pytest.fixture
def scripted_runner():
    return ScriptedRunner()


@pytest.fixture
def session(scripted_runner):
    return GigalixirSession(scripted_runner, "dev@example.com")


@pytest.fixture
def mock_session():
    """GigalixirSession double for tests that only check which calls are made."""
    return MagicMock(spec=GigalixirSession)
