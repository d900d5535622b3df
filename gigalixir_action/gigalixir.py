"""Thin wrapper over the ``gigalixir`` command line tool.

:class:`GigalixirCLI` installs the tool and logs in; the returned
:class:`GigalixirSession` is the authenticated handle every later call goes
through. Each method maps to exactly one CLI invocation.
"""
from __future__ import annotations

import sys
from typing import List

from loguru import logger

from .runner import CommandRunner
from .schemas import AppRecord, PodStatus, Release, parse_output


class GigalixirCLI:
    def __init__(self, runner: CommandRunner, executable: str = "gigalixir"):
        self.runner = runner
        self.executable = executable

    def install(self, package: str = "gigalixir"):
        self.runner.run([sys.executable, "-m", "pip", "install", package])

    def login(self, email: str, password: str) -> "GigalixirSession":
        self.runner.add_secret(password)
        self.runner.run([self.executable, "login", "-e", email, "-y", "-p", password])
        logger.info(f"Logged in to gigalixir as {email}")
        return GigalixirSession(self.runner, email, self.executable)


class GigalixirSession:
    def __init__(self, runner: CommandRunner, email: str, executable: str = "gigalixir"):
        self.runner = runner
        self.email = email
        self.executable = executable

    def __repr__(self):
        return f"<GigalixirSession {self.email}>"

    def _run(self, *args: str) -> str:
        return self.runner.run([self.executable, *args])

    def set_git_remote(self, app: str):
        self._run("git:remote", app)

    def list_apps(self) -> List[AppRecord]:
        return parse_output(self._run("apps"), List[AppRecord], "apps")

    def create_app(self, app: str):
        self._run("apps:create", "-n", app)

    def create_database(self, app: str):
        self._run("pg:create", "-a", app, "--free", "--yes")

    def set_config(self, app: str, key: str, value: str):
        self._run("config:set", "-a", app, f"{key}={value}")

    def list_releases(self, app: str) -> List[Release]:
        return parse_output(self._run("releases", "-a", app), List[Release], "releases")

    def pod_status(self, app: str) -> PodStatus:
        return parse_output(self._run("ps", "-a", app), PodStatus, "ps")

    def scale(self, app: str, replicas: int = 1):
        self._run("ps:scale", f"--replicas={replicas}", "-a", app)

    def migrate(self, app: str):
        self._run("ps:migrate", "-a", app)

    def rollback(self, app: str):
        self._run("releases:rollback", "-a", app)
