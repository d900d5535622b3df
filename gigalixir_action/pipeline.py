"""The deployment run, step by step.

Every step is a blocking call made in order. Failures propagate to the
caller unchanged; the only local recovery is the migration rollback in
:mod:`gigalixir_action.migrations`.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from loguru import logger

from . import actions
from .apps import app_exists, create_app
from .config import Settings
from .gigalixir import GigalixirCLI, GigalixirSession
from .git_manager import GitManager
from .health import ReleaseWatcher
from .inputs import DeploymentRequest
from .migrations import run_migrations
from .releases import format_release_message, get_current_release
from .runner import CommandRunner


class DeploymentPipeline:
    def __init__(
        self,
        request: DeploymentRequest,
        settings: Optional[Settings] = None,
        runner: Optional[CommandRunner] = None,
        git_manager: Optional[GitManager] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.request = request
        self.settings = settings or Settings()
        self.runner = runner or CommandRunner(cwd=self.settings.repo_path)
        self.git_manager = git_manager or GitManager(self.settings.repo_path)
        self.cli = GigalixirCLI(self.runner, self.settings.cli)
        self._sleep = sleep

        for secret in (request.password, request.ssh_private_key):
            self.runner.add_secret(secret)
            actions.set_secret(secret)

    def setup_session(self) -> GigalixirSession:
        if self.settings.install_cli:
            with actions.group("Installing gigalixir"):
                self.cli.install(self.settings.cli_package)

        with actions.group("Logging in to gigalixir"):
            session = self.cli.login(self.request.username, self.request.password)

        with actions.group("Setting git remote for gigalixir"):
            session.set_git_remote(self.request.app)
        return session

    def ensure_app(self, session: GigalixirSession) -> bool:
        """Create the app when missing; return True if it already existed."""
        app = self.request.app
        with actions.group("Checking existing apps"):
            exists = app_exists(session, app)

        if exists:
            logger.info(f"App {app} already exists")
        else:
            create_app(
                session,
                app,
                create_database=self.request.create_database,
                config_values=self.request.config_values,
            )
        return exists

    def run(self) -> int:
        """Deploy and return the release number seen before the push."""
        app = self.request.app
        logger.info(f"Starting deployment for {app}")

        session = self.setup_session()
        self.ensure_app(session)

        with actions.group("Getting current release"):
            baseline = get_current_release(session, app)
        actions.info(format_release_message(baseline))

        if self.request.set_url_host:
            with actions.group("Setting URL_HOST for app"):
                session.set_config(
                    app, "URL_HOST", f"{app}.{self.settings.url_host_domain}"
                )

        with actions.group("Deploying to gigalixir"):
            self.git_manager.force_push(
                self.settings.git_remote, self.settings.deploy_branch
            )

        if self.request.migrations:
            watcher = ReleaseWatcher(
                session,
                interval=self.settings.poll_interval,
                max_attempts=self.settings.max_poll_attempts,
                replicas=self.settings.replicas,
                sleep=self._sleep,
            )
            run_migrations(
                session,
                self.runner,
                watcher,
                app,
                baseline,
                self.request.ssh_private_key,
                self.settings.key_helper,
            )

        logger.success(f"Deployed {app} successfully!")
        return baseline
