"""Running migrations on the freshly deployed release."""
from __future__ import annotations

import sys
from typing import List

from . import actions
from .errors import MigrationError
from .gigalixir import GigalixirSession
from .health import ReleaseWatcher
from .runner import CommandRunner


def key_helper_command(helper: str, private_key: str) -> List[str]:
    if helper.endswith(".py"):
        return [sys.executable, helper, private_key]
    return [helper, private_key]


def install_private_key(runner: CommandRunner, helper: str, private_key: str):
    runner.add_secret(private_key)
    runner.run(key_helper_command(helper, private_key))


def migrate_or_rollback(session: GigalixirSession, app: str, baseline: int):
    """Run ``ps:migrate``; roll back to ``baseline`` if it fails.

    There is nothing to roll back to on a first deploy (``baseline == 0``),
    so only a warning is reported. Either way the run fails with the
    migration error's message. A failing rollback raises its own error.
    """
    try:
        with actions.group("Running migrations"):
            session.migrate(app)
    except Exception as e:
        if baseline == 0:
            actions.warning("Migration failed")
            raise MigrationError(str(e), baseline) from e

        actions.warning(
            f"Migration failed, rolling back to the previous release: {baseline}"
        )
        with actions.group("Rolling back"):
            session.rollback(app)
        raise MigrationError(str(e), baseline, rolled_back=True) from e


def run_migrations(
    session: GigalixirSession,
    runner: CommandRunner,
    watcher: ReleaseWatcher,
    app: str,
    baseline: int,
    private_key: str,
    key_helper: str,
):
    with actions.group("Adding private key to gigalixir"):
        install_private_key(runner, key_helper, private_key)

    with actions.group("Waiting for new release to deploy"):
        watcher.wait_for_new_release(app, baseline)

    migrate_or_rollback(session, app, baseline)
