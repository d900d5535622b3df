"""Checking for and provisioning the target application."""
from __future__ import annotations

import re
from typing import List, Tuple

from loguru import logger

from . import actions
from .gigalixir import GigalixirSession

ConfigEntry = Tuple[str, str]


def app_exists(session: GigalixirSession, app: str) -> bool:
    names = {record.unique_name for record in session.list_apps()}
    return app in names


def parse_config_values(text: str) -> List[ConfigEntry]:
    """Split ``key=value`` lines at the first ``=``.

    Lines without ``=`` or with an empty key are skipped; values are kept
    verbatim, including further ``=`` signs.
    """
    entries = []
    for line in re.split(r"\r?\n", text or ""):
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            if line.strip():
                logger.debug(f"Skipping config line without key=value: {line!r}")
            continue
        entries.append((key, value))
    return entries


def create_app(
    session: GigalixirSession,
    app: str,
    create_database: bool = False,
    config_values: str = "",
):
    """Create ``app`` with an optional free database and config values.

    Config values are set one call at a time; the first failing call stops
    the rest and nothing already applied is undone.
    """
    with actions.group("Creating new app"):
        session.create_app(app)

    if create_database:
        with actions.group("Creating Database for app"):
            session.create_database(app)

    for key, value in parse_config_values(config_values):
        with actions.group(f"Setting {key} for app"):
            session.set_config(app, key, value)
