"""GitHub Actions workflow commands.

The CI host reads these from stdout: ``::group::`` folds the lines up to the
matching ``::endgroup::``, ``::warning::`` and ``::error::`` annotate the run
and ``::add-mask::`` hides a value in every later line of the log.
"""
from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from loguru import logger


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str = "", stream: Optional[TextIO] = None):
    stream = stream or sys.stdout
    stream.write(f"::{command}::{_escape_data(message)}\n")
    stream.flush()


def set_secret(value: str, stream: Optional[TextIO] = None):
    # every line of a multi-line secret is masked separately
    for line in value.splitlines() or [value]:
        if line.strip():
            issue_command("add-mask", line, stream=stream)


@contextmanager
def group(name: str, stream: Optional[TextIO] = None) -> Iterator[None]:
    issue_command("group", name, stream=stream)
    try:
        yield
    finally:
        issue_command("endgroup", stream=stream)


def info(message: str):
    logger.info(message)


def warning(message: str, stream: Optional[TextIO] = None):
    logger.warning(message)
    issue_command("warning", message, stream=stream)


def set_failed(message: str, stream: Optional[TextIO] = None) -> int:
    """Report the run as failed and return the process exit status."""
    logger.error(message)
    issue_command("error", message, stream=stream)
    return 1
