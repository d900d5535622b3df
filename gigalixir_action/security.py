"""Keeping credentials out of the job log."""
from typing import Iterable, List

MASK = "***"


def redact(text: str, secrets: Iterable[str]) -> str:
    """Replace every occurrence of each secret in ``text`` with ``***``.

    Longer secrets are replaced first so a secret that contains another
    one is not half-masked. Empty strings are ignored.
    """
    for secret in sorted({s for s in secrets if s}, key=len, reverse=True):
        text = text.replace(secret, MASK)
    return text


def redact_command(command: List[str], secrets: Iterable[str]) -> str:
    secrets = list(secrets)
    return " ".join(redact(part, secrets) for part in command)
