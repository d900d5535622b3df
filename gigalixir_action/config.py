"""Runtime settings for the deploy action.

Values come from ``GIGALIXIR_ACTION_*`` environment variables, after a
local ``.env`` file (if any) has been loaded.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Literal, Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, field_validator

try:
    load_dotenv()
except Exception as e:  # pragma: no cover
    logger.warning(f"Failed to load .env file: {e}")

ENV_PREFIX = "GIGALIXIR_ACTION_"
ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_KEY_HELPER = ROOT_DIR / "scripts" / "add_private_key.py"


class Settings(BaseModel):
    cli: str = "gigalixir"
    cli_package: str = "gigalixir"
    install_cli: bool = True
    git_remote: str = "gigalixir"
    deploy_branch: str = "master"
    repo_path: str = "."
    poll_interval: float = Field(default=10.0, ge=0)
    max_poll_attempts: int = Field(default=60, ge=0)
    replicas: int = Field(default=1, ge=1)
    key_helper: str = str(DEFAULT_KEY_HELPER)
    url_host_domain: str = "gigalixirapp.com"
    log_level: Literal[
        "TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"
    ] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """Build settings from ``GIGALIXIR_ACTION_<FIELD>`` variables.

        Unset or empty variables keep the field default.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip() != "":
                values[name] = raw.strip()
        return cls(**values)
