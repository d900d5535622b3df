"""Reading the action inputs into a :class:`DeploymentRequest`."""
from __future__ import annotations

import os
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from .errors import InputError


class DeploymentRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password: str
    ssh_private_key: str
    app: str
    migrations: bool
    create_database: bool
    set_url_host: bool = False
    config_values: str = ""

    def __repr__(self):
        return f"<DeploymentRequest {self.app} (migrations={self.migrations})>"

    __str__ = __repr__


def parse_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def get_input(
    name: str, required: bool = False, environ: Optional[Dict[str, str]] = None
) -> str:
    """Return the trimmed value of an action input.

    GitHub exposes input ``NAME`` as ``INPUT_NAME``; the bare ``NAME``
    variable is accepted too so the action can be run locally from a
    ``.env`` file.
    """
    environ = os.environ if environ is None else environ
    key = name.replace(" ", "_").upper()
    value = environ.get(f"INPUT_{key}")
    if value is None or value.strip() == "":
        value = environ.get(key, "")
    value = value.strip()

    if required and not value:
        raise InputError(f"Input required and not supplied: {name}")
    return value


def read_request(environ: Optional[Dict[str, str]] = None) -> DeploymentRequest:
    # all required inputs are resolved before anything runs
    return DeploymentRequest(
        username=get_input("GIGALIXIR_USERNAME", required=True, environ=environ),
        password=get_input("GIGALIXIR_PASSWORD", required=True, environ=environ),
        ssh_private_key=get_input("SSH_PRIVATE_KEY", required=True, environ=environ),
        app=get_input("GIGALIXIR_APP", required=True, environ=environ),
        migrations=parse_bool(get_input("MIGRATIONS", required=True, environ=environ)),
        create_database=parse_bool(
            get_input("CREATE_DATABASE", required=True, environ=environ)
        ),
        set_url_host=parse_bool(get_input("SET_URL_HOST", environ=environ)),
        config_values=get_input("CONFIG_VALUES", environ=environ),
    )
