#!/usr/bin/env python3
# scripts/add_private_key.py
"""Install the deploy key so `gigalixir ps:migrate` can ssh into the app."""
import os
import sys
from pathlib import Path


def install_key(key: str, ssh_dir: Path) -> Path:
    ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    key_path = ssh_dir / "id_rsa"
    if not key.endswith("\n"):
        key += "\n"
    fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        # an existing file keeps its old mode through O_CREAT
        os.fchmod(f.fileno(), 0o600)
        f.write(key)
    return key_path


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1 or not argv[0].strip():
        print("Usage: add_private_key.py <private-key>", file=sys.stderr)
        return 1

    ssh_dir = Path(os.environ.get("HOME", str(Path.home()))) / ".ssh"
    install_key(argv[0], ssh_dir)
    print(f"Installed private key in {ssh_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
