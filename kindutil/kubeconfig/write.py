"""Writing KUBECONFIG files."""

from __future__ import annotations

import os

from kindutil.kubeconfig.encode import encode
from kindutil.kubeconfig.types import Config, KubeconfigError


def write(cfg: Config, config_path: str) -> None:
    """Write ``cfg`` to ``config_path``, creating its directory if necessary."""
    encoded = encode(cfg).encode("utf-8")
    directory = os.path.dirname(config_path)
    if directory and not os.path.exists(directory):
        try:
            os.makedirs(directory, mode=0o755, exist_ok=True)
        except OSError as err:
            raise KubeconfigError(f"failed to create directory for KUBECONFIG: {err}") from err
    try:
        fd = os.open(config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(encoded)
    except OSError as err:
        raise KubeconfigError(f"failed to write KUBECONFIG: {err}") from err