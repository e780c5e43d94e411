"""Removing kind cluster entries from KUBECONFIG files."""

from __future__ import annotations

import contextlib
import os
from typing import Iterator

from kindutil.kubeconfig.lock import lock_file, unlock_file
from kindutil.kubeconfig.paths import paths
from kindutil.kubeconfig.read import read
from kindutil.kubeconfig.types import Config, KubeconfigError, kind_cluster_key
from kindutil.kubeconfig.write import write


@contextlib.contextmanager
def _holding_lock(config_path: str) -> Iterator[None]:
    try:
        lock_file(config_path)
    except OSError as err:
        raise KubeconfigError(f"failed to lock config file: {err}") from err
    try:
        yield
    finally:
        with contextlib.suppress(OSError):
            unlock_file(config_path)


def remove_kind(kind_cluster_name: str, explicit_path: str = "") -> None:
    """Remove the kind cluster ``kind_cluster_name`` from every KUBECONFIG file in use."""
    for config_path in paths(explicit_path, os.environ.get):
        with _holding_lock(config_path):
            try:
                existing = read(config_path)
            except (KubeconfigError, OSError) as err:
                raise KubeconfigError(
                    f"failed to read kubeconfig to remove KIND entry: {err}"
                ) from err
            if remove(existing, kind_cluster_name):
                write(existing, config_path)


def remove(cfg: Config, kind_cluster_name: str) -> bool:
    """Drop the entries of ``kind_cluster_name`` from ``cfg``; return True if it changed."""
    key = kind_cluster_key(kind_cluster_name)
    before = (len(cfg.clusters), len(cfg.users), len(cfg.contexts))

    cfg.clusters = [c for c in cfg.clusters if c.name != key]
    cfg.users = [u for u in cfg.users if u.name != key]
    cfg.contexts = [c for c in cfg.contexts if c.name != key]

    mutated = before != (len(cfg.clusters), len(cfg.users), len(cfg.contexts))
    if cfg.current_context == key:
        cfg.current_context = ""
        mutated = True
    return mutated