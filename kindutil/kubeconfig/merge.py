"""Merging kind kubeconfig entries into existing KUBECONFIG files."""

from __future__ import annotations

import contextlib
import os
from typing import Any, Iterator

from kindutil.kubeconfig.lock import lock_file, unlock_file
from kindutil.kubeconfig.paths import path_for_merge
from kindutil.kubeconfig.read import read
from kindutil.kubeconfig.types import Config, KubeconfigError, check_kubeadm_expectations
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


def _upsert(entries: list[Any], entry: Any) -> None:
    """Replace every entry named like ``entry``, or append it if there is none."""
    replaced = False
    for i, existing in enumerate(entries):
        if existing.name == entry.name:
            entries[i] = entry
            replaced = True
    if not replaced:
        entries.append(entry)


def write_merged(kind_config: Config, explicit_config_path: str = "") -> None:
    """Merge ``kind_config`` into the KUBECONFIG kubectl would merge into.

    The current context is set to the kind config's current context.
    """
    config_path = path_for_merge(explicit_config_path, os.environ.get)
    with _holding_lock(config_path):
        try:
            existing = read(config_path)
        except (KubeconfigError, OSError) as err:
            raise KubeconfigError(f"failed to get kubeconfig to merge: {err}") from err
        merge(existing, kind_config)
        write(existing, config_path)


def merge(existing: Config, kind: Config) -> None:
    """Merge the single cluster, user and context of ``kind`` into ``existing``."""
    check_kubeadm_expectations(kind)
    _upsert(existing.clusters, kind.clusters[0])
    _upsert(existing.users, kind.users[0])
    _upsert(existing.contexts, kind.contexts[0])
    existing.current_context = kind.current_context