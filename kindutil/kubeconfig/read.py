"""Reading KUBECONFIG files and deriving kind kubeconfigs from kubeadm ones."""

from __future__ import annotations

import yaml

from kindutil.kubeconfig.types import (
    Config,
    KubeconfigError,
    check_kubeadm_expectations,
    kind_cluster_key,
)


def _parse(raw: str) -> Config:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as err:
        raise KubeconfigError(f"failed to parse KUBECONFIG: {err}") from err
    return Config.from_dict(data)


def kind_from_raw_kubeadm(raw_kubeadm_kubeconfig: str, cluster_name: str, server: str = "") -> Config:
    """Return a kind kubeconfig derived from a raw kubeadm kubeconfig.

    Every named reference is renamed to the kind key for ``cluster_name``;
    the cluster's server is replaced by ``server`` when it is set.
    """
    cfg = _parse(raw_kubeadm_kubeconfig)
    check_kubeadm_expectations(cfg)

    key = kind_cluster_key(cluster_name)
    cfg.clusters[0].name = key
    cfg.users[0].name = key
    cfg.contexts[0].name = key
    cfg.contexts[0].context.user = key
    cfg.contexts[0].context.cluster = key
    cfg.current_context = key

    if server:
        cfg.clusters[0].cluster.server = server
    return cfg


def read(config_path: str) -> Config:
    """Load the KUBECONFIG at ``config_path``; a missing file gives an empty Config."""
    try:
        with open(config_path, encoding="utf-8") as f:
            raw = f.read()
    except FileNotFoundError:
        return Config()
    return _parse(raw)