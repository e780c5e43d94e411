"""Encoding a KUBECONFIG to normalized YAML text."""

from __future__ import annotations

import yaml

from kindutil.kubeconfig.types import Config, KubeconfigError


def encode(cfg: Config) -> str:
    """Encode ``cfg`` as YAML with sorted keys; an empty config encodes to ``""``.

    Raises KubeconfigError if the config cannot be encoded.
    """
    try:
        data = cfg.to_dict()
    except KubeconfigError as err:
        raise KubeconfigError(f"failed to encode KUBECONFIG: {err}") from err
    try:
        encoded = yaml.safe_dump(
            data,
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
        )
    except yaml.YAMLError as err:
        raise KubeconfigError(f"failed to normalize KUBECONFIG encoding: {err}") from err
    if encoded == "{}\n":
        return ""
    return encoded