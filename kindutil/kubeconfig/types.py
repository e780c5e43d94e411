"""KUBECONFIG data types with the fields this package inspects or modifies.

Fields that are not inspected are kept as unstructured data in
``other_fields`` purely so they can be written back.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


class KubeconfigError(Exception):
    """Raised when a KUBECONFIG is malformed or does not meet expectations."""


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise KubeconfigError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise KubeconfigError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _list(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise KubeconfigError(f"field {key!r} must be a list, got {type(value).__name__}")
    return value


def _others(data: Mapping[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    return {k: copy.deepcopy(v) for k, v in data.items() if k not in known}


def _inline(out: dict[str, Any], others: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in others.items():
        if key in out:
            raise KubeconfigError(
                f"cannot have key {key!r} in inlined map: conflicts with struct field"
            )
        out[key] = copy.deepcopy(value)
    return out


@dataclass
class Cluster:
    """How to communicate with a kubernetes cluster."""

    server: str = ""
    other_fields: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("server",)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.server:
            out["server"] = self.server
        return _inline(out, self.other_fields)

    @classmethod
    def from_dict(cls, data: Any) -> "Cluster":
        data = _mapping(data, "cluster")
        return cls(server=_string(data, "server"), other_fields=_others(data, cls._KEYS))


@dataclass
class NamedCluster:
    """A nickname with its cluster information."""

    name: str = ""
    cluster: Cluster = field(default_factory=Cluster)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "cluster": self.cluster.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> "NamedCluster":
        data = _mapping(data, "named cluster")
        return cls(name=_string(data, "name"), cluster=Cluster.from_dict(data.get("cluster")))


@dataclass
class NamedUser:
    """A nickname with its user information, kept untouched."""

    name: str = ""
    user: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "user": copy.deepcopy(self.user)}

    @classmethod
    def from_dict(cls, data: Any) -> "NamedUser":
        data = _mapping(data, "named user")
        user = _mapping(data.get("user"), "user")
        return cls(name=_string(data, "name"), user=copy.deepcopy(dict(user)))


@dataclass
class Context:
    """References to a cluster and a user, plus other untouched fields."""

    cluster: str = ""
    user: str = ""
    other_fields: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("cluster", "user")

    def to_dict(self) -> dict[str, Any]:
        return _inline({"cluster": self.cluster, "user": self.user}, self.other_fields)

    @classmethod
    def from_dict(cls, data: Any) -> "Context":
        data = _mapping(data, "context")
        return cls(
            cluster=_string(data, "cluster"),
            user=_string(data, "user"),
            other_fields=_others(data, cls._KEYS),
        )


@dataclass
class NamedContext:
    """A nickname with its context information."""

    name: str = ""
    context: Context = field(default_factory=Context)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "context": self.context.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> "NamedContext":
        data = _mapping(data, "named context")
        return cls(name=_string(data, "name"), context=Context.from_dict(data.get("context")))


@dataclass
class Config:
    """A KUBECONFIG with the fields this package uses."""

    clusters: list[NamedCluster] = field(default_factory=list)
    users: list[NamedUser] = field(default_factory=list)
    contexts: list[NamedContext] = field(default_factory=list)
    current_context: str = ""
    other_fields: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("clusters", "users", "contexts", "current-context")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.clusters:
            out["clusters"] = [c.to_dict() for c in self.clusters]
        if self.users:
            out["users"] = [u.to_dict() for u in self.users]
        if self.contexts:
            out["contexts"] = [c.to_dict() for c in self.contexts]
        if self.current_context:
            out["current-context"] = self.current_context
        return _inline(out, self.other_fields)

    @classmethod
    def from_dict(cls, data: Optional[Any]) -> "Config":
        data = _mapping(data, "config")
        return cls(
            clusters=[NamedCluster.from_dict(c) for c in _list(data, "clusters")],
            users=[NamedUser.from_dict(u) for u in _list(data, "users")],
            contexts=[NamedContext.from_dict(c) for c in _list(data, "contexts")],
            current_context=_string(data, "current-context"),
            other_fields=_others(data, cls._KEYS),
        )


def kind_cluster_key(cluster_name: str) -> str:
    """Return the key that identifies a kind cluster in kubeconfig files."""
    return "kind-" + cluster_name


def check_kubeadm_expectations(cfg: Config) -> None:
    """Raise KubeconfigError unless cfg has exactly one cluster, user and context."""
    if len(cfg.clusters) != 1:
        raise KubeconfigError(
            f"kubeadm KUBECONFIG should have one cluster, but read {len(cfg.clusters)}"
        )
    if len(cfg.users) != 1:
        raise KubeconfigError(
            f"kubeadm KUBECONFIG should have one user, but read {len(cfg.users)}"
        )
    if len(cfg.contexts) != 1:
        raise KubeconfigError(
            f"kubeadm KUBECONFIG should have one context, but read {len(cfg.contexts)}"
        )