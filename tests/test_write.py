import pytest

from kindutil.kubeconfig.types import (
    Cluster,
    Config,
    Context,
    KubeconfigError,
    NamedCluster,
    NamedContext,
    NamedUser,
)
from kindutil.kubeconfig.write import write


def _kind_config():
    return Config(
        clusters=[
            NamedCluster(
                name="kind-kind",
                cluster=Cluster(
                    server="https://127.0.0.1:6443",
                    other_fields={"certificate-authority-data": "definitelyacert"},
                ),
            )
        ],
        contexts=[
            NamedContext(name="kind-kind", context=Context(user="kind-kind", cluster="kind-kind"))
        ],
        users=[
            NamedUser(
                name="kind-kind",
                user={"client-certificate-data": "seemslegit", "client-key-data": "yep"},
            )
        ],
        current_context="kind-kind",
        other_fields={"apiVersion": "v1", "kind": "Config", "preferences": {}},
    )


EXPECTED = """apiVersion: v1
clusters:
- cluster:
    certificate-authority-data: definitelyacert
    server: https://127.0.0.1:6443
  name: kind-kind
contexts:
- context:
    cluster: kind-kind
    user: kind-kind
  name: kind-kind
current-context: kind-kind
kind: Config
preferences: {}
users:
- name: kind-kind
  user:
    client-certificate-data: seemslegit
    client-key-data: yep
"""


def test_write_non_existent_file(tmp_path):
    target = tmp_path / "bogus" / "extra-bogus"
    write(_kind_config(), str(target))
    assert target.read_text() == EXPECTED


def test_write_overwrites_existing(tmp_path):
    target = tmp_path / "config"
    target.write_text("old contents that are much longer than nothing\n" * 100)
    write(_kind_config(), str(target))
    assert target.read_text() == EXPECTED


def test_write_empty_config_gives_empty_file(tmp_path):
    target = tmp_path / "config"
    write(Config(), str(target))
    assert target.read_text() == ""


def test_write_encode_error(tmp_path):
    cfg = Config(other_fields={"current-context": "x"}, current_context="y")
    target = tmp_path / "config"
    with pytest.raises(KubeconfigError):
        write(cfg, str(target))
    assert not target.exists()