# kindutil

Helpers for tooling that manages local Kubernetes clusters:

- **kubeconfig handling**: read kubeadm-generated kubeconfigs, rename their
  entries under a cluster key, merge them into a user's existing kubeconfig
  and remove them again. Files are locked while they are changed, using a
  `<file>.lock` file in the same way as `kubectl`.
- **YAML patching**: apply JSON merge patches (RFC 7386) and JSON patches
  (RFC 6902) to a stream of Kubernetes-style YAML documents. Patches are
  matched to documents by `kind` and `apiVersion`.
- **terminal output**: a loading spinner that also works as a writer, and a
  check for whether a stream is a terminal.
- **test helpers**: small assertion functions that report mismatches through
  a test object's `errorf` method.

## Installation

```
pip install .
```

Python 3.10 or newer is required. The only runtime dependency is PyYAML.

## Kubeconfig

```python
from kindutil.kubeconfig.read import kind_from_raw_kubeadm
from kindutil.kubeconfig.merge import write_merged
from kindutil.kubeconfig.remove import remove_kind

with open("admin.conf", encoding="utf-8") as f:
    raw = f.read()

# rename the single cluster, user and context to "kind-kind"
# and point the cluster at a new server address
cfg = kind_from_raw_kubeadm(raw, "kind", "https://127.0.0.1:6443")

# merge into ~/.kube/config, $KUBECONFIG or an explicit path
write_merged(cfg, "")

# later, drop every entry named "kind-kind" from each kubeconfig in use
remove_kind("kind", "")
```

The modules in `kindutil.kubeconfig`:

- `types`: the `Config`, `NamedCluster`, `Cluster`, `NamedUser`,
  `NamedContext` and `Context` dataclasses, each with `to_dict()` and
  `from_dict()`. Fields that are not inspected are kept in `other_fields` so
  that they are written back unchanged. `kind_cluster_key("kind")` returns
  `"kind-kind"`. `check_kubeadm_expectations(cfg)` raises unless the config
  has exactly one cluster, one user and one context.
- `read`: `kind_from_raw_kubeadm(raw, cluster_name, server)` and
  `read(path)`. A missing file reads as an empty `Config`.
- `encode`: `encode(cfg)` renders a `Config` as YAML with sorted keys. An
  empty config encodes to `""`.
- `write`: `write(cfg, path)` creates the directory if needed and writes the
  file with mode `0600`.
- `merge`: `merge(existing, kind)` replaces entries that have the same name
  or appends them, and sets the current context. `write_merged(kind_config,
  explicit_path)` does the same on disk while holding the file's lock.
- `remove`: `remove(cfg, cluster_name)` drops the cluster's entries and
  clears the current context if it pointed at them. It returns whether
  anything changed. `remove_kind(cluster_name, explicit_path)` applies it to
  every kubeconfig file in use and writes back only the files that changed.
- `lock`: `lock_file`, `unlock_file`, `lock_name` and the `locked(path)`
  context manager.
- `paths`: `paths`, `path_for_merge`, `file_exists`,
  `discard_empty_and_duplicates` and `home_dir`.

Paths are chosen as `kubectl` chooses them. An explicit path wins. Otherwise
the entries of `$KUBECONFIG` are used: new entries go to the first of them
that exists, or to the last one if none exists. Otherwise
`$HOME/.kube/config` is used. On Windows, `home_dir` also looks at
`%HOMEDRIVE%%HOMEPATH%` and `%USERPROFILE%`.

Malformed or unexpected kubeconfigs raise `KubeconfigError`. A file that is
already locked raises `KubeconfigError` from `write_merged` and
`remove_kind`, and `FileExistsError` from `lock_file`.

## Patching YAML

```python
from kindutil.patch.apply import patch
from kindutil.patch.matchinfo import PatchJSON6902

docs = """\
kind: ClusterConfiguration
apiVersion: kubeadm.k8s.io/v1beta2
networking:
  podSubnet: 10.244.0.0/16
"""

merge = ["kind: ClusterConfiguration\nnetworking:\n  serviceSubnet: 10.96.0.0/12\n"]
ops = [PatchJSON6902(
    group="kubeadm.k8s.io", version="v1beta2", kind="ClusterConfiguration",
    patch="- op: add\n  path: /clusterName\n  value: demo\n",
)]

print(patch(docs, merge, ops))
```

A patch applies to a document when their `kind` matches and, if the patch
sets an `apiVersion`, when that matches too. For JSON 6902 patches the
`apiVersion` is built from `group` and `version`. The core group gives just
the version. Merge patches are applied before JSON 6902 patches. The
patched documents are written back as YAML with sorted keys and joined with
`---`.

The building blocks can also be used on their own:

- `kindutil.patch.jsonpatch`: `decode_patch(ops)` returns a `JsonPatch`, and
  `JsonPatch.apply(doc)` returns a patched copy of the document.
  `merge_patch(original, patch)` applies a JSON merge patch.
- `kindutil.patch.matchinfo`: `MatchInfo`, `parse_yaml_match_info`,
  `group_version_to_api_version`, `parse_merge_patches` and
  `convert_json6902_patches`.
- `kindutil.patch.resource`: `split_yaml_documents`, `parse_resources` and
  `Resource` with `matches`, `apply_merge_patch`, `apply_json6902_patch`
  and `encode`.

Every failure raises `PatchError`.

## Spinner

```python
import sys
import time
from kindutil.cli.spinner import Spinner
from kindutil.env import is_terminal

if is_terminal(sys.stderr):
    spinner = Spinner(sys.stderr)
    spinner.set_suffix(" Preparing nodes ")
    spinner.start()
    time.sleep(1)
    spinner.stop()
    spinner.write("\r ✓ Preparing nodes\n")
```

The spinner draws a frame every 100 ms on one line of its writer. It
assumes that the line length does not change. While it is running,
`write()` first moves back to the start of the line and then passes the
text on. `start()` does nothing if the spinner is already running.
`stop()` waits until the background thread has finished.

`is_terminal(w)` is true only for objects with a `fileno()` that refers to a
terminal.

## Test helpers

`kindutil.assertions.expect_error(t, expect_error, err)` and
`string_equal(t, expected, result)` call `t.errorf(...)` when an expectation
is not met. Any object with an `errorf(format, *args)` method can be used as
`t`.

## What is not included

The package has no logger with verbosity levels and no status-line helper
that prints ✓ / ✗ progress marks. You write to the spinner or to a stream
yourself. It provides no command-line program, and it does not create or
manage clusters. It only edits kubeconfig files and YAML documents.

## Running the tests

```
pip install .[test]
pytest
```