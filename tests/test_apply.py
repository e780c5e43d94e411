import pytest
import yaml

from kindutil.patch.apply import patch as apply_patches
from kindutil.patch.jsonpatch import PatchError
from kindutil.patch.matchinfo import PatchJSON6902

DOC_A = {"apiVersion": "v1", "kind": "A", "spec": {"x": 1}}
DOC_B = {"apiVersion": "v1", "kind": "B", "spec": {"x": 1}}


def _stream(*docs):
    return "---\n".join(yaml.safe_dump(d) for d in docs)


def test_no_patches_round_trip():
    result = apply_patches(_stream(DOC_A, DOC_B), [], [])
    assert list(yaml.safe_load_all(result)) == [DOC_A, DOC_B]
    assert result.count("---\n") == 1


def test_worked_example():
    result = apply_patches("apiVersion: v1\nkind: A\nspec:\n  x: 1\n", ["kind: A\nspec:\n  x: 2\n"], [])
    assert result == "apiVersion: v1\nkind: A\nspec:\n  x: 2\n"


def test_merge_patch_only_matching_kind():
    result = apply_patches(_stream(DOC_A, DOC_B), ["kind: B\nspec:\n  y: 3\n"], [])
    a, b = yaml.safe_load_all(result)
    assert a == DOC_A
    assert b["spec"] == {"x": 1, "y": 3}


def test_merge_patch_api_version_mismatch_ignored():
    result = apply_patches(_stream(DOC_A), ["apiVersion: v2\nkind: A\nspec:\n  x: 9\n"], [])
    assert list(yaml.safe_load_all(result)) == [DOC_A]


def test_json6902_patch_applied():
    p = PatchJSON6902(version="v1", kind="A", patch="- op: add\n  path: /spec/z\n  value: 7\n")
    result = apply_patches(_stream(DOC_A, DOC_B), [], [p])
    a, b = yaml.safe_load_all(result)
    assert a["spec"] == {"x": 1, "z": 7}
    assert b == DOC_B


def test_merge_then_json6902_order():
    p = PatchJSON6902(version="v1", kind="A", patch='[{"op": "test", "path": "/spec/x", "value": 2}]')
    result = apply_patches(_stream(DOC_A), ["kind: A\nspec:\n  x: 2\n"], [p])
    (a,) = yaml.safe_load_all(result)
    assert a["spec"]["x"] == 2


def test_bad_yaml_to_patch():
    with pytest.raises(PatchError, match="failed to parse yaml to patch"):
        apply_patches("a: [1", [], [])


def test_bad_merge_patch():
    with pytest.raises(PatchError, match="failed to parse patches"):
        apply_patches(_stream(DOC_A), ["a: [1"], [])


def test_bad_json6902_patch():
    p = PatchJSON6902(version="v1", kind="A", patch='[{"op": "bogus", "path": "/x"}]')
    with pytest.raises(PatchError, match="failed to parse JSON 6902 patches"):
        apply_patches(_stream(DOC_A), [], [p])


def test_failing_json6902_patch():
    p = PatchJSON6902(version="v1", kind="A", patch='[{"op": "remove", "path": "/missing"}]')
    with pytest.raises(PatchError, match="failed to apply JSON 6902 patch"):
        apply_patches(_stream(DOC_A), [], [p])


def test_empty_stream():
    assert apply_patches("", ["kind: A\n"], []) == ""