import pytest
import yaml

from kindutil.patch.jsonpatch import PatchError
from kindutil.patch.matchinfo import (
    MatchInfo,
    PatchJSON6902,
    convert_json6902_patches,
    parse_merge_patches,
)
from kindutil.patch.resource import Resource, parse_resources, split_yaml_documents


def _resource(doc):
    return parse_resources(yaml.safe_dump(doc))[0]


def test_split_round_trip():
    docs = ["a: 1", "b: 2\n"]
    assert split_yaml_documents("\n---\n".join(docs)) == docs


def test_split_single_document():
    stream = "a: 1\nb: 2\n"
    assert split_yaml_documents(stream) == [stream]


def test_split_empty():
    assert split_yaml_documents("") == []


def test_split_drops_text_on_separator_line():
    assert split_yaml_documents("a: 1\n--- # note\nb: 2") == ["a: 1", "b: 2"]


def test_split_trailing_separator():
    assert split_yaml_documents("a: 1\n---") == ["a: 1"]


def test_parse_resources_match_info_and_document():
    resources = parse_resources("apiVersion: v1\nkind: A\nx: 1\n---\nkind: B\n")
    assert len(resources) == 2
    assert resources[0].match_info == MatchInfo(kind="A", api_version="v1")
    assert resources[0].document == {"apiVersion": "v1", "kind": "A", "x": 1}
    assert resources[1].match_info == MatchInfo(kind="B", api_version="")


def test_parse_resources_invalid_yaml():
    with pytest.raises(PatchError):
        parse_resources("a: [1")


def test_matches():
    r = _resource({"apiVersion": "v1", "kind": "A"})
    assert r.matches(MatchInfo(kind="A"))
    assert r.matches(MatchInfo(kind="A", api_version="v1"))
    assert not r.matches(MatchInfo(kind="A", api_version="v2"))
    assert not r.matches(MatchInfo(kind="B", api_version="v1"))


def test_apply_merge_patch():
    r = _resource({"apiVersion": "v1", "kind": "A", "spec": {"x": 1, "y": 1}})
    (p,) = parse_merge_patches(["kind: A\nspec:\n  x: 2\n"])
    assert r.apply_merge_patch(p) is True
    assert r.document["spec"] == {"x": 2, "y": 1}


def test_apply_merge_patch_no_match():
    doc = {"apiVersion": "v1", "kind": "A", "spec": {"x": 1}}
    r = _resource(doc)
    (p,) = parse_merge_patches(["kind: B\nspec:\n  x: 2\n"])
    assert r.apply_merge_patch(p) is False
    assert r.document == doc


def test_apply_json6902_patch():
    r = _resource({"apiVersion": "v1", "kind": "A", "spec": {"x": 1}})
    (p,) = convert_json6902_patches(
        [PatchJSON6902(version="v1", kind="A", patch='[{"op": "replace", "path": "/spec/x", "value": 5}]')]
    )
    assert r.apply_json6902_patch(p) is True
    assert r.document["spec"]["x"] == 5


def test_apply_json6902_patch_no_match():
    doc = {"apiVersion": "v1", "kind": "A", "spec": {"x": 1}}
    r = _resource(doc)
    (p,) = convert_json6902_patches(
        [PatchJSON6902(version="v2", kind="A", patch='[{"op": "remove", "path": "/spec"}]')]
    )
    assert r.apply_json6902_patch(p) is False
    assert r.document == doc


def test_apply_json6902_patch_failure():
    r = _resource({"apiVersion": "v1", "kind": "A"})
    (p,) = convert_json6902_patches(
        [PatchJSON6902(version="v1", kind="A", patch='[{"op": "replace", "path": "/missing", "value": 1}]')]
    )
    with pytest.raises(PatchError):
        r.apply_json6902_patch(p)


def test_encode_round_trip_and_sorted():
    doc = {"zeta": [1, 2], "alpha": {"b": "x", "a": True}}
    r = Resource(raw="", document=doc, match_info=MatchInfo())
    encoded = r.encode()
    assert yaml.safe_load(encoded) == doc
    assert encoded.startswith("alpha:")


def test_encode_simple():
    r = Resource(raw="", document={"kind": "Config"}, match_info=MatchInfo())
    assert r.encode() == "kind: Config\n"


def test_encode_null():
    r = Resource(raw="", document=None, match_info=MatchInfo())
    assert r.encode() == "null\n"