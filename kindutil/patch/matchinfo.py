"""Matching information for resources and patches, and parsed patch types.

Resources and patches are matched on their v1 TypeMeta: kind and apiVersion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import yaml

from kindutil.patch.jsonpatch import JsonPatch, PatchError, decode_patch


class _JsonLoader(yaml.SafeLoader):
    """A safe loader that leaves timestamps as strings, as JSON has none."""


_JsonLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def _to_json(value: Any) -> Any:
    if isinstance(value, dict):
        return {_json_key(k): _to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _yaml_to_json(raw: str) -> Any:
    """Decode the first YAML document of ``raw`` into JSON compatible values."""
    try:
        documents = yaml.load_all(raw, Loader=_JsonLoader)
        try:
            first = next(documents, None)
        finally:
            documents.close()
    except yaml.YAMLError as err:
        raise PatchError(f"failed to convert YAML to JSON: {err}") from err
    return _to_json(first)


def _string_field(data: dict, name: str) -> str:
    value = None
    for key, item in data.items():
        if key.casefold() == name.casefold():
            value = item
    if value is None:
        return ""
    if not isinstance(value, str):
        raise PatchError(f"failed to parse type meta: field {name!r} must be a string")
    return value


@dataclass(frozen=True)
class MatchInfo:
    """The kind and apiVersion used to match resources and patches."""

    kind: str = ""
    api_version: str = ""


@dataclass(frozen=True)
class PatchJSON6902:
    """A JSON 6902 patch in YAML or JSON, targeting resources by group, version and kind."""

    group: str = ""
    version: str = ""
    kind: str = ""
    patch: str = ""


@dataclass
class MergePatch:
    """A parsed merge patch: its raw text, JSON form and match information."""

    raw: str
    document: Any
    match_info: MatchInfo


@dataclass
class Json6902Patch:
    """A parsed JSON 6902 patch: its raw text, decoded patch and match information."""

    raw: str
    patch: JsonPatch
    match_info: MatchInfo


def parse_yaml_match_info(raw: str) -> MatchInfo:
    """Read the kind and apiVersion of the YAML document ``raw``."""
    try:
        data = _yaml_to_json(raw)
    except PatchError as err:
        raise PatchError(f"failed to parse type meta: {err}") from err
    if data is None:
        return MatchInfo()
    if not isinstance(data, dict):
        raise PatchError("failed to parse type meta: document is not a mapping")
    return MatchInfo(
        kind=_string_field(data, "kind"),
        api_version=_string_field(data, "apiVersion"),
    )


def group_version_to_api_version(group: str, version: str) -> str:
    """Join ``group`` and ``version`` into an apiVersion; the core group has none."""
    if not group:
        return version
    return f"{group}/{version}"


def match_info_for_json6902_patch(patch: PatchJSON6902) -> MatchInfo:
    """Return the match information of a configured JSON 6902 patch."""
    return MatchInfo(
        kind=patch.kind,
        api_version=group_version_to_api_version(patch.group, patch.version),
    )


def parse_merge_patches(raw_patches: Iterable[str]) -> list[MergePatch]:
    """Parse YAML merge patches, keeping each one's match information."""
    return [
        MergePatch(raw=raw, document=_yaml_to_json(raw), match_info=parse_yaml_match_info(raw))
        for raw in raw_patches
    ]


def convert_json6902_patches(patches: Iterable[PatchJSON6902]) -> list[Json6902Patch]:
    """Decode configured JSON 6902 patches, written in YAML or JSON."""
    return [
        Json6902Patch(
            raw=p.patch,
            patch=decode_patch(_yaml_to_json(p.patch)),
            match_info=match_info_for_json6902_patch(p),
        )
        for p in patches
    ]