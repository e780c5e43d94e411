"""Patching YAML document streams with merge patches and JSON 6902 patches."""

from __future__ import annotations

from typing import Iterable

from kindutil.patch.jsonpatch import PatchError
from kindutil.patch.matchinfo import (
    PatchJSON6902,
    convert_json6902_patches,
    parse_merge_patches,
)
from kindutil.patch.resource import parse_resources


def patch(
    to_patch: str,
    patches: Iterable[str] = (),
    patches_json6902: Iterable[PatchJSON6902] = (),
) -> str:
    """Apply merge patches, then JSON 6902 patches, to each document of a YAML stream.

    Patches are matched to documents on kind and apiVersion; a patch that sets
    no apiVersion matches any version of its kind. Returns the patched stream.
    """
    try:
        resources = parse_resources(to_patch)
    except PatchError as err:
        raise PatchError(f"failed to parse yaml to patch: {err}") from err
    try:
        merge_patches = parse_merge_patches(patches)
    except PatchError as err:
        raise PatchError(f"failed to parse patches: {err}") from err
    try:
        json6902_patches = convert_json6902_patches(patches_json6902)
    except PatchError as err:
        raise PatchError(f"failed to parse JSON 6902 patches: {err}") from err

    encoded: list[str] = []
    for resource in resources:
        for merge in merge_patches:
            try:
                resource.apply_merge_patch(merge)
            except PatchError as err:
                raise PatchError(f"failed to apply patch: {err}") from err
        for json_patch in json6902_patches:
            try:
                resource.apply_json6902_patch(json_patch)
            except PatchError as err:
                raise PatchError(f"failed to apply JSON 6902 patch: {err}") from err
        try:
            encoded.append(resource.encode())
        except PatchError as err:
            raise PatchError(f"failed to write patched resource: {err}") from err
    return "---\n".join(encoded)