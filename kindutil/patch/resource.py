"""YAML resources that patches are matched against and applied to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import yaml

from kindutil.patch.jsonpatch import PatchError, merge_patch
from kindutil.patch.matchinfo import (
    Json6902Patch,
    MatchInfo,
    MergePatch,
    _yaml_to_json,
    parse_yaml_match_info,
)

_SEPARATOR = "\n---"
_DOCUMENT_END = "\n...\n"


@dataclass
class Resource:
    """One YAML document: its raw text, its JSON form and its match information."""

    raw: str
    document: Any
    match_info: MatchInfo

    def matches(self, other: MatchInfo) -> bool:
        """Return True if ``other`` targets this resource.

        Kind must match; apiVersion is compared only when ``other`` sets it.
        """
        mine = self.match_info
        return mine.kind == other.kind and (
            not other.api_version or mine.api_version == other.api_version
        )

    def apply_json6902_patch(self, patch: Json6902Patch) -> bool:
        """Apply ``patch`` if it matches; return whether it matched."""
        if not self.matches(patch.match_info):
            return False
        self.document = patch.patch.apply(self.document)
        return True

    def apply_merge_patch(self, patch: MergePatch) -> bool:
        """Apply the merge ``patch`` if it matches; return whether it matched."""
        if not self.matches(patch.match_info):
            return False
        self.document = merge_patch(self.document, patch.document)
        return True

    def encode(self) -> str:
        """Return the current document as YAML with sorted keys."""
        try:
            encoded = yaml.safe_dump(
                self.document,
                default_flow_style=False,
                sort_keys=True,
                allow_unicode=True,
            )
        except yaml.YAMLError as err:
            raise PatchError(f"failed to encode resource: {err}") from err
        if encoded.endswith(_DOCUMENT_END):
            encoded = encoded[: -len(_DOCUMENT_END) + 1]
        return encoded


def split_yaml_documents(yaml_document_stream: str) -> list[str]:
    """Split a YAML stream on ``---`` separator lines.

    Text following ``---`` on a separator line is dropped, as is the newline
    before it. A final separator line with text but no newline ends the stream.
    """
    documents: list[str] = []
    data = yaml_document_stream
    while data:
        i = data.find(_SEPARATOR)
        if i < 0:
            documents.append(data)
            break
        after = data[i + len(_SEPARATOR) :]
        if not after:
            documents.append(data[:i])
            break
        j = after.find("\n")
        if j < 0:
            break
        documents.append(data[:i])
        data = after[j + 1 :]
    return documents


def parse_resources(yaml_document_stream: str) -> list[Resource]:
    """Parse every document of a YAML stream into a Resource."""
    return [
        Resource(
            raw=raw,
            document=_yaml_to_json(raw),
            match_info=parse_yaml_match_info(raw),
        )
        for raw in split_yaml_documents(yaml_document_stream)
    ]