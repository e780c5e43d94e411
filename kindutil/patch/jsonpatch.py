"""JSON Patch (RFC 6902) and JSON Merge Patch (RFC 7386) on decoded JSON values."""

from __future__ import annotations

import copy
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

_INDEX = re.compile(r"[+-]?[0-9]+")
_OPS_WITH_VALUE = frozenset({"add", "replace", "test"})
_OPS_WITH_FROM = frozenset({"move", "copy"})
_OPS = _OPS_WITH_VALUE | _OPS_WITH_FROM | {"remove"}
_MISSING = object()


class PatchError(Exception):
    """Raised when a patch is malformed or cannot be applied."""


@dataclass(frozen=True)
class _Operation:
    op: str
    path: str
    value: Any = None
    from_path: str = ""


def _parse_pointer(pointer: str) -> list[str]:
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise PatchError(f"invalid JSON pointer: {pointer!r}")
    return [t.replace("~1", "/").replace("~0", "~") for t in pointer[1:].split("/")]


def _index(token: str, length: int, *, inserting: bool = False) -> int:
    if inserting and token == "-":
        return length
    if not _INDEX.fullmatch(token):
        raise PatchError(f"value was not a proper array index: {token!r}")
    size = length + 1 if inserting else length
    idx = int(token)
    if idx >= size or idx < -size:
        raise PatchError(f"unable to access invalid index: {idx}")
    return idx + size if idx < 0 else idx


def _child(container: Any, token: str) -> Any:
    if isinstance(container, dict):
        if token not in container:
            raise PatchError(f"doc is missing key: {token!r}")
        return container[token]
    if isinstance(container, list):
        return container[_index(token, len(container))]
    raise PatchError(f"cannot traverse into {type(container).__name__} at {token!r}")


def _parent(doc: Any, pointer: str, op: str) -> tuple[Any, str]:
    tokens = _parse_pointer(pointer)
    if not tokens:
        raise PatchError(f"{op} operation does not apply: doc is missing path: {pointer!r}")
    container = doc
    for token in tokens[:-1]:
        container = _child(container, token)
    if not isinstance(container, (dict, list)):
        raise PatchError(f"{op} operation does not apply: doc is missing path: {pointer!r}")
    return container, tokens[-1]


def _get(doc: Any, pointer: str, op: str) -> Any:
    if pointer == "":
        return doc
    container, key = _parent(doc, pointer, op)
    if isinstance(container, dict):
        return container.get(key, _MISSING)
    return container[_index(key, len(container))]


def _add(doc: Any, pointer: str, value: Any) -> None:
    container, key = _parent(doc, pointer, "add")
    if isinstance(container, dict):
        container[key] = value
    else:
        container.insert(_index(key, len(container), inserting=True), value)


def _remove(doc: Any, pointer: str, op: str = "remove") -> Any:
    container, key = _parent(doc, pointer, op)
    if isinstance(container, dict):
        if key not in container:
            raise PatchError(f"unable to remove nonexistent key: {key!r}")
        return container.pop(key)
    return container.pop(_index(key, len(container)))


def _replace(doc: Any, pointer: str, value: Any) -> None:
    container, key = _parent(doc, pointer, "replace")
    if isinstance(container, dict):
        if key not in container:
            raise PatchError(f"replace operation does not apply: doc is missing key: {pointer!r}")
        container[key] = value
    else:
        container[_index(key, len(container))] = value


def _json_equal(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_json_equal(v, b[k]) for k, v in a.items())
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_json_equal(x, y) for x, y in zip(a, b))
    return type(a) is type(b) and a == b


def _run_add(doc: Any, op: _Operation) -> None:
    _add(doc, op.path, copy.deepcopy(op.value))


def _run_remove(doc: Any, op: _Operation) -> None:
    _remove(doc, op.path)


def _run_replace(doc: Any, op: _Operation) -> None:
    _replace(doc, op.path, copy.deepcopy(op.value))


def _run_move(doc: Any, op: _Operation) -> None:
    value = _remove(doc, op.from_path, "move")
    _add(doc, op.path, value)


def _run_copy(doc: Any, op: _Operation) -> None:
    value = _get(doc, op.from_path, "copy")
    if value is _MISSING:
        raise PatchError(f"copy operation does not apply: doc is missing from path: {op.from_path!r}")
    _add(doc, op.path, copy.deepcopy(value))


def _run_test(doc: Any, op: _Operation) -> None:
    actual = _get(doc, op.path, "test")
    if actual is _MISSING:
        actual = None
    if not _json_equal(actual, op.value):
        raise PatchError(f"testing value {op.path!r} failed")


_HANDLERS: dict[str, Callable[[Any, _Operation], None]] = {
    "add": _run_add,
    "remove": _run_remove,
    "replace": _run_replace,
    "move": _run_move,
    "copy": _run_copy,
    "test": _run_test,
}


@dataclass(frozen=True)
class JsonPatch:
    """A decoded JSON Patch: a sequence of operations applied in order."""

    operations: tuple[_Operation, ...] = ()

    def __len__(self) -> int:
        return len(self.operations)

    def apply(self, document: Any) -> Any:
        """Return a patched copy of ``document``; the original is left unchanged."""
        if not isinstance(document, (dict, list)):
            raise PatchError("invalid JSON document: must be an object or an array")
        doc = copy.deepcopy(document)
        for operation in self.operations:
            _HANDLERS[operation.op](doc, operation)
        return doc


def _decode_operation(raw: Any) -> _Operation:
    if not isinstance(raw, Mapping):
        raise PatchError(f"a JSON patch operation must be an object, got {type(raw).__name__}")
    op = raw.get("op")
    if op not in _OPS:
        raise PatchError(f"unexpected kind of operation: {op!r}")
    path = raw.get("path")
    if not isinstance(path, str):
        raise PatchError(f"{op} operation is missing a string path")
    if op in _OPS_WITH_VALUE and "value" not in raw:
        raise PatchError(f"{op} operation is missing a value")
    from_path = raw.get("from", "")
    if op in _OPS_WITH_FROM and (not isinstance(from_path, str) or "from" not in raw):
        raise PatchError(f"{op} operation is missing a string from path")
    return _Operation(op=op, path=path, value=copy.deepcopy(raw.get("value")), from_path=from_path)


def decode_patch(operations: Union[str, bytes, list, tuple]) -> JsonPatch:
    """Decode a JSON Patch from JSON text or from a list of operation objects."""
    if isinstance(operations, (str, bytes)):
        try:
            operations = json.loads(operations)
        except ValueError as err:
            raise PatchError(f"invalid JSON patch: {err}") from err
    if not isinstance(operations, (list, tuple)):
        raise PatchError("a JSON patch must be a list of operations")
    return JsonPatch(operations=tuple(_decode_operation(o) for o in operations))


def _prune(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune(v) for v in value]
    return value


def _merge_objects(doc: dict, patch: dict) -> dict:
    result = copy.deepcopy(doc)
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge_objects(result[key], value)
        else:
            result[key] = _prune(value)
    return result


def merge_patch(original: Any, patch: Any) -> Any:
    """Return ``original`` with the JSON merge patch ``patch`` applied."""
    if original is None:
        raise PatchError("invalid JSON document")
    if patch is None:
        raise PatchError("invalid JSON patch")
    if isinstance(patch, list):
        return _prune(patch)
    if not isinstance(patch, dict):
        raise PatchError("invalid JSON patch: must be an object or an array")
    if not isinstance(original, dict):
        return _prune(patch)
    return _merge_objects(original, patch)