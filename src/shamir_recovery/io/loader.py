"""Read share documents from JSON or YAML files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Tuple, Union

import yaml

from ..errors import MalformedInputError

YAML_SUFFIXES = (".yaml", ".yml")


class _PairList(list):
    """Marks a JSON object decoded as key/value pairs."""


def _keep_pairs(pairs: List[Tuple[str, Any]]) -> _PairList:
    return _PairList(pairs)


def _unpair(value: Any) -> Any:
    # Nested objects become dicts again; only the top level keeps duplicates.
    if isinstance(value, _PairList):
        return {key: _unpair(item) for key, item in value}
    if isinstance(value, list):
        return [_unpair(item) for item in value]
    return value


def load_share_document(path: Union[str, Path]) -> List[Tuple[str, Any]]:
    """
    Load a share document as top-level (key, value) pairs.

    JSON documents keep repeated top-level keys so duplicate share
    identifiers can be reported instead of silently overwritten.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MalformedInputError(f"Cannot read share document {path}: {exc}") from exc
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise MalformedInputError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise MalformedInputError(f"Share document {path} must contain an object")
        return [(str(key), value) for key, value in data.items()]
    try:
        data = json.loads(text, object_pairs_hook=_keep_pairs)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, _PairList):
        raise MalformedInputError(f"Share document {path} must contain an object")
    return [(key, _unpair(value)) for key, value in data]
