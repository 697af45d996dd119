from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import ChangeType
from ..core.exceptions import ConcurrencyError


@dataclass(frozen=True)
class Document:
    """A stored document: plain JSON-like data plus a write counter."""

    collection: str
    doc_id: str
    data: dict[str, Any]
    version: int


@dataclass(frozen=True)
class ChangeEvent:
    collection: str
    doc_id: str
    change_type: ChangeType
    version: int
    data: dict[str, Any] = field(default_factory=dict)


def merge_documents(current: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Merge-write semantics: nested maps are merged, everything else replaced."""

    out = copy.deepcopy(dict(current))
    for key, value in patch.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), Mapping):
            out[key] = merge_documents(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def ensure_version(collection: str, doc_id: str, actual: int, expected: Optional[int]) -> None:
    """expected=None writes unconditionally, 0 means the document must not exist."""

    if expected is None or int(expected) == int(actual):
        return
    raise ConcurrencyError(
        f"{collection}/{doc_id}: expected version {expected}, found {actual}"
    )
