from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Mapping


def deep_merge(base: Mapping[str, Any] | None, patch: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Merge ``patch`` onto ``base`` without mutating either side.

    Mappings present on both sides are merged recursively; any other patch
    value (lists included) replaces the base value wholesale.
    """

    merged: Dict[str, Any] = deepcopy(dict(base)) if isinstance(base, Mapping) else {}
    if not isinstance(patch, Mapping):
        return merged
    for key, value in patch.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged
