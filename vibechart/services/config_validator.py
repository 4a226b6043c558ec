from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from pydantic import ValidationError

from ..schemas.chart import ChartConfiguration
from .errors import ConfigurationError

logger = logging.getLogger("vibechart.validator")

FIXED_DEFAULTS: Dict[str, Any] = {
    "axisStyle": "classic",
    "animation": {"easing": "cubicOut", "duration": 1000},
    "font": {"family": "Inter", "size": 12, "weight": 500},
    "tooltipStyle": "shadow",
    "grid": "none",
    "themePreset": "shadcn-dark",
}


def _error_path(loc: Tuple[Any, ...]) -> str:
    # Union branches show up in ``loc`` as type names; keep only field names and indexes.
    parts: List[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(str(part))
        elif isinstance(part, str) and part[:1].islower() and "[" not in part and "'" not in part:
            parts.append(part)
    return ".".join(parts)


def _failing_paths(exc: ValidationError) -> List[str]:
    paths: List[str] = []
    for err in exc.errors():
        path = _error_path(tuple(err.get("loc", ()))) or "<root>"
        if path not in paths:
            paths.append(path)
    return paths


def validate_config(candidate: Any) -> ChartConfiguration:
    """Validate ``candidate`` against the chart schema or raise ``ConfigurationError``."""

    if not isinstance(candidate, Mapping):
        raise ConfigurationError("Schema validation failed", details="configuration must be a JSON object")
    try:
        return ChartConfiguration.model_validate(dict(candidate))
    except ValidationError as exc:
        raise ConfigurationError("Schema validation failed", paths=_failing_paths(exc)) from exc


def apply_fixed_defaults(config: Mapping[str, Any], failing_paths: Iterable[str] = ()) -> Dict[str, Any]:
    """Force-fill the commonly-missing preset fields with hardcoded values.

    A field is replaced when it is missing, empty, or one of ``failing_paths``
    points into it.
    """

    failing_fields = {path.split(".", 1)[0] for path in failing_paths}
    fixed = deepcopy(dict(config))
    for key, value in FIXED_DEFAULTS.items():
        if not fixed.get(key) or key in failing_fields:
            fixed[key] = deepcopy(value)
    return fixed


def validate_with_repair(beautified: Mapping[str, Any]) -> ChartConfiguration:
    """Validate, then retry exactly once on a fixed-defaults copy."""

    try:
        return validate_config(beautified)
    except ConfigurationError as first:
        logger.warning("schema validation failed (%s); applying fixed defaults", ", ".join(first.paths) or first.details)
        fixed = apply_fixed_defaults(beautified, first.paths)
        try:
            return validate_config(fixed)
        except ConfigurationError as final:
            logger.error("schema validation failed after repair: %s", final.details)
            raise
