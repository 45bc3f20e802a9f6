"""Deep-merge untrusted model output against the canonical shape for a task."""

from __future__ import annotations

import logging
import math
from typing import Any

from resume_insights.models.schemas import (
    TASK_SCHEMAS,
    Bool,
    ListOf,
    Num,
    Obj,
    SchemaNode,
    Str,
)
from resume_insights.models.task import TaskKind

logger = logging.getLogger(__name__)

_DROP = object()


def normalize(task: TaskKind, data: Any) -> dict[str, Any]:
    """Return the canonical structure for ``task`` populated from ``data``.

    Never raises: anything missing or of the wrong type becomes the
    declared default, and undeclared keys are dropped.
    """
    return merge(TASK_SCHEMAS[task], data)


def default_for(node: SchemaNode) -> Any:
    if isinstance(node, Obj):
        return {key: default_for(child) for key, child in node.fields.items()}
    if isinstance(node, ListOf):
        return []
    return node.default


def merge(node: SchemaNode, value: Any) -> Any:
    if isinstance(node, Obj):
        source = value if isinstance(value, dict) else {}
        return {key: merge(child, source.get(key)) for key, child in node.fields.items()}

    if isinstance(node, ListOf):
        if not isinstance(value, list):
            return []
        if isinstance(node.item, (Obj, ListOf)):
            return [merge(node.item, item) for item in value]
        # Scalar lists keep only elements that coerce cleanly
        items = (_coerce_scalar(node.item, item) for item in value)
        return [item for item in items if item is not _DROP]

    coerced = _coerce_scalar(node, value)
    return node.default if coerced is _DROP else coerced


def _coerce_scalar(node: Str | Num | Bool, value: Any) -> Any:
    if isinstance(node, Bool):
        return bool(value)

    if isinstance(node, Str):
        if isinstance(value, str):
            return value
        if _is_number(value):
            return _format_number(value)
        return _DROP

    if isinstance(node, Num):
        if _is_number(value):
            return _finite(value)
        if isinstance(value, str):
            return _parse_number(value.strip().rstrip("%"))
        return _DROP

    raise TypeError(f"Unknown schema node: {node!r}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite(value: int | float) -> Any:
    """Keep numbers representable as a finite float; drop the rest."""
    try:
        as_float = float(value)
    except OverflowError:
        logger.debug("Dropping out-of-range number")
        return _DROP
    return value if math.isfinite(as_float) else _DROP


def _format_number(value: int | float) -> Any:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        return str(value)
    except ValueError:
        # int exceeds the interpreter's digit limit for str()
        return _DROP


def _parse_number(text: str) -> Any:
    try:
        return _finite(int(text))
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        logger.debug("Dropping non-numeric value %r", text)
        return _DROP
    return _finite(number)
