"""Normalization of loosely-typed LLM output into a ``RepairGuide``.

Each output field is described by a ``FieldRule``: the source keys to try
in order, a type check each candidate value must pass, a converter for the
accepted value, and the default used when no candidate passes. Evaluating
the table is total: malformed input degrades to defaults, it never raises.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, NamedTuple, Tuple

from repair_api.expert.schemas import NO_OVERVIEW, NOT_AVAILABLE, RepairGuide


def stringify(value: Any) -> str:
    """Render a JSON value the way it reads in the reply.

    Booleans and null use their JSON spelling, integral floats lose the
    trailing ``.0``, and nested objects or arrays become compact JSON.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _is_nonempty_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _as_text(value: Any) -> str:
    return value


def _as_text_list(value: Any) -> List[str]:
    return [stringify(item) for item in value]


class FieldRule(NamedTuple):
    """How one ``RepairGuide`` field is filled from a loose record."""

    name: str
    sources: Tuple[str, ...]
    accepts: Callable[[Any], bool]
    convert: Callable[[Any], Any]
    default: Callable[[], Any]


def _text_rule(name: str) -> FieldRule:
    return FieldRule(name, (name,), _is_text, _as_text, lambda: NOT_AVAILABLE)


def _list_rule(name: str) -> FieldRule:
    return FieldRule(name, (name,), _is_sequence, _as_text_list, list)


FIELD_RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        "overview",
        ("overview", "summary", "message"),
        _is_nonempty_text,
        _as_text,
        lambda: NO_OVERVIEW,
    ),
    _list_rule("diagnostic_steps"),
    _list_rule("repair_steps"),
    _list_rule("tools_needed"),
    _text_rule("time_estimate"),
    _text_rule("cost_estimate"),
    _list_rule("parts"),
    _list_rule("videos"),
    _list_rule("recommended_repairs"),
)


def _resolve(rule: FieldRule, loose: Mapping) -> Any:
    for key in rule.sources:
        value = loose.get(key)
        if rule.accepts(value):
            return rule.convert(value)
    return rule.default()


def normalize_to_schema(loose: Any) -> RepairGuide:
    """Build a complete ``RepairGuide`` from whatever the coercer produced.

    Anything that is not a mapping (an array, a scalar, ``None``) carries
    no usable fields and yields the all-defaults guide.
    """
    if not isinstance(loose, Mapping):
        loose = {}
    values: Dict[str, Any] = {rule.name: _resolve(rule, loose) for rule in FIELD_RULES}
    return RepairGuide(**values)


def normalize_as_loose(guide: RepairGuide) -> Dict[str, Any]:
    """Reinterpret a normalized guide as a loose record."""
    return guide.model_dump()
