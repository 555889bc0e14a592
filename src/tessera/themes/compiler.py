"""
Style compiler.

Applies a stack of style functions to resolved variables and merges the
per-slot results in stack order.
"""

from __future__ import annotations

import string
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from tessera.core.errors import MergeError
from tessera.core.merge import deep_merge
from tessera.specs.context import DEFAULT_STYLE_CONTEXT, StyleContext

StyleFunction = Callable[[Mapping[str, Any], StyleContext], Any]


def compile_styles(
    stack: Iterable[Any],
    variables: Mapping[str, Any],
    context: StyleContext | None = None,
) -> dict[str, dict[str, Any]]:
    """
    Compile a style stack into slot -> style object.

    Each stack entry is either a style function returning ``{slot: style}``
    or a slot mapping whose values are per-slot style functions or literal
    style objects. Later entries win.

    Args:
        stack: Style entries, lowest precedence first (``None`` entries skipped)
        variables: Resolved variables; functions see a read-only view
        context: Direction / animation flags

    Returns:
        Slot name -> merged style object

    Raises:
        MergeError: If a slot style is not a mapping
    """
    context = context or DEFAULT_STYLE_CONTEXT
    view = MappingProxyType(dict(variables))
    compiled: dict[str, dict[str, Any]] = {}

    for entry in stack:
        if not entry:
            continue
        for slot, style in _slot_styles(entry, view, context).items():
            if style is None:
                continue
            if not isinstance(style, Mapping):
                raise MergeError(
                    f"style for slot '{slot}' must be a mapping, got {type(style).__name__}",
                    path=slot,
                    component=context.display_name or None,
                )
            compiled[slot] = deep_merge(compiled.get(slot), style)

    return compiled


def _slot_styles(
    entry: Any, variables: Mapping[str, Any], context: StyleContext
) -> Mapping[str, Any]:
    if callable(entry):
        result = entry(variables, context)
        if result is None:
            return {}
        if not isinstance(result, Mapping):
            raise MergeError(
                f"style function must return a slot mapping, got {type(result).__name__}",
                component=context.display_name or None,
            )
        return result

    if not isinstance(entry, Mapping):
        raise MergeError(
            f"style entry must be a mapping or a function, got {type(entry).__name__}",
            component=context.display_name or None,
        )
    return {
        slot: style(variables, context) if callable(style) else style
        for slot, style in entry.items()
    }


def style_template(template: Mapping[str, Any]) -> StyleFunction:
    """
    Turn a literal style object with ``{token}`` placeholders into a style
    function.

    Example:
        style_template({"background": "{background_color}", ":hover": {"color": "{hover}"}})
    """

    def render(variables: Mapping[str, Any], context: StyleContext) -> dict[str, Any]:
        return _fill(template, variables)

    return render


class _StrictFormatter(string.Formatter):
    def get_value(self, key: Any, args: Any, kwargs: Any) -> Any:
        if isinstance(key, str) and key not in kwargs:
            raise MergeError(f"style template references unknown variable '{key}'", path=key)
        return super().get_value(key, args, kwargs)


_formatter = _StrictFormatter()


def _fill(value: Any, variables: Mapping[str, Any]) -> Any:
    if isinstance(value, Mapping):
        return {key: _fill(item, variables) for key, item in value.items()}
    if isinstance(value, list):
        return [_fill(item, variables) for item in value]
    if isinstance(value, str) and "{" in value:
        # a lone placeholder keeps the variable's own type
        if value.startswith("{") and value.endswith("}") and value[1:-1].isidentifier():
            name = value[1:-1]
            if name not in variables:
                raise MergeError(f"style template references unknown variable '{name}'", path=name)
            return variables[name]
        return _formatter.vformat(value, (), variables)
    return value
