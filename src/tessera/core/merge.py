"""
Deep merge primitive for theme layers.

Layers are processed strictly left to right, the earliest layer having the
lowest precedence:

- ``None`` and ``""`` layers are skipped
- mappings merge recursively, key by key
- functions at the same path are chained: the merged function calls both and
  deep merges their results (pass ``compose=False`` to let the later function
  replace the earlier one instead)
- sequences and scalars are replaced outright

Inputs are never mutated; every mapping and list in the result is a new
container.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .errors import MergeError

_MISSING = object()


def deep_merge(*values: Any, compose: bool = True) -> Any:
    """
    Merge theme layers into one value.

    Args:
        *values: Mappings or functions, lowest precedence first
        compose: Chain functions found at the same path instead of replacing

    Returns:
        The merged mapping (``{}`` when every layer is empty), or a function
        when the layers are functions

    Raises:
        MergeError: If a layer is malformed, with the offending path
    """
    result: Any = _MISSING
    for index, value in enumerate(values):
        if _is_empty(value):
            continue
        if not isinstance(value, Mapping) and not callable(value):
            raise MergeError(
                f"cannot merge a {type(value).__name__} layer, expected a mapping or function",
                path=f"[{index}]",
            )
        result = _merge_value(result, value, "", compose)
    if result is _MISSING:
        return {}
    return result


def merge_slot_styles(*values: Any) -> Any:
    """
    Merge ``{slot: style}`` layers where each slot holds a style function or
    a plain style object.

    Plain style objects are wrapped as constant style functions first, so the
    two forms can be layered on the same slot and are chained like any other
    functions.
    """
    return deep_merge(*(_slot_functions(value) for value in values))


def _slot_functions(value: Any) -> Any:
    if not isinstance(value, Mapping):
        return value
    return {
        slot: style if style is None or callable(style) else _constant_style(style)
        for slot, style in value.items()
    }


def _constant_style(style: Any) -> Callable[..., Any]:
    def constant(*args: Any, **kwargs: Any) -> Any:
        return _copy(style)

    return constant


def merge_static_styles(*values: Any) -> list[Any]:
    """
    Collect static style layers (CSS strings or style mappings) into a
    compact list, dropping empty layers. Nested lists are flattened one level.
    """
    merged: list[Any] = []
    for value in values:
        if isinstance(value, list | tuple):
            merged.extend(item for item in value if not _is_empty(item))
        elif not _is_empty(value):
            merged.append(value)
    return merged


def object_keys_to_values(value: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """
    Replace every leaf with its dotted key path.

    Example:
        object_keys_to_values({"a": 2, "b": {"c": [3, 4]}})
        # {"a": "a", "b": {"c": "b.c"}}
    """
    result: dict[str, Any] = {}
    for key, item in value.items():
        path = _join(prefix, key)
        if isinstance(item, Mapping):
            result[key] = object_keys_to_values(item, path)
        else:
            result[key] = path
    return result


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _join(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy(item) for item in value]
    return value


def _describe(value: Any) -> str:
    if isinstance(value, Mapping):
        return "mapping"
    if callable(value):
        return "function"
    return type(value).__name__


def _merge_value(previous: Any, value: Any, path: str, compose: bool) -> Any:
    if previous is _MISSING or previous is None:
        return _copy(value)
    if value is None:
        return None

    if isinstance(value, Mapping):
        if not isinstance(previous, Mapping):
            raise MergeError(f"cannot merge a mapping over a {_describe(previous)}", path)
        merged = dict(previous)
        for key, item in value.items():
            merged[key] = _merge_value(merged.get(key, _MISSING), item, _join(path, key), compose)
        return merged

    if callable(value):
        if isinstance(previous, Mapping):
            raise MergeError("cannot merge a function over a mapping", path)
        if compose and callable(previous):
            return _compose(previous, value, path)
        return value

    if isinstance(previous, Mapping):
        raise MergeError(f"cannot replace a mapping with a {_describe(value)}", path)
    return _copy(value)


def _compose(previous: Callable[..., Any], current: Callable[..., Any], path: str) -> Callable[..., Any]:
    def composed(*args: Any, **kwargs: Any) -> Any:
        earlier = previous(*args, **kwargs)
        later = current(*args, **kwargs)
        if later is None:
            return earlier
        return _merge_value(earlier, later, path, True)

    return composed
