"""
Reference CSS renderer.

The resolution core treats the renderer as an opaque ``style -> class name``
function. AtomicRenderer is a deterministic implementation: each distinct
style object gets a content-hashed class name and one CSS rule block.
"""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Iterable, Mapping
from typing import Any

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


class AtomicRenderer:
    """
    Render style objects to hashed class names, collecting their CSS.

    Example:
        renderer = AtomicRenderer(prefix="tx")
        renderer({"color": "red", ":hover": {"color": "blue"}})  # "tx-1a2b3c4d"
        renderer.css()
    """

    def __init__(self, prefix: str = "tx"):
        self.prefix = prefix
        self._rules: dict[str, str] = {}

    def __call__(self, style: Mapping[str, Any]) -> str:
        if not style:
            return ""
        digest = hashlib.sha1(
            json.dumps(style, sort_keys=True, default=str).encode("utf-8")
        ).hexdigest()
        class_name = f"{self.prefix}-{digest[:8]}"
        if class_name not in self._rules:
            self._rules[class_name] = "\n".join(_rule_lines(f".{class_name}", style))
        return class_name

    def css(self) -> str:
        """All rules rendered so far, in first-render order."""
        return "\n\n".join(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


def property_name(name: str) -> str:
    """``background_color`` / ``backgroundColor`` -> ``background-color``."""
    if name.startswith("--"):
        return name
    return _CAMEL.sub("-", name).replace("_", "-").lower()


def _rule_lines(selector: str, style: Mapping[str, Any], indent: int = 0) -> list[str]:
    """
    Generate a rule block for ``selector``.

    Nested mappings are pseudo selectors (``:hover``), ``&`` selectors
    (``& > span``) or at-rules (``@media ...``) and produce their own blocks.
    """
    prefix = " " * indent
    declarations: list[str] = []
    nested: list[str] = []

    for key, value in style.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            if key.startswith("@"):
                nested.append(f"{prefix}{key} {{")
                nested.extend(_rule_lines(selector, value, indent + 2))
                nested.append(f"{prefix}}}")
            else:
                nested.extend(_rule_lines(_nested_selector(selector, key), value, indent))
        else:
            declarations.append(f"{prefix}  {property_name(key)}: {_css_value(value)};")

    lines: list[str] = []
    if declarations:
        lines.append(f"{prefix}{selector} {{")
        lines.extend(declarations)
        lines.append(f"{prefix}}}")
    lines.extend(nested)
    return lines


def _nested_selector(selector: str, key: str) -> str:
    if "&" in key:
        return key.replace("&", selector)
    if key.startswith(":"):
        return f"{selector}{key}"
    return f"{selector} {key}"


def _css_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list | tuple):
        return " ".join(_css_value(item) for item in value)
    return str(value)


def variables_to_css(variables: Mapping[str, Any], prefix: str = "tx") -> str:
    """
    Convert scalar variables to a CSS :root block of custom properties.

    Nested values are skipped.
    """
    lines = [":root {"]
    for key, value in sorted(variables.items()):
        if isinstance(value, Mapping) or callable(value):
            continue
        lines.append(f"  --{prefix}-{property_name(key)}: {_css_value(value)};")
    lines.append("}")
    return "\n".join(lines)


def render_static_styles(static_styles: Iterable[Any]) -> str:
    """
    Render static styles: CSS strings pass through, mappings are
    ``{selector: style}``.
    """
    blocks: list[str] = []
    for entry in static_styles:
        if isinstance(entry, str):
            blocks.append(entry)
        elif isinstance(entry, Mapping):
            for selector, style in entry.items():
                if isinstance(style, Mapping):
                    blocks.append("\n".join(_rule_lines(selector, style)))
    return "\n\n".join(blocks)
