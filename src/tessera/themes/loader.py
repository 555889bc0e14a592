"""
YAML persistence for themes and component definitions.

Theme file:

    site_variables:
      brand: "#6264a7"
    components:
      Button:
        variables: {padding: "8px 16px"}
        tokens:
          background_color: {$site: brand}
        styles:
          root: {background: "{background_color}"}
    static_styles:
      - "*{box-sizing:border-box;}"

Component file:

    name: Button
    tokens:
      background_color: blue
      background_hover_color: {$format: "{0}cc", depends_on: [background_color]}
      border_color: {$ref: background_color}
    styles:
      root: {background: "{background_color}"}
    variants:
      primary:
        true:
          tokens: {background_color: red}

Token values are literals unless they are a mapping with one of the keys
``$ref`` (alias of another token), ``$format`` (formatted dependent token)
or ``$site`` (site variable lookup). Style slots are templates whose
``{name}`` placeholders are filled from the resolved variables.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tessera.core.errors import ThemeLoadError
from tessera.specs.component import ComponentDefinition
from tessera.specs.theme import Theme, create_theme
from tessera.specs.tokens import alias, formatted, functional, literal

from .compiler import style_template
from .merger import merge_themes

logger = logging.getLogger(__name__)


# =============================================================================
# Parsing helpers
# =============================================================================


def parse_token_value(name: str, value: Any) -> Any:
    """Parse one token value from its YAML form."""
    if isinstance(value, Mapping):
        if "$ref" in value:
            return alias(str(value["$ref"]))
        if "$format" in value:
            depends_on = value.get("depends_on", [])
            if not isinstance(depends_on, list):
                raise ThemeLoadError(f"token '{name}': depends_on must be a list")
            return formatted(str(value["$format"]), *(str(dep) for dep in depends_on))
        if "$site" in value:
            return _site_lookup(name, str(value["$site"]))
    return literal(value)


def _site_lookup(token: str, variable: str) -> Any:
    def lookup(variables: Mapping[str, Any]) -> Any:
        if variable not in variables:
            raise ThemeLoadError(f"token '{token}' references unknown site variable '{variable}'")
        return variables[variable]

    return functional(lookup)


def parse_tokens(data: Any, where: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ThemeLoadError(f"{where}: tokens must be a mapping")
    return {name: parse_token_value(name, value) for name, value in data.items()}


def parse_styles(data: Any, where: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ThemeLoadError(f"{where}: styles must be a mapping of slots")
    styles: dict[str, Any] = {}
    for slot, template in data.items():
        if not isinstance(template, Mapping):
            raise ThemeLoadError(f"{where}: style for slot '{slot}' must be a mapping")
        styles[slot] = style_template(template)
    return styles


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content) or {}
    except OSError as e:
        raise ThemeLoadError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ThemeLoadError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ThemeLoadError(f"{path}: expected a mapping at the top level")
    return data


# =============================================================================
# Loading
# =============================================================================


def load_theme(path: Path) -> Theme:
    """Load a theme from a YAML file."""
    data = _read_yaml(path)
    components: dict[str, Any] = {}
    for name, component in (data.get("components") or {}).items():
        if not isinstance(component, Mapping):
            raise ThemeLoadError(f"{path}: component '{name}' must be a mapping")
        where = f"{path}: {name}"
        components[name] = {
            "variables": component.get("variables"),
            "tokens": parse_tokens(component.get("tokens"), where),
            "styles": parse_styles(component.get("styles"), where),
        }

    try:
        theme = create_theme(
            {
                "site_variables": data.get("site_variables") or {},
                "components": components,
                "static_styles": data.get("static_styles") or [],
                "font_faces": data.get("font_faces") or [],
            }
        )
    except ValidationError as e:
        raise ThemeLoadError(f"Invalid theme {path}: {e}") from e

    logger.debug("Loaded theme %s (%d components)", path, len(components))
    return theme


def load_themes(paths: Iterable[Path]) -> Theme:
    """Load theme files and merge them in order (later files win)."""
    return merge_themes(*(load_theme(path) for path in paths))


def load_component(path: Path) -> ComponentDefinition:
    """Load a component definition from a YAML file."""
    data = _read_yaml(path)
    name = data.get("name") or path.stem
    where = f"{path}: {name}"

    variants: dict[str, dict[Any, Any]] = {}
    for variant_name, by_value in (data.get("variants") or {}).items():
        if not isinstance(by_value, Mapping):
            raise ThemeLoadError(f"{where}: variant '{variant_name}' must map values")
        variants[variant_name] = {
            key: {
                "tokens": parse_tokens((item or {}).get("tokens"), where) or None,
                "styles": parse_styles((item or {}).get("styles"), where) or None,
            }
            for key, item in by_value.items()
        }

    try:
        definition = ComponentDefinition(
            name=name,
            tokens=parse_tokens(data.get("tokens"), where),
            styles=parse_styles(data.get("styles"), where),
            variants=variants,
        )
    except ValidationError as e:
        raise ThemeLoadError(f"Invalid component {path}: {e}") from e

    logger.debug("Loaded component %s from %s", name, path)
    return definition
