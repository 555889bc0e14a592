"""
Theme merger for Tessera.

Merges stacks of themes and resolves the final variables and styles of one
component instance. Variable precedence, lowest first:

1. Site variables
2. Component definition tokens
3. Theme component tokens (definition lineage, base names first)
4. Component variables: theme component variables (lineage order) deep merged
   with the inline variables
5. Active variant token contributions (variant declaration order)

Functional tokens and variant token functions see the site variables
overlaid with the component variables.

Style precedence, lowest first: definition styles, theme component styles
(lineage order), active variant styles, inline style overrides.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from tessera.core.errors import MergeError
from tessera.core.merge import deep_merge, merge_slot_styles, merge_static_styles
from tessera.specs.component import ComponentDefinition
from tessera.specs.context import DEFAULT_STYLE_CONTEXT, InlineOverrides, StyleContext
from tessera.specs.theme import Theme

from .compiler import compile_styles
from .tokens import merge_token_specs, resolve_tokens
from .variants import resolve_variants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentResolution:
    """Resolved variables and slot styles of one component instance."""

    variables: dict[str, Any]
    styles: dict[str, dict[str, Any]]


def merge_themes(*themes: Theme | None) -> Theme:
    """
    Merge themes; later themes win on every key.

    ``None`` entries are skipped. The renderer of the last theme that has one
    is kept.
    """
    present = [theme for theme in themes if theme is not None]
    renderer = next((t.renderer for t in reversed(present) if t.renderer is not None), None)

    merged = Theme(
        site_variables=merge_site_variables(*(t.site_variables for t in present)),
        component_variables=merge_theme_variables(*(t.component_variables for t in present)),
        component_styles=merge_theme_styles(*(t.component_styles for t in present)),
        component_tokens=merge_theme_tokens(*(t.component_tokens for t in present)),
        static_styles=_merge_lists(*(merge_static_styles(t.static_styles) for t in present)),
        font_faces=_merge_lists(*(t.font_faces for t in present)),
        renderer=renderer,
    )
    logger.debug("Merged %d themes into version %d", len(present), merged.version)
    return merged


def merge_site_variables(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    return _expect_mapping(deep_merge(*sources), "site_variables")


def merge_component_variables(*sources: Any) -> Any:
    """
    Merge variable sources of one component.

    Returns the merged mapping when every source is a mapping, otherwise a
    function of the site variables that evaluates each source and merges the
    results.
    """
    present = [source for source in sources if source is not None]
    if all(isinstance(source, Mapping) for source in present):
        return deep_merge(*present)

    def merged(site_variables: Mapping[str, Any]) -> dict[str, Any]:
        return evaluate_variables(*present, site_variables=site_variables)

    return merged


def evaluate_variables(*sources: Any, site_variables: Mapping[str, Any]) -> dict[str, Any]:
    """Evaluate mapping-or-function variable sources against the site variables."""
    evaluated = [
        source(site_variables) if callable(source) else source
        for source in sources
        if source is not None
    ]
    return _expect_mapping(deep_merge(*evaluated), "variables")


def merge_component_styles(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge slot styles; plain style objects and style functions on one slot are chained."""
    return _expect_mapping(merge_slot_styles(*sources), "styles")


def merge_theme_variables(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    names = _names(sources)
    return {
        name: merge_component_variables(*(source.get(name) for source in sources if source))
        for name in names
    }


def merge_theme_styles(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    names = _names(sources)
    return {
        name: merge_component_styles(*(source.get(name) for source in sources if source))
        for name in names
    }


def merge_theme_tokens(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    names = _names(sources)
    return {
        name: merge_token_specs(*(source.get(name) for source in sources if source))
        for name in names
    }


def resolve_for_component(
    theme: Theme,
    definition: ComponentDefinition,
    props: Mapping[str, Any] | None = None,
    overrides: InlineOverrides | None = None,
    context: StyleContext | None = None,
) -> ComponentResolution:
    """
    Resolve the variables and slot styles of a component instance.

    Args:
        theme: Active theme
        definition: Component definition
        props: Active props; only declared variants are read
        overrides: Inline variables/styles of the instance
        context: Direction / animation flags

    Returns:
        ComponentResolution with flat variables and slot styles
    """
    context = context or DEFAULT_STYLE_CONTEXT
    site_variables = theme.site_variables
    names = definition.theme_names

    component_variables = evaluate_variables(
        *(theme.component_variables.get(name) for name in names),
        overrides.variables if overrides is not None else None,
        site_variables=site_variables,
    )
    base_variables = {**site_variables, **component_variables}

    variants = resolve_variants(definition.variants, props, base_variables)

    specs = merge_token_specs(
        definition.tokens,
        *(theme.component_tokens.get(name) for name in names),
        component_variables,
        *variants.token_contributions,
    )
    variables = {**site_variables, **resolve_tokens(specs, base_variables)}

    stack: list[Any] = [definition.styles]
    stack.extend(theme.component_styles.get(name) for name in names)
    stack.extend(variants.style_contributions)
    if overrides is not None:
        stack.append(overrides.styles)

    styles = compile_styles(stack, variables, context)
    return ComponentResolution(variables=variables, styles=styles)


def _names(sources: tuple[Mapping[str, Any] | None, ...]) -> list[str]:
    names: dict[str, None] = {}
    for source in sources:
        for name in source or {}:
            names.setdefault(name)
    return list(names)


def _expect_mapping(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise MergeError(f"expected a mapping, got {type(value).__name__}", path=path)
    return dict(value)


def _merge_lists(*lists: Iterable[Any]) -> list[Any]:
    # drop entries an earlier theme already has; repeats within one theme stay
    merged: list[Any] = []
    for items in lists:
        earlier = list(merged)
        merged.extend(item for item in items if item not in earlier)
    return merged
