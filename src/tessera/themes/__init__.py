"""
Tessera theme resolution.

Usage:
    from tessera.themes import merge_themes, resolve_for_component

    theme = merge_themes(base_theme, brand_theme)
    resolution = resolve_for_component(theme, Button, props={"primary": True})
    resolution.variables["background_color"]
    resolution.styles["root"]
"""

from .compiler import compile_styles, style_template
from .loader import load_component, load_theme, load_themes
from .merger import (
    ComponentResolution,
    evaluate_variables,
    merge_component_styles,
    merge_component_variables,
    merge_site_variables,
    merge_theme_styles,
    merge_theme_tokens,
    merge_theme_variables,
    merge_themes,
    resolve_for_component,
)
from .tokens import merge_token_specs, resolve_tokens
from .variants import VariantResolution, active_variant_props, resolve_variants

__all__ = [
    # Tokens
    "resolve_tokens",
    "merge_token_specs",
    # Variants
    "VariantResolution",
    "resolve_variants",
    "active_variant_props",
    # Styles
    "compile_styles",
    "style_template",
    # Merging
    "ComponentResolution",
    "merge_themes",
    "merge_site_variables",
    "merge_component_variables",
    "merge_component_styles",
    "merge_theme_variables",
    "merge_theme_styles",
    "merge_theme_tokens",
    "evaluate_variables",
    "resolve_for_component",
    # Files
    "load_theme",
    "load_themes",
    "load_component",
]
