"""
Tessera specification types: tokens, components, themes and render context.
"""

from .component import (
    COMPOSE_OPTIONS,
    ComponentDefinition,
    VariantContribution,
    compose,
    variant_key,
)
from .context import DEFAULT_STYLE_CONTEXT, InlineOverrides, StyleContext
from .theme import EMPTY_THEME, ComponentTheme, Theme, ThemeDocument, create_theme, empty_theme
from .tokens import (
    DependentToken,
    FunctionalToken,
    LiteralToken,
    TokenKind,
    TokenSpec,
    alias,
    as_token_spec,
    dependent,
    formatted,
    functional,
    literal,
)

__all__ = [
    # Tokens
    "TokenKind",
    "TokenSpec",
    "LiteralToken",
    "FunctionalToken",
    "DependentToken",
    "literal",
    "functional",
    "dependent",
    "alias",
    "formatted",
    "as_token_spec",
    # Components
    "COMPOSE_OPTIONS",
    "ComponentDefinition",
    "VariantContribution",
    "compose",
    "variant_key",
    # Themes
    "Theme",
    "ThemeDocument",
    "ComponentTheme",
    "EMPTY_THEME",
    "create_theme",
    "empty_theme",
    # Context
    "StyleContext",
    "DEFAULT_STYLE_CONTEXT",
    "InlineOverrides",
]
