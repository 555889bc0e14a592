"""
Tessera - layered theme resolution for UI components.

Resolves site variables, component tokens, variants and inline overrides into
deterministic variables and slot styles, memoized per component instance.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core.errors import (
    ComponentDefinitionError,
    CyclicTokenDependency,
    MergeError,
    TesseraError,
    ThemeLoadError,
    UnknownTokenDependency,
)
from .core.merge import deep_merge
from .runtime import ProviderContext, ResolutionCache, get_styles
from .specs import (
    ComponentDefinition,
    InlineOverrides,
    StyleContext,
    Theme,
    VariantContribution,
    alias,
    compose,
    create_theme,
    dependent,
    formatted,
    functional,
    literal,
)
from .themes import merge_themes, resolve_for_component, resolve_tokens, style_template


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("tessera")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    # Errors
    "TesseraError",
    "MergeError",
    "CyclicTokenDependency",
    "UnknownTokenDependency",
    "ComponentDefinitionError",
    "ThemeLoadError",
    # Specs
    "ComponentDefinition",
    "VariantContribution",
    "Theme",
    "StyleContext",
    "InlineOverrides",
    "compose",
    "create_theme",
    "literal",
    "functional",
    "dependent",
    "alias",
    "formatted",
    # Resolution
    "deep_merge",
    "merge_themes",
    "resolve_tokens",
    "resolve_for_component",
    "style_template",
    "ResolutionCache",
    "ProviderContext",
    "get_styles",
]
