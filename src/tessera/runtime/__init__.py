"""
Tessera runtime: resolution cache, resolution entry point, telemetry and the
reference renderer.
"""

from .cache import BoundKey, CacheEntry, InputIdentities, ResolutionCache, render_classes
from .renderer import AtomicRenderer, render_static_styles, variables_to_css
from .styles import ProviderContext, StylesResult, get_styles, warn_provider_missing
from .telemetry import PerformanceStats, Telemetry

__all__ = [
    "ResolutionCache",
    "CacheEntry",
    "InputIdentities",
    "BoundKey",
    "render_classes",
    "ProviderContext",
    "StylesResult",
    "get_styles",
    "warn_provider_missing",
    "Telemetry",
    "PerformanceStats",
    "AtomicRenderer",
    "variables_to_css",
    "render_static_styles",
]
