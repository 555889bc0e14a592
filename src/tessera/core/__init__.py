"""
Core primitives: errors, the deep merge primitive, and project manifest loading.
"""

from .errors import (
    ComponentDefinitionError,
    CyclicTokenDependency,
    ErrorContext,
    ManifestError,
    MergeError,
    TesseraError,
    ThemeLoadError,
    UnknownTokenDependency,
)
from .merge import deep_merge, merge_slot_styles, merge_static_styles, object_keys_to_values

__all__ = [
    "TesseraError",
    "ErrorContext",
    "MergeError",
    "CyclicTokenDependency",
    "UnknownTokenDependency",
    "ComponentDefinitionError",
    "ThemeLoadError",
    "ManifestError",
    "deep_merge",
    "merge_slot_styles",
    "merge_static_styles",
    "object_keys_to_values",
]
