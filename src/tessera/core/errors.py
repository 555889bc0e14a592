"""
Error types for Tessera theme merging, token resolution, and loading.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional


class TesseraError(Exception):
    """Base exception for all Tessera errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class MergeError(TesseraError):
    """
    Raised when merge inputs are malformed.

    Examples:
    - A layer that is neither a mapping nor a function
    - A mapping merged with a scalar at the same path
    - A style function returning something other than a style mapping
    """

    def __init__(self, message: str, path: str = "", component: str | None = None):
        self.path = path
        super().__init__(message, ErrorContext(path=path or "<root>", component=component))


class CyclicTokenDependency(TesseraError):
    """
    Raised when a dependent token chain revisits a token that is
    still being resolved.
    """

    def __init__(self, chain: Sequence[str]):
        self.chain = tuple(chain)
        super().__init__("cyclic token dependency: " + " -> ".join(self.chain))


class UnknownTokenDependency(TesseraError):
    """Raised when a dependent token names a token absent from the spec map."""

    def __init__(self, token: str, dependency: str):
        self.token = token
        self.dependency = dependency
        super().__init__(f"token '{token}' depends on unknown token '{dependency}'")


class ComponentDefinitionError(TesseraError):
    """
    Raised when a component definition cannot be composed.

    Examples:
    - Base component does not accept ``slots``/``slot_props``
    - Unrecognized composition option
    """

    pass


class ThemeLoadError(TesseraError):
    """Raised when a theme or component file cannot be loaded."""

    pass


class ManifestError(TesseraError):
    """Raised when tessera.toml is malformed."""

    pass


@dataclass
class ErrorContext:
    """
    Where an error happened inside a theme.

    Attributes:
        path: Dotted path inside the merged value (e.g. ``root.:hover.color``)
        component: Optional component name being resolved
    """

    path: str
    component: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "Button at root.color"
        """
        if self.component:
            return f"{self.component} at {self.path}"
        return f"at {self.path}"
