"""
Token resolver.

Turns a map of token specs into concrete values:

- literal tokens copy their value
- functional tokens are called with a read-only view of the base variables
- dependent tokens resolve their dependencies first (memoized within one
  pass) and are called with the dependency values in ``depends_on`` order

Resolution order follows declared dependencies, never the order of the
spec map, so reordering a spec map does not change any resolved value.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from tessera.core.errors import CyclicTokenDependency, UnknownTokenDependency
from tessera.specs.tokens import DependentToken, FunctionalToken, LiteralToken, coerce_token_map

logger = logging.getLogger(__name__)


def merge_token_specs(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Layer token maps by name; a later spec replaces an earlier one outright.

    Raw values are coerced to specs (callables become functional tokens).
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(coerce_token_map(layer))
    return merged


def resolve_tokens(
    specs: Mapping[str, Any],
    variables: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Resolve every token in ``specs``.

    Args:
        specs: Token name -> TokenSpec (raw values are treated as literals)
        variables: Base variables handed to functional tokens

    Returns:
        Token name -> concrete value, in ``specs`` order

    Raises:
        CyclicTokenDependency: If a dependency chain revisits a token
        UnknownTokenDependency: If a dependency is not in ``specs``
    """
    return _TokenPass(coerce_token_map(specs), variables or {}).run()


class _TokenPass:
    """State of a single resolution pass."""

    def __init__(self, specs: dict[str, Any], variables: Mapping[str, Any]):
        self.specs = specs
        self.variables = MappingProxyType(dict(variables))
        self.resolved: dict[str, Any] = {}
        self.stack: list[str] = []

    def run(self) -> dict[str, Any]:
        for name in self.specs:
            self.resolve(name)
        return {name: self.resolved[name] for name in self.specs}

    def resolve(self, name: str) -> Any:
        if name in self.resolved:
            return self.resolved[name]
        if name in self.stack:
            chain = self.stack[self.stack.index(name) :] + [name]
            raise CyclicTokenDependency(chain)

        spec = self.specs[name]
        self.stack.append(name)
        try:
            value = self._evaluate(name, spec)
        finally:
            self.stack.pop()
        self.resolved[name] = value
        return value

    def _evaluate(self, name: str, spec: Any) -> Any:
        if isinstance(spec, LiteralToken):
            return spec.value
        if isinstance(spec, FunctionalToken):
            return spec.fn(self.variables)
        if isinstance(spec, DependentToken):
            values = []
            for dependency in spec.depends_on:
                if dependency not in self.specs:
                    raise UnknownTokenDependency(name, dependency)
                values.append(self.resolve(dependency))
            logger.debug("Resolved dependencies of %s: %s", name, spec.depends_on)
            return spec.fn(values)
        raise TypeError(f"unsupported token spec for '{name}': {type(spec).__name__}")
