"""
Per-instance resolution cache.

An entry is reused only while every tracked input is unchanged:

- component definition and theme, by version
- active variant props, by value
- inline overrides and renderer, by reference
- style context, by value

Any change replaces the whole entry. Entries are never updated in place, so
recursive resolutions (a parent resolving while its children resolve) never
observe a half-written entry.
"""

from __future__ import annotations

import itertools
import logging
import weakref
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from typing import Any

from tessera.specs.component import ComponentDefinition
from tessera.specs.context import DEFAULT_STYLE_CONTEXT, InlineOverrides, StyleContext
from tessera.specs.theme import Theme
from tessera.themes.merger import resolve_for_component
from tessera.themes.variants import active_variant_props

logger = logging.getLogger(__name__)

Renderer = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True)
class InputIdentities:
    """What a cache entry was computed from."""

    definition_version: int
    theme_version: int
    variant_props: tuple[tuple[str, Any], ...]
    overrides: InlineOverrides | None
    context: StyleContext
    renderer: Renderer | None

    def matches(self, other: InputIdentities) -> bool:
        return (
            self.definition_version == other.definition_version
            and self.theme_version == other.theme_version
            and self.variant_props == other.variant_props
            and self.overrides is other.overrides
            and self.context == other.context
            and self.renderer is other.renderer
        )


@dataclass(frozen=True)
class CacheEntry:
    """Resolved classes, variables and styles of one component instance."""

    input_identities: InputIdentities
    classes: dict[str, str]
    resolved_variables: dict[str, Any]
    resolved_styles: dict[str, dict[str, Any]]


@dataclass(frozen=True)
class BoundKey:
    """Instance key handed out by ``ResolutionCache.bind``."""

    number: int


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0


class ResolutionCache:
    """
    Memoizes component resolution per instance key.

    Example:
        cache = ResolutionCache()
        entry = cache.resolve("button-1", Button, theme, {"primary": True})
        assert cache.resolve("button-1", Button, theme, {"primary": True}) is entry
        cache.dispose("button-1")
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, CacheEntry] = {}
        self._keys = itertools.count(1)
        self.stats = CacheStats()

    def resolve(
        self,
        instance_key: Hashable,
        definition: ComponentDefinition,
        theme: Theme,
        props: Mapping[str, Any] | None = None,
        overrides: InlineOverrides | None = None,
        context: StyleContext | None = None,
        renderer: Renderer | None = None,
    ) -> CacheEntry:
        """
        Return the cached entry for ``instance_key`` or recompute it.

        ``renderer`` defaults to the theme's renderer. Without any renderer
        every slot class is ``""``.

        Raises:
            TesseraError: Resolution errors propagate; the key's previous
                entry is evicted and nothing is stored.
        """
        context = context or DEFAULT_STYLE_CONTEXT
        renderer = renderer if renderer is not None else theme.renderer
        identities = InputIdentities(
            definition_version=definition.version,
            theme_version=theme.version,
            variant_props=active_variant_props(definition.variants, props),
            overrides=overrides,
            context=context,
            renderer=renderer,
        )

        current = self._entries.get(instance_key)
        if current is not None and current.input_identities.matches(identities):
            self.stats.hits += 1
            logger.debug("Resolution cache hit for %r (%s)", instance_key, definition.name)
            return current

        self.stats.misses += 1
        logger.debug("Resolution cache miss for %r (%s)", instance_key, definition.name)
        try:
            resolution = resolve_for_component(theme, definition, props, overrides, context)
            classes = render_classes(resolution.styles, definition.slots, renderer)
        except Exception:
            self._entries.pop(instance_key, None)
            raise

        entry = CacheEntry(
            input_identities=identities,
            classes=classes,
            resolved_variables=resolution.variables,
            resolved_styles=resolution.styles,
        )
        self._entries[instance_key] = entry
        return entry

    def get(self, instance_key: Hashable) -> CacheEntry | None:
        return self._entries.get(instance_key)

    def dispose(self, instance_key: Hashable) -> None:
        """Drop the entry of a destroyed instance."""
        self._entries.pop(instance_key, None)

    def bind(self, owner: Any) -> BoundKey:
        """
        Allocate an instance key whose entry is disposed when ``owner`` is
        garbage collected.
        """
        key = BoundKey(next(self._keys))
        weakref.finalize(owner, self.dispose, key)
        return key

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, instance_key: object) -> bool:
        return instance_key in self._entries


def render_classes(
    styles: Mapping[str, Mapping[str, Any]],
    slots: Mapping[str, Any] | None = None,
    renderer: Renderer | None = None,
) -> dict[str, str]:
    """Render one class name per slot; slots without styles get ``""``."""
    classes = {slot: "" for slot in slots or {}}
    for slot, style in styles.items():
        classes[slot] = renderer(style) if renderer is not None else ""
    return classes
