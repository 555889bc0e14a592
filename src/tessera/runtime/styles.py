"""
Resolution entry point.

``get_styles`` is what a rendering layer calls for each component instance:
it reads the provider context (falling back to the empty theme when there is
none), resolves through the cache, records timings and assembles the root
class name.
"""

from __future__ import annotations

import copy
import logging
import time
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any

from tessera.core.manifest import ProjectManifest
from tessera.specs.component import ComponentDefinition
from tessera.specs.context import InlineOverrides, StyleContext
from tessera.specs.theme import Theme, empty_theme

from .cache import Renderer, ResolutionCache
from .telemetry import Telemetry

logger = logging.getLogger(__name__)

_provider_warning_logged = False


@dataclass(frozen=True)
class ProviderContext:
    """What the provider collaborator hands to the resolution entry point."""

    theme: Theme = field(default_factory=empty_theme)
    rtl: bool = False
    disable_animations: bool = False
    renderer: Renderer | None = None
    telemetry: Telemetry | None = None

    @classmethod
    def from_manifest(
        cls,
        manifest: ProjectManifest,
        theme: Theme,
        renderer: Renderer | None = None,
    ) -> ProviderContext:
        return cls(
            theme=theme,
            rtl=manifest.render.rtl,
            disable_animations=manifest.render.disable_animations,
            renderer=renderer,
            telemetry=Telemetry(enabled=manifest.telemetry),
        )


@dataclass(frozen=True)
class StylesResult:
    """Resolution output consumed by the renderer collaborator.

    Styles and variables are copies; the cached entry is never handed out.
    """

    classes: dict[str, str]
    resolved_styles: dict[str, dict[str, Any]]
    resolved_variables: dict[str, Any]
    theme: Theme = field(repr=False)


def warn_provider_missing() -> None:
    """Log the missing-provider warning once per process."""
    global _provider_warning_logged
    if _provider_warning_logged:
        return
    _provider_warning_logged = True
    logger.warning(
        "No theme provider context found: resolving with the empty theme. "
        "Wrap your component tree in a provider to apply a theme."
    )


def get_styles(
    definition: ComponentDefinition,
    instance_key: Hashable,
    cache: ResolutionCache,
    context: ProviderContext | None = None,
    props: Mapping[str, Any] | None = None,
    overrides: InlineOverrides | None = None,
    class_name: str | None = None,
) -> StylesResult:
    """
    Resolve classes, styles and variables of one component instance.

    Args:
        definition: Component definition
        instance_key: Stable key of the instance in ``cache``
        cache: Resolution cache shared by the render tree
        context: Provider context; ``None`` falls back to the empty theme
        props: Active props of the instance
        overrides: Inline variables/styles/class name
        class_name: Component's own root class name, rendered first

    Returns:
        StylesResult with the root class joined from ``class_name``, the
        rendered root class and the inline class name
    """
    if context is None:
        warn_provider_missing()
        context = ProviderContext()

    start = time.monotonic()

    style_context = StyleContext(
        rtl=context.rtl,
        disable_animations=context.disable_animations,
        display_name=definition.name,
    )
    entry = cache.resolve(
        instance_key,
        definition,
        context.theme,
        props,
        overrides,
        style_context,
        context.renderer,
    )

    classes = dict(entry.classes)
    inline_class = overrides.class_name if overrides is not None else None
    classes["root"] = " ".join(
        part for part in (class_name, classes.get("root"), inline_class) if part
    )

    if context.telemetry is not None:
        context.telemetry.record(definition.name, (time.monotonic() - start) * 1000)

    return StylesResult(
        classes=classes,
        resolved_styles=copy.deepcopy(entry.resolved_styles),
        resolved_variables=copy.deepcopy(entry.resolved_variables),
        theme=context.theme,
    )
