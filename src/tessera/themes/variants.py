"""
Variant resolver.

Selects the variant contributions that apply for the active props, in the
order the variants were declared on the component definition. A prop value
with no matching contribution contributes nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from tessera.specs.component import VariantContribution, variant_key

from .tokens import merge_token_specs


@dataclass(frozen=True)
class VariantResolution:
    """Token and style contributions of the active variants, lowest precedence first."""

    token_contributions: tuple[dict[str, Any], ...] = ()
    style_contributions: tuple[Any, ...] = ()


def active_variant_props(
    variants: Mapping[str, Mapping[str, VariantContribution]],
    props: Mapping[str, Any] | None,
) -> tuple[tuple[str, Any], ...]:
    """The style-affecting subset of ``props``, in variant declaration order."""
    props = props or {}
    return tuple((name, props.get(name)) for name in variants)


def resolve_variants(
    variants: Mapping[str, Mapping[str, VariantContribution]],
    props: Mapping[str, Any] | None,
    site_variables: Mapping[str, Any] | None = None,
) -> VariantResolution:
    """
    Collect contributions of the active variants.

    Token-producing functions are only called for active variants, with the
    site variables.

    Args:
        variants: Variant name -> value key -> contribution
        props: Active props of the component instance
        site_variables: Passed to token-producing functions

    Returns:
        VariantResolution with contributions in declaration order
    """
    token_contributions: list[dict[str, Any]] = []
    style_contributions: list[Any] = []

    for name, value in active_variant_props(variants, props):
        key = variant_key(value)
        if key is None:
            continue
        contribution = variants[name].get(key)
        if contribution is None:
            continue

        tokens = contribution.tokens
        if callable(tokens):
            tokens = tokens(site_variables or {})
        if tokens:
            token_contributions.append(merge_token_specs(tokens))
        if contribution.styles:
            style_contributions.append(contribution.styles)

    return VariantResolution(
        token_contributions=tuple(token_contributions),
        style_contributions=tuple(style_contributions),
    )
