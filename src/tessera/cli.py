"""
Tessera CLI.

Commands for inspecting merged themes and resolved component styles.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

import typer

from tessera import __version__
from tessera.core.errors import TesseraError
from tessera.core.manifest import ProjectManifest, find_manifest, load_manifest
from tessera.runtime import (
    AtomicRenderer,
    ProviderContext,
    ResolutionCache,
    get_styles,
    render_static_styles,
    variables_to_css,
)
from tessera.specs.theme import Theme
from tessera.themes import evaluate_variables, load_component, load_themes, resolve_tokens

app = typer.Typer(help="Layered theme resolution for UI components")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log resolution details"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("version")
def version() -> None:
    """Show the Tessera version."""
    typer.echo(f"tessera {__version__}")


@app.command("merge")
def merge(
    themes: list[Path] = typer.Argument(..., help="Theme YAML files, lowest precedence first"),
    css: bool = typer.Option(False, "--css", help="Print site variables and static styles as CSS"),
    prefix: str = typer.Option("tx", "--prefix", help="CSS custom property prefix"),
) -> None:
    """Merge theme files and print the result."""
    try:
        theme = load_themes(themes)
        if css:
            typer.echo(variables_to_css(theme.site_variables, prefix))
            static = render_static_styles(theme.static_styles)
            if static:
                typer.echo("")
                typer.echo(static)
            return
        typer.echo(_dump(_describe_theme(theme)))
    except TesseraError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("resolve")
def resolve(
    component: Path = typer.Argument(..., help="Component definition YAML file"),
    theme_files: list[Path] = typer.Option(
        [], "--theme", "-t", help="Theme YAML file (repeatable, later wins)"
    ),
    props: list[str] = typer.Option([], "--prop", "-p", help="Active prop as name=value"),
    rtl: bool | None = typer.Option(None, "--rtl/--ltr", help="Text direction"),
    css: bool = typer.Option(False, "--css", help="Also print the generated CSS"),
) -> None:
    """Resolve a component against themes and print variables, styles and classes."""
    try:
        manifest = _find_project_manifest()
        if not theme_files and manifest is not None:
            theme_files = manifest.theme_paths()

        definition = load_component(component)
        theme = load_themes(theme_files)
        renderer = AtomicRenderer(prefix=manifest.render.class_prefix if manifest else "tx")

        if manifest is not None:
            context = ProviderContext.from_manifest(manifest, theme, renderer)
        else:
            context = ProviderContext(theme=theme, renderer=renderer)
        if rtl is not None:
            context = replace(context, rtl=rtl)

        result = get_styles(
            definition,
            instance_key=definition.name,
            cache=ResolutionCache(),
            context=context,
            props=_parse_props(props),
        )
    except TesseraError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        _dump(
            {
                "variables": result.resolved_variables,
                "styles": result.resolved_styles,
                "classes": result.classes,
            }
        )
    )
    if css:
        typer.echo("")
        typer.echo(renderer.css())


def _find_project_manifest() -> ProjectManifest | None:
    path = find_manifest(Path.cwd())
    return load_manifest(path) if path is not None else None


def _parse_props(values: list[str]) -> dict[str, Any]:
    props: dict[str, Any] = {}
    for item in values:
        name, sep, raw = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected name=value, got '{item}'", param_hint="--prop")
        lowered = raw.lower()
        if lowered in ("true", "false"):
            props[name] = lowered == "true"
        else:
            props[name] = raw
    return props


def _describe_theme(theme: Theme) -> dict[str, Any]:
    site_variables = theme.site_variables
    components: dict[str, Any] = {}
    names = [*theme.component_variables, *theme.component_tokens, *theme.component_styles]
    for name in dict.fromkeys(names):
        described: dict[str, Any] = {}
        source = theme.component_variables.get(name)
        if source is not None:
            described["variables"] = evaluate_variables(source, site_variables=site_variables)
        tokens = theme.component_tokens.get(name)
        if tokens:
            described["tokens"] = resolve_tokens(tokens, site_variables)
        slots = theme.component_styles.get(name)
        if slots:
            described["slots"] = sorted(slots)
        components[name] = described
    return {"site_variables": site_variables, "components": components}


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
