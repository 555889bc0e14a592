import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError

MANIFEST_FILE = "tessera.toml"


@dataclass
class RenderConfig:
    """Render context defaults handed to style functions.

    Examples in tessera.toml:

        [render]
        rtl = false
        disable_animations = true
        class_prefix = "tx"
    """

    rtl: bool = False
    disable_animations: bool = False
    class_prefix: str = "tx"


@dataclass
class ThemesConfig:
    """Theme files, merged in order (later files win)."""

    files: list[str] = field(default_factory=list)
    components: list[str] = field(default_factory=list)


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from tessera.toml.

    Paths in ``themes`` are resolved against ``project_root``.
    """

    name: str
    project_root: str
    render: RenderConfig = field(default_factory=RenderConfig)
    themes: ThemesConfig = field(default_factory=ThemesConfig)
    telemetry: bool = False

    def theme_paths(self) -> list[Path]:
        root = Path(self.project_root)
        return [root / name for name in self.themes.files]

    def component_paths(self) -> list[Path]:
        root = Path(self.project_root)
        return [root / name for name in self.themes.components]


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    project = data.get("project", {})
    render_data = data.get("render", {})
    themes_data = data.get("themes", {})

    files = themes_data.get("files", [])
    components = themes_data.get("components", [])
    if not isinstance(files, list) or not isinstance(components, list):
        raise ManifestError(f"{path}: [themes] files and components must be lists")

    render_config = RenderConfig(
        rtl=bool(render_data.get("rtl", False)),
        disable_animations=bool(render_data.get("disable_animations", False)),
        class_prefix=render_data.get("class_prefix", "tx"),
    )

    return ProjectManifest(
        name=project.get("name", path.parent.name),
        project_root=str(path.parent),
        render=render_config,
        themes=ThemesConfig(files=list(files), components=list(components)),
        telemetry=bool(project.get("telemetry", False)),
    )


def find_manifest(start: Path) -> Path | None:
    """Walk up from ``start`` looking for tessera.toml."""
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / MANIFEST_FILE
        if candidate.is_file():
            return candidate
    return None
