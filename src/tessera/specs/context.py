"""
Render-time inputs to style resolution: the cross-cutting style context and
per-instance inline overrides.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StyleContext(BaseModel):
    """
    Cross-cutting inputs style functions may read but never change.

    Example:
        StyleContext(rtl=True, disable_animations=True, display_name="Button")
    """

    model_config = ConfigDict(frozen=True)

    rtl: bool = Field(default=False, description="Right-to-left text direction")
    disable_animations: bool = Field(default=False, description="Animations disabled")
    display_name: str = Field(default="", description="Component being styled")

    @property
    def direction(self) -> str:
        return "rtl" if self.rtl else "ltr"


DEFAULT_STYLE_CONTEXT = StyleContext()


class InlineOverrides(BaseModel):
    """
    Per-instance overrides, the highest precedence layers.

    ``variables`` sits above theme variables but below active variants;
    ``styles`` sits above everything else.

    Example:
        InlineOverrides(
            variables={"background_color": "black"},
            styles={"root": {"margin": 0}},
            class_name="my-button",
        )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    variables: Any = Field(default=None, description="Mapping or (site_variables) -> mapping")
    styles: dict[str, Any] = Field(default_factory=dict, description="Slot -> style override")
    class_name: str | None = Field(default=None, description="Extra root class name")

    @field_validator("variables")
    @classmethod
    def _mapping_or_callable(cls, value: Any) -> Any:
        if value is None or isinstance(value, Mapping) or callable(value):
            return value
        raise ValueError(f"expected a mapping or a function, got {type(value).__name__}")
