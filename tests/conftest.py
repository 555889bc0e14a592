"""Shared pytest fixtures for Tessera tests."""

import pytest

from tessera.runtime import styles as styles_module
from tessera.specs import ComponentDefinition, Theme, functional, literal
from tessera.themes import style_template


@pytest.fixture
def button() -> ComponentDefinition:
    """Return a Button definition with a primary variant."""
    return ComponentDefinition(
        name="Button",
        tokens={"background_color": literal("blue"), "padding": literal(4)},
        styles={
            "root": style_template({"background": "{background_color}", "padding": "{padding}"}),
        },
        variants={
            "primary": {True: {"tokens": {"background_color": functional(lambda v: "red")}}},
        },
    )


@pytest.fixture
def green_theme() -> Theme:
    """Return a theme overriding the Button background."""
    return Theme(
        site_variables={"brand": "#6264a7", "spacing_unit": 4},
        component_tokens={"Button": {"background_color": literal("green")}},
    )


@pytest.fixture(autouse=True)
def reset_provider_warning():
    """Let each test observe the once-per-process provider warning."""
    styles_module._provider_warning_logged = False
    yield
    styles_module._provider_warning_logged = False
