"""
Unit tests for the per-instance resolution cache.
"""

import gc

import pytest

from tessera.core.errors import CyclicTokenDependency
from tessera.runtime import AtomicRenderer, BoundKey, ResolutionCache, render_classes
from tessera.specs import (
    ComponentDefinition,
    InlineOverrides,
    StyleContext,
    Theme,
    dependent,
    literal,
)


@pytest.fixture
def cache() -> ResolutionCache:
    return ResolutionCache()


@pytest.fixture
def renderer() -> AtomicRenderer:
    return AtomicRenderer()


class TestCacheHits:
    """Unchanged inputs return the cached entry itself."""

    def test_same_inputs_return_same_entry(self, cache, button, green_theme, renderer):
        """Test a second resolution with equal inputs is a hit."""
        first = cache.resolve("b1", button, green_theme, {"primary": True}, renderer=renderer)
        second = cache.resolve("b1", button, green_theme, {"primary": True}, renderer=renderer)
        assert second is first
        assert cache.stats.hits == 1
        assert cache.stats.misses == 1

    def test_equal_props_in_new_mapping_hit(self, cache, button, green_theme):
        """Test variant props are compared by value."""
        first = cache.resolve("b1", button, green_theme, {"primary": True})
        assert cache.resolve("b1", button, green_theme, dict(primary=True)) is first

    def test_non_variant_props_ignored(self, cache, button, green_theme):
        """Test props that select no variant do not affect the key."""
        first = cache.resolve("b1", button, green_theme, {"primary": True, "on_click": object()})
        second = cache.resolve("b1", button, green_theme, {"primary": True, "on_click": object()})
        assert second is first

    def test_same_overrides_object_hits(self, cache, button, green_theme):
        """Test the same overrides object is a hit."""
        overrides = InlineOverrides(variables={"padding": 2})
        first = cache.resolve("b1", button, green_theme, overrides=overrides)
        assert cache.resolve("b1", button, green_theme, overrides=overrides) is first

    def test_equal_context_hits(self, cache, button, green_theme):
        """Test style contexts are compared by value."""
        first = cache.resolve("b1", button, green_theme, context=StyleContext(rtl=True))
        assert cache.resolve("b1", button, green_theme, context=StyleContext(rtl=True)) is first


class TestCacheMisses:
    """Any tracked input change recomputes the entry."""

    def test_variant_prop_change(self, cache, button, green_theme):
        """Test a variant prop change recomputes."""
        first = cache.resolve("b1", button, green_theme, {"primary": True})
        second = cache.resolve("b1", button, green_theme, {"primary": False})
        assert second is not first
        assert first.resolved_variables["background_color"] == "red"
        assert second.resolved_variables["background_color"] == "green"

    def test_new_theme_instance(self, cache, button, green_theme):
        """Test a structurally equal but new theme recomputes."""
        first = cache.resolve("b1", button, green_theme)
        equal_theme = green_theme.model_copy()
        assert cache.resolve("b1", button, equal_theme) is not first

    def test_new_definition_instance(self, cache, button, green_theme):
        """Test a new definition instance recomputes."""
        first = cache.resolve("b1", button, green_theme)
        assert cache.resolve("b1", button.extend(), green_theme) is not first

    def test_new_overrides_object(self, cache, button, green_theme):
        """Test overrides are compared by reference."""
        first = cache.resolve("b1", button, green_theme, overrides=InlineOverrides())
        assert cache.resolve("b1", button, green_theme, overrides=InlineOverrides()) is not first

    def test_renderer_change(self, cache, button, green_theme):
        """Test a new renderer recomputes."""
        first = cache.resolve("b1", button, green_theme, renderer=AtomicRenderer())
        assert cache.resolve("b1", button, green_theme, renderer=AtomicRenderer()) is not first

    def test_context_change(self, cache, button, green_theme):
        """Test a different style context recomputes."""
        first = cache.resolve("b1", button, green_theme)
        assert cache.resolve("b1", button, green_theme, context=StyleContext(rtl=True)) is not first

    def test_instances_are_independent(self, cache, button, green_theme):
        """Test instance keys never share entries."""
        first = cache.resolve("b1", button, green_theme, {"primary": True})
        other = cache.resolve("b2", button, green_theme, {"primary": False})
        assert cache.resolve("b1", button, green_theme, {"primary": True}) is first
        assert other is not first
        assert len(cache) == 2


class TestReentrantResolution:
    """A parent resolving while its children resolve through the same cache."""

    def test_child_resolved_inside_parent_style(self, cache, green_theme):
        """Test nested resolutions store independent entries."""
        child = ComponentDefinition(
            name="Icon",
            tokens={"size": literal(16)},
            styles={"root": lambda v, ctx: {"width": v["size"]}},
        )
        seen = []

        def parent_root(variables, context):
            entry = cache.resolve("child", child, green_theme)
            seen.append(entry)
            return {"min_width": entry.resolved_variables["size"] * 2}

        parent = ComponentDefinition(name="Button", styles={"root": parent_root})
        parent_entry = cache.resolve("parent", parent, green_theme)

        assert len(cache) == 2
        assert cache.get("parent") is parent_entry
        assert cache.get("child") is seen[0]
        assert parent_entry.resolved_styles["root"] == {"min_width": 32}
        assert seen[0].resolved_styles["root"] == {"width": 16}

    def test_parent_recompute_reuses_child_entry(self, cache, green_theme):
        """Test the child entry is a hit when the parent recomputes."""
        child = ComponentDefinition(name="Icon", styles={"root": {"width": 16}})
        seen = []

        def parent_root(variables, context):
            seen.append(cache.resolve("child", child, green_theme))
            return {}

        parent = ComponentDefinition(name="Button", styles={"root": parent_root})
        cache.resolve("parent", parent, green_theme)
        cache.resolve("parent", parent, green_theme, context=StyleContext(rtl=True))

        assert len(seen) == 2
        assert seen[1] is seen[0]


class TestCacheErrors:
    """Failed resolutions leave no entry behind."""

    def test_failure_stores_nothing(self, cache):
        """Test a failing first resolution stores nothing."""
        definition = ComponentDefinition(
            name="Broken",
            tokens={"a": dependent(["a"], lambda d: d[0])},
        )
        with pytest.raises(CyclicTokenDependency):
            cache.resolve("x", definition, Theme())
        assert "x" not in cache

    def test_failure_evicts_previous_entry(self, cache, button, green_theme):
        """Test a failing recompute evicts the stale entry."""
        cache.resolve("b1", button, green_theme)
        broken = button.extend(tokens={"padding": dependent(["padding"], lambda d: d[0])})
        with pytest.raises(CyclicTokenDependency):
            cache.resolve("b1", broken, green_theme)
        assert cache.get("b1") is None


class TestCacheLifecycle:
    """Tests for dispose and bind."""

    def test_dispose(self, cache, button, green_theme):
        """Test disposing drops the entry and tolerates repeats."""
        cache.resolve("b1", button, green_theme)
        cache.dispose("b1")
        assert "b1" not in cache
        cache.dispose("b1")

    def test_bind_disposes_on_collection(self, cache, button, green_theme):
        """Test a bound key is disposed when its owner is collected."""

        class Instance:
            pass

        owner = Instance()
        key = cache.bind(owner)
        assert isinstance(key, BoundKey)
        cache.resolve(key, button, green_theme)
        assert key in cache

        del owner
        gc.collect()
        assert key not in cache

    def test_bound_keys_are_unique(self, cache):
        """Test every bind hands out a new key."""

        class Instance:
            pass

        first, second = Instance(), Instance()
        assert cache.bind(first) != cache.bind(second)

    def test_clear(self, cache, button, green_theme):
        """Test clearing drops every entry."""
        cache.resolve("b1", button, green_theme)
        cache.clear()
        assert len(cache) == 0


class TestRenderClasses:
    """Tests for class rendering."""

    def test_slot_classes(self, cache, button, green_theme, renderer):
        """Test styled slots get classes and unstyled slots get ""."""
        definition = button.extend(slots={"icon": "Icon"})
        entry = cache.resolve("b1", definition, green_theme, renderer=renderer)
        assert entry.classes["root"].startswith("tx-")
        assert entry.classes["icon"] == ""

    def test_theme_renderer_is_default(self, cache, button):
        """Test the theme's renderer is used when none is given."""
        theme = Theme(renderer=lambda style: "themed")
        assert cache.resolve("b1", button, theme).classes["root"] == "themed"

    def test_no_renderer_gives_empty_classes(self):
        """Test slots render to "" without a renderer."""
        assert render_classes({"root": {"color": "red"}}, {"icon": None}) == {
            "icon": "",
            "root": "",
        }
