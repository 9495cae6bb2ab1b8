"""Tests for per-session category colour assignment."""
import pytest

from ehl.highlight.colors import PASTEL_COLORS, CategoryColorAssigner


class TestCategoryColorAssigner:

    def test_first_seen_order(self):
        colors = CategoryColorAssigner()
        assert colors.color_for("PERSON") == PASTEL_COLORS[0]
        assert colors.color_for("LOCATION") == PASTEL_COLORS[1]
        assert colors.color_for("ORGANIZATION") == PASTEL_COLORS[2]

    def test_same_category_same_color(self):
        colors = CategoryColorAssigner()
        first = colors.color_for("PERSON")
        colors.color_for("LOCATION")
        assert colors.color_for("PERSON") == first
        assert len(colors) == 2

    def test_palette_cycles(self):
        colors = CategoryColorAssigner()
        assigned = [colors.color_for(f"CAT{i}") for i in range(len(PASTEL_COLORS) + 2)]
        assert assigned[len(PASTEL_COLORS)] == PASTEL_COLORS[0]
        assert assigned[len(PASTEL_COLORS) + 1] == PASTEL_COLORS[1]

    def test_reset_is_deterministic(self):
        colors = CategoryColorAssigner()
        order = ["PERSON", "DATE", "LOCATION", "EVENT"]
        first_run = [colors.color_for(c) for c in order]
        colors.reset()
        assert len(colors) == 0
        assert [colors.color_for(c) for c in order] == first_run

    def test_reset_restarts_palette(self):
        colors = CategoryColorAssigner()
        colors.color_for("PERSON")
        colors.color_for("LOCATION")
        colors.reset()
        assert colors.color_for("LOCATION") == PASTEL_COLORS[0]

    def test_get_does_not_register(self):
        colors = CategoryColorAssigner()
        assert colors.get("PERSON") is None
        assert "PERSON" not in colors
        colors.color_for("PERSON")
        assert colors.get("PERSON") == PASTEL_COLORS[0]

    def test_sessions_are_independent(self):
        a, b = CategoryColorAssigner(), CategoryColorAssigner()
        a.color_for("PERSON")
        assert b.color_for("LOCATION") == PASTEL_COLORS[0]

    def test_categories_in_first_seen_order(self):
        colors = CategoryColorAssigner()
        for category in ["B", "A", "B", "C"]:
            colors.color_for(category)
        assert colors.categories == ["B", "A", "C"]
        assert list(colors) == ["B", "A", "C"]

    def test_custom_palette(self):
        colors = CategoryColorAssigner(palette=["red", "blue"])
        assert [colors.color_for(c) for c in "xyz"] == ["red", "blue", "red"]

    def test_empty_palette_rejected(self):
        with pytest.raises(ValueError):
            CategoryColorAssigner(palette=[])

    def test_default_palette_has_at_least_eight_colors(self):
        assert len(set(PASTEL_COLORS)) >= 8
