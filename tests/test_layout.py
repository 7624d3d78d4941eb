"""
Tests layout resolution — lookup tables are total, absent options use block defaults
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from page_builder.blocks import BlockKind, CategoryGridContent, CollectionGridContent
from page_builder.core.layout import (
    ASPECT_RATIO, CARD_STYLE, CATEGORY_COLUMNS, CATEGORY_GAP, CATEGORY_PADDING,
    COLLECTION_COLUMNS, COLLECTION_GAP, COLLECTION_PADDING, HEADER_ALIGN,
    HOVER_EFFECT, TEXT_POSITION, resolve_grid_layout,
)


class TestTables:
    @pytest.mark.parametrize("table,values", [
        (CATEGORY_COLUMNS,   [2, 3, 4, 5, 6]),
        (COLLECTION_COLUMNS, [2, 3, 4, 5, 6]),
        (CATEGORY_GAP,       ["small", "medium", "large"]),
        (COLLECTION_GAP,     ["small", "medium", "large"]),
        (CATEGORY_PADDING,   ["none", "small", "medium", "large"]),
        (COLLECTION_PADDING, ["none", "small", "medium", "large"]),
        (ASPECT_RATIO,       ["square", "portrait", "landscape", "wide"]),
        (HEADER_ALIGN,       ["left", "center", "right"]),
        (CARD_STYLE,         ["rounded", "square", "circle"]),
        (HOVER_EFFECT,       ["zoom", "lift", "none"]),
        (TEXT_POSITION,      ["bottom", "center", "overlay"]),
    ])
    def test_total(self, table, values):
        for v in values:
            assert v in table

    def test_columns_are_distinct(self):
        values = [COLLECTION_COLUMNS[n] for n in (2, 3, 4, 5, 6)]
        assert len(set(values)) == 5


class TestCollectionGridLayout:
    def test_absent_options_use_defaults(self):
        layout = resolve_grid_layout(BlockKind.COLLECTION_GRID, None)
        assert layout.columns == COLLECTION_COLUMNS[4]
        assert layout.gap == COLLECTION_GAP["large"]
        assert layout.padding == COLLECTION_PADDING["medium"]
        assert layout.header_align == "text-left"

    def test_typed_config(self):
        config = CollectionGridContent.coerce({"columns": 6, "gap": "small", "headerAlign": "right"})
        layout = resolve_grid_layout(BlockKind.COLLECTION_GRID, config)
        assert layout.columns == COLLECTION_COLUMNS[6]
        assert layout.gap == COLLECTION_GAP["small"]
        assert layout.header_align == "text-right"

    def test_raw_mapping(self):
        layout = resolve_grid_layout(BlockKind.COLLECTION_GRID, {"columns": 2, "padding": "none"})
        assert layout.columns == COLLECTION_COLUMNS[2]
        assert layout.padding == "py-0"

    def test_value_outside_table_is_default(self):
        layout = resolve_grid_layout(BlockKind.COLLECTION_GRID, {"columns": 12, "gap": ["x"]})
        assert layout.columns == COLLECTION_COLUMNS[4]
        assert layout.gap == COLLECTION_GAP["large"]

    @pytest.mark.parametrize("n", [2, 3, 4, 5, 6])
    def test_each_column_count_resolves(self, n):
        config = CollectionGridContent.coerce({"columns": n})
        assert resolve_grid_layout(BlockKind.COLLECTION_GRID, config).columns == COLLECTION_COLUMNS[n]


class TestCategoryGridLayout:
    def test_defaults(self):
        layout = resolve_grid_layout(BlockKind.CATEGORY_GRID, CategoryGridContent())
        assert layout.columns == CATEGORY_COLUMNS[3]
        assert layout.gap == CATEGORY_GAP["medium"]
        assert layout.header_align == "text-center"
        assert layout.aspect_ratio == ASPECT_RATIO["landscape"]
        assert layout.card_style == "rounded-lg"
        assert layout.hover_effect == HOVER_EFFECT["zoom"]
        assert layout.text_position == "bottom-0"

    def test_options(self):
        config = CategoryGridContent.coerce({
            "aspectRatio": "square", "cardStyle": "circle", "hoverEffect": "none", "textPosition": "overlay",
        })
        layout = resolve_grid_layout(BlockKind.CATEGORY_GRID, config)
        assert layout.aspect_ratio == "aspect-square"
        assert layout.card_style == "rounded-full"
        assert layout.hover_effect == ""
        assert layout.text_position == TEXT_POSITION["overlay"]
