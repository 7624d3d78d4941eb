"""
Tests block model — kind registry, lenient typed configs, raw block records
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from page_builder.blocks import (
    BLOCK_CONTENT, DATA_BOUND_KINDS, DEFAULT_EMPTY_MESSAGE, Block, BlockKind,
    CategoryGridContent, CollectionGridContent, CTAContent, GalleryContent,
    HeroContent, ProductGridContent, content_model,
)


# ── Registry ───────────────────────────────────────────────────────────────

class TestRegistry:
    def test_every_kind_has_a_config(self):
        assert set(BLOCK_CONTENT) == set(BlockKind)

    def test_content_model_lookup(self):
        assert content_model(BlockKind.COLLECTION_GRID) is CollectionGridContent

    def test_data_bound_kinds(self):
        assert DATA_BOUND_KINDS == {
            BlockKind.PRODUCT_GRID, BlockKind.CATEGORY_GRID, BlockKind.COLLECTION_GRID,
        }

    def test_parse_known(self):
        assert BlockKind.parse("collection-grid") is BlockKind.COLLECTION_GRID

    def test_parse_unknown(self):
        assert BlockKind.parse("carousel-3d") is None
        assert BlockKind.parse(None) is None

    @pytest.mark.parametrize("kind", list(BlockKind))
    def test_every_config_has_full_defaults(self, kind):
        # an empty payload is always a valid configuration
        assert isinstance(content_model(kind).coerce({}), content_model(kind))


# ── Defaults ───────────────────────────────────────────────────────────────

class TestDefaults:
    def test_collection_grid(self):
        c = CollectionGridContent.coerce({})
        assert c.columns == 4
        assert c.gap == "large"
        assert c.header_align == "left"
        assert c.padding == "medium"
        assert c.background_color == "transparent"
        assert c.show_empty_state is True
        assert c.empty_message == DEFAULT_EMPTY_MESSAGE == "No products in this collection yet."
        assert c.show_product_count is True
        assert c.sort_by == "newest"

    def test_category_grid(self):
        c = CategoryGridContent.coerce({})
        assert (c.columns, c.limit, c.gap, c.header_align) == (3, 6, "medium", "center")
        assert (c.aspect_ratio, c.overlay_style, c.overlay_color) == ("landscape", "gradient", "#000000")
        assert (c.card_style, c.hover_effect, c.text_position) == ("rounded", "zoom", "bottom")
        assert c.show_product_count is False
        assert c.show_description is False

    def test_product_grid(self):
        c = ProductGridContent.coerce({})
        assert c.limit == 4
        assert c.featured_only is True
        assert c.subtitle == "Curated Selection"

    def test_hero(self):
        c = HeroContent.coerce({})
        assert len(c.slides) == 1
        assert c.slides[0].title == "Hero Title"
        assert c.auto_play is False
        assert c.auto_play_interval == 5000
        assert c.overlay_opacity == 0.5

    def test_cta(self):
        c = CTAContent.coerce({})
        assert c.title == "Ready to get started?"
        assert c.button_text == "Get Started"


# ── Coercion ───────────────────────────────────────────────────────────────

class TestCoerce:
    def test_camel_case_keys(self):
        c = CollectionGridContent.coerce({"headerAlign": "center", "sortBy": "price-low", "showEmptyState": False})
        assert c.header_align == "center"
        assert c.sort_by == "price-low"
        assert c.show_empty_state is False

    def test_invalid_value_falls_back_to_default(self):
        c = CollectionGridContent.coerce({"columns": 9, "gap": "huge", "sortBy": "price-low"})
        assert c.columns == 4
        assert c.gap == "large"
        # valid keys survive next to invalid ones
        assert c.sort_by == "price-low"

    def test_unknown_keys_ignored(self):
        c = CategoryGridContent.coerce({"columns": 5, "sparkles": True})
        assert c.columns == 5
        assert not hasattr(c, "sparkles")

    def test_null_values_use_defaults(self):
        c = CategoryGridContent.coerce({"columns": None, "gap": None})
        assert c.columns == 3
        assert c.gap == "medium"

    @pytest.mark.parametrize("payload", [None, "text", 42, ["columns", 3]])
    def test_non_mapping_payload(self, payload):
        assert CollectionGridContent.coerce(payload) == CollectionGridContent()

    def test_invalid_nested_item_drops_the_field(self):
        g = GalleryContent.coerce({"columns": 2, "images": "not-a-list"})
        assert g.columns == 2
        assert g.images == GalleryContent().images


# ── Block records ──────────────────────────────────────────────────────────

class TestBlock:
    def test_kind_and_config(self):
        b = Block(id="b1", type="collection-grid", content={"columns": 3})
        assert b.kind is BlockKind.COLLECTION_GRID
        assert b.config().columns == 3

    def test_unknown_type_survives(self):
        b = Block.model_validate({"id": "x", "type": "legacy-slider", "content": {"speed": 3}})
        assert b.kind is None
        assert b.config() is None
        assert b.to_record() == {"id": "x", "type": "legacy-slider", "content": {"speed": 3}}

    def test_missing_id_gets_one(self):
        b = Block.model_validate({"type": "text"})
        assert b.id
        assert b.content == {}

    def test_non_mapping_content(self):
        b = Block.model_validate({"id": "b", "type": "text", "content": "oops"})
        assert b.content == {}

    def test_numeric_id_is_stringified(self):
        assert Block.model_validate({"id": 7, "type": "text"}).id == "7"
