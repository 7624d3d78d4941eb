from .html import (
    RENDERERS,
    render_block,
    render_blocks,
    render_collection_body,
    render_collection_page,
    render_not_found,
    render_page,
)

__all__ = [
    "RENDERERS", "render_block", "render_blocks", "render_collection_body",
    "render_collection_page", "render_not_found", "render_page",
]
