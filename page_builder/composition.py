"""
Collection page composition.

Two modes, kept for pages authored before the explicit collection-grid
block existed:

* explicit — the sequence contains a ``collection-grid`` block anywhere:
  all blocks render in their own order and the built-in product listing is
  suppressed;
* marker — otherwise, blocks before the first ``product-grid`` marker render
  above the built-in listing, the rest below; without a marker the whole
  sequence renders below it.

``product-grid`` markers are never rendered on a collection page.
"""
from dataclasses import dataclass, field
from typing import List, Sequence

from .blocks import BlockKind
from .blocks.base import Block


@dataclass
class Composition:
    before: List[Block] = field(default_factory=list)
    after: List[Block] = field(default_factory=list)
    show_listing: bool = True
    # default collection heading shown when nothing renders above the listing
    show_header: bool = True

    @property
    def blocks(self) -> List[Block]:
        return self.before + self.after


def _is_marker(block: Block) -> bool:
    return block.type == BlockKind.PRODUCT_GRID.value


def has_collection_grid(blocks: Sequence[Block]) -> bool:
    return any(b.type == BlockKind.COLLECTION_GRID.value for b in blocks)


def compose_collection_page(blocks: Sequence[Block]) -> Composition:
    blocks = list(blocks or [])

    if has_collection_grid(blocks):
        return Composition(
            before=[b for b in blocks if not _is_marker(b)],
            after=[],
            show_listing=False,
            show_header=False,
        )

    marker = next((i for i, b in enumerate(blocks) if _is_marker(b)), -1)
    if marker < 0:
        before, after = [], blocks
    else:
        before, after = blocks[:marker], blocks[marker + 1:]

    return Composition(
        before=before,
        after=[b for b in after if not _is_marker(b)],
        show_listing=True,
        show_header=not before,
    )
