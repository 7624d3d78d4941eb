"""
Per-block data resolution.

Each data-bound block fetches on its own worker: no shared request queue,
no batching, no ordering between siblings. A block whose fetch has not
finished when the deadline passes renders its loading state; its late
result is discarded. No retries — the next render starts from scratch.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Dict, Iterable, Optional

from ..blocks import DATA_BOUND_KINDS
from ..blocks.base import Block
from ..core.context import CollectionContext
from .collection import fetch_block_data
from .source import BlockData, CatalogSource

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
DEFAULT_WORKERS = 8


def resolve_blocks(
    blocks: Iterable[Block],
    source: Optional[CatalogSource],
    collection: Optional[CollectionContext] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    max_workers: int = DEFAULT_WORKERS,
) -> Dict[str, BlockData]:
    """Fetch the data of every data-bound block. Returns {block_id: BlockData}."""
    bound = [b for b in blocks if b.kind in DATA_BOUND_KINDS]
    if not bound:
        return {}

    if source is None:
        # builder preview: nothing to query
        return {b.id: fetch_block_data(b, None, collection) for b in bound}

    results: Dict[str, BlockData] = {}
    pool = ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(bound))),
                              thread_name_prefix="block-fetch")
    futures = {pool.submit(fetch_block_data, b, source, collection): b for b in bound}
    try:
        done, pending = wait(futures, timeout=timeout)
        for fut in done:
            block = futures[fut]
            try:
                results[block.id] = fut.result()
            except Exception as e:
                log.warning("Block %s (%s) fetch crashed: %s", block.id, block.type, e)
                results[block.id] = BlockData(state="error")
        for fut in pending:
            block = futures[fut]
            log.warning("Block %s (%s) fetch exceeded %ss", block.id, block.type, timeout)
            results[block.id] = BlockData(state="loading")
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
    return results
