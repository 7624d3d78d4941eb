"""
Block sequence editing for the admin builder.

Every operation returns a new list; the caller saves the whole sequence.
"""
import copy
import json
import uuid
from typing import Any, Dict, List, Optional, Sequence, Union

from .blocks import BlockKind
from .blocks.base import Block

MAX_HISTORY_LENGTH = 50


class BlockNotFound(KeyError):
    """No block with the given id in the sequence."""


def _index_of(blocks: Sequence[Block], block_id: str) -> int:
    for i, b in enumerate(blocks):
        if b.id == block_id:
            return i
    raise BlockNotFound(block_id)


def new_block(kind: Union[BlockKind, str], content: Optional[Dict[str, Any]] = None) -> Block:
    kind = BlockKind(kind)
    return Block(id=str(uuid.uuid4()), type=kind.value, content=dict(content or {}))


def add_block(
    blocks: Sequence[Block],
    kind: Union[BlockKind, str],
    content: Optional[Dict[str, Any]] = None,
    index: Optional[int] = None,
) -> List[Block]:
    """Insert a new block at ``index`` (clamped), appending when None."""
    result = list(blocks)
    block = new_block(kind, content)
    if index is None:
        result.append(block)
    else:
        result.insert(max(0, min(index, len(result))), block)
    return result


def move_to_index(blocks: Sequence[Block], block_id: str, index: int) -> List[Block]:
    result = list(blocks)
    block = result.pop(_index_of(result, block_id))
    result.insert(max(0, min(index, len(result))), block)
    return result


def move_block(blocks: Sequence[Block], block_id: str, target_id: str) -> List[Block]:
    """Drag-and-drop move: the block takes the position of ``target_id``."""
    if block_id == target_id:
        _index_of(blocks, block_id)
        return list(blocks)
    return move_to_index(blocks, block_id, _index_of(blocks, target_id))


def remove_block(blocks: Sequence[Block], block_id: str) -> List[Block]:
    _index_of(blocks, block_id)
    return [b for b in blocks if b.id != block_id]


def update_block_content(
    blocks: Sequence[Block],
    block_id: str,
    content: Dict[str, Any],
    merge: bool = True,
) -> List[Block]:
    idx = _index_of(blocks, block_id)
    result = list(blocks)
    old = result[idx]
    new_content = {**old.content, **content} if merge else dict(content)
    result[idx] = old.model_copy(update={"content": new_content})
    return result


def duplicate_block(blocks: Sequence[Block], block_id: str) -> List[Block]:
    """Copy of the block with a fresh id, inserted right after it."""
    idx = _index_of(blocks, block_id)
    result = list(blocks)
    src = result[idx]
    result.insert(idx + 1, Block(id=str(uuid.uuid4()), type=src.type,
                                 content=copy.deepcopy(src.content)))
    return result


# ── Undo / redo ─────────────────────────────────────────────────────────────

def _snapshot(blocks: Sequence[Block]) -> str:
    return json.dumps([b.to_record() for b in blocks], sort_keys=True, default=str)


class BuilderHistory:
    """
    Undo/redo over block sequences.

    A change identical to the present is ignored; a new change clears the
    redo stack; at most ``MAX_HISTORY_LENGTH`` past states are kept.
    """

    def __init__(self, blocks: Sequence[Block] = (), max_length: int = MAX_HISTORY_LENGTH):
        self.max_length = max_length
        self.past: List[List[Block]] = []
        self.present: List[Block] = list(blocks)
        self.future: List[List[Block]] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def set(self, blocks: Sequence[Block]) -> List[Block]:
        blocks = list(blocks)
        if _snapshot(blocks) == _snapshot(self.present):
            return self.present
        self.past = (self.past + [self.present])[-self.max_length:]
        self.present = blocks
        self.future = []
        return self.present

    def undo(self) -> List[Block]:
        if self.past:
            self.future.insert(0, self.present)
            self.present = self.past.pop()
        return self.present

    def redo(self) -> List[Block]:
        if self.future:
            self.past.append(self.present)
            self.present = self.future.pop(0)
        return self.present

    def reset(self, blocks: Sequence[Block]) -> List[Block]:
        """Replace the present (e.g. after loading a page) without recording history."""
        self.past, self.future = [], []
        self.present = list(blocks)
        return self.present
