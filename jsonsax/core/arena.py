"""
Arena allocator owning every buffer and node produced during a parse.

Blocks are registered under integer handles in insertion order. Growing a
block extends its backing storage in place and keeps its handle, so the
arena's bookkeeping never depends on object identity. ``release`` drops
every block at once; individual blocks are never freed by their users.
"""

import logging
from collections.abc import MutableSequence
from typing import Any, Callable, NoReturn, Optional

logger = logging.getLogger(__name__)

FailureHandler = Callable[[str, bool], NoReturn]


class Block:
    """A single arena allocation: a handle, its backing data and size."""

    __slots__ = ("handle", "data", "size")

    def __init__(self, handle: int, data: Any, size: int) -> None:
        self.handle = handle
        self.data = data
        self.size = size

    def __repr__(self) -> str:
        return f"Block(handle={self.handle}, size={self.size})"


class Arena:
    """Region allocator with bulk release.

    ``on_failure(message, out_of_memory)`` is invoked when a request is too
    large or cannot be satisfied; it must not return. The parser wires it to
    its error channel so allocation failures unwind like any other error.
    """

    def __init__(
        self,
        max_block_size: int,
        on_failure: FailureHandler,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self.max_block_size = max_block_size
        self.on_failure = on_failure
        self.logger = log or logger
        self._blocks: dict[int, Block] = {}
        self._next_handle = 0
        self.allocations = 0
        self.releases = 0

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block: object) -> bool:
        return isinstance(block, Block) and self._blocks.get(block.handle) is block

    @property
    def live_count(self) -> int:
        """Number of blocks currently owned by the arena."""
        return len(self._blocks)

    def _check_size(self, size: int) -> None:
        if size > self.max_block_size:
            self.on_failure("too large allocation", False)

    def _register(self, data: Any, size: int) -> Block:
        block = Block(self._next_handle, data, size)
        self._blocks[block.handle] = block
        self._next_handle += 1
        self.allocations += 1
        return block

    def allocate(self, size: int) -> Block:
        """Allocate a zero-filled byte buffer of ``size`` bytes."""
        self._check_size(size)
        try:
            data = bytearray(size)
        except MemoryError:
            self.on_failure("allocation failed: out of memory", True)
        return self._register(data, size)

    def allocate_list(self, size: int = 0) -> Block:
        """Allocate a slot list of ``size`` entries for child values."""
        self._check_size(size)
        try:
            data: list[Any] = [None] * size
        except MemoryError:
            self.on_failure("allocation failed: out of memory", True)
        return self._register(data, size)

    def adopt(self, obj: Any) -> Block:
        """Take ownership of an already constructed node."""
        return self._register(obj, 1)

    def reallocate(self, block: Optional[Block], size: int) -> Block:
        """Grow or shrink ``block`` to ``size`` entries, keeping its handle.

        A ``None`` block behaves like a fresh allocation of a slot list.
        """
        if block is None:
            return self.allocate_list(size)
        if block not in self:
            raise ValueError(f"{block!r} is not owned by this arena")

        self._check_size(size)
        data: MutableSequence[Any] = block.data
        try:
            if size > len(data):
                filler = 0 if isinstance(data, bytearray) else None
                data.extend([filler] * (size - len(data)))
            else:
                del data[size:]
        except MemoryError:
            self.on_failure("reallocation failed: out of memory", True)
        block.size = size
        return block

    def release(self) -> int:
        """Release every block; returns the number of blocks released."""
        count = len(self._blocks)
        for block in self._blocks.values():
            block.data = None
        self._blocks.clear()
        self.releases += count
        if count:
            self.logger.debug(f"Arena released {count} block(s)")
        return count
