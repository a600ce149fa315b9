"""Node records stored in a graph's arena."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._errors import CycleError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._computation import Computation
    from ._ids import NodeID
    from ._keys import MemoKey


@dataclass(slots=True)
class NodeStats:
    """Counters describing how a node has been used.

    Attributes:
        executions: Number of times the node's computation ran.
        cache_hits: Number of evaluations served from the memo table.
        invalidations: Number of clean-to-dirty transitions.

    """

    executions: int = 0
    cache_hits: int = 0
    invalidations: int = 0


@dataclass(slots=True)
class Node:
    """A memoized, dependency-tracked computation.

    A node starts dirty so that its first evaluation always runs the
    computation. Memo entries are only meaningful while ``clean`` is True.

    Attributes:
        id: The node's own identity.
        computation: Produces the node's value.
        memo: Cached results keyed by argument key.
        clean: Whether the memo table is currently valid.
        dependents: Nodes that read this node in their latest evaluation.
        dependencies: Nodes this node read in its latest evaluation.
        stats: Usage counters.

    """

    id: NodeID
    computation: Computation
    memo: dict[MemoKey, float] = field(default_factory=dict)
    clean: bool = False
    dependents: set[NodeID] = field(default_factory=set)
    dependencies: set[NodeID] = field(default_factory=set)
    stats: NodeStats = field(default_factory=NodeStats)
    _held: bool = False

    @property
    def busy(self) -> bool:
        """Whether the node's exclusive-access guard is currently held."""
        return self._held

    @contextmanager
    def exclusive(self) -> Iterator[Node]:
        """Hold this node's exclusive-access guard for the duration of the block.

        Raises:
            CycleError: If the guard is already held, which in a single-threaded
                call tree means the node was re-entered through a cycle.

        """
        if self._held:
            raise CycleError(self.id)
        self._held = True
        try:
            yield self
        finally:
            self._held = False

    def lookup(self, key: MemoKey) -> float | None:
        """Return the cached value for key if the node is clean, else None."""
        if not self.clean:
            return None
        return self.memo.get(key)

    def mark_dirty(self) -> bool:
        """Mark the node dirty and discard its memo table.

        Returns:
            True if the node was clean, False if it was already dirty.

        """
        if not self.clean:
            return False
        self.clean = False
        self.memo.clear()
        self.stats.invalidations += 1
        return True
