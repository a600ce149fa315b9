"""Node identities."""

import itertools
from dataclasses import dataclass

_graph_tokens = itertools.count(1)


def next_graph_token() -> int:
    """Return a token unique to one Graph instance within this process."""
    return next(_graph_tokens)


@dataclass(frozen=True, slots=True, order=True)
class NodeID:
    """Opaque handle of a node within one Graph.

    Attributes:
        index: Slot of the node in the graph's arena. Slots are never reused.
        graph_token: Token of the graph that allocated this identity.

    """

    index: int
    graph_token: int

    def __str__(self) -> str:
        return f"#{self.index}"
