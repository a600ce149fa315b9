"""Graph algorithms over dependency snapshots."""

from collections import defaultdict, deque
from collections.abc import Collection, Hashable, Mapping
from typing import TypeVar

T = TypeVar("T", bound=Hashable)


def topological_sort(successors: Mapping[T, Collection[T]]) -> list[T]:
    """Sort nodes so that every node comes before the nodes depending on it.

    Uses Kahn's algorithm. Among nodes that become ready at the same time,
    the input's iteration order is kept.

    Args:
        successors: Mapping from node to the nodes that depend on it.

    Returns:
        List of nodes in topological order.

    Raises:
        ValueError: If the edges contain a cycle.

    Example:
        >>> topological_sort({"leaf": ["sum"], "sum": ["ratio"], "ratio": []})
        ['leaf', 'sum', 'ratio']

    """
    indegree: dict[T, int] = defaultdict(int)
    for node, dependents in successors.items():
        indegree.setdefault(node, 0)
        for dependent in dependents:
            indegree[dependent] += 1

    ready = deque(node for node, degree in indegree.items() if degree == 0)
    order: list[T] = []

    while ready:
        node = ready.popleft()
        order.append(node)
        for dependent in successors.get(node, ()):
            indegree[dependent] -= 1
            if indegree[dependent] == 0:
                ready.append(dependent)

    if len(order) != len(indegree):
        stuck = sorted((str(n) for n, degree in indegree.items() if degree > 0))
        msg = f"Cycle detected among nodes: {', '.join(stuck)}"
        raise ValueError(msg)

    return order
