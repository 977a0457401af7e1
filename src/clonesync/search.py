# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Generic breadth-first frontier search."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

NodeT = TypeVar("NodeT")


def frontier_search(
    start: Iterable[NodeT],
    *,
    expand: Callable[[NodeT], Iterable[NodeT]],
    is_goal: Callable[[NodeT], bool],
    key: Callable[[NodeT], Hashable],
) -> NodeT | None:
    """Return the first node satisfying ``is_goal`` in breadth-first order.

    Nodes are expanded in the order ``expand`` yields them. A node whose key
    has already been visited or queued is never enqueued again, so every node
    is tested at most once even when ``expand`` produces cycles.

    Args:
        start: Initial frontier.
        expand: Edge function producing the neighbours of a non-goal node.
        is_goal: Predicate identifying the node being searched for.
        key: Identity function used for visited/queued membership.

    Returns:
        NodeT | None: The matching node or ``None`` once the frontier is exhausted.

    """

    frontier: deque[NodeT] = deque()
    seen: set[Hashable] = set()

    def _offer(node: NodeT) -> None:
        node_key = key(node)
        if node_key not in seen:
            seen.add(node_key)
            frontier.append(node)

    for node in start:
        _offer(node)

    while frontier:
        node = frontier.popleft()
        if is_goal(node):
            return node
        for neighbour in expand(node):
            _offer(neighbour)
    return None


__all__ = ["frontier_search"]
