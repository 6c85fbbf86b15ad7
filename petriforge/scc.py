#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Strongly connected components of a Petri net.

Components are computed with Kosaraju's algorithm (Kosaraju 1978, Sharir
1981): a depth-first search over the net records the order in which nodes are
finished, and a second depth-first search over the transposed net, started
from the nodes in reverse finishing order, collects one component per root.

Both searches use an explicit stack, so deep nets do not hit the recursion
limit. The net is never modified.
"""

__all__ = [
    "get_strongly_connected_components",
    "is_strongly_connected",
]


def _finishing_order(net) -> list:
    visited = set()
    order = []
    for root in net.nodes:
        if root.id in visited:
            continue
        visited.add(root.id)
        stack = [(root, iter(net.get_successors(root)))]
        while stack:
            node, successors = stack[-1]
            for successor in successors:
                if successor.id not in visited:
                    visited.add(successor.id)
                    stack.append((successor, iter(net.get_successors(successor))))
                    break
            else:
                stack.pop()
                order.append(node)
    return order


def _collect_component(net, root, visited) -> list:
    # pre-order DFS over incoming arcs
    component = [root]
    visited.add(root.id)
    stack = [iter(net.get_predecessors(root))]
    while stack:
        for predecessor in stack[-1]:
            if predecessor.id not in visited:
                visited.add(predecessor.id)
                component.append(predecessor)
                stack.append(iter(net.get_predecessors(predecessor)))
                break
        else:
            stack.pop()
    return component


def get_strongly_connected_components(net, AS_IDS : bool = False) -> list:
    """
    Compute the strongly connected components of a Petri net.

    A strongly connected component (SCC) is a maximal set of nodes such that
    every node in the set is reachable from every other node via directed
    arcs. A node that lies on no cycle forms a component on its own.

    Parameters
    ----------
    net : PetriNet
        The net to decompose. It is not modified.
    AS_IDS : bool, optional
        If True, components contain node identifiers instead of nodes.
        Default False.

    Returns
    -------
    list of list
        Components in the order in which Kosaraju's second pass discovers
        them. Together they partition the nodes of the net. The result is
        deterministic for a fixed node and arc insertion order.
    """
    order = _finishing_order(net)
    order.reverse()

    visited = set()
    components = []
    for root in order:
        if root.id not in visited:
            components.append(_collect_component(net, root, visited))

    if AS_IDS:
        return [[node.id for node in component] for component in components]
    return components


def is_strongly_connected(net) -> bool:
    """Return True if the net is non-empty and consists of a single SCC."""
    return len(net) > 0 and len(get_strongly_connected_components(net)) == 1
