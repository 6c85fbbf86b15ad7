#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Weakly connected components of a Petri net.
"""

__all__ = [
    "get_connected_components",
]


def get_connected_components(net, AS_IDS : bool = False) -> list:
    """
    Compute the weakly connected components of a Petri net.

    Two nodes belong to the same component if they are linked by a path that
    ignores arc directions. The layout uses the components to scope its force
    calculations and its termination test.

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
        Components ordered by their first node in ``net.nodes``; the nodes of
        each component follow the same order.
    """
    component_of = {}
    n_components = 0
    for root in net.nodes:
        if root.id in component_of:
            continue
        component_of[root.id] = n_components
        stack = [root]
        while stack:
            node = stack.pop()
            for neighbor in net.get_neighbors(node):
                if neighbor.id not in component_of:
                    component_of[neighbor.id] = n_components
                    stack.append(neighbor)
        n_components += 1

    components = [[] for _ in range(n_components)]
    for node in net.nodes:
        components[component_of[node.id]].append(node.id if AS_IDS else node)
    return components
