#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elementary circuits of a Petri net.

An elementary circuit is a closed directed path in which no node appears
twice, except that the first and the last node coincide. Two circuits that
are cyclic rotations of each other are the same circuit.

Circuits are enumerated with Johnson's algorithm (D. B. Johnson, "Finding all
the elementary circuits of a directed graph", SIAM J. Comput. 4(1), 1975).
The algorithm works on a private deep copy of the net, from which it removes
one node per round, so the net passed in is never modified.
"""

from collections import defaultdict

from petriforge.scc import get_strongly_connected_components


__all__ = [
    "find_elementary_circuits",
    "count_elementary_circuits",
]


class _CircuitSearch(object):
    """
    Blocked depth-first search for the circuits through one start node.

    Holds all scratch state of one round of Johnson's algorithm: the current
    path, the ``blocked`` set and the B-lists of nodes to unblock once a
    circuit through them is found. Searches are restricted to the strongly
    connected component that contains the start node.
    """

    def __init__(self, net, component):
        members = {node.id for node in component}
        self.successors = {
            node.id: [s.id for s in net.get_successors(node) if s.id in members]
            for node in component
        }
        self.blocked = set()
        self.B = defaultdict(set)

    def _unblock(self, node):
        stack = [node]
        while stack:
            current = stack.pop()
            if current in self.blocked:
                self.blocked.remove(current)
                stack.extend(self.B[current])
                self.B[current].clear()

    def run(self, start) -> list:
        circuits = []
        path = [start]
        self.blocked.add(start)
        # each frame: [node, iterator over successors, closed]
        stack = [[start, iter(self.successors[start]), False]]
        while stack:
            frame = stack[-1]
            node, successors = frame[0], frame[1]
            descended = False
            for successor in successors:
                if successor == start:
                    circuits.append(list(path))
                    frame[2] = True
                elif successor not in self.blocked:
                    path.append(successor)
                    self.blocked.add(successor)
                    stack.append([successor, iter(self.successors[successor]), False])
                    descended = True
                    break
            if descended:
                continue

            closed = frame[2]
            if closed:
                self._unblock(node)
            else:
                for successor in self.successors[node]:
                    self.B[successor].add(node)
            stack.pop()
            path.pop()
            if closed and stack:
                stack[-1][2] = True
        return circuits


def find_elementary_circuits(net, AS_IDS : bool = False) -> list:
    """
    Enumerate all elementary circuits of a Petri net.

    In every round the first remaining node ``s`` of a working copy of the
    net is taken, the strongly connected component of ``s`` in the working
    copy is computed, all circuits through ``s`` inside that component are
    collected, and ``s`` is removed from the working copy. A component of a
    single node contributes nothing: the net is bipartite, so there are no
    self-loops.

    Parameters
    ----------
    net : PetriNet
        The net to analyze. It is not modified.
    AS_IDS : bool, optional
        If True, circuits contain node identifiers instead of nodes.
        Default False.

    Returns
    -------
    list of list
        Each circuit as an ordered list of nodes of ``net`` (never of the
        internal copy). The circuit closes implicitly from the last node back
        to the first; the first node is the earliest node of the circuit in
        the order of ``net.nodes``.

    Examples
    --------
    >>> net = PetriNet.from_description(
    ...     nodes=[{'kind': 'place', 'id': 'P1'}, {'kind': 'transition', 'id': 'T1'}],
    ...     arcs=[{'kind': 'PT', 'source': 'P1', 'target': 'T1'},
    ...           {'kind': 'TP', 'source': 'T1', 'target': 'P1'}],
    ... )
    >>> find_elementary_circuits(net, AS_IDS=True)
    [['P1', 'T1']]
    """
    working = net.deep_clone()
    circuits = []

    while len(working) > 0:
        start = working.nodes[0]
        component = next(
            c for c in get_strongly_connected_components(working) if any(n is start for n in c)
        )
        if len(component) > 1:
            circuits.extend(_CircuitSearch(working, component).run(start.id))
        working.remove_node(start)

    if AS_IDS:
        return circuits
    return [[net.find_by_id(node_id) for node_id in circuit] for circuit in circuits]


def count_elementary_circuits(net) -> int:
    """Return the number of elementary circuits of the net."""
    return len(find_elementary_circuits(net, AS_IDS=True))
