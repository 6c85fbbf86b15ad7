#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Handles of elementary circuits.

A handle of an elementary circuit is a simple path whose first and last
nodes lie on the circuit and whose interior nodes do not. Handles are
classified by the kinds of their endpoints:

- ``PP``: from a place to a place,
- ``TT``: from a transition to a transition,
- ``PT``: from a place to a transition,
- ``TP``: from a transition to a place.

PT- and TP-handles cross between the two node kinds and are called *bad*
handles; their absence on a strongly connected net implies structural
boundedness, repetitiveness and liveness (see :mod:`petriforge.analysis`).
"""

from enum import Enum


__all__ = [
    "HandleType",
    "find_handles",
    "get_handle_type",
]


class HandleType(Enum):
    PP = "PP"
    TT = "TT"
    PT = "PT"
    TP = "TP"


def get_handle_type(handle) -> HandleType:
    """
    Return the type of a handle from the kinds of its first and last node.

    Parameters
    ----------
    handle : sequence of Node
        A handle as returned by :func:`find_handles`.

    Returns
    -------
    HandleType
    """
    first = 'P' if handle[0].is_place else 'T'
    last = 'P' if handle[-1].is_place else 'T'
    return HandleType(first + last)


def find_handles(net, circuit, bad_handles_only : bool = False, AS_IDS : bool = False) -> list:
    """
    Find all handles of an elementary circuit.

    Starting from every node of the circuit, a depth-first search follows
    arcs through nodes of the whole net that are not on the circuit. Whenever
    a successor lies on the circuit again, and the search has left the start
    node, the path extended by that successor is a handle. Nodes already on
    the current path are not revisited.

    Parameters
    ----------
    net : PetriNet
        The net that contains the circuit.
    circuit : sequence of Node
        An elementary circuit of ``net``, e.g. one returned by
        :func:`~petriforge.find_elementary_circuits`.
    bad_handles_only : bool, optional
        If True, only PT- and TP-handles are returned; handles whose
        endpoints are of the same kind are skipped. Default False.
    AS_IDS : bool, optional
        If True, handles contain node identifiers instead of nodes.
        Default False.

    Returns
    -------
    list of list
        Handles as ordered node lists, from the start node on the circuit to
        the end node on the circuit. A handle may end at its own start node.
    """
    on_circuit = {node.id for node in circuit}
    handles = []

    for start in circuit:
        path = [start]
        on_path = {start.id}
        stack = [iter(net.get_successors(start))]
        while stack:
            current = path[-1]
            for successor in stack[-1]:
                if current is not start and successor.id in on_circuit:
                    if bad_handles_only and successor.kind is start.kind:
                        continue
                    handles.append(path + [successor])
                elif successor.id not in on_circuit and successor.id not in on_path:
                    path.append(successor)
                    on_path.add(successor.id)
                    stack.append(iter(net.get_successors(successor)))
                    break
            else:
                stack.pop()
                on_path.discard(path.pop().id)

    if AS_IDS:
        return [[node.id for node in handle] for handle in handles]
    return handles
