#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Place/transition net representation.

This module defines the :class:`~petriforge.PetriNet` class together with its
building blocks :class:`~petriforge.Node` and :class:`~petriforge.Arc`.

A Petri net is a directed bipartite graph. Nodes are either places, which
hold tokens, or transitions, which consume tokens from their input places and
produce tokens in their output places when they fire. Arcs always run from a
place to a transition (``PT``) or from a transition to a place (``TP``).

The net is stored as an id-keyed graph: the net owns every node and arc, arcs
refer to their endpoints by identifier, and nodes refer to their incident
arcs by identifier.
"""

import uuid
from collections.abc import Mapping, Sequence
from enum import Enum

import numpy as np
import networkx as nx

from typing import Union, Optional

import petriforge.utils as utils
from petriforge.exceptions import (
    MalformedStructureError,
    ConnectionError,
    DisconnectionError,
)


__all__ = [
    "NodeKind",
    "ArcKind",
    "Node",
    "Arc",
    "PetriNet",
    "MAX_NAME_LENGTH",
]

#: Display names are truncated to this many characters.
MAX_NAME_LENGTH = 4


class NodeKind(Enum):
    PLACE = "place"
    TRANSITION = "transition"


class ArcKind(Enum):
    PT = "PT"
    TP = "TP"


class Node(object):
    """
    A place or a transition of a Petri net.

    Nodes are created by :meth:`PetriNet.add_place` and
    :meth:`PetriNet.add_transition`; they should not be instantiated directly.

    Attributes
    ----------
    id : str
        Identifier of the node. Immutable once assigned.
    kind : NodeKind
        ``NodeKind.PLACE`` or ``NodeKind.TRANSITION``.
    name : str
        Display name, truncated to ``MAX_NAME_LENGTH`` characters.
    in_arcs, out_arcs : tuple of str
        Identifiers of the incoming and outgoing arcs, in insertion order.
    position : tuple of float or None
        Diagram position written by :meth:`LayoutResult.apply`.
    """

    def __init__(self, kind : NodeKind, id : str, name : str = ''):
        self._kind = NodeKind(kind)
        self._id = str(id)
        self._name = ''
        self.name = name
        self._in_arcs = []
        self._out_arcs = []
        self.position = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value):
        self._name = str(value)[:MAX_NAME_LENGTH]

    @property
    def is_place(self) -> bool:
        return self._kind is NodeKind.PLACE

    @property
    def is_transition(self) -> bool:
        return self._kind is NodeKind.TRANSITION

    @property
    def in_arcs(self) -> tuple:
        return tuple(self._in_arcs)

    @property
    def out_arcs(self) -> tuple:
        return tuple(self._out_arcs)

    def __repr__(self):
        kind = "Place" if self.is_place else "Transition"
        return f"{kind}(id={self._id!r}, name={self._name!r})"


class Arc(object):
    """
    A directed, weighted arc between a place and a transition.

    The kind of the arc is derived from its endpoints, so an arc between two
    nodes of the same kind cannot be constructed.

    Parameters
    ----------
    id : str
        Identifier of the arc.
    source, target : Node
        Endpoints of the arc. Only their identifiers are stored.
    multiplicity : int, optional
        Positive number of tokens moved along the arc per firing. Default 1.

    Raises
    ------
    ConnectionError
        If ``source`` and ``target`` are of the same kind.
    ValueError
        If ``multiplicity`` is not a positive integer.
    """

    def __init__(self, id : str, source : Node, target : Node, multiplicity : int = 1):
        if source.kind is target.kind:
            raise ConnectionError(
                f"Cannot connect {source.kind.value} '{source.id}' "
                f"to {target.kind.value} '{target.id}'."
            )
        self._id = str(id)
        self._kind = ArcKind.PT if source.is_place else ArcKind.TP
        self._source = source.id
        self._target = target.id
        self.multiplicity = multiplicity

    @property
    def id(self) -> str:
        return self._id

    @property
    def kind(self) -> ArcKind:
        return self._kind

    @property
    def source(self) -> str:
        return self._source

    @property
    def target(self) -> str:
        return self._target

    @property
    def multiplicity(self) -> int:
        return self._multiplicity

    @multiplicity.setter
    def multiplicity(self, value):
        if not utils.is_positive_integer(value):
            raise ValueError(f"multiplicity must be a positive integer, got {value!r}")
        self._multiplicity = int(value)

    def __repr__(self):
        return (
            f"Arc{self._kind.value}(id={self._id!r}, {self._source!r} -> {self._target!r}, "
            f"multiplicity={self._multiplicity})"
        )


class PetriNet(object):
    """
    Place/transition net with an integer marking.

    The net owns its places, transitions and arcs. Places and transitions are
    kept in insertion order; the node order used by all algorithms is "all
    places, then all transitions".

    Parameters
    ----------
    id : str, optional
        Identifier of the net. A random UUID is used if omitted.
    name : str, optional
        Name of the net.

    Examples
    --------
    >>> from petriforge import PetriNet
    >>> net = PetriNet()
    >>> p1, p2 = net.add_place(id='P1'), net.add_place(id='P2')
    >>> t1 = net.add_transition(id='T1')
    >>> net.connect(p1, t1)
    (ArcPT(...), False)
    >>> net.connect(t1, p2)
    (ArcTP(...), False)
    >>> net.add_token(p1)
    >>> net.fire(t1)
    True
    >>> net.marking
    {'P1': 0, 'P2': 1}
    >>> net.fire(t1)
    False
    """

    def __init__(self, id : Optional[str] = None, name : str = ''):
        self.id = str(id) if id else str(uuid.uuid4())
        self.name = name
        self._places = {}
        self._marking = {}
        self._transitions = {}
        self._arcs = {}
        self._arc_index = {}


    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def places(self) -> list:
        return list(self._places.values())

    @property
    def transitions(self) -> list:
        return list(self._transitions.values())

    @property
    def nodes(self) -> list:
        """All nodes: places first, then transitions, each in insertion order."""
        return list(self._places.values()) + list(self._transitions.values())

    @property
    def arcs(self) -> list:
        return list(self._arcs.values())

    @property
    def marking(self) -> dict:
        """Snapshot of the marking as a dict place id -> number of tokens."""
        return dict(self._marking)

    @property
    def n_places(self) -> int:
        return len(self._places)

    @property
    def n_transitions(self) -> int:
        return len(self._transitions)

    @property
    def n_arcs(self) -> int:
        return len(self._arcs)

    def __len__(self):
        return len(self._places) + len(self._transitions)

    def __iter__(self):
        return iter(self.nodes)

    def __contains__(self, node):
        if isinstance(node, Node):
            return self.find_by_id(node.id) is node
        return self.find_by_id(node) is not None

    def __str__(self):
        return (
            f"Petri net with {self.n_places} places, {self.n_transitions} transitions "
            f"and {self.n_arcs} arcs"
        )

    def __repr__(self):
        return (
            f"{type(self).__name__}(id={self.id!r}, P={self.n_places}, "
            f"T={self.n_transitions}, arcs={self.n_arcs})"
        )

    def find_by_id(self, id : str) -> Optional[Node]:
        """Return the node with identifier ``id``, or None."""
        node = self._places.get(id)
        if node is None:
            node = self._transitions.get(id)
        return node

    def get_arc(self, id : str) -> Optional[Arc]:
        """Return the arc with identifier ``id``, or None."""
        return self._arcs.get(id)

    def find_arc(self, source, target) -> Optional[Arc]:
        """Return the arc running from ``source`` to ``target``, or None."""
        source = self._resolve(source)
        target = self._resolve(target)
        arc_id = self._arc_index.get((source.id, target.id))
        return None if arc_id is None else self._arcs[arc_id]

    def get_tokens(self, place) -> int:
        return self._marking[self._resolve_place(place).id]

    def get_input_arcs(self, node) -> list:
        node = self._resolve(node)
        return [self._arcs[arc_id] for arc_id in node._in_arcs]

    def get_output_arcs(self, node) -> list:
        node = self._resolve(node)
        return [self._arcs[arc_id] for arc_id in node._out_arcs]

    def get_successors(self, node) -> list:
        """Targets of the outgoing arcs of ``node``, in arc insertion order."""
        node = self._resolve(node)
        return [self.find_by_id(self._arcs[arc_id].target) for arc_id in node._out_arcs]

    def get_predecessors(self, node) -> list:
        """Sources of the incoming arcs of ``node``, in arc insertion order."""
        node = self._resolve(node)
        return [self.find_by_id(self._arcs[arc_id].source) for arc_id in node._in_arcs]

    def get_neighbors(self, node) -> list:
        """
        Nodes adjacent to ``node`` in either direction, without repetitions.

        A node ``n`` is returned exactly when ``are_connected(node, n)`` holds.
        """
        neighbors = {}
        for other in self.get_successors(node) + self.get_predecessors(node):
            neighbors.setdefault(other.id, other)
        return list(neighbors.values())

    def are_connected(self, a, b) -> bool:
        """Return True if an arc runs between ``a`` and ``b`` in either direction."""
        a = self._resolve(a)
        b = self._resolve(b)
        return (a.id, b.id) in self._arc_index or (b.id, a.id) in self._arc_index

    def is_enabled(self, transition) -> bool:
        """
        Return True if ``transition`` may fire under the current marking.

        A transition is enabled if it has at least one input arc and every
        input place holds at least as many tokens as the multiplicity of the
        connecting arc.
        """
        transition = self._resolve_transition(transition)
        if not transition._in_arcs:
            return False
        for arc_id in transition._in_arcs:
            arc = self._arcs[arc_id]
            if self._marking[arc.source] < arc.multiplicity:
                return False
        return True

    def enabled_transitions(self) -> list:
        return [t for t in self._transitions.values() if self.is_enabled(t)]

    def get_marking_vector(self) -> np.ndarray:
        """Return the marking as an integer vector ordered like ``places``."""
        return np.array([self._marking[p] for p in self._places], dtype=int)

    def get_incidence_matrix(self) -> np.ndarray:
        """
        Compute the incidence matrix of the net.

        Returns
        -------
        np.ndarray
            Integer matrix ``C`` of shape ``(n_places, n_transitions)`` with
            ``C[p, t] = post(t, p) - pre(p, t)``, i.e. the net change in the
            marking of place ``p`` when transition ``t`` fires. Rows follow
            ``places`` and columns follow ``transitions``.
        """
        place_idx = {p: i for i, p in enumerate(self._places)}
        transition_idx = {t: j for j, t in enumerate(self._transitions)}
        C = np.zeros((len(place_idx), len(transition_idx)), dtype=int)
        for arc in self._arcs.values():
            if arc.kind is ArcKind.PT:
                C[place_idx[arc.source], transition_idx[arc.target]] -= arc.multiplicity
            else:
                C[place_idx[arc.target], transition_idx[arc.source]] += arc.multiplicity
        return C


    # ------------------------------------------------------------------
    # Structural mutations
    # ------------------------------------------------------------------

    def add_place(self, name : Optional[str] = None, id : Optional[str] = None) -> Node:
        """
        Add an unmarked place to the net.

        Parameters
        ----------
        name : str, optional
            Display name. Defaults to ``'p<k>'`` where ``k`` is the new number
            of places.
        id : str, optional
            Identifier. A random UUID is generated if omitted.

        Returns
        -------
        Node
            The new place.

        Raises
        ------
        MalformedStructureError
            If ``id`` is already used by a node or an arc of the net.
        """
        node_id = self._claim_id(id)
        if name is None:
            name = 'p' + str(len(self._places) + 1)
        place = Node(NodeKind.PLACE, node_id, name)
        self._places[node_id] = place
        self._marking[node_id] = 0
        return place

    def add_transition(self, name : Optional[str] = None, id : Optional[str] = None) -> Node:
        """
        Add a transition to the net.

        Same as :meth:`add_place`; the default name is ``'t<k>'``.
        """
        node_id = self._claim_id(id)
        if name is None:
            name = 't' + str(len(self._transitions) + 1)
        transition = Node(NodeKind.TRANSITION, node_id, name)
        self._transitions[node_id] = transition
        return transition

    def connect(self, source, target, multiplicity : int = 1, id : Optional[str] = None) -> tuple:
        """
        Connect ``source`` to ``target`` with a new arc.

        A place-transition arc (``PT``) or a transition-place arc (``TP``) is
        created depending on the kinds of the endpoints. At most one arc
        exists per ordered pair of nodes: if the pair is already connected,
        the multiplicity of the existing arc is increased instead.

        Parameters
        ----------
        source, target : Node or str
            Endpoints, given as nodes of this net or their identifiers.
        multiplicity : int, optional
            Positive multiplicity of the new arc (or increment of the existing
            one). Default 1.
        id : str, optional
            Identifier of a newly created arc. Ignored when merging.

        Returns
        -------
        tuple
            ``(arc, merged)`` where ``merged`` is True if an existing arc was
            reused. Callers that want distinct arcs can treat a merge as a
            no-op addition.

        Raises
        ------
        ConnectionError
            If both endpoints are places or both are transitions.
        ValueError
            If ``multiplicity`` is not a positive integer.
        """
        source = self._resolve(source)
        target = self._resolve(target)
        if not utils.is_positive_integer(multiplicity):
            raise ValueError(f"multiplicity must be a positive integer, got {multiplicity!r}")

        existing = self._arc_index.get((source.id, target.id))
        if existing is not None:
            arc = self._arcs[existing]
            arc.multiplicity = arc.multiplicity + int(multiplicity)
            return arc, True

        arc = Arc(self._claim_id(id), source, target, multiplicity)
        self._arcs[arc.id] = arc
        self._arc_index[(source.id, target.id)] = arc.id
        source._out_arcs.append(arc.id)
        target._in_arcs.append(arc.id)
        return arc, False

    def disconnect(self, source, target) -> Arc:
        """
        Remove the arc running from ``source`` to ``target``.

        Returns
        -------
        Arc
            The removed arc.

        Raises
        ------
        DisconnectionError
            If no arc runs from ``source`` to ``target``.
        """
        arc = self.find_arc(source, target)
        if arc is None:
            raise DisconnectionError(
                f"There is no arc from '{self._resolve(source).id}' to '{self._resolve(target).id}'."
            )
        self.remove_arc(arc)
        return arc

    def remove_arc(self, arc) -> None:
        """Remove ``arc`` (an :class:`Arc` or an arc id) from the net."""
        arc_id = arc.id if isinstance(arc, Arc) else arc
        arc = self._arcs.get(arc_id)
        if arc is None:
            raise DisconnectionError(f"Arc '{arc_id}' is not part of the net.")
        self.find_by_id(arc.source)._out_arcs.remove(arc.id)
        self.find_by_id(arc.target)._in_arcs.remove(arc.id)
        del self._arc_index[(arc.source, arc.target)]
        del self._arcs[arc.id]

    def remove_node(self, node) -> bool:
        """
        Remove ``node`` and every arc incident to it.

        Removing a node that is not (or no longer) part of the net is a no-op.

        Returns
        -------
        bool
            True if the node was removed, False if there was nothing to do.
        """
        node_id = node.id if isinstance(node, Node) else node
        found = self.find_by_id(node_id)
        if found is None or (isinstance(node, Node) and found is not node):
            return False
        for arc_id in found._in_arcs + found._out_arcs:
            self.remove_arc(arc_id)
        if found.is_place:
            del self._places[node_id]
            del self._marking[node_id]
        else:
            del self._transitions[node_id]
        return True


    # ------------------------------------------------------------------
    # Marking
    # ------------------------------------------------------------------

    def add_token(self, place) -> None:
        place = self._resolve_place(place)
        self._marking[place.id] += 1

    def remove_token(self, place) -> None:
        """Remove one token from ``place``; does nothing if it is empty."""
        place = self._resolve_place(place)
        if self._marking[place.id] > 0:
            self._marking[place.id] -= 1

    def clear_tokens(self, place) -> None:
        place = self._resolve_place(place)
        self._marking[place.id] = 0

    def set_tokens(self, place, tokens : int) -> None:
        place = self._resolve_place(place)
        if not utils.is_nonnegative_integer(tokens):
            raise ValueError(f"tokens must be a non-negative integer, got {tokens!r}")
        self._marking[place.id] = int(tokens)

    def clear_marking(self) -> None:
        for place_id in self._marking:
            self._marking[place_id] = 0

    def fire(self, transition) -> bool:
        """
        Fire ``transition`` if it is enabled.

        Every input place loses, and every output place gains, as many tokens
        as the multiplicity of the connecting arc. The update is applied as a
        single step: either the whole marking changes or nothing does.

        Returns
        -------
        bool
            True if the transition fired, False if it was not enabled. A
            disabled transition is an expected outcome, not an error.
        """
        transition = self._resolve_transition(transition)
        if not self.is_enabled(transition):
            return False
        marking = dict(self._marking)
        for arc_id in transition._in_arcs:
            arc = self._arcs[arc_id]
            marking[arc.source] -= arc.multiplicity
        for arc_id in transition._out_arcs:
            arc = self._arcs[arc_id]
            marking[arc.target] += arc.multiplicity
        self._marking = marking
        return True


    # ------------------------------------------------------------------
    # Copies and conversions
    # ------------------------------------------------------------------

    def deep_clone(self) -> "PetriNet":
        """
        Return a fully independent copy of the net.

        The copy has new node and arc objects with the same identifiers,
        names, multiplicities, positions and marking.
        """
        clone = PetriNet(id=self.id, name=self.name)
        for place in self._places.values():
            copied = clone.add_place(place.name, place.id)
            copied.position = place.position
            clone._marking[place.id] = self._marking[place.id]
        for transition in self._transitions.values():
            copied = clone.add_transition(transition.name, transition.id)
            copied.position = transition.position
        for arc in self._arcs.values():
            clone.connect(arc.source, arc.target, arc.multiplicity, id=arc.id)
        return clone

    def __copy__(self):
        return self.deep_clone()

    def __deepcopy__(self, memo):
        return self.deep_clone()

    @classmethod
    def from_description(
        cls,
        nodes : Sequence,
        arcs : Sequence = (),
        marking : Optional[Mapping] = None,
        id : Optional[str] = None,
        name : str = '',
    ) -> "PetriNet":
        """
        Build a net from a structural description.

        Parameters
        ----------
        nodes : sequence of mappings
            Node descriptors ``{'kind': 'place' | 'transition', 'id': str,
            'name': str}``. ``name`` is optional.
        arcs : sequence of mappings, optional
            Arc descriptors ``{'id': str, 'kind': 'PT' | 'TP', 'source': str,
            'target': str, 'multiplicity': int}``. ``id`` and
            ``multiplicity`` are optional. Two descriptors for the same
            ordered pair are merged into one arc, adding their
            multiplicities; the later one must then omit ``id`` or repeat
            the id of the first.
        marking : mapping, optional
            Place id -> non-negative number of tokens. Unlisted places are
            empty.

        Returns
        -------
        PetriNet

        Raises
        ------
        MalformedStructureError
            If an identifier is empty or duplicated, a descriptor is incomplete or has
            an unknown kind, an arc references a missing node or its declared
            kind does not match its endpoints, a multiplicity is not a
            positive integer, or the marking is negative, not an integer, or
            refers to an unknown place.

        Examples
        --------
        >>> net = PetriNet.from_description(
        ...     nodes=[{'kind': 'place', 'id': 'P1'},
        ...            {'kind': 'transition', 'id': 'T1'}],
        ...     arcs=[{'id': 'A1', 'kind': 'PT', 'source': 'P1', 'target': 'T1'}],
        ...     marking={'P1': 2},
        ... )
        >>> net.marking
        {'P1': 2}
        """
        net = cls(id=id, name=name)

        for descriptor in nodes:
            kind = _kind_value(_get_field(descriptor, 'kind', 'node'))
            node_id = _get_id(descriptor, 'node')
            node_name = descriptor.get('name')
            if kind == NodeKind.PLACE.value:
                net.add_place(node_name, node_id)
            elif kind == NodeKind.TRANSITION.value:
                net.add_transition(node_name, node_id)
            else:
                raise MalformedStructureError(f"Unknown node kind {kind!r} for node '{node_id}'.")

        for descriptor in arcs:
            kind = _kind_value(_get_field(descriptor, 'kind', 'arc'))
            source_id = str(_get_field(descriptor, 'source', 'arc'))
            target_id = str(_get_field(descriptor, 'target', 'arc'))
            arc_id = _get_id(descriptor, 'arc') if descriptor.get('id') is not None else None
            multiplicity = descriptor.get('multiplicity', 1)

            source = net.find_by_id(source_id)
            target = net.find_by_id(target_id)
            if source is None or target is None:
                missing = source_id if source is None else target_id
                raise MalformedStructureError(f"Arc '{arc_id}' references unknown node '{missing}'.")
            if kind == ArcKind.PT.value:
                expected = (NodeKind.PLACE, NodeKind.TRANSITION)
            elif kind == ArcKind.TP.value:
                expected = (NodeKind.TRANSITION, NodeKind.PLACE)
            else:
                raise MalformedStructureError(f"Unknown arc kind {kind!r} for arc '{arc_id}'.")
            if (source.kind, target.kind) != expected:
                raise MalformedStructureError(
                    f"Arc '{arc_id}' is declared {kind} but runs from a {source.kind.value} "
                    f"to a {target.kind.value}."
                )
            if not utils.is_positive_integer(multiplicity):
                raise MalformedStructureError(
                    f"Arc '{arc_id}' has invalid multiplicity {multiplicity!r}."
                )
            existing = net.find_arc(source, target)
            if existing is not None:
                if arc_id is not None and arc_id != existing.id:
                    raise MalformedStructureError(
                        f"Arc '{arc_id}' duplicates arc '{existing.id}' from '{source_id}' to '{target_id}'."
                    )
            elif arc_id is not None and net._is_known_id(arc_id):
                raise MalformedStructureError(f"Identifier '{arc_id}' already exists.")
            net.connect(source, target, multiplicity, id=arc_id)

        for place_id, tokens in (marking or {}).items():
            place = net._places.get(str(place_id))
            if place is None:
                raise MalformedStructureError(f"Marking refers to unknown place '{place_id}'.")
            if not utils.is_nonnegative_integer(tokens):
                raise MalformedStructureError(
                    f"Marking of place '{place_id}' must be a non-negative integer, got {tokens!r}."
                )
            net._marking[place.id] = int(tokens)

        return net

    def to_description(self) -> dict:
        """
        Export the net as a structural description.

        Returns
        -------
        dict
            ``{'nodes': [...], 'arcs': [...], 'marking': {...}}`` in the format
            accepted by :meth:`from_description`.
        """
        nodes = [
            {'kind': node.kind.value, 'id': node.id, 'name': node.name}
            for node in self.nodes
        ]
        arcs = [
            {
                'id': arc.id,
                'kind': arc.kind.value,
                'source': arc.source,
                'target': arc.target,
                'multiplicity': arc.multiplicity,
            }
            for arc in self._arcs.values()
        ]
        return {'nodes': nodes, 'arcs': arcs, 'marking': dict(self._marking)}

    @classmethod
    def from_DiGraph(cls, nx_DiGraph : "nx.DiGraph") -> "PetriNet":
        """
        Construct a net from a NetworkX directed graph.

        Node attributes
            kind : str
                ``'place'`` or ``'transition'`` (required).
            name : str, optional
                Display name.
            tokens : int, optional
                Initial marking of a place.

        Edge attributes
            multiplicity : int, optional
                Arc multiplicity, 1 if absent.
            id : str, optional
                Arc identifier.

        Raises
        ------
        TypeError
            If ``nx_DiGraph`` is not a ``networkx.DiGraph``.
        MalformedStructureError
            If the graph does not describe a valid bipartite net.
        """
        if not isinstance(nx_DiGraph, nx.DiGraph):
            raise TypeError("nx_DiGraph must be a networkx.DiGraph")

        nodes = []
        marking = {}
        for node, data in nx_DiGraph.nodes(data=True):
            nodes.append({'kind': data.get('kind'), 'id': str(node), 'name': data.get('name')})
            if 'tokens' in data:
                marking[str(node)] = data['tokens']

        arcs = []
        for u, v, data in nx_DiGraph.edges(data=True):
            source_kind = nx_DiGraph.nodes[u].get('kind')
            arcs.append({
                'id': data.get('id'),
                'kind': ArcKind.PT.value if source_kind == NodeKind.PLACE.value else ArcKind.TP.value,
                'source': str(u),
                'target': str(v),
                'multiplicity': data.get('multiplicity', 1),
            })
        return cls.from_description(nodes, arcs, marking)

    def to_DiGraph(self) -> nx.DiGraph:
        """
        Convert the net into a NetworkX directed graph.

        Nodes are labeled by their identifiers and carry the attributes
        ``kind``, ``name`` and, for places, ``tokens``. Edges carry ``id``,
        ``kind`` and ``multiplicity``.
        """
        G = nx.DiGraph()
        for place in self._places.values():
            G.add_node(place.id, kind=place.kind.value, name=place.name,
                       tokens=self._marking[place.id])
        for transition in self._transitions.values():
            G.add_node(transition.id, kind=transition.kind.value, name=transition.name)
        for arc in self._arcs.values():
            G.add_edge(arc.source, arc.target, id=arc.id, kind=arc.kind.value,
                       multiplicity=arc.multiplicity)
        return G

    def summary(self) -> str:
        """Human-readable summary of the net."""
        lines = [str(self), "", "Places:"]
        for i, place in enumerate(self._places.values()):
            lines.append(f"  [{i}] {place.id:20s} {place.name:4s}  tokens={self._marking[place.id]}")
        lines.append("")
        lines.append("Transitions:")
        for i, transition in enumerate(self._transitions.values()):
            enabled = " [enabled]" if self.is_enabled(transition) else ""
            lines.append(f"  [{i}] {transition.id:20s} {transition.name:4s}{enabled}")
        lines.append("")
        lines.append("Arcs:")
        for arc in self._arcs.values():
            lines.append(f"  {arc.source} --({arc.multiplicity})--> {arc.target}")
        return "\n".join(lines)


    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _is_known_id(self, id : str) -> bool:
        return id in self._places or id in self._transitions or id in self._arcs

    def _claim_id(self, id : Optional[str]) -> str:
        if id is None or id == '':
            id = str(uuid.uuid4())
            while self._is_known_id(id):
                id = str(uuid.uuid4())
            return id
        id = str(id)
        if self._is_known_id(id):
            raise MalformedStructureError(f"Identifier '{id}' already exists.")
        return id

    def _resolve(self, node : Union[Node, str]) -> Node:
        if isinstance(node, Node):
            found = self.find_by_id(node.id)
            if found is not node:
                raise ValueError(f"{node!r} is not part of this net")
            return found
        found = self.find_by_id(node)
        if found is None:
            raise ValueError(f"Unknown node '{node}'")
        return found

    def _resolve_place(self, place) -> Node:
        place = self._resolve(place)
        if not place.is_place:
            raise TypeError(f"{place!r} is not a place")
        return place

    def _resolve_transition(self, transition) -> Node:
        transition = self._resolve(transition)
        if not transition.is_transition:
            raise TypeError(f"{transition!r} is not a transition")
        return transition


def _get_field(descriptor, key, what):
    if not isinstance(descriptor, Mapping):
        raise MalformedStructureError(f"A {what} descriptor must be a mapping, got {type(descriptor).__name__}.")
    if key not in descriptor or descriptor[key] is None:
        raise MalformedStructureError(f"A {what} descriptor is missing the field '{key}'.")
    return descriptor[key]


def _get_id(descriptor, what):
    # caller-supplied ids are kept verbatim, so they must not be blank
    id = str(_get_field(descriptor, 'id', what))
    if not id.strip():
        raise MalformedStructureError(f"A {what} descriptor has an empty 'id'.")
    return id


def _kind_value(kind):
    return kind.value if isinstance(kind, Enum) else kind
