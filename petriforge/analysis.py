#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Structural analysis of Petri nets.

:func:`analyze` decomposes a net into its strongly connected components,
enumerates its elementary circuits and the handles of every circuit, and
derives structural properties from the handle counts.

For a strongly connected net the following holds (Esparza & Silva, "Circuits,
handles, bridges and nets", 1990):

- no TP-handle: the net is structurally bounded,
- no PT-handle: the net is repetitive,
- neither: the net is structurally live, conservative and consistent.

These properties are only reported for strongly connected nets; otherwise
they are None.
"""

from enum import Enum

from typing import Optional

from petriforge.scc import get_strongly_connected_components
from petriforge.circuits import find_elementary_circuits
from petriforge.handles import HandleType, find_handles, get_handle_type


__all__ = [
    "SubnetKind",
    "Subnet",
    "NetAnalysis",
    "analyze",
]


class SubnetKind(Enum):
    COMPONENT = "SCC"
    CIRCUIT = "CRCT"
    HANDLE = "HNDL"


class Subnet(object):
    """
    A named, ordered selection of nodes of a net.

    Subnets are the results of the structural analysis: strongly connected
    components, elementary circuits and handles. The nodes belong to the
    analyzed net.

    Attributes
    ----------
    kind : SubnetKind
        What the subnet represents.
    name : str
        Display name, the kind prefix followed by a 1-based counter, e.g.
        ``SCC1``, ``CRCT2``, ``HNDL3``.
    nodes : tuple of Node
        The nodes in order.
    handle_type : HandleType or None
        Type of a handle; None for other kinds.
    circuit : Subnet or None
        The circuit a handle belongs to; None for other kinds.
    """

    def __init__(self, kind : SubnetKind, index : int, nodes, handle_type : Optional[HandleType] = None,
                 circuit : Optional["Subnet"] = None):
        self._kind = kind
        self._name = f"{kind.value}{index}"
        self._nodes = tuple(nodes)
        self._handle_type = handle_type
        self._circuit = circuit

    @property
    def kind(self) -> SubnetKind:
        return self._kind

    @property
    def name(self) -> str:
        return self._name

    @property
    def nodes(self) -> tuple:
        return self._nodes

    @property
    def handle_type(self) -> Optional[HandleType]:
        return self._handle_type

    @property
    def circuit(self) -> Optional["Subnet"]:
        return self._circuit

    @property
    def ids(self) -> list:
        return [node.id for node in self._nodes]

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def __str__(self):
        return f"{self._name}: " + " -> ".join(node.name or node.id for node in self._nodes)

    def __repr__(self):
        return f"Subnet(name={self._name!r}, n_nodes={len(self._nodes)})"


class NetAnalysis(object):
    """
    Result of :func:`analyze`.

    Attributes
    ----------
    components : list of Subnet
        Strongly connected components.
    circuits : list of Subnet
        Elementary circuits.
    handles : list of Subnet
        Handles of all circuits.
    """

    def __init__(self, net, components, circuits, handles):
        self.net = net
        self.components = components
        self.circuits = circuits
        self.handles = handles

    @property
    def n_pt_handles(self) -> int:
        return sum(1 for h in self.handles if h.handle_type is HandleType.PT)

    @property
    def n_tp_handles(self) -> int:
        return sum(1 for h in self.handles if h.handle_type is HandleType.TP)

    @property
    def is_strongly_connected(self) -> bool:
        return len(self.components) == 1

    @property
    def structurally_bounded(self) -> Optional[bool]:
        if not self.is_strongly_connected:
            return None
        return self.n_tp_handles == 0

    @property
    def repetitive(self) -> Optional[bool]:
        if not self.is_strongly_connected:
            return None
        return self.n_pt_handles == 0

    @property
    def structurally_live(self) -> Optional[bool]:
        if not self.is_strongly_connected:
            return None
        return self.n_tp_handles == 0 and self.n_pt_handles == 0

    # same criterion as liveness for strongly connected nets
    conservative = structurally_live
    consistent = structurally_live

    def to_dict(self) -> dict:
        """Return the analysis as plain data (ids and flags)."""
        return {
            'components': [c.ids for c in self.components],
            'circuits': [c.ids for c in self.circuits],
            'handles': [
                {'ids': h.ids, 'type': h.handle_type.value, 'circuit': h.circuit.name}
                for h in self.handles
            ],
            'n_pt_handles': self.n_pt_handles,
            'n_tp_handles': self.n_tp_handles,
            'is_strongly_connected': self.is_strongly_connected,
            'structurally_bounded': self.structurally_bounded,
            'repetitive': self.repetitive,
            'structurally_live': self.structurally_live,
            'conservative': self.conservative,
            'consistent': self.consistent,
        }

    def report(self) -> str:
        """Return a human-readable summary of the analysis."""
        lines = [
            f"Strongly connected components: {len(self.components)}",
            f"Elementary circuits: {len(self.circuits)}",
            f"Handles: {len(self.handles)} (PT: {self.n_pt_handles}, TP: {self.n_tp_handles})",
        ]
        if not self.is_strongly_connected:
            lines.append("The net is not strongly connected; no structural properties derived.")
            return "\n".join(lines)

        if self.structurally_live:
            lines.append("The net is structurally bounded, repetitive, live, conservative and consistent.")
        else:
            lines.append(
                "The net is "
                + ("" if self.structurally_bounded else "not ")
                + "structurally bounded."
            )
            lines.append("The net is " + ("" if self.repetitive else "not ") + "repetitive.")
        return "\n".join(lines)

    def __repr__(self):
        return (
            f"NetAnalysis(n_components={len(self.components)}, n_circuits={len(self.circuits)}, "
            f"n_handles={len(self.handles)})"
        )


def analyze(net, bad_handles_only : bool = False) -> NetAnalysis:
    """
    Run the full structural analysis of a Petri net.

    Parameters
    ----------
    net : PetriNet
        The net to analyze. It is not modified.
    bad_handles_only : bool, optional
        If True, only PT- and TP-handles are collected. The derived
        properties only depend on those, so they are unaffected.
        Default False.

    Returns
    -------
    NetAnalysis

    Examples
    --------
    >>> result = analyze(net)
    >>> print(result.report())
    """
    components = [
        Subnet(SubnetKind.COMPONENT, i + 1, component)
        for i, component in enumerate(get_strongly_connected_components(net))
    ]
    circuits = [
        Subnet(SubnetKind.CIRCUIT, i + 1, circuit)
        for i, circuit in enumerate(find_elementary_circuits(net))
    ]

    handles = []
    for circuit in circuits:
        for handle in find_handles(net, circuit.nodes, bad_handles_only=bad_handles_only):
            handles.append(
                Subnet(SubnetKind.HANDLE, len(handles) + 1, handle,
                       handle_type=get_handle_type(handle), circuit=circuit)
            )

    return NetAnalysis(net, components, circuits, handles)
