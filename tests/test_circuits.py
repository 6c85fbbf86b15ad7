#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import networkx as nx

import petriforge
from petriforge import PetriNet


def random_net(rng, n_places, n_transitions, p):
    net = PetriNet()
    places = [net.add_place(id=f'P{i+1}') for i in range(n_places)]
    transitions = [net.add_transition(id=f'T{j+1}') for j in range(n_transitions)]
    for place in places:
        for transition in transitions:
            if rng.random() < p:
                net.connect(place, transition)
            if rng.random() < p:
                net.connect(transition, place)
    return net


def canonical(circuit):
    """Rotate a circuit so that its smallest id comes first."""
    i = circuit.index(min(circuit))
    return tuple(circuit[i:] + circuit[:i])


def is_circuit(net, circuit):
    if len(set(circuit)) != len(circuit):
        return False
    return all(
        net.find_arc(circuit[i], circuit[(i + 1) % len(circuit)]) is not None
        for i in range(len(circuit))
    )


def test_single_cycle():
    """The four-node cycle has exactly one circuit, equal up to rotation to [P1, T1, P2, T2]."""
    net = PetriNet()
    p1, p2 = net.add_place(id='P1'), net.add_place(id='P2')
    t1, t2 = net.add_transition(id='T1'), net.add_transition(id='T2')
    net.connect(p1, t1)
    net.connect(t1, p2)
    net.connect(p2, t2)
    net.connect(t2, p1)

    circuits = petriforge.find_elementary_circuits(net)
    assert len(circuits) == 1
    assert canonical([n.id for n in circuits[0]]) == canonical(['P1', 'T1', 'P2', 'T2'])
    assert all(node in net for node in circuits[0]), "Circuits must refer to nodes of the input net"


def test_net_is_not_modified():
    rng = np.random.default_rng(3)
    net = random_net(rng, 5, 5, 0.3)
    before = net.to_description()
    petriforge.find_elementary_circuits(net)
    assert net.to_description() == before


def test_acyclic_net_has_no_circuits():
    net = PetriNet()
    p1, p2 = net.add_place(), net.add_place()
    t1 = net.add_transition()
    net.connect(p1, t1)
    net.connect(t1, p2)
    assert petriforge.find_elementary_circuits(net) == []
    assert petriforge.count_elementary_circuits(PetriNet()) == 0


def test_two_circuits_sharing_a_transition():
    net = PetriNet()
    p1, p2 = net.add_place(id='P1'), net.add_place(id='P2')
    t1 = net.add_transition(id='T1')
    net.connect(p1, t1)
    net.connect(t1, p1)
    net.connect(p2, t1)
    net.connect(t1, p2)

    circuits = {canonical(c) for c in petriforge.find_elementary_circuits(net, AS_IDS=True)}
    assert circuits == {('P1', 'T1'), ('P2', 'T1')}


def test_circuits_are_valid_and_unique():
    """Every reported circuit is a closed simple path and no circuit is reported twice."""
    rng = np.random.default_rng(4)
    for _ in range(20):
        net = random_net(rng, 5, 4, 0.3)
        circuits = petriforge.find_elementary_circuits(net, AS_IDS=True)
        assert all(is_circuit(net, c) for c in circuits), "Invalid circuit reported"
        canonical_circuits = [canonical(c) for c in circuits]
        assert len(set(canonical_circuits)) == len(canonical_circuits), "Circuit reported twice"


def test_circuits_match_networkx():
    """The circuits agree with nx.simple_cycles on random nets."""
    rng = np.random.default_rng(5)
    for _ in range(20):
        net = random_net(rng, 5, 5, 0.25)
        ours = {canonical(c) for c in petriforge.find_elementary_circuits(net, AS_IDS=True)}
        theirs = {canonical(c) for c in nx.simple_cycles(net.to_DiGraph())}
        assert ours == theirs, "Circuits differ from networkx"
        assert petriforge.count_elementary_circuits(net) == len(theirs)


def test_circuit_starts_at_earliest_node():
    rng = np.random.default_rng(6)
    net = random_net(rng, 4, 4, 0.4)
    order = {node.id: i for i, node in enumerate(net.nodes)}
    for circuit in petriforge.find_elementary_circuits(net, AS_IDS=True):
        assert order[circuit[0]] == min(order[node_id] for node_id in circuit)
