#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import networkx as nx

import petriforge
from petriforge import PetriNet


def test_two_disjoint_pairs():
    """Two unconnected place/transition pairs form two disjoint components."""
    net = PetriNet()
    p1, p2 = net.add_place(id='P1'), net.add_place(id='P2')
    t1, t2 = net.add_transition(id='T1'), net.add_transition(id='T2')
    net.connect(p1, t1)
    net.connect(t2, p2)

    components = petriforge.get_connected_components(net, AS_IDS=True)
    assert components == [['P1', 'T1'], ['P2', 'T2']]

    groups = petriforge.get_connected_components(net)
    assert len(groups) == 2
    assert not {n.id for n in groups[0]} & {n.id for n in groups[1]}
    for group in groups:
        assert net.are_connected(group[0], group[1])


def test_isolated_nodes_are_own_components():
    net = PetriNet()
    net.add_place()
    net.add_place()
    net.add_transition()
    assert [len(c) for c in petriforge.get_connected_components(net)] == [1, 1, 1]
    assert petriforge.get_connected_components(PetriNet()) == []


def test_direction_is_ignored():
    net = PetriNet()
    p1, p2 = net.add_place(id='P1'), net.add_place(id='P2')
    t1 = net.add_transition(id='T1')
    net.connect(p1, t1)
    net.connect(p2, t1)
    assert petriforge.get_connected_components(net, AS_IDS=True) == [['P1', 'P2', 'T1']]


def test_components_match_networkx():
    rng = np.random.default_rng(8)
    for _ in range(20):
        net = PetriNet()
        places = [net.add_place() for _ in range(8)]
        transitions = [net.add_transition() for _ in range(8)]
        for place in places:
            for transition in transitions:
                if rng.random() < 0.06:
                    net.connect(place, transition)
                if rng.random() < 0.06:
                    net.connect(transition, place)

        ours = {frozenset(c) for c in petriforge.get_connected_components(net, AS_IDS=True)}
        theirs = {frozenset(c) for c in nx.weakly_connected_components(net.to_DiGraph())}
        assert ours == theirs, "Weak components differ from networkx"
