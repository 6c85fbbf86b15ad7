#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np

import petriforge
from petriforge import PetriNet, HandleType


def make_cycle_with_bypass():
    """Cycle P1 -> T1 -> P2 -> T2 -> P1 plus the bypass T1 -> P3 -> T2."""
    net = PetriNet()
    p1, p2, p3 = net.add_place(id='P1'), net.add_place(id='P2'), net.add_place(id='P3')
    t1, t2 = net.add_transition(id='T1'), net.add_transition(id='T2')
    net.connect(p1, t1)
    net.connect(t1, p2)
    net.connect(p2, t2)
    net.connect(t2, p1)
    net.connect(t1, p3)
    net.connect(p3, t2)
    circuit = [p1, t1, p2, t2]
    return net, circuit


def test_bypass_is_a_TT_handle():
    """The bypass through P3 is the only handle of the cycle and it runs T1 -> P3 -> T2."""
    net, circuit = make_cycle_with_bypass()
    handles = petriforge.find_handles(net, circuit, AS_IDS=True)
    assert handles == [['T1', 'P3', 'T2']]

    handle = petriforge.find_handles(net, circuit)[0]
    assert petriforge.get_handle_type(handle) is HandleType.TT


def test_bad_handles_only_skips_same_kind_handles():
    net, circuit = make_cycle_with_bypass()
    assert petriforge.find_handles(net, circuit, bad_handles_only=True) == []


def test_PT_and_TP_handles():
    net, circuit = make_cycle_with_bypass()
    p1, t1, p2, t2 = circuit
    # P1 -> T3 -> P4 -> T2 is a PT-handle, T2 -> P5 -> T4 -> P2 a TP-handle
    t3, t4 = net.add_transition(id='T3'), net.add_transition(id='T4')
    p4, p5 = net.add_place(id='P4'), net.add_place(id='P5')
    net.connect(p1, t3)
    net.connect(t3, p4)
    net.connect(p4, t2)
    net.connect(t2, p5)
    net.connect(p5, t4)
    net.connect(t4, p2)

    handles = petriforge.find_handles(net, circuit)
    types = sorted(petriforge.get_handle_type(h).value for h in handles)
    assert types == ['PT', 'TP', 'TT']

    bad = petriforge.find_handles(net, circuit, bad_handles_only=True, AS_IDS=True)
    assert sorted(bad) == [['P1', 'T3', 'P4', 'T2'], ['T2', 'P5', 'T4', 'P2']]


def test_handle_may_return_to_its_start():
    """A detour leaving and re-entering the circuit at the same node is a handle."""
    net, circuit = make_cycle_with_bypass()
    t1 = circuit[1]
    p4 = net.add_place(id='P4')
    t3 = net.add_transition(id='T3')
    net.connect(t1, p4)
    net.connect(p4, t3)
    net.connect(t3, net.find_by_id('P3'))
    net.connect(net.find_by_id('P3'), t1)

    handles = petriforge.find_handles(net, circuit, AS_IDS=True)
    assert ['T1', 'P3', 'T1'] in handles
    assert ['T1', 'P4', 'T3', 'P3', 'T1'] in handles


def test_handles_are_simple_paths_through_outside_nodes():
    """Interior nodes of a handle lie off the circuit and do not repeat."""
    rng = np.random.default_rng(7)
    for _ in range(15):
        net = PetriNet()
        places = [net.add_place() for _ in range(5)]
        transitions = [net.add_transition() for _ in range(5)]
        for place in places:
            for transition in transitions:
                if rng.random() < 0.25:
                    net.connect(place, transition)
                if rng.random() < 0.25:
                    net.connect(transition, place)

        for circuit in petriforge.find_elementary_circuits(net):
            on_circuit = {node.id for node in circuit}
            for handle in petriforge.find_handles(net, circuit):
                ids = [node.id for node in handle]
                assert ids[0] in on_circuit and ids[-1] in on_circuit
                assert len(ids) >= 3, "A handle leaves the circuit"
                interior = ids[1:-1]
                assert not on_circuit.intersection(interior)
                assert len(set(interior)) == len(interior)
                assert all(net.find_arc(a, b) is not None for a, b in zip(ids, ids[1:]))
