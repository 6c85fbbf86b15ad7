#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Force-directed layout of Petri net diagrams.

The layout is a spring-electrical simulation in the spirit of Eades (1984):
every pair of nodes repels like two equal charges (Coulomb's law) and every
pair of adjacent nodes attracts like the ends of a spring (Hooke's law).
Nodes are moved by the resulting net force until the diagram settles.

The simulation is a function of the connectivity of the net and the canvas
size only. It does not move the nodes of the net; :meth:`LayoutResult.apply`
copies the computed positions onto the nodes if desired.
"""

import math
import time
import warnings

import numpy as np
import networkx as nx

from typing import Optional

import petriforge.utils as utils
from petriforge.connectivity import get_connected_components
from petriforge.vector import Vector


__all__ = [
    "ForceLayout",
    "LayoutResult",
    "force_directed_layout",
    "plot_layout",
]

ATTRACTION_CONSTANT = 0.1       # spring constant
REPULSION_CONSTANT = 50000.0    # charge constant
INTER_COMPONENT_FACTOR = 0.7    # repulsion between different weak components
DEFAULT_NODE_SIZE = 40
DEFAULT_MAX_ITERATIONS = 1000
STOP_ITERATIONS = 15
COMPONENT_FORCE_THRESHOLD = 10.0
DISPLACEMENT_PER_NODE = 4.0


class LayoutResult(object):
    """
    Outcome of a layout run.

    Attributes
    ----------
    positions : dict
        Node id -> ``(x, y)`` centre of the node on the canvas.
    bounds : tuple
        ``(x, y, width, height)`` of the rectangle occupied by the diagram,
        including a margin of one node size, cut at the canvas borders.
    canvas : tuple
        ``(width, height)`` of the canvas.
    iterations : int
        Number of simulation steps performed.
    converged : bool
        True if the simulation settled before the iteration cap.
    cancelled : bool
        True if the run was stopped through its cancel event.
    spring_length : float
        Target spring length used by the simulation.
    """

    def __init__(self, positions, bounds, canvas, iterations, converged, cancelled, spring_length):
        self.positions = positions
        self.bounds = bounds
        self.canvas = canvas
        self.iterations = iterations
        self.converged = converged
        self.cancelled = cancelled
        self.spring_length = spring_length

    def apply(self, net) -> None:
        """Store the computed positions in ``Node.position`` of ``net``."""
        for node_id, position in self.positions.items():
            node = net.find_by_id(node_id)
            if node is not None:
                node.position = position

    def __repr__(self):
        return (
            f"LayoutResult(n_nodes={len(self.positions)}, iterations={self.iterations}, "
            f"converged={self.converged}, cancelled={self.cancelled})"
        )


class ForceLayout(object):
    """
    Spring-electrical layout simulation.

    Parameters
    ----------
    width, height : float
        Size of the canvas. Both must be at least ``node_size``.
    node_size : float, optional
        Side of the square occupied by a node. Node centres are kept at least
        half a node size away from the canvas borders. Default 40.
    max_iterations : int, optional
        Hard cap on the number of simulation steps. Default 1000.
    spring_length : float, optional
        Target length of the springs. By default it is derived from the
        canvas width, the number of nodes and the number of weakly connected
        components: ``width / (4 * sqrt(n_nodes) * n_components)``.
    GRID_NODES : bool, optional
        If True, the final positions are snapped to a grid with step
        ``node_size``. Default False.
    delay : float, optional
        Seconds to sleep after every step, for animated display. Default 0.
    rng : None, int, np.random.Generator, np.random.RandomState or random.Random, optional
        Source of randomness for the initial positions.

    Examples
    --------
    >>> layout = ForceLayout(400, 400, rng=0)
    >>> result = layout.arrange(net)
    >>> result.positions
    {'P1': (...), 'T1': (...)}
    """

    def __init__(
        self,
        width : float,
        height : float,
        node_size : float = DEFAULT_NODE_SIZE,
        max_iterations : int = DEFAULT_MAX_ITERATIONS,
        spring_length : Optional[float] = None,
        GRID_NODES : bool = False,
        delay : float = 0.0,
        rng = None,
    ):
        if node_size <= 0:
            raise ValueError(f"node_size must be > 0, got {node_size}")
        if width < node_size or height < node_size:
            raise ValueError(
                f"The canvas ({width} x {height}) must be at least as large as a node ({node_size})."
            )
        if not utils.is_positive_integer(max_iterations):
            raise ValueError(f"max_iterations must be a positive integer, got {max_iterations!r}")
        if spring_length is not None and spring_length <= 0:
            raise ValueError(f"spring_length must be > 0, got {spring_length}")
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")

        self.width = float(width)
        self.height = float(height)
        self.node_size = float(node_size)
        self.max_iterations = int(max_iterations)
        self.spring_length = spring_length
        self.GRID_NODES = GRID_NODES
        self.delay = delay
        self.rng = rng


    def arrange(self, net, cancel_event=None, callback=None) -> LayoutResult:
        """
        Run the simulation on ``net``.

        Parameters
        ----------
        net : PetriNet
            The net to lay out. It is not modified.
        cancel_event : threading.Event, optional
            Checked once per step. When set, the simulation stops at the next
            step boundary and returns a consistent, centred result flagged
            ``cancelled``.
        callback : callable, optional
            Called as ``callback(iteration, positions)`` after every step,
            e.g. to animate the process.

        Returns
        -------
        LayoutResult
        """
        nodes = net.nodes
        n_nodes = len(nodes)
        canvas = (self.width, self.height)
        if n_nodes == 0:
            return LayoutResult({}, (0.0, 0.0, 0.0, 0.0), canvas, 0, True, False,
                                self.spring_length or 0.0)

        components = get_connected_components(net, AS_IDS=True)
        component_of = {}
        for index, component in enumerate(components):
            for node_id in component:
                component_of[node_id] = index
        neighbors = {node.id: [n.id for n in net.get_neighbors(node)] for node in nodes}

        spring_length = self.spring_length
        if spring_length is None:
            spring_length = self.width / (4 * math.sqrt(n_nodes) * len(components))

        positions = self._randomize(nodes, utils._coerce_rng(self.rng))

        iterations = 0
        stop_count = 0
        converged = False
        cancelled = False
        while True:
            if cancel_event is not None and cancel_event.is_set():
                cancelled = True
                break

            component_forces = [0.0] * len(components)
            next_positions = {}
            for node in nodes:
                position = positions[node.id]
                degree = len(neighbors[node.id])
                component = component_of[node.id]
                net_force = Vector()
                component_force = Vector()

                for other in nodes:
                    if other is node:
                        continue
                    force = self._repulsion(position, positions[other.id], degree)
                    if component_of[other.id] == component:
                        component_force = component_force + force
                    else:
                        force = force * INTER_COMPONENT_FACTOR
                    net_force = net_force + force

                for other_id in neighbors[node.id]:
                    force = self._attraction(position, positions[other_id], spring_length) * math.sqrt(degree)
                    net_force = net_force + force
                    component_force = component_force + force

                next_positions[node.id] = self._clamp(position + net_force)
                component_forces[component] += component_force.length

            total_displacement = sum(
                positions[node_id].distance_to(next_positions[node_id]) for node_id in positions
            )
            positions = next_positions
            iterations += 1

            if (total_displacement < DISPLACEMENT_PER_NODE * n_nodes
                    or not any(f > COMPONENT_FORCE_THRESHOLD for f in component_forces)):
                stop_count += 1
            else:
                stop_count = 0

            if callback is not None:
                callback(iterations, {k: v.to_point() for k, v in positions.items()})

            if stop_count >= STOP_ITERATIONS:
                converged = True
                break
            if iterations >= self.max_iterations:
                break
            if self.delay:
                time.sleep(self.delay)

        if not converged and not cancelled:
            warnings.warn(
                f'Layout did not converge within {self.max_iterations} iterations.', UserWarning
            )

        positions = self._centralize(positions)
        if self.GRID_NODES:
            positions = self._snap_to_grid(positions)

        return LayoutResult(
            {node_id: v.to_point() for node_id, v in positions.items()},
            self._bounds(positions),
            canvas,
            iterations,
            converged,
            cancelled,
            spring_length,
        )


    def _randomize(self, nodes, rng) -> dict:
        # one node per grid cell, cells shuffled, uniform position within the cell
        n_nodes = len(nodes)
        columns = int(math.ceil(math.sqrt(n_nodes)))
        rows = int(math.ceil(n_nodes / columns))
        x_step = self.width / columns
        y_step = self.height / rows

        positions = {}
        for node, slot in zip(nodes, rng.permutation(n_nodes)):
            column, row = int(slot) % columns, int(slot) // columns
            x = rng.uniform(column * x_step, (column + 1) * x_step)
            y = rng.uniform(row * y_step, (row + 1) * y_step)
            positions[node.id] = self._clamp(Vector(x, y))
        return positions

    def _clamp(self, position : Vector) -> Vector:
        half = self.node_size / 2.0
        x = min(max(position.x, half), self.width - half)
        y = min(max(position.y, half), self.height - half)
        return Vector(x, y)

    @staticmethod
    def _repulsion(position : Vector, other : Vector, degree : int) -> Vector:
        # Coulomb's law: F = k * Qq / r^2, pointing away from the other node
        proximity = max(int(position.distance_to(other)), 1)
        force = -(REPULSION_CONSTANT / proximity ** 2)
        force = force * 5.0 / degree if degree != 0 else force / 3.0
        return Vector.from_polar(force, position.angle_to(other))

    @staticmethod
    def _attraction(position : Vector, other : Vector, spring_length : float) -> Vector:
        # Hooke's law: F = -k * x, only for stretched springs
        proximity = max(int(position.distance_to(other)), 1)
        force = ATTRACTION_CONSTANT * max(proximity - spring_length, 0)
        return Vector.from_polar(force, position.angle_to(other))

    def _centralize(self, positions : dict) -> dict:
        xs = np.array([v.x for v in positions.values()])
        ys = np.array([v.y for v in positions.values()])
        shift = Vector(
            self.width / 2.0 - (xs.min() + xs.max()) / 2.0,
            self.height / 2.0 - (ys.min() + ys.max()) / 2.0,
        )
        return {node_id: self._clamp(v + shift) for node_id, v in positions.items()}

    def _snap_to_grid(self, positions : dict) -> dict:
        step = self.node_size
        return {
            node_id: self._clamp(Vector(round(v.x / step) * step, round(v.y / step) * step))
            for node_id, v in positions.items()
        }

    def _bounds(self, positions : dict) -> tuple:
        xs = np.array([v.x for v in positions.values()])
        ys = np.array([v.y for v in positions.values()])
        x_min = max(float(xs.min()) - self.node_size, 0.0)
        y_min = max(float(ys.min()) - self.node_size, 0.0)
        x_max = min(float(xs.max()) + self.node_size, self.width)
        y_max = min(float(ys.max()) + self.node_size, self.height)
        return (x_min, y_min, x_max - x_min, y_max - y_min)


def force_directed_layout(net, width : float, height : float, cancel_event=None, callback=None,
                          **kwargs) -> LayoutResult:
    """
    Lay out ``net`` on a ``width`` x ``height`` canvas.

    Shorthand for ``ForceLayout(width, height, **kwargs).arrange(net, ...)``.
    """
    return ForceLayout(width, height, **kwargs).arrange(net, cancel_event=cancel_event,
                                                         callback=callback)


def plot_layout(net, result : LayoutResult, ax=None, show : bool = True, node_size : float = 400):
    """
    Draw a laid-out net with matplotlib.

    Places are drawn as circles and transitions as squares. Arcs with a
    multiplicity above one are labeled with it. The y-axis points down, as on
    a canvas.

    Parameters
    ----------
    net : PetriNet
        The net to draw.
    result : LayoutResult
        Positions computed for ``net``.
    ax : matplotlib.axes.Axes, optional
        Axes to draw into. A new figure is created if omitted.
    show : bool, default=True
        Whether to call ``plt.show()`` at the end.
    node_size : float, optional
        Marker size passed to networkx.

    Returns
    -------
    ax : matplotlib.axes.Axes or None
        None if the net is empty.
    """
    import matplotlib.pyplot as plt

    if len(net) == 0:
        warnings.warn('No plot created. The net has no nodes.', UserWarning)
        return None

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    G = net.to_DiGraph()
    pos = result.positions

    nx.draw_networkx_nodes(G, pos, nodelist=[p.id for p in net.places], node_shape='o',
                           node_color='white', edgecolors='black', node_size=node_size, ax=ax)
    nx.draw_networkx_nodes(G, pos, nodelist=[t.id for t in net.transitions], node_shape='s',
                           node_color='#dddddd', edgecolors='black', node_size=node_size, ax=ax)
    nx.draw_networkx_edges(G, pos, arrows=True, node_size=node_size, ax=ax)
    nx.draw_networkx_labels(G, pos, labels={node.id: node.name for node in net.nodes},
                            font_size=9, ax=ax)
    multiplicities = {
        (arc.source, arc.target): arc.multiplicity for arc in net.arcs if arc.multiplicity > 1
    }
    if multiplicities:
        nx.draw_networkx_edge_labels(G, pos, edge_labels=multiplicities, ax=ax)

    width, height = result.canvas
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect('equal')
    ax.set_axis_off()

    if show:
        plt.show()
    return ax
