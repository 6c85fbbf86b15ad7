#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error types raised by :mod:`petriforge`.

All errors derive from :class:`PetriNetError`, which is itself a
``ValueError`` so that callers catching the built-in type keep working.
Firing a transition that is not enabled is *not* an error; see
:meth:`petriforge.PetriNet.fire`.
"""

__all__ = [
    "PetriNetError",
    "MalformedStructureError",
    "ConnectionError",
    "DisconnectionError",
]


class PetriNetError(ValueError):
    """Base class for all Petri-net specific errors."""


class MalformedStructureError(PetriNetError):
    """Raised when a structural description or a node id is ill-formed."""


class ConnectionError(PetriNetError):
    """Raised when two nodes of the same kind are to be connected by an arc."""

    def __init__(self, message="Arcs can only connect a place with a transition."):
        super().__init__(message)


class DisconnectionError(PetriNetError):
    """Raised when no arc exists between the given source and target."""

    def __init__(self, message="There is no arc between the given nodes."):
        super().__init__(message)
