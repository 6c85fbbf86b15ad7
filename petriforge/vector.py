#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Two-dimensional vectors for the force-directed layout.
"""

import math


__all__ = [
    "Vector",
]


class Vector(object):
    """
    Two-dimensional vector.

    Vectors are created from cartesian coordinates or, with
    :meth:`from_polar`, from a magnitude and a direction in degrees (x-axis is
    0 degrees, angles grow towards the positive y-axis).
    """

    def __init__(self, x : float = 0.0, y : float = 0.0):
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def from_polar(cls, magnitude : float, direction : float) -> "Vector":
        radians = math.radians(direction)
        return cls(magnitude * math.cos(radians), magnitude * math.sin(radians))

    @classmethod
    def from_point(cls, point) -> "Vector":
        x, y = point
        return cls(x, y)

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other : "Vector") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def angle_to(self, other : "Vector") -> float:
        """Direction from this point to ``other`` in degrees."""
        return math.degrees(math.atan2(other.y - self.y, other.x - self.x))

    def to_point(self) -> tuple:
        return (self.x, self.y)

    def __add__(self, other):
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, multiplier):
        return Vector(self.x * multiplier, self.y * multiplier)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __repr__(self):
        return f"Vector({self.x}, {self.y})"
