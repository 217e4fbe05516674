# -*- coding: utf-8 -*-
"""
2D vector used for map coordinates. Immutable and hashable so it can
key the adjacency graph of a sector's boundary.
"""

from typing import Union, TypeAlias, Final
from math import sqrt

EPSILON: Final[float] = 1/(2**10)
Number: TypeAlias = Union[int, float]


class Vector2D(tuple):
    def __new__(cls, x: Number, y: Number):
        return super().__new__(cls, (x, y))

    @property
    def x(self): return self[0]

    @property
    def y(self): return self[1]

    @property
    def mag(self) -> float:
        return sqrt((self.x ** 2) + (self.y ** 2))

    def dot(self, b) -> float:
        return self.x * b[0] + self.y * b[1]

    def cross(self, b) -> float:
        """Z component of the 3D cross product"""
        return self.x * b[1] - self.y * b[0]

    def __neg__(self):
        return Vector2D(-self.x, -self.y)

    def __add__(self, b):
        if isinstance(b, (int, float)):
            return Vector2D(self[0] + b, self[1] + b)
        return Vector2D(self[0] + b[0], self[1] + b[1])

    def __sub__(self, b):
        if isinstance(b, (int, float)):
            return Vector2D(self[0] - b, self[1] - b)
        return Vector2D(self[0] - b[0], self[1] - b[1])

    def __mul__(self, b):
        if isinstance(b, (int, float)):
            return Vector2D(self[0] * b, self[1] * b)
        return Vector2D(self[0] * b[0], self[1] * b[1])

    def __rmul__(self, b): return self.__mul__(b)

    def __truediv__(self, b):
        if isinstance(b, (int, float)):
            return Vector2D(self[0] / b, self[1] / b)
        return Vector2D(self[0] / b[0], self[1] / b[1])

    def __str__(self):
        return f"[{self.x:g}, {self.y:g}]"

    def __repr__(self):
        return f"Vector2D({self.x:g}, {self.y:g})"
