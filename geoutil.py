"""
Geometric functions and classes
"""

from typing import List, Tuple, Optional, Final, Generator, Sequence, TypeAlias
from dataclasses import dataclass, field
from math import atan2
from vector2d import Vector2D, EPSILON


PI: Final[float] = 3.141592653589793116
TILE_SIZE: Final[float] = 64.0  # World units per texture repeat
Triangle: TypeAlias = Tuple[int, int, int]
Position: TypeAlias = Tuple[float, float, float]


@dataclass
class MeshData:
    """Triangle mesh handed over to the assembler"""
    name: str
    texture: Optional[str] = None
    positions: List[Position] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    uvs: List[Tuple[float, float]] = field(default_factory=list)
    part: str = ''

    @property
    def triangles(self) -> List[Triangle]:
        i = self.indices
        return [(i[n], i[n + 1], i[n + 2]) for n in range(0, len(i) - 2, 3)]

    def __repr__(self) -> str:
        return f"MeshData({self.name}, {len(self.positions)} vertices, "\
            f"{len(self.indices) // 3} triangles)"


def looped_pairs(polygon: Sequence[Vector2D]
                 ) -> Generator[Tuple[Vector2D, Vector2D], None, None]:
    iterable = iter(polygon)
    first = last = next(iterable)
    for x in iterable:
        yield last, x
        last = x
    yield last, first


def looped_triples(polygon: Sequence[Vector2D]
                   ) -> Generator[Tuple[Vector2D, Vector2D, Vector2D], None, None]:
    """Every (previous, current, next) triple of a closed polygon"""
    n = len(polygon)
    for i in range(n):
        yield polygon[i - 1], polygon[i], polygon[(i + 1) % n]


def segments_cross(a: Vector2D, b: Vector2D, c: Vector2D) -> float:
    """Finds the cross product between the segments AB and BC.
    Positive for a left (counter-clockwise) turn at B"""
    return (b - a).cross(c - b)


def signed_area(polygon: Sequence[Vector2D]) -> float:
    """Shoelace formula, positive when the polygon winds counter-clockwise"""
    if len(polygon) < 3:
        return 0.0
    return sum(a.cross(b) for a, b in looped_pairs(polygon)) / 2.0


def is_clockwise(polygon: Sequence[Vector2D]) -> bool:
    return signed_area(polygon) < 0


def triangle_area(a: Vector2D, b: Vector2D, c: Vector2D) -> float:
    return abs((b - a).cross(c - a)) / 2.0


def is_convex(polygon: Sequence[Vector2D], epsilon: float = EPSILON) -> bool:
    """True if every turn goes the same way, ignoring near collinear points"""
    sign = 0
    for a, b, c in looped_triples(polygon):
        cross = segments_cross(a, b, c)
        if abs(cross) < epsilon:
            continue
        current = 1 if cross > 0 else -1
        if sign == 0:
            sign = current
        elif current != sign:
            return False
    return True


def point_in_triangle(p: Vector2D, a: Vector2D, b: Vector2D, c: Vector2D) -> bool:
    """Barycentric test, points on the edges count as inside.
    The triangle must not be degenerate."""
    v0 = c - a
    v1 = b - a
    v2 = p - a

    dot00 = v0.dot(v0)
    dot01 = v0.dot(v1)
    dot02 = v0.dot(v2)
    dot11 = v1.dot(v1)
    dot12 = v1.dot(v2)

    inv_denom = 1 / (dot00 * dot11 - dot01 * dot01)
    u = (dot11 * dot02 - dot01 * dot12) * inv_denom
    v = (dot00 * dot12 - dot01 * dot02) * inv_denom

    return u >= -EPSILON and v >= -EPSILON and u + v <= 1 + EPSILON


def turn_angle(incoming: Vector2D, outgoing: Vector2D) -> float:
    """Signed angle from incoming to outgoing direction in radians,
    positive for clockwise (right hand) turns, in the range (-PI, PI]"""
    angle = atan2(-incoming.cross(outgoing), incoming.dot(outgoing))
    return PI if angle <= -PI else angle


def distance(a: Vector2D, b: Vector2D) -> float:
    return (b - a).mag

