import logging
from typing import List, Sequence
from vector2d import Vector2D, EPSILON
from geoutil import Triangle, segments_cross, is_clockwise, is_convex, point_in_triangle


logger = logging.getLogger(__name__)


def fan_triangulate(num_vertices: int) -> List[Triangle]:
    """Triangle fan anchored at the first vertex"""
    return [(0, i, i + 1) for i in range(1, num_vertices - 1)]


def is_ear(polygon: Sequence[Vector2D], remaining: List[int],
           i_prev: int, i_curr: int, i_next: int, winding: int) -> bool:
    a, b, c = polygon[i_prev], polygon[i_curr], polygon[i_next]

    # Must turn the same way as the polygon winds
    if segments_cross(a, b, c) * winding <= EPSILON:
        return False

    for i in remaining:
        if i in (i_prev, i_curr, i_next):
            continue
        if point_in_triangle(polygon[i], a, b, c):
            return False
    return True


def ear_clip(polygon: Sequence[Vector2D], winding: int) -> List[Triangle]:
    """Triangulates a simple (either convex or concave) polygon without holes
    using ear clipping algorithm. winding is 1 for counter-clockwise and -1
    for clockwise polygons. Falls back to a triangle fan if no ear can be found.

    Returns:
        a list of triangles as indices into the polygon
    """

    num_vertices = len(polygon)
    if num_vertices < 3:
        return []

    remaining = list(range(num_vertices))
    triangles: List[Triangle] = []

    i = 0
    while len(remaining) > 3:
        count = len(remaining)
        found = False
        for _ in range(2 * count):
            i %= count
            i_prev = remaining[(i - 1) % count]
            i_curr = remaining[i]
            i_next = remaining[(i + 1) % count]
            if is_ear(polygon, remaining, i_prev, i_curr, i_next, winding):
                triangles.append((i_prev, i_curr, i_next))
                remaining.pop(i)  # Remove current ear
                found = True
                break
            i += 1

        if not found:
            logger.warning(f"Ear clipping failed for polygon with {num_vertices} "\
                           'vertices, falling back to fan triangulation')
            return fan_triangulate(num_vertices)

    triangles.append((remaining[0], remaining[1], remaining[2]))
    return triangles


def triangulate(polygon: Sequence[Vector2D]) -> List[Triangle]:
    """Fan triangulates convex polygons and ear clips the rest.
    Triangles wind the same way as the polygon."""

    if len(polygon) < 3:
        return []

    if is_convex(polygon):
        return fan_triangulate(len(polygon))

    winding = -1 if is_clockwise(polygon) else 1
    return ear_clip(polygon, winding)
