"""
Tests for geometric functions
"""

import unittest
import geoutil
import ear_clip
from vector2d import Vector2D


square = [Vector2D(0, 0), Vector2D(1, 0), Vector2D(1, 1), Vector2D(0, 1)]

# Concave "L" shaped hexagon, counter-clockwise
l_shape = [
    Vector2D(0, 0), Vector2D(2, 0), Vector2D(2, 1),
    Vector2D(1, 1), Vector2D(1, 2), Vector2D(0, 2),
]


def triangles_area(polygon, triangles) -> float:
    return sum(geoutil.triangle_area(polygon[a], polygon[b], polygon[c])
               for a, b, c in triangles)


def on_segment(point, a, b) -> bool:
    if geoutil.segments_cross(a, b, point) != 0:
        return False
    return (min(a.x, b.x) <= point.x <= max(a.x, b.x)
            and min(a.y, b.y) <= point.y <= max(a.y, b.y))


class TestVector2D(unittest.TestCase):

    def test_hashable_and_comparable(self):
        self.assertEqual(Vector2D(1, 2), (1, 2))
        self.assertEqual(hash(Vector2D(1, 2)), hash((1, 2)))
        self.assertEqual(Vector2D(-1, 5), min([Vector2D(0, 0), Vector2D(-1, 5), Vector2D(-1, 7)]))

    def test_arithmetic(self):
        self.assertEqual(Vector2D(4, 6), Vector2D(1, 2) + Vector2D(3, 4))
        self.assertEqual(Vector2D(-2, -2), Vector2D(1, 2) - Vector2D(3, 4))
        self.assertEqual(Vector2D(2, 4), Vector2D(1, 2) * 2)
        self.assertEqual(5.0, Vector2D(3, 4).mag)
        self.assertEqual(11, Vector2D(1, 2).dot(Vector2D(3, 4)))
        self.assertEqual(-2, Vector2D(1, 2).cross(Vector2D(3, 4)))


class TestGeoutil(unittest.TestCase):

    def test_looped_pairs(self):
        expected = [(1, 2), (2, 3), (3, 1)]
        self.assertEqual(expected, list(geoutil.looped_pairs([1, 2, 3])))

    def test_looped_triples(self):
        expected = [(3, 1, 2), (1, 2, 3), (2, 3, 1)]
        self.assertEqual(expected, list(geoutil.looped_triples([1, 2, 3])))

    def test_signed_area(self):
        self.assertEqual(1.0, geoutil.signed_area(square))
        self.assertEqual(-1.0, geoutil.signed_area(list(reversed(square))))
        self.assertEqual(3.0, geoutil.signed_area(l_shape))
        self.assertEqual(0.0, geoutil.signed_area(square[:2]))

    def test_is_clockwise(self):
        self.assertFalse(geoutil.is_clockwise(square))
        self.assertTrue(geoutil.is_clockwise(list(reversed(square))))

    def test_is_convex(self):
        self.assertTrue(geoutil.is_convex(square))
        self.assertTrue(geoutil.is_convex(list(reversed(square))))
        self.assertFalse(geoutil.is_convex(l_shape))

    def test_is_convex_ignores_collinear(self):
        polygon = [Vector2D(0, 0), Vector2D(1, 0), Vector2D(2, 0),
                   Vector2D(2, 2), Vector2D(0, 2)]
        self.assertTrue(geoutil.is_convex(polygon))

    def test_segments_cross(self):
        a, b = Vector2D(0, 0), Vector2D(1, 0)
        self.assertGreater(geoutil.segments_cross(a, b, Vector2D(1, 1)), 0)
        self.assertLess(geoutil.segments_cross(a, b, Vector2D(1, -1)), 0)
        self.assertEqual(0, geoutil.segments_cross(a, b, Vector2D(2, 0)))

    def test_point_in_triangle(self):
        a, b, c = Vector2D(0, 0), Vector2D(4, 0), Vector2D(0, 4)
        self.assertTrue(geoutil.point_in_triangle(Vector2D(1, 1), a, b, c))
        self.assertTrue(geoutil.point_in_triangle(Vector2D(2, 2), a, b, c))
        self.assertFalse(geoutil.point_in_triangle(Vector2D(3, 3), a, b, c))
        self.assertFalse(geoutil.point_in_triangle(Vector2D(-1, 1), a, b, c))

    def test_turn_angle(self):
        north = Vector2D(0, 1)
        self.assertAlmostEqual(geoutil.PI / 2, geoutil.turn_angle(north, Vector2D(1, 0)))
        self.assertAlmostEqual(-geoutil.PI / 2, geoutil.turn_angle(north, Vector2D(-1, 0)))
        self.assertAlmostEqual(0.0, geoutil.turn_angle(north, Vector2D(0, 5)))
        self.assertAlmostEqual(geoutil.PI, geoutil.turn_angle(north, Vector2D(0, -1)))

    def test_distance(self):
        self.assertEqual(128.0, geoutil.distance(Vector2D(0, 0), Vector2D(0, 128)))

    def test_on_segment(self):
        a, b = Vector2D(0, 0), Vector2D(2, 2)
        self.assertTrue(on_segment(Vector2D(1, 1), a, b))
        self.assertFalse(on_segment(Vector2D(3, 3), a, b))
        self.assertFalse(on_segment(Vector2D(1, 0), a, b))

    def test_mesh_triangles(self):
        mesh = geoutil.MeshData('Floor_0', indices=[0, 1, 2, 0, 2, 3])
        self.assertEqual([(0, 1, 2), (0, 2, 3)], mesh.triangles)


class TestEarClip(unittest.TestCase):

    def test_fan_triangulate(self):
        self.assertEqual([(0, 1, 2), (0, 2, 3), (0, 3, 4)], ear_clip.fan_triangulate(5))
        self.assertEqual([], ear_clip.fan_triangulate(2))

    def test_triangulate_square(self):
        result = ear_clip.triangulate(square)

        self.assertEqual([(0, 1, 2), (0, 2, 3)], result)
        self.assertEqual(1.0, triangles_area(square, result))

    def test_triangulate_degenerate(self):
        self.assertEqual([], ear_clip.triangulate(square[:2]))
        self.assertEqual([], ear_clip.triangulate([]))

    def test_ear_clip_l_shape(self):
        result = ear_clip.triangulate(l_shape)

        # We expect n - 2 triangles for n vertices
        self.assertEqual(len(l_shape) - 2, len(result))
        self.assertAlmostEqual(3.0, triangles_area(l_shape, result))

        for triangle in result:
            a, b, c = (l_shape[i] for i in triangle)
            self.assertGreater(geoutil.segments_cross(a, b, c), 0)
            for i, point in enumerate(l_shape):
                if i in triangle:
                    continue
                # No other boundary vertex may lie strictly inside
                inside = geoutil.point_in_triangle(point, a, b, c)
                on_edge = any(on_segment(point, p, q)
                              for p, q in ((a, b), (b, c), (c, a)))
                self.assertFalse(inside and not on_edge)

    def test_ear_clip_clockwise(self):
        polygon = list(reversed(l_shape))
        result = ear_clip.ear_clip(polygon, -1)

        self.assertEqual(4, len(result))
        self.assertAlmostEqual(3.0, triangles_area(polygon, result))
        for a, b, c in result:
            self.assertLess(geoutil.segments_cross(polygon[a], polygon[b], polygon[c]), 0)

    def test_triangulate_clockwise(self):
        polygon = list(reversed(l_shape))
        result = ear_clip.triangulate(polygon)

        self.assertEqual(4, len(result))
        self.assertAlmostEqual(3.0, triangles_area(polygon, result))
        for a, b, c in result:
            self.assertLess(geoutil.segments_cross(polygon[a], polygon[b], polygon[c]), 0)

    def test_ear_clip_fallback(self):
        # Winding opposite to the polygon's, the ear search runs dry
        result = ear_clip.ear_clip(l_shape, -1)

        self.assertEqual(ear_clip.fan_triangulate(len(l_shape)), result)
        self.assertEqual(4, len(result))

    def test_ear_clip_triangle(self):
        self.assertEqual([(0, 1, 2)], ear_clip.ear_clip(square[:3], 1))


if __name__ == '__main__':
    unittest.main()
