"""
Floor and ceiling meshes of sectors, built by walking each sector's
boundary lines into a closed polygon and triangulating it.
"""

from typing import Dict, List, Optional, Tuple, Final
import logging
from vector2d import Vector2D
from geoutil import MeshData, Triangle, TILE_SIZE, turn_angle
from ear_clip import triangulate
from formats.level_reader import Level
from formats.wad_structures import texture_or_none


logger = logging.getLogger(__name__)

Segment = Tuple[Vector2D, Vector2D]
Adjacency = Dict[Vector2D, List[Vector2D]]

# Direction we pretend to arrive from at the start point
START_DIRECTION: Final[Vector2D] = Vector2D(0, 1)


def build_adjacency(segments: List[Segment]) -> Adjacency:
    """Maps every endpoint coordinate to its neighbouring coordinates"""
    adjacency: Adjacency = {}
    for start, end in segments:
        adjacency.setdefault(start, [])
        adjacency.setdefault(end, [])
        if end not in adjacency[start]:
            adjacency[start].append(end)
        if start not in adjacency[end]:
            adjacency[end].append(start)
    return adjacency


def order_boundary(adjacency: Adjacency) -> List[Vector2D]:
    """Walks the boundary from the lowest-leftmost point, always taking the
    most clockwise turn. Returns an empty list if fewer than 3 points are found."""

    if not adjacency:
        return []

    start = min(adjacency)  # Smallest x, then smallest y
    ordered: List[Vector2D] = [start]
    visited = {start}
    previous: Optional[Vector2D] = None
    current = start
    incoming = START_DIRECTION

    while len(ordered) < len(adjacency):
        best: Optional[Vector2D] = None
        best_angle = 0.0
        for neighbour in adjacency[current]:
            if neighbour == previous:
                continue
            if neighbour in visited and neighbour != start:
                continue
            angle = turn_angle(incoming, neighbour - current)
            if best is None or angle > best_angle:
                best, best_angle = neighbour, angle

        if best is None or best == start:
            break

        ordered.append(best)
        visited.add(best)
        incoming = best - current
        previous, current = current, best

    if len(ordered) < 3:
        return []
    return ordered


def flip_triangles(triangles: List[Triangle]) -> List[Triangle]:
    return [(a, c, b) for a, b, c in triangles]


def flatten(triangles: List[Triangle]) -> List[int]:
    return [i for triangle in triangles for i in triangle]


class SectorMeshBuilder:
    """
    Builds sector polygons and floor/ceiling meshes for a level.
    Lines are indexed by sector once, polygons and triangles are cached.
    """

    def __init__(self, level: Level):
        self.level = level
        self.sector_lines: Dict[int, List[int]] = self.index_sector_lines()
        self.polygons: Dict[int, List[Vector2D]] = {}
        self.triangles: Dict[int, List[Triangle]] = {}

    def index_sector_lines(self) -> Dict[int, List[int]]:
        sector_lines: Dict[int, List[int]] = {}
        for i, linedef in enumerate(self.level.linedefs):
            sectors = set()
            for side in (linedef.front_sidedef, linedef.back_sidedef):
                sidedef = self.level.sidedef(side)
                if sidedef is not None:
                    sectors.add(sidedef.sector)
            for sector in sectors:
                sector_lines.setdefault(sector, []).append(i)
        return sector_lines

    def sector_segments(self, sector_index: int) -> List[Segment]:
        segments: List[Segment] = []
        for i in self.sector_lines.get(sector_index, []):
            linedef = self.level.linedefs[i]
            start = self.level.vertex(linedef.start_vertex)
            end = self.level.vertex(linedef.end_vertex)
            if start is None or end is None:
                logger.warning(f"Linedef {i} references a missing vertex")
                continue
            a, b = Vector2D(start.x, start.y), Vector2D(end.x, end.y)
            if a == b:
                continue
            segments.append((a, b))
        return segments

    def sector_polygon(self, sector_index: int) -> List[Vector2D]:
        if sector_index not in self.polygons:
            adjacency = build_adjacency(self.sector_segments(sector_index))
            polygon = order_boundary(adjacency)
            if not polygon:
                logger.debug(f"Sector {sector_index} has no closed boundary")
            self.polygons[sector_index] = polygon
        return self.polygons[sector_index]

    def sector_triangles(self, sector_index: int) -> List[Triangle]:
        if sector_index not in self.triangles:
            self.triangles[sector_index] = triangulate(self.sector_polygon(sector_index))
        return self.triangles[sector_index]

    def build_flat_mesh(self, sector_index: int, ceiling: bool) -> Optional[MeshData]:
        sector = self.level.sector(sector_index)
        if sector is None:
            return None

        polygon = self.sector_polygon(sector_index)
        triangles = self.sector_triangles(sector_index)
        if not triangles:
            return None

        if ceiling:
            name, height = f"Ceiling_{sector_index}", sector.ceiling_height
            texture = sector.ceiling_texture
            triangles = flip_triangles(triangles)
        else:
            name, height = f"Floor_{sector_index}", sector.floor_height
            texture = sector.floor_texture

        return MeshData(
            name=name,
            texture=texture_or_none(texture),
            positions=[(float(p.x), float(height), float(-p.y)) for p in polygon],
            indices=flatten(triangles),
            uvs=[(p.x / TILE_SIZE, p.y / TILE_SIZE) for p in polygon],
            part='ceiling' if ceiling else 'floor',
        )

    def build_floor_mesh(self, sector_index: int) -> Optional[MeshData]:
        return self.build_flat_mesh(sector_index, ceiling=False)

    def build_ceiling_mesh(self, sector_index: int) -> Optional[MeshData]:
        return self.build_flat_mesh(sector_index, ceiling=True)

    def build_all(self) -> List[MeshData]:
        meshes: List[MeshData] = []
        for i in range(len(self.level.sectors)):
            for mesh in (self.build_floor_mesh(i), self.build_ceiling_mesh(i)):
                if mesh is not None:
                    meshes.append(mesh)
        return meshes
