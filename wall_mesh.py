"""
Wall quads for each side of a linedef. One-sided lines get a full height
middle wall, two-sided lines get lower and upper risers where the
neighbouring sector's floor or ceiling differs.
"""

from typing import List, Optional
import logging
from vector2d import Vector2D
from geoutil import MeshData, TILE_SIZE, distance
from formats.level_reader import Level
from formats.wad_structures import Sidedef, Vertex, texture_or_none


logger = logging.getLogger(__name__)


def wall_quad(name: str, texture: Optional[str], part: str,
              start: Vertex, end: Vertex, bottom: float, top: float,
              mirrored: bool) -> MeshData:
    length = distance(Vector2D(start.x, start.y), Vector2D(end.x, end.y))
    height = top - bottom
    u, v = length / TILE_SIZE, height / TILE_SIZE

    if mirrored:
        indices = [0, 2, 1, 0, 3, 2]
    else:
        indices = [0, 1, 2, 0, 2, 3]

    return MeshData(
        name=name,
        texture=texture,
        positions=[
            (float(start.x), float(bottom), float(-start.y)),
            (float(end.x), float(bottom), float(-end.y)),
            (float(end.x), float(top), float(-end.y)),
            (float(start.x), float(top), float(-start.y)),
        ],
        indices=indices,
        uvs=[(0.0, 0.0), (u, 0.0), (u, v), (0.0, v)],
        part=part,
    )


def side_texture(sidedef: Sidedef, two_sided: bool) -> Optional[str]:
    """The single texture used for a whole side of a line"""
    if two_sided:
        for texture in (sidedef.upper_texture, sidedef.lower_texture):
            if texture_or_none(texture):
                return texture
    return texture_or_none(sidedef.middle_texture)


def build_side_meshes(level: Level, line_index: int, back: bool) -> List[MeshData]:
    linedef = level.linedefs[line_index]
    this_side, other_side = linedef.front_sidedef, linedef.back_sidedef
    if back:
        this_side, other_side = other_side, this_side

    sidedef = level.sidedef(this_side)
    if sidedef is None:
        return []

    sector = level.sector(sidedef.sector)
    start = level.vertex(linedef.start_vertex)
    end = level.vertex(linedef.end_vertex)
    if sector is None or start is None or end is None:
        logger.warning(f"Linedef {line_index} references a missing "\
                       'sector or vertex, skipping side')
        return []

    prefix = f"Wall_{line_index}_{'Back' if back else 'Front'}"
    other = level.side_sector(other_side)

    if other is None:
        return [wall_quad(f"{prefix}_Middle", texture_or_none(sidedef.middle_texture),
                          'middle', start, end,
                          sector.floor_height, sector.ceiling_height, back)]

    meshes: List[MeshData] = []
    if sector.floor_height < other.floor_height:
        top = max(sector.floor_height, other.floor_height)
        meshes.append(wall_quad(f"{prefix}_Lower", texture_or_none(sidedef.lower_texture),
                                'lower', start, end, sector.floor_height, top, back))

    if sector.ceiling_height > other.ceiling_height:
        bottom = min(sector.ceiling_height, other.ceiling_height)
        meshes.append(wall_quad(f"{prefix}_Upper", texture_or_none(sidedef.upper_texture),
                                'upper', start, end, bottom, sector.ceiling_height, back))

    return meshes


def build_wall_meshes(level: Level, line_index: int) -> List[MeshData]:
    """Front side meshes followed by back side meshes of a linedef"""
    return (build_side_meshes(level, line_index, back=False)
            + build_side_meshes(level, line_index, back=True))


def build_all_walls(level: Level) -> List[MeshData]:
    meshes: List[MeshData] = []
    for i in range(len(level.linedefs)):
        meshes.extend(build_wall_meshes(level, i))
    return meshes
