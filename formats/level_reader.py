# -*- coding: utf-8 -*-
"""
Finds the maps of a Doom format .wad and decodes their geometry lumps.
"""

from typing import Final, Optional
from dataclasses import dataclass, field
import re
import logging
from formats.wad_reader import WadReader
from formats.wad_structures import Vertex, Linedef, Sidedef, Sector, NO_SIDEDEF


logger = logging.getLogger(__name__)


MAP_MARKER: Final[re.Pattern] = re.compile(r'^(E\dM\d|MAP\d\d)$')

# Lumps that may follow a map marker, in their usual order
LEVEL_LUMPS: Final[tuple[str, ...]] = (
    'THINGS', 'LINEDEFS', 'SIDEDEFS', 'VERTEXES', 'SEGS',
    'SSECTORS', 'NODES', 'SECTORS', 'REJECT', 'BLOCKMAP',
)


@dataclass
class Level:
    name: str
    vertices: list[Vertex] = field(default_factory=list)
    linedefs: list[Linedef] = field(default_factory=list)
    sidedefs: list[Sidedef] = field(default_factory=list)
    sectors: list[Sector] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Level({self.name}: {len(self.vertices)} vertices, "\
            f"{len(self.linedefs)} linedefs, {len(self.sectors)} sectors)"

    def vertex(self, index: int) -> Optional[Vertex]:
        if 0 <= index < len(self.vertices):
            return self.vertices[index]
        return None

    def sidedef(self, index: int) -> Optional[Sidedef]:
        if index == NO_SIDEDEF or not 0 <= index < len(self.sidedefs):
            return None
        return self.sidedefs[index]

    def sector(self, index: int) -> Optional[Sector]:
        if 0 <= index < len(self.sectors):
            return self.sectors[index]
        return None

    def side_sector(self, sidedef_index: int) -> Optional[Sector]:
        sidedef = self.sidedef(sidedef_index)
        if sidedef is None:
            return None
        return self.sector(sidedef.sector)


def is_map_marker(name: str) -> bool:
    return MAP_MARKER.match(name) is not None


def find_maps(reader: WadReader) -> list[tuple[int, str]]:
    """Directory position and name of every map marker"""
    maps = [(i, name) for i, name in enumerate(reader.lump_names())
            if is_map_marker(name)]
    logger.debug(f"Found {len(maps)} maps: {', '.join(name for _, name in maps)}")
    return maps


def load_level(reader: WadReader, marker_index: int) -> Level:
    """Decodes the geometry lumps in the run following the map marker
    at marker_index. The run ends at the first lump that isn't a map lump."""

    marker = reader.lump_at(marker_index)
    level = Level(marker.name if marker else '')

    i = marker_index + 1
    while (lump := reader.lump_at(i)) is not None and lump.name in LEVEL_LUMPS:
        if lump.name == 'VERTEXES':
            level.vertices = reader.read_records(i, Vertex)
        elif lump.name == 'LINEDEFS':
            level.linedefs = reader.read_records(i, Linedef)
        elif lump.name == 'SIDEDEFS':
            level.sidedefs = reader.read_records(i, Sidedef)
        elif lump.name == 'SECTORS':
            level.sectors = reader.read_records(i, Sector)
        i += 1

    logger.debug(repr(level))
    return level


def load_level_by_name(reader: WadReader, name: str) -> Optional[Level]:
    index = reader.find_lump_index(name)
    if index < 0:
        return None
    return load_level(reader, index)
