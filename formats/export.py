"""
Runs a full import pass over one .wad: textures, flats and the
floor, ceiling and wall meshes of every map.
"""

from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass, field
from pathlib import Path
import logging
from PIL.Image import Image
from geoutil import MeshData
from sector_mesh import SectorMeshBuilder
from wall_mesh import build_all_walls
from formats.wad_reader import WadReader
from formats.level_reader import Level, find_maps, load_level
from formats.texture_builder import TextureBuilder


logger = logging.getLogger(__name__)


@dataclass
class LevelGeometry:
    name: str
    floors: List[MeshData] = field(default_factory=list)
    ceilings: List[MeshData] = field(default_factory=list)
    walls: List[MeshData] = field(default_factory=list)

    @property
    def meshes(self) -> List[MeshData]:
        return self.floors + self.ceilings + self.walls


@dataclass
class WadImport:
    textures: Dict[str, Image] = field(default_factory=dict)
    flats: Dict[str, Image] = field(default_factory=dict)
    levels: Dict[str, LevelGeometry] = field(default_factory=dict)


def build_level_geometry(level: Level) -> LevelGeometry:
    geometry = LevelGeometry(level.name)

    for mesh in SectorMeshBuilder(level).build_all():
        if mesh.part == 'ceiling':
            geometry.ceilings.append(mesh)
        else:
            geometry.floors.append(mesh)

    geometry.walls = build_all_walls(level)

    skipped = len(level.sectors) - len(geometry.floors)
    if skipped:
        logger.info(f"{level.name}: {skipped} of {len(level.sectors)} sectors "\
                    'have no closed boundary')
    return geometry


def import_wad(reader: WadReader, maps: Optional[Sequence[str]] = None) -> WadImport:
    result = WadImport()

    builder = TextureBuilder(reader)
    result.textures = builder.build_textures()
    result.flats = builder.build_flats()

    for index, name in find_maps(reader):
        if maps and name not in maps:
            continue
        level = load_level(reader, index)
        result.levels[name] = build_level_geometry(level)
        logger.info(f"{name}: {len(level.sectors)} sectors, "\
                    f"{len(result.levels[name].walls)} wall segments")

    if maps:
        for name in maps:
            if name not in result.levels:
                logger.warning(f"Map {name} not found")

    return result


def extract_images(images: Dict[str, Image], outputdir: Path, image_format: str) -> int:
    if not outputdir.is_dir():
        outputdir.mkdir(parents=True)

    for name, image in images.items():
        image.save(outputdir / f"{name}.{image_format}")
    return len(images)


def process_wad(filepath: Path, outputdir: Path,
                maps: Optional[Sequence[str]] = None,
                extract_textures: bool = False,
                extract_flats: bool = False,
                image_format: str = 'png') -> WadImport:
    with filepath.open('rb') as file:
        reader = WadReader.from_file(file)

    logger.info(f"Reading {filepath.name} ({reader.header['magic']}, "\
                f"{reader.lump_count} lumps)")

    result = import_wad(reader, maps)

    if extract_textures:
        count = extract_images(result.textures, outputdir / 'textures', image_format)
        logger.info(f"Extracted {count} textures to {outputdir / 'textures'}")
    if extract_flats:
        count = extract_images(result.flats, outputdir / 'flats', image_format)
        logger.info(f"Extracted {count} flats to {outputdir / 'flats'}")

    return result
