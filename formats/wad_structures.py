# -*- coding: utf-8 -*-
"""
Fixed size records found in the map lumps of a Doom format .wad,
plus the variable length texture and patch headers.
"""

from typing import BinaryIO, Final, Optional
from dataclasses import dataclass
from formats import (read_short, read_ushort, read_uint, read_name)


NO_SIDEDEF: Final[int] = 0xFFFF
NO_TEXTURE: Final[str] = '-'

ML_BLOCKING: Final[int] = 0x0001
ML_TWOSIDED: Final[int] = 0x0004


def texture_or_none(name: str) -> Optional[str]:
    if not name or name == NO_TEXTURE:
        return None
    return name


@dataclass(frozen=True)
class Vertex:
    x: int
    y: int

    @classmethod
    def read(cls, file: BinaryIO) -> 'Vertex':
        return cls(read_short(file), read_short(file))


@dataclass(frozen=True)
class Linedef:
    start_vertex: int
    end_vertex: int
    flags: int
    special: int
    tag: int
    front_sidedef: int
    back_sidedef: int

    @property
    def has_back_side(self) -> bool: return self.back_sidedef != NO_SIDEDEF
    @property
    def two_sided(self) -> bool: return bool(self.flags & ML_TWOSIDED)
    @property
    def blocks_player(self) -> bool: return bool(self.flags & ML_BLOCKING)

    @classmethod
    def read(cls, file: BinaryIO) -> 'Linedef':
        return cls(*(read_ushort(file) for _ in range(7)))


@dataclass(frozen=True)
class Sidedef:
    x_offset: int
    y_offset: int
    upper_texture: str
    lower_texture: str
    middle_texture: str
    sector: int

    @classmethod
    def read(cls, file: BinaryIO) -> 'Sidedef':
        return cls(
            x_offset=read_short(file),
            y_offset=read_short(file),
            upper_texture=read_name(file),
            lower_texture=read_name(file),
            middle_texture=read_name(file),
            sector=read_ushort(file),
        )


@dataclass(frozen=True)
class Sector:
    floor_height: int
    ceiling_height: int
    floor_texture: str
    ceiling_texture: str
    light_level: int
    special: int
    tag: int

    @property
    def wall_height(self) -> int:
        return self.ceiling_height - self.floor_height

    @classmethod
    def read(cls, file: BinaryIO) -> 'Sector':
        return cls(
            floor_height=read_short(file),
            ceiling_height=read_short(file),
            floor_texture=read_name(file),
            ceiling_texture=read_name(file),
            light_level=read_short(file),
            special=read_short(file),
            tag=read_short(file),
        )


@dataclass(frozen=True)
class PatchPlacement:
    origin_x: int
    origin_y: int
    patch: int
    stepdir: int = 1
    colormap: int = 0

    @classmethod
    def read(cls, file: BinaryIO) -> 'PatchPlacement':
        return cls(
            origin_x=read_short(file),
            origin_y=read_short(file),
            patch=read_ushort(file),
            stepdir=read_ushort(file),
            colormap=read_ushort(file),
        )


@dataclass(frozen=True)
class TextureDef:
    """Composite texture descriptor from a TEXTURE1/TEXTURE2 lump"""
    name: str
    flags: int
    width: int
    height: int
    patches: tuple[PatchPlacement, ...]

    @classmethod
    def read(cls, file: BinaryIO) -> 'TextureDef':
        name = read_name(file)
        flags = read_ushort(file)
        width = read_ushort(file)
        height = read_ushort(file)
        read_uint(file)  # columndirectory, unused
        patch_count = read_ushort(file)
        patches = tuple(PatchPlacement.read(file) for _ in range(patch_count))
        return cls(name, flags, width, height, patches)


@dataclass(frozen=True)
class PatchHeader:
    width: int
    height: int
    left_offset: int
    top_offset: int
    column_offsets: tuple[int, ...]

    @classmethod
    def read(cls, file: BinaryIO) -> 'PatchHeader':
        width = read_ushort(file)
        height = read_ushort(file)
        left_offset = read_short(file)
        top_offset = read_short(file)
        column_offsets = tuple(read_uint(file) for _ in range(width))
        return cls(width, height, left_offset, top_offset, column_offsets)


# Byte size of each fixed size record, used to count records in a lump
RECORD_SIZES: Final[dict[type, int]] = {
    Vertex: 4,      # 2 shorts
    Linedef: 14,    # 7 ushorts
    Sidedef: 30,    # 2 shorts + 3 * 8 byte names + 1 ushort
    Sector: 26,     # 2 shorts + 2 * 8 byte names + 3 shorts
    PatchPlacement: 10,
}
