"""
Helpers to assemble small .wad files in memory for the tests
"""

from typing import List, Tuple, Sequence
from struct import pack


def name8(name: str) -> bytes:
    return name.encode('ascii')[:8].ljust(8, b'\x00')


def build_wad(lumps: Sequence[Tuple[str, bytes]], magic: bytes = b'PWAD') -> bytes:
    """Lump data first, directory at the end"""
    body = b''
    entries = b''
    offset = 12
    for name, data in lumps:
        entries += pack('<ll', offset, len(data)) + name8(name)
        body += data
        offset += len(data)
    return magic + pack('<ll', len(lumps), offset) + body + entries


def build_palette(colours: Sequence[Tuple[int, int, int]]) -> bytes:
    data = b''.join(bytes(c) for c in colours)
    return data.ljust(768, b'\x00')


def build_pnames(names: Sequence[str]) -> bytes:
    return pack('<i', len(names)) + b''.join(name8(n) for n in names)


def build_texture_lump(textures: Sequence[Tuple[str, int, int, Sequence[Tuple[int, int, int]]]]) -> bytes:
    """textures: (name, width, height, [(origin_x, origin_y, patch index)])"""
    descriptors: List[bytes] = []
    for name, width, height, patches in textures:
        data = name8(name) + pack('<HHHIH', 0, width, height, 0, len(patches))
        for ox, oy, patch in patches:
            data += pack('<hhHHH', ox, oy, patch, 1, 0)
        descriptors.append(data)

    header_size = 4 + 4 * len(descriptors)
    offsets = []
    offset = header_size
    for data in descriptors:
        offsets.append(offset)
        offset += len(data)
    return (pack('<i', len(descriptors))
            + b''.join(pack('<i', o) for o in offsets)
            + b''.join(descriptors))


def build_patch(columns: Sequence[Sequence[Tuple[int, Sequence[int]]]], height: int) -> bytes:
    """columns: per column list of posts (topdelta, palette indices)"""
    width = len(columns)
    header_size = 8 + 4 * width
    streams: List[bytes] = []
    for posts in columns:
        stream = b''
        for topdelta, indices in posts:
            stream += bytes((topdelta, len(indices), 0)) + bytes(indices) + b'\x00'
        streams.append(stream + b'\xff')

    offsets = []
    offset = header_size
    for stream in streams:
        offsets.append(offset)
        offset += len(stream)
    return (pack('<HHhh', width, height, 0, 0)
            + b''.join(pack('<I', o) for o in offsets)
            + b''.join(streams))


def build_vertexes(points: Sequence[Tuple[int, int]]) -> bytes:
    return b''.join(pack('<hh', x, y) for x, y in points)


def build_linedefs(lines: Sequence[Tuple[int, int, int, int, int]]) -> bytes:
    """lines: (start, end, flags, front sidedef, back sidedef)"""
    return b''.join(pack('<7H', start, end, flags, 0, 0, front, back)
                    for start, end, flags, front, back in lines)


def build_sidedefs(sides: Sequence[Tuple[str, str, str, int]]) -> bytes:
    """sides: (upper, lower, middle, sector)"""
    return b''.join(pack('<hh', 0, 0) + name8(upper) + name8(lower) + name8(middle)
                    + pack('<H', sector) for upper, lower, middle, sector in sides)


def build_sectors(sectors: Sequence[Tuple[int, int]],
                  floor: str = 'FLOOR4_8', ceiling: str = 'CEIL3_5') -> bytes:
    """sectors: (floor height, ceiling height)"""
    return b''.join(pack('<hh', f, c) + name8(floor) + name8(ceiling)
                    + pack('<hhh', 160, 0, 0) for f, c in sectors)
