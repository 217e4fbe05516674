# -*- coding: utf-8 -*-
"""
Reads the header and lump directory of a Doom format .wad (IWAD/PWAD)
and gives access to the lumps by name and by directory position.
"""

from typing import Callable, Final, Iterator, Optional, TypeVar, Union, BinaryIO
from dataclasses import dataclass
from io import BytesIO
from struct import unpack
import logging
from formats import InvalidFormatException, EndOfFileException, decode_name
from formats.wad_structures import RECORD_SIZES


logger = logging.getLogger(__name__)

T = TypeVar('T')

HEADER_SIZE: Final[int] = 12
DIR_ENTRY_SIZE: Final[int] = 16
WAD_MAGICS: Final[tuple[bytes, ...]] = (b'IWAD', b'PWAD')


@dataclass(frozen=True)
class Lump:
    offset: int
    size: int
    name: str

    def __str__(self):
        return self.name


class WadReader:
    """
    Indexes the lumps of a .wad held in memory.

    Name lookups resolve to the last lump with that name, while the
    positional directory keeps every entry so that map lumps sharing
    names (VERTEXES, LINEDEFS...) can be read from the run following
    their map marker.
    """

    def __init__(self, data: bytes):
        self.data = data

        if len(data) < HEADER_SIZE:
            raise InvalidFormatException(
                f"File is too small to be a .wad ({len(data)} bytes)")

        magic = data[0:4]
        if magic not in WAD_MAGICS:
            raise InvalidFormatException(
                f"Not a valid .wad file, identification was {magic!r}")

        num_lumps, dir_offset = unpack('<ll', data[4:HEADER_SIZE])
        if num_lumps < 0 or dir_offset < 0:
            raise InvalidFormatException(
                f"Invalid .wad header ({num_lumps} lumps at {dir_offset})")
        if num_lumps > 0 and dir_offset >= len(data):
            raise InvalidFormatException(
                f"Directory offset {dir_offset} is past the end of the file")

        self.header = {
            'magic': magic.decode('ascii'),
            'num_lumps': num_lumps,
            'dir_offset': dir_offset,
        }

        self.lumps: list[Lump] = []
        self.names: dict[str, Lump] = {}
        self.read_directory(num_lumps, dir_offset)

    @classmethod
    def from_file(cls, file: BinaryIO) -> 'WadReader':
        return cls(file.read())

    def read_directory(self, num_lumps: int, dir_offset: int) -> None:
        available = (len(self.data) - dir_offset) // DIR_ENTRY_SIZE
        if available < num_lumps:
            logger.warning(f"Lump directory is truncated, reading {available} "\
                           f"of {num_lumps} entries")
            num_lumps = available

        for i in range(num_lumps):
            start = dir_offset + i * DIR_ENTRY_SIZE
            entry = self.data[start:start + DIR_ENTRY_SIZE]
            offset, size = unpack('<ll', entry[0:8])
            lump = Lump(offset, size, decode_name(entry[8:16]))
            self.lumps.append(lump)
            self.names[lump.name] = lump  # Last one wins

    @property
    def lump_count(self) -> int:
        return len(self.lumps)

    def __len__(self) -> int:
        return len(self.lumps)

    def __contains__(self, name: str) -> bool:
        return name in self.names

    def lump_names(self) -> Iterator[str]:
        """All lump names in directory order, duplicates included"""
        return (lump.name for lump in self.lumps)

    def lump_at(self, index: int) -> Optional[Lump]:
        if 0 <= index < len(self.lumps):
            return self.lumps[index]
        return None

    def find_lump_index(self, name: str, start: int = 0) -> int:
        for i in range(start, len(self.lumps)):
            if self.lumps[i].name == name:
                return i
        return -1

    def lump_bytes(self, lump: Lump) -> bytes:
        if lump.offset < 0 or lump.size < 0:
            logger.warning(f"Lump {lump.name} has an invalid range "\
                           f"({lump.size} bytes at {lump.offset})")
            return b''
        data = self.data[lump.offset:lump.offset + lump.size]
        if len(data) < lump.size:
            logger.warning(f"Lump {lump.name} is truncated, read {len(data)} "\
                           f"of {lump.size} bytes")
        return data

    def get_lump_data(self, name: str) -> Optional[bytes]:
        lump = self.names.get(name)
        if lump is None:
            return None
        return self.lump_bytes(lump)

    def get_lump_data_at(self, index: int) -> Optional[bytes]:
        lump = self.lump_at(index)
        if lump is None:
            return None
        return self.lump_bytes(lump)

    def read_lump_data(self, name: str,
                       decoder: Callable[[BinaryIO], T]) -> Optional[T]:
        """Decodes a whole lump with a decoder reading from a binary stream"""
        data = self.get_lump_data(name)
        if data is None:
            return None
        return decoder(BytesIO(data))

    def read_lump_array(self, name: str,
                        decoder: Callable[[BinaryIO], T],
                        record_size: int) -> list[T]:
        return decode_records(self.get_lump_data(name), decoder, record_size)

    def read_lump_array_at(self, index: int,
                           decoder: Callable[[BinaryIO], T],
                           record_size: int) -> list[T]:
        return decode_records(self.get_lump_data_at(index), decoder, record_size)

    def read_records(self, lump: Union[str, int], record_type: type) -> list:
        """Decodes a lump of fixed size records of a type in RECORD_SIZES"""
        record_size = RECORD_SIZES[record_type]
        if isinstance(lump, int):
            return self.read_lump_array_at(lump, record_type.read, record_size)
        return self.read_lump_array(lump, record_type.read, record_size)


def decode_records(data: Optional[bytes],
                   decoder: Callable[[BinaryIO], T],
                   record_size: int) -> list[T]:
    """Decodes len(data) // record_size records, ignoring a trailing partial record"""
    if not data or record_size <= 0:
        return []

    count = len(data) // record_size
    records: list[T] = []
    stream = BytesIO(data)
    for i in range(count):
        stream.seek(i * record_size)
        try:
            records.append(decoder(stream))
        except EndOfFileException:
            break
    return records
