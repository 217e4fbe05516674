# -*- coding: utf-8 -*-

from typing import BinaryIO
from struct import unpack


class InvalidFormatException(Exception):
    pass


class EndOfFileException(Exception):
    pass


def read_exact(file: BinaryIO, length: int) -> bytes:
    """Reads exactly length bytes from the buffer or raises EndOfFileException"""
    data = file.read(length)
    if len(data) < length:
        raise EndOfFileException(
            f"Expected {length} bytes, got {len(data)}")
    return data


def read_ubyte(file: BinaryIO) -> int:
    """Reads a single unsigned byte from the buffer"""
    return unpack('<B', read_exact(file, 1))[0]


def read_short(file: BinaryIO) -> int:
    """Reads two bytes (int16) from the buffer"""
    return unpack('<h', read_exact(file, 2))[0]


def read_ushort(file: BinaryIO) -> int:
    """Reads two bytes (uint16) from the buffer"""
    return unpack('<H', read_exact(file, 2))[0]


def read_int(file: BinaryIO) -> int:
    """Reads 4 bytes (int32) from the buffer"""
    return unpack('<i', read_exact(file, 4))[0]


def read_uint(file: BinaryIO) -> int:
    """Reads 4 bytes (uint32) from the buffer"""
    return unpack('<I', read_exact(file, 4))[0]


def decode_name(raw: bytes) -> str:
    """Null-trims a fixed size ascii name"""
    return raw.split(b'\x00', 1)[0].decode('ascii', errors='replace')


def read_name(file: BinaryIO, length: int = 8) -> str:
    """Reads a null-padded ascii name of a set length from the buffer"""
    return decode_name(read_exact(file, length))
