"""
Tests for the .wad lump directory reader
"""

import unittest
from io import BytesIO
from struct import pack
from formats import InvalidFormatException
from formats.wad_reader import WadReader, decode_records
from formats.wad_structures import Vertex, Linedef, Sidedef, Sector, RECORD_SIZES
from testutil import (build_wad, build_vertexes, build_linedefs,
                      build_sidedefs, build_sectors)


class TestWadReader(unittest.TestCase):

    def test_empty_wad(self):
        reader = WadReader(build_wad([]))

        self.assertEqual(0, reader.lump_count)
        self.assertIsNone(reader.get_lump_data('PLAYPAL'))
        self.assertIsNone(reader.get_lump_data_at(0))
        self.assertIsNone(reader.lump_at(0))
        self.assertEqual([], list(reader.lump_names()))
        self.assertEqual([], reader.read_records('VERTEXES', Vertex))
        self.assertEqual([], reader.read_records(0, Vertex))
        self.assertIsNone(reader.read_lump_data('PNAMES', lambda f: f.read()))
        self.assertEqual(-1, reader.find_lump_index('E1M1'))
        self.assertNotIn('E1M1', reader)

    def test_header(self):
        reader = WadReader(build_wad([('A', b'abc')], magic=b'IWAD'))
        self.assertEqual('IWAD', reader.header['magic'])
        self.assertEqual(1, reader.header['num_lumps'])
        self.assertEqual(15, reader.header['dir_offset'])

    def test_unreadable_header(self):
        with self.assertRaises(InvalidFormatException):
            WadReader(b'PWAD\x01\x00')
        with self.assertRaises(InvalidFormatException):
            WadReader(b'WAD3' + pack('<ll', 0, 12))
        with self.assertRaises(InvalidFormatException):
            WadReader(b'IWAD' + pack('<ll', -1, 12))
        with self.assertRaises(InvalidFormatException):
            WadReader(b'IWAD' + pack('<ll', 3, 5000))

    def test_lookup_by_name(self):
        reader = WadReader(build_wad([('PLAYPAL', b'\x01\x02'), ('COLORMAP', b'\x03')]))
        self.assertEqual(b'\x01\x02', reader.get_lump_data('PLAYPAL'))
        self.assertEqual(b'\x03', reader.get_lump_data('COLORMAP'))
        self.assertIn('COLORMAP', reader)
        self.assertEqual(['PLAYPAL', 'COLORMAP'], list(reader.lump_names()))

    def test_duplicate_names(self):
        reader = WadReader(build_wad([
            ('E1M1', b''),
            ('VERTEXES', b'first'),
            ('E1M2', b''),
            ('VERTEXES', b'second'),
        ]))

        # Name lookup keeps the last entry
        self.assertEqual(b'second', reader.get_lump_data('VERTEXES'))

        # Positional lookup keeps both
        self.assertEqual(b'first', reader.get_lump_data_at(1))
        self.assertEqual(b'second', reader.get_lump_data_at(3))
        self.assertEqual(4, reader.lump_count)
        self.assertEqual(1, reader.find_lump_index('VERTEXES'))
        self.assertEqual(3, reader.find_lump_index('VERTEXES', 2))

    def test_name_is_null_trimmed(self):
        reader = WadReader(build_wad([('F_START', b'')]))
        self.assertEqual('F_START', reader.lump_at(0).name)

    def test_truncated_directory(self):
        data = build_wad([('A', b'1'), ('B', b'2')])
        reader = WadReader(data[:-8])  # Cut the second entry in half
        self.assertEqual(1, reader.lump_count)
        self.assertEqual(b'1', reader.get_lump_data('A'))

    def test_truncated_lump(self):
        data = b'PWAD' + pack('<ll', 1, 12) + pack('<ll', 0, 100) + b'TOOBIG\x00\x00'
        reader = WadReader(data)
        self.assertEqual(data, reader.get_lump_data('TOOBIG'))

    def test_read_records(self):
        reader = WadReader(build_wad([
            ('VERTEXES', build_vertexes([(0, 0), (-64, 128)]) + b'\x01'),
            ('LINEDEFS', build_linedefs([(0, 1, 4, 0, 0xFFFF)])),
            ('SIDEDEFS', build_sidedefs([('-', 'STEP1', 'STARTAN3', 2)])),
            ('SECTORS', build_sectors([(-8, 120)])),
        ]))

        vertices = reader.read_records('VERTEXES', Vertex)
        self.assertEqual([Vertex(0, 0), Vertex(-64, 128)], vertices)

        linedef = reader.read_records('LINEDEFS', Linedef)[0]
        self.assertEqual(Linedef(0, 1, 4, 0, 0, 0, 0xFFFF), linedef)
        self.assertTrue(linedef.two_sided)
        self.assertFalse(linedef.blocks_player)
        self.assertFalse(linedef.has_back_side)

        sidedef = reader.read_records('SIDEDEFS', Sidedef)[0]
        self.assertEqual('-', sidedef.upper_texture)
        self.assertEqual('STEP1', sidedef.lower_texture)
        self.assertEqual('STARTAN3', sidedef.middle_texture)
        self.assertEqual(2, sidedef.sector)

        sector = reader.read_records('SECTORS', Sector)[0]
        self.assertEqual(-8, sector.floor_height)
        self.assertEqual(120, sector.ceiling_height)
        self.assertEqual(128, sector.wall_height)
        self.assertEqual('FLOOR4_8', sector.floor_texture)
        self.assertEqual(160, sector.light_level)

    def test_read_lump_array_with_decoder(self):
        reader = WadReader(build_wad([('NUMBERS', pack('<4h', 1, 2, 3, 4))]))
        result = reader.read_lump_array(
            'NUMBERS', lambda f: int.from_bytes(f.read(2), 'little'), 2)
        self.assertEqual([1, 2, 3, 4], result)
        self.assertEqual([], reader.read_lump_array('MISSING', Vertex.read, 4))

    def test_decode_records_truncates_partial(self):
        data = build_vertexes([(1, 2), (3, 4)]) + b'\x05\x00'
        result = decode_records(data, Vertex.read, RECORD_SIZES[Vertex])
        self.assertEqual([Vertex(1, 2), Vertex(3, 4)], result)

    def test_from_file(self):
        reader = WadReader.from_file(BytesIO(build_wad([('A', b'x')])))
        self.assertEqual(b'x', reader.get_lump_data('A'))


if __name__ == '__main__':
    unittest.main()
