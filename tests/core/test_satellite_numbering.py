#!/usr/bin/env python3
"""Test suite for the flat satellite index space"""

import unittest
from pysatnav.core.constants import INVALID_SATELLITE_INDEX
from pysatnav.core.satellite_numbering import (
    DEFAULT_CONSTELLATIONS, Constellation, ConstellationTable,
    id_from_index, index_from_id
)


class TestConstellationTable(unittest.TestCase):
    """Test constellation sizing"""

    def test_default_size(self):
        self.assertEqual(DEFAULT_CONSTELLATIONS.num_satellites, 32 + 26 + 36 + 16 + 7)

    def test_index_ranges(self):
        """Constellations occupy contiguous ranges in table order"""
        self.assertEqual(DEFAULT_CONSTELLATIONS.index_range('G'), range(0, 32))
        self.assertEqual(DEFAULT_CONSTELLATIONS.index_range('R'), range(32, 58))
        self.assertEqual(DEFAULT_CONSTELLATIONS.index_range('E'), range(58, 94))
        self.assertEqual(DEFAULT_CONSTELLATIONS.index_range('C'), range(94, 110))
        self.assertEqual(DEFAULT_CONSTELLATIONS.index_range('J'), range(110, 117))

    def test_index_bias(self):
        self.assertEqual(DEFAULT_CONSTELLATIONS.index_bias('G'), -1)
        self.assertEqual(DEFAULT_CONSTELLATIONS.index_bias('R'), 31)
        with self.assertRaises(KeyError):
            DEFAULT_CONSTELLATIONS.index_bias('X')

    def test_duplicate_characters_rejected(self):
        with self.assertRaises(ValueError):
            ConstellationTable((Constellation('G', 'GPS', 32), Constellation('G', 'GPS', 4)))

    def test_empty_constellation_rejected(self):
        with self.assertRaises(ValueError):
            ConstellationTable((Constellation('G', 'GPS', 0),))

    def test_custom_table(self):
        table = ConstellationTable((Constellation('E', 'Galileo', 4), Constellation('G', 'GPS', 2)))
        self.assertEqual(table.num_satellites, 6)
        self.assertEqual(index_from_id('G01', table), 4)
        self.assertEqual(id_from_index(3, table), 'E04')
        self.assertEqual(index_from_id('G03', table), INVALID_SATELLITE_INDEX)


class TestSatelliteIds(unittest.TestCase):
    """Test identifier <-> index conversion"""

    def test_known_ids(self):
        self.assertEqual(index_from_id('G01'), 0)
        self.assertEqual(index_from_id('G32'), 31)
        self.assertEqual(index_from_id('R01'), 32)
        self.assertEqual(index_from_id('E05'), 62)
        self.assertEqual(index_from_id('C16'), 109)
        self.assertEqual(index_from_id('J01'), 110)

    def test_sp3_prefix(self):
        """SP3 position records carry a leading 'P'"""
        self.assertEqual(index_from_id('PG01'), 0)
        self.assertEqual(index_from_id('PE05'), 62)

    def test_invalid_ids(self):
        for sat_id in ['', 'X01', 'G', 'G00', 'G33', 'C17', 'Gxx', 'S20']:
            with self.subTest(sat_id=sat_id):
                self.assertEqual(index_from_id(sat_id), INVALID_SATELLITE_INDEX)

    def test_round_trip(self):
        """Every index maps to an identifier that maps back to it"""
        for index in range(DEFAULT_CONSTELLATIONS.num_satellites):
            sat_id = id_from_index(index)
            self.assertEqual(index_from_id(sat_id), index)

    def test_zero_padded_slot(self):
        self.assertEqual(id_from_index(4), 'G05')
        self.assertEqual(id_from_index(116), 'J07')

    def test_out_of_range_index(self):
        self.assertEqual(id_from_index(-1), '')
        self.assertEqual(id_from_index(DEFAULT_CONSTELLATIONS.num_satellites), '')


if __name__ == '__main__':
    unittest.main()
