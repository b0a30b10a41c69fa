#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from copy import deepcopy
from tchip.ram import RAM, RAMError


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM()
        self.ram.resize(5)

    def test_ram_init(self):
        ram = RAM()
        self.assertEqual("", ram.mem.hex())

    def test_ram_resize(self):
        self.assertEqual("0000000000", self.ram.mem.hex())
        self.assertEqual(4, self.ram.mem_top)

    def test_ram_read(self):
        self.ram.write(3, 0xAB)
        self.assertEqual(0xAB, self.ram.read(3))
        self.assertEqual(b"\x00\xAB", bytes(self.ram.read_block(2, 2)))

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())

    def test_ram_byte_overflow(self):
        self.assertRaises(RAMError, self.ram.write, 5, 255)
        self.assertRaises(RAMError, self.ram.read, 5)
        self.assertRaises(RAMError, self.ram.read, -1)

    def test_ram_block_overflow(self):
        self.assertRaises(RAMError, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))
        self.assertRaises(RAMError, self.ram.read_block, 4, 2)

    def test_ram_move_left(self):
        self.ram.write_block(1, bytearray(b"\xFC\xFD\xFE"))
        self.ram.move_mem(-1)
        self.assertEqual("fcfdfe0000", self.ram.mem.hex())
        self.ram.move_mem(-2)
        self.assertEqual("fe00000000", self.ram.mem.hex())

    def test_ram_move_right(self):
        self.ram.write_block(1, bytearray(b"\xFC\xFD\xFE"))
        self.ram.move_mem(1)
        self.assertEqual("0000fcfdfe", self.ram.mem.hex())

    def test_ram_move_nothing(self):
        self.ram.write_block(0, bytearray(b"\x01\x02\x03\x04\x05"))
        self.ram.move_mem(0)
        self.ram.move_mem(5)
        self.ram.move_mem(-9)
        self.assertEqual("0102030405", self.ram.mem.hex())

    def test_ram_zero_block(self):
        self.ram.write_block(0, bytearray(b"\xFC\xFD\xFE\xFF"))
        self.ram.zero_block(1, 2)
        self.assertEqual("fc0000ff00", self.ram.mem.hex())
        self.ram.zero_block(0, 0)
        self.assertEqual("fc0000ff00", self.ram.mem.hex())
        self.assertRaises(RAMError, self.ram.zero_block, 4, 2)

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_deepcopy(self):
        self.ram.write(0, 1)
        ram_copy = deepcopy(self.ram)
        self.ram.write(0, 2)
        self.assertEqual(1, ram_copy.read(0))


if __name__ == "__main__":
    unittest.main()
