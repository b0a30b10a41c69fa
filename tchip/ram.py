#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes.  Also
supports fast moving (copying) and zeroing of memory blocks.

The same class backs the display planes, where moving memory is used to
scroll the screen.

Every access is bounds-checked.  A program that walks I or the program counter
off the end of memory gets a RAMError rather than silently wrapping.  Memory is
held in a plain bytearray so that the whole machine can be deep-copied for
save states.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self):
        self.resize(0)

    def resize(self, mem_size):
        self.mem = bytearray(mem_size)
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location + size - 1)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top or location < 0:
            raise RAMError("Memory access out of bounds at 0x{:04x}".format(location))

    def move_mem(self, offset):
        # Fast slice-based memory mover.  Leaves original data behind.  This is only used to shift everything, so
        # there is no start, end, or size.
        if offset >= self.mem_size or -offset >= self.mem_size:
            return

        if offset < 0:
            self.mem[:offset] = self.mem[-offset:]
        elif offset > 0:
            self.mem[offset:] = self.mem[:-offset]

    def zero_block(self, offset, size):
        if size <= 0:
            return

        block_top = offset + size
        self.check_overflow(block_top - 1)
        self.mem[offset:block_top] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)
