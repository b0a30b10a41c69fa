#!/usr/bin/env python3

"""
Machine State

Everything a running program can observe or change lives here: registers,
memory, the call stack, timers, keys, display planes and XO-CHIP audio
registers.  A Machine is owned by exactly one CPU, which mutates it one
instruction (or one timer tick) at a time.

Nothing in here refers back to the CPU or to any host device, so a save state
is simply a deep copy of the whole object.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import (
    ARCH_CHIP8, ARCH_SCHIP, ARCH_XO_CHIP, PROGRAM_START, SYSFONT_SM_LOC, SYSFONT_BG_LOC, MEM_SIZE_CHIP8, MEM_SIZE_XO_CHIP,
    STACK_SIZE, NUM_KEYS, DEFAULT_PITCH, DEFAULT_PATTERN
)
from .fonts import SMALL_FONT, BIG_FONT
from .framebuffer import Framebuffer
from .ram import RAM
from .stack import Stack


class Machine:
    def __init__(self, config):
        self.arch = arch = config.arch

        # Allocate default memory matching system architecture
        self.ram = RAM()
        self.ram.resize(MEM_SIZE_CHIP8 if arch < ARCH_XO_CHIP else MEM_SIZE_XO_CHIP)
        self.i_bitmask = 0xFFF if arch < ARCH_XO_CHIP else 0xFFFF

        self.stack = Stack(STACK_SIZE)

        if arch == ARCH_CHIP8:
            vid_width, vid_height = 64, 32
        else:
            vid_width, vid_height = 128, 64

        self.framebuffer = Framebuffer(vid_width, vid_height, num_planes=2, allow_wrapping=not config.clipping)

        # RPL flags are only cleared when the machine is first built
        self.rpl = bytearray(16)

        self.reset()

    def reset(self):
        # Return to power-on state, apart from the RPL flags.  Any loaded program is erased.
        self.ram.clear()
        self.ram.write_block(SYSFONT_SM_LOC, SMALL_FONT)
        self.ram.write_block(SYSFONT_BG_LOC, BIG_FONT)
        self.stack.clear()
        self.framebuffer.reset()
        # Super-CHIP and XO-CHIP power on in low resolution, with every logical pixel covering 2x2 of the screen
        self.framebuffer.set_lo_res(self.arch >= ARCH_SCHIP)

        self.pc = PROGRAM_START
        self.v = bytearray(16)  # Bytearrays are mutable, so this should be fast when a register is updated
        self.i = 0              # Index register
        self.dt = 0             # Delay timer
        self.st = 0             # Sound timer
        self.beep = False
        self.keys = [False] * NUM_KEYS
        self.high_res = False
        self.key_frame = True
        self.next_wide = False  # Set when the next instruction is the double-length F000

        self.pattern_buffer = bytearray(DEFAULT_PATTERN)
        self.pitch = DEFAULT_PITCH

    @property
    def stack_pointer(self):
        return self.stack.pointer

    def load(self, data, location=PROGRAM_START):
        # Raw binary with no header.  RAMError if it doesn't fit.
        self.ram.write_block(location, data)
