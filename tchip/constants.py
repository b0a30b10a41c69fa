#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "TriChip Interpreter"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Emulated system architectures.  Ordered, so later architectures can be compared as supersets of earlier ones.
ARCH_CHIP8 = 0
ARCH_SCHIP = 10
ARCH_XO_CHIP = 20

# Default mappings for keys 0-F, later populated into a dictionary.  These are PyGame keycodes, which match ASCII for
# the keys used (x,1,2,3,q,w,e,a,s,d,z,c,4,r,f,v on a QWERTY keyboard)
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Startup
SUPPORTED_CPUS = {
    "chip8":  ARCH_CHIP8,    # Base CPU architecture
    "schip":  ARCH_SCHIP,    # Extra instructions, RPL registers, high res mode, scrolling, large system font
    "xochip": ARCH_XO_CHIP   # Two colour planes, 64K memory, audio patterns, etc
}

# Instructions executed per 60Hz frame
DEFAULT_TICKS_PER_FRAME = {
    ARCH_CHIP8:   15,
    ARCH_SCHIP:   20,
    ARCH_XO_CHIP: 500
}

# Quirk flags, all of which can be toggled independently
CPU_QUIRKS = [
    "vf_reset", "memory_increment", "display_wait", "clipping", "shifting_ignores_source", "jump_uses_vx",
    "clip_counts_as_collision", "legacy_scroll"
]

# Memory layout
PROGRAM_START = 0x200
SYSFONT_SM_LOC = 0x00   # 16 glyphs of 5 bytes
SYSFONT_BG_LOC = 0x50   # 10 glyphs of 10 bytes
MEM_SIZE_CHIP8 = 0x1000
MEM_SIZE_XO_CHIP = 0x10000
STACK_SIZE = 16
NUM_KEYS = 16

# Display plane masks (XO-CHIP FN01)
PLANE_NONE = 0b00
PLANE_1 = 0b01
PLANE_2 = 0b10
PLANE_BOTH = 0b11

# XO-CHIP audio
PATTERN_BUFFER_SIZE = 16
DEFAULT_PITCH = 64
DEFAULT_PATTERN = b"\x00\xFF" * 8  # Square wave

# Host actions reported by input plugins, outside of the 16-key keypad
ACTION_QUIT = "quit"
ACTION_RESET = "reset"
ACTION_SAVE_STATE = "save_state"
ACTION_LOAD_STATE = "load_state"
ACTION_FASTER = "faster"
ACTION_SLOWER = "slower"
ACTION_NEXT_PALETTE = "next_palette"
ACTION_PREVIOUS_PALETTE = "previous_palette"
ACTION_TOGGLE_MUTE = "toggle_mute"
