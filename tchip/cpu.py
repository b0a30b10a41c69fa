#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8, Super-CHIP and XO-CHIP)

Like a real computer, this is where most of the processing happens.  The host
calls step() for every instruction it wants executed, and tick_timers() once
every 60Hz frame.  The CPU never loops, sleeps or draws anything by itself: it
only changes the Machine it owns, which the host reads back through the
accessor methods at the bottom of this class.

All three architectures share one dispatch table.  The architecture decides
which instructions are added to that table, and the quirk flags from the
Config decide how the shared instructions behave.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from copy import deepcopy
from random import randint
from .constants import (
    APP_INTRO, ARCH_SCHIP, ARCH_XO_CHIP, PROGRAM_START, SYSFONT_SM_LOC, SYSFONT_BG_LOC, NUM_KEYS,
    PATTERN_BUFFER_SIZE
)
from .debugger import Debugger
from .fonts import SMALL_GLYPH_SIZE, BIG_GLYPH_SIZE
from .machine import Machine

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
WIDE_OPCODE = 0xF000  # Followed by a 16-bit operand, so skips over it need to jump 4 bytes


class CPUError(Exception):
    pass


class DecodeError(CPUError):
    def __init__(self, message, opcode, address):
        super().__init__(message)
        self.opcode = opcode
        self.address = address


class CPU:
    def __init__(self, config, debugger=None):
        self.config = config
        self.arch = arch = config.arch
        self.machine = Machine(config)
        self.debugger = Debugger() if debugger is None else debugger
        self.live_debug = self.debugger.is_live()
        self.opcode = 0
        self.debug_pc = PROGRAM_START

        # Quirks are read on every affected instruction, so copy them out of the config
        self.vf_reset = config.vf_reset
        self.memory_increment = config.memory_increment
        self.display_wait = config.display_wait
        self.shifting_ignores_source = config.shifting_ignores_source
        self.jump_uses_vx = config.jump_uses_vx
        self.clip_counts_as_collision = config.clip_counts_as_collision
        self.legacy_scroll = config.legacy_scroll

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,            # Exact match
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,       # Bitmask 0xF0FF
            0xF: self._Ennn_Fnnn        # Bitmask 0xF0FF
        }

        # Second-level lookup on the masked opcode
        self.masked_instructions = {
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x0000: self._0000,
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        if arch >= ARCH_SCHIP:
            # Add instructions for Super-CHIP and above
            self.masked_instructions.update(
                {
                    0x00FB: self._00FB,
                    0x00FC: self._00FC,
                    0x00FD: self._00FD,
                    0x00FE: self._00FE,
                    0x00FF: self._00FF,
                    0xF030: self._Fx30,
                    0xF075: self._Fx75,
                    0xF085: self._Fx85
                }
            )

            # Not worth having a separate way of accessing these, as there are only 16
            for n in range(0x10):  # Add scroll down functions
                self.masked_instructions[0x00C0 | n] = self._00Cn

        if arch >= ARCH_XO_CHIP:
            # Add instructions for XO-CHIP
            self.masked_instructions.update(
                {
                    0x5002: self._5xy2,
                    0x5003: self._5xy3,
                    0xF000: self._Fx00,  # Only F000 is used
                    0xF001: self._Fn01,
                    0xF002: self._Fx02,  # Only F002 is used
                    0xF03A: self._Fx3A
                }
            )

            for n in range(0x10):  # Add scroll up functions
                self.masked_instructions[0x00D0 | n] = self._00Dn

    # Host interface

    def load(self, data):
        self.machine.load(data)

    def reset(self):
        self.machine.reset()
        self.opcode = 0
        self.debug_pc = PROGRAM_START

    def step(self, is_key_frame=True):
        # Fetch, decode and execute a single instruction.  Any error is left for the host to deal with.
        machine = self.machine
        machine.key_frame = is_key_frame
        self.debug_pc = machine.pc  # Keep track of the program counter before altering it, in case there is a crash
        self.decode_exec(self.fetch())

    def tick_timers(self):
        machine = self.machine

        if machine.dt > 0:
            machine.dt -= 1

        if machine.st > 0:
            machine.st -= 1

        machine.beep = machine.st > 0

    def set_key(self, key, pressed):
        if not 0 <= key < NUM_KEYS:
            raise CPUError("Key {} is out of range".format(key))

        self.machine.keys[key] = bool(pressed)

    def snapshot(self):
        # Save states never share anything with the live machine
        return deepcopy(self.machine)

    def restore(self, snapshot):
        self.machine = deepcopy(snapshot)

    def get_display(self, plane_num=0):
        return self.machine.framebuffer.get_display(plane_num)

    def get_colours(self):
        return self.machine.framebuffer.get_colours()

    def get_screen_size(self):
        framebuffer = self.machine.framebuffer
        return framebuffer.vid_width, framebuffer.vid_height

    def get_pattern_buffer(self):
        return bytes(self.machine.pattern_buffer)

    def get_pitch(self):
        return self.machine.pitch

    def get_sound_frequency(self):
        # This is the standard XO-CHIP translation formula to convert the pitch register to playback frequency in Hz
        return round(4000 * (2 ** ((self.machine.pitch - 64) / 48.0)))

    def is_beeping(self):
        return self.machine.beep

    # Fetch and decode

    def fetch(self):
        machine = self.machine
        ram = machine.ram
        opcode = int.from_bytes(ram.read_block(machine.pc, 2), CPU_ENDIAN, signed=False)
        self.inc_pc()

        # Look ahead without moving, so skips can step over both words of a double-length instruction
        next_pc = machine.pc
        machine.next_wide = (
            next_pc + 1 <= ram.mem_top and
            int.from_bytes(ram.read_block(next_pc, 2), CPU_ENDIAN, signed=False) == WIDE_OPCODE
        )

        return opcode

    def decode_exec(self, opcode):
        self.opcode = opcode
        self.instructions[opcode >> 12]()

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.masked_instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def inc_pc(self):
        self.machine.pc += 2

    def dec_pc(self):
        # Only used to re-run instructions (e.g. keypress wait and display wait).
        self.machine.pc -= 2

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication (ever so slight slowdown).  Don't reference these more than necessary as they are
    # recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        raise DecodeError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info (arch {}):\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} is not emulated for the selected architecture."
            ).format(
                APP_INTRO, self.arch, self.debugger.debug(self, "???", verbose=True), self.opcode, self.debug_pc
            ),
            self.opcode,
            self.debug_pc
        ) from None

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _0nnn(self):
        self._call_masked_instruction(self.opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _post_skip(self):
        # Step over the next instruction, including the operand if it is F000
        if self.machine.next_wide:
            self.inc_pc()

        self.inc_pc()

    # Instructions for CHIP-8 (and above)

    def _0000(self):  # NOP
        if self.live_debug:
            self.debug("NOP")

    def _00E0(self):  # CLS
        if self.live_debug:
            self.debug("CLS")

        self.machine.framebuffer.clear()

    def _00EE(self):  # RET
        if self.live_debug:
            self.debug("RET")

        self.machine.pc = self.machine.stack.pop()

    def _1nnn(self):  # JP addr
        if self.live_debug:
            self.debug("JP 0x{:03x}".format(self.addr))

        self.machine.pc = self.addr

    def _2nnn(self):  # CALL addr
        if self.live_debug:
            self.debug("CALL 0x{:03x}".format(self.addr))

        machine = self.machine
        machine.stack.push(machine.pc)
        machine.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.live_debug:
            self.debug("SE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.machine.v[self.vx] == self.byte:
            self._post_skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.live_debug:
            self.debug("SNE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.machine.v[self.vx] != self.byte:
            self._post_skip()

    def _5xy0(self):  # SE Vx, Vy
        if self.live_debug:
            self.debug("SE V{:01x}, V{:01x}".format(self.vx, self.vy))

        v = self.machine.v

        if v[self.vx] == v[self.vy]:
            self._post_skip()

    def _6xkk(self):  # LD Vx, byte
        if self.live_debug:
            self.debug("LD V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        self.machine.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        byte = self.byte

        if self.live_debug:
            self.debug("ADD V{:01x}, 0x{:02x}".format(vx, byte))

        v = self.machine.v
        v[vx] = (v[vx] + byte) & 0xFF  # No carry flag for this one

    def _post_8xy1_8xy2_8xy3(self):
        if self.vf_reset:
            self.machine.v[0xF] = 0

    def _8xy0(self):  # LD Vx, Vy
        if self.live_debug:
            self.debug("LD V{:01x}, V{:01x}".format(self.vx, self.vy))

        v = self.machine.v
        v[self.vx] = v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        if self.live_debug:
            self.debug("OR V{:01x}, V{:01x}".format(self.vx, self.vy))

        v = self.machine.v
        v[self.vx] |= v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self):  # AND Vx, Vy
        if self.live_debug:
            self.debug("AND V{:01x}, V{:01x}".format(self.vx, self.vy))

        v = self.machine.v
        v[self.vx] &= v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self):  # XOR Vx, Vy
        if self.live_debug:
            self.debug("XOR V{:01x}, V{:01x}".format(self.vx, self.vy))

        v = self.machine.v
        v[self.vx] ^= v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.vx
        vy = self.vy

        if self.live_debug:
            self.debug("ADD V{:01x}, V{:01x}".format(vx, vy))

        v = self.machine.v
        val = v[vx] + v[vy]
        v[vx] = val & 0xFF
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        v = self.machine.v
        v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes Vf is specified in the
        # parameters.
        v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        if self.live_debug:
            self.debug("SUB V{:01x}, V{:01x}".format(self.vx, self.vy))

        v = self.machine.v
        self._post_8xy5_8xy7(v[self.vx] - v[self.vy])

    def _debug_8xy6_8xyE(self, direction):
        self.debug(
            "{} V{:01x}".format(direction, self.vx) if self.shifting_ignores_source else
            "{} V{:01x}, V{:01x}".format(direction, self.vx, self.vy)
        )

    def _8xy6(self):  # SHR Vx {, Vy}
        # On Super-CHIP, Vx is shifted in place.  On CHIP-8 and XO-CHIP, Vy is shifted into Vx.
        if self.live_debug:
            self._debug_8xy6_8xyE("SHR")

        v = self.machine.v
        val = v[self.vx if self.shifting_ignores_source else self.vy]
        v[self.vx] = val >> 1
        v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        if self.live_debug:
            self.debug("SUBN V{:01x}, V{:01x}".format(self.vx, self.vy))

        v = self.machine.v
        self._post_8xy5_8xy7(v[self.vy] - v[self.vx])

    def _8xyE(self):  # SHL Vx {, Vy}
        if self.live_debug:
            self._debug_8xy6_8xyE("SHL")

        v = self.machine.v
        val = v[self.vx if self.shifting_ignores_source else self.vy]
        v[self.vx] = (val << 1) & 0xFF
        v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.live_debug:
            self.debug("SNE V{:01x}, V{:01x}".format(self.vx, self.vy))

        v = self.machine.v

        if v[self.vx] != v[self.vy]:
            self._post_skip()

    def _Annn(self):  # LD I, addr
        if self.live_debug:
            self.debug("LD I, 0x{:03x}".format(self.addr))

        self.machine.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        # This is a nasty quirk which breaks lots of games if set incorrectly.  Super-CHIP reads the register from the
        # top nibble of the address.
        vr = self.vx if self.jump_uses_vx else 0

        if self.live_debug:
            self.debug("JP V{:01x}, 0x{:03x}".format(vr, self.addr))

        machine = self.machine
        machine.pc = (machine.v[vr] + self.addr) & machine.i_bitmask

    def _Cxkk(self):  # RND Vx, byte
        if self.live_debug:
            self.debug("RND V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.machine.v[self.vx] = randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Main sprite drawing routine.  If nibble == 0 on Super-CHIP or XO-CHIP, then draw a 16-row sprite.
        height = self.nibble

        if self.live_debug:
            self.debug("DRW V{:01x}, V{:01x}, 0x{:01x}".format(self.vx, self.vy, height))

        machine = self.machine

        if self.display_wait and not machine.key_frame:
            # Sprites are only drawn at the start of a frame.  Come back to this instruction until then.
            self.dec_pc()
            return

        if height == 0 and self.arch >= ARCH_SCHIP:
            # Super-CHIP shows 8x16 in low resolution, otherwise 16x16
            height = 16
            width = 8 if (self.arch == ARCH_SCHIP and not machine.high_res) else 16
        else:
            width = 8

        # The sprite's start always wraps regardless of the clipping quirk
        framebuffer = machine.framebuffer
        vid_width, vid_height = framebuffer.get_vid_size()
        v = machine.v
        vx_pos = v[self.vx] % vid_width
        vy_pos = v[self.vy] % vid_height
        row_size = 2 if width > 8 else 1
        top_bit = 0x8000 if width > 8 else 0x80
        count_clipped = self.clip_counts_as_collision
        rows_collided = 0
        affected_planes = framebuffer.get_affected_planes()
        sprite_size = height * row_size

        # Fetch every sprite before touching the screen, so a sprite running off the end of memory draws nothing
        sprites_size = sprite_size * len(affected_planes)
        sprites = machine.ram.read_block(machine.i, sprites_size) if sprites_size else b""
        i = 0

        # Drawing to two planes uses two sprites, one straight after the other
        for affected_plane in affected_planes:
            for y in range(height):
                spr_data = int.from_bytes(sprites[i + y * row_size:i + (y + 1) * row_size], CPU_ENDIAN)
                scr_y = y + vy_pos
                row_collided = False

                for x in range(width):
                    if spr_data & (top_bit >> x):
                        collision = framebuffer.xor_pixel(x + vx_pos, scr_y, affected_plane)

                        if collision or (collision is None and count_clipped):
                            # Don't stop drawing.  Set the flag, and never unset it for this row.
                            row_collided = True

                if row_collided:
                    rows_collided += 1

            i += sprite_size

        # Super-CHIP in high resolution reports the number of rows collided
        if self.arch == ARCH_SCHIP and machine.high_res:
            v[0xF] = rows_collided
        else:
            v[0xF] = int(rows_collided > 0)

    def _Ex9E(self):  # SKP Vx
        if self.live_debug:
            self.debug("SKP V{:01x}".format(self.vx))

        machine = self.machine

        if machine.keys[machine.v[self.vx] & 0xF]:
            self._post_skip()

    def _ExA1(self):  # SKNP Vx
        if self.live_debug:
            self.debug("SKNP V{:01x}".format(self.vx))

        machine = self.machine

        if not machine.keys[machine.v[self.vx] & 0xF]:
            self._post_skip()

    def _Fx07(self):  # LD Vx, DT
        if self.live_debug:
            self.debug("LD V{:01x}, DT".format(self.vx))

        machine = self.machine
        machine.v[self.vx] = machine.dt

    def _Fx0A(self):  # LD Vx, K
        if self.live_debug:
            self.debug("LD V{:01x}, K".format(self.vx))

        # This opcode waits for a keypress, but the timers still need to expire and the screen still needs updating.
        # Rather than block, hand control back to the host and come back to this instruction on the next step.
        machine = self.machine

        for key, pressed in enumerate(machine.keys):
            if pressed:
                machine.v[self.vx] = key
                return

        self.dec_pc()

    def _Fx15(self):  # LD DT, Vx
        if self.live_debug:
            self.debug("LD DT, V{:01x}".format(self.vx))

        machine = self.machine
        machine.dt = machine.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        if self.live_debug:
            self.debug("LD ST, V{:01x}".format(self.vx))

        machine = self.machine
        machine.st = machine.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        if self.live_debug:
            self.debug("ADD I, V{:01x}".format(self.vx))

        machine = self.machine
        machine.i = (machine.i + machine.v[self.vx]) & machine.i_bitmask

    def _Fx29(self):  # LD F, Vx
        if self.live_debug:
            self.debug("LD F, V{:01x}".format(self.vx))

        machine = self.machine
        machine.i = SYSFONT_SM_LOC + SMALL_GLYPH_SIZE * (machine.v[self.vx] & 0xF)

    def _Fx33(self):  # LD B, Vx
        if self.live_debug:
            self.debug("LD B, V{:01x}".format(self.vx))

        machine = self.machine
        val = machine.v[self.vx]
        # Most-significant digit first
        machine.ram.write_block(machine.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _post_Fx55_Fx65(self):
        if self.memory_increment:
            machine = self.machine
            machine.i = (machine.i + self.vx + 1) & machine.i_bitmask

    def _Fx55(self):  # LD [I], Vx
        if self.live_debug:
            self.debug("LD [I], V{:01x}".format(self.vx))

        machine = self.machine
        machine.ram.write_block(machine.i, machine.v[:self.vx + 1])

        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        if self.live_debug:
            self.debug("LD V{:01x}, [I]".format(self.vx))

        machine = self.machine
        machine.v[:self.vx + 1] = machine.ram.read_block(machine.i, self.vx + 1)

        self._post_Fx55_Fx65()

    # Instructions for Super-CHIP (and above)

    def _scroll_distance(self, distance):
        # Convert a logical scroll distance into screen pixels.  Legacy Super-CHIP scrolls by screen pixels even in
        # low resolution, which moves half as far.
        if self.legacy_scroll:
            return distance

        return distance * self.machine.framebuffer.pixel_scale

    def _00Cn(self):  # SCD n
        scroll_distance = self.nibble

        if self.live_debug:
            self.debug("SCD {:01x}".format(scroll_distance))

        self.machine.framebuffer.scroll_down(self._scroll_distance(scroll_distance))

    def _00FB(self):  # SCR
        if self.live_debug:
            self.debug("SCR")

        self.machine.framebuffer.scroll_right(self._scroll_distance(4))

    def _00FC(self):  # SCL
        if self.live_debug:
            self.debug("SCL")

        self.machine.framebuffer.scroll_left(self._scroll_distance(4))

    def _00FD(self):  # EXIT
        if self.live_debug:
            self.debug("EXIT")

        # Restart the program.  RPL flags are left alone so the program can pick them up again.
        self.machine.pc = PROGRAM_START

    def _set_resolution(self, high_res):
        machine = self.machine
        machine.high_res = high_res
        machine.framebuffer.set_lo_res(not high_res)

        if self.arch >= ARCH_XO_CHIP:
            machine.framebuffer.clear_all()

    def _00FE(self):  # LOW
        if self.live_debug:
            self.debug("LOW")

        self._set_resolution(False)

    def _00FF(self):  # HIGH
        if self.live_debug:
            self.debug("HIGH")

        self._set_resolution(True)

    def _Fx30(self):  # LD HF, Vx
        if self.live_debug:
            self.debug("LD HF, V{:01x}".format(self.vx))

        machine = self.machine
        machine.i = SYSFONT_BG_LOC + BIG_GLYPH_SIZE * (machine.v[self.vx] & 0xF)

    def _Fx75(self):  # LD R, Vx
        if self.live_debug:
            self.debug("LD R, V{:01x}".format(self.vx))

        vx = self.vx

        if self.arch < ARCH_XO_CHIP and vx > 7:
            # Fx75 with x set over 7 is only supported on XO-CHIP
            self._opcode_unsupported()

        # Ensure with +1s that the final register is copied.
        machine = self.machine
        machine.rpl[:vx + 1] = machine.v[:vx + 1]

    def _Fx85(self):  # LD Vx, R
        if self.live_debug:
            self.debug("LD V{:01x}, R".format(self.vx))

        vx = self.vx

        if self.arch < ARCH_XO_CHIP and vx > 7:
            # Fx85 with x set over 7 is only supported on XO-CHIP
            self._opcode_unsupported()

        machine = self.machine
        machine.v[:vx + 1] = machine.rpl[:vx + 1]

    # Instructions for XO-CHIP

    def _00Dn(self):  # SCU n
        scroll_distance = self.nibble

        if self.live_debug:
            self.debug("SCU {:01x}".format(scroll_distance))

        self.machine.framebuffer.scroll_up(self._scroll_distance(scroll_distance))

    def _5xy2(self):  # XST Vx, Vy
        vx = self.vx
        vy = self.vy

        if self.live_debug:
            self.debug("XST V{:01x}, V{:01x}".format(vx, vy))

        # Both ends are inclusive.  If x > y, the registers are stored in descending order.
        machine = self.machine
        i = machine.i
        iter_back = vx > vy

        # The whole block must fit before any of it is stored
        machine.ram.check_overflow(i + abs(vx - vy))

        for offset in range(vx - vy + 1) if iter_back else range(vy - vx + 1):
            machine.ram.write(i + offset, machine.v[(vx - offset) if iter_back else (vx + offset)])

    def _5xy3(self):  # XLD Vx, Vy
        vx = self.vx
        vy = self.vy

        if self.live_debug:
            self.debug("XLD V{:01x}, V{:01x}".format(vx, vy))

        machine = self.machine
        i = machine.i
        iter_back = vx > vy
        machine.ram.check_overflow(i + abs(vx - vy))

        for offset in range(vx - vy + 1) if iter_back else range(vy - vx + 1):
            machine.v[(vx - offset) if iter_back else (vx + offset)] = machine.ram.read(i + offset)

    def _Fx00(self):  # XLDL I, addr
        # Only F000 is supported
        if self.vx != 0:
            self._opcode_unsupported()

        machine = self.machine
        i = int.from_bytes(machine.ram.read_block(machine.pc, 2), CPU_ENDIAN, signed=False)

        if self.live_debug:
            self.debug("XLDL I, 0x{:04x}".format(i))

        machine.i = i
        self.inc_pc()  # Increment PC again as this is a double-length instruction

    def _Fn01(self):  # XPLA n
        if self.live_debug:
            self.debug("XPLA 0x{:01x}".format(self.vx))

        if self.vx > 3:
            # Only two planes exist
            self._opcode_unsupported()

        self.machine.framebuffer.switch_planes(self.vx)

    def _Fx02(self):  # XSTA
        # Only 0xF002 is supported by the CPU, but since there is no 0xF102, 0xF202, .., 0xFF02, we can catch the
        # entirety of Fx02 with the same bitmask as other 0xFs, and then just check the second nibble (Vx) is 0
        if self.vx != 0:
            self._opcode_unsupported()

        if self.live_debug:
            self.debug("XSTA")

        machine = self.machine
        machine.pattern_buffer[:] = machine.ram.read_block(machine.i, PATTERN_BUFFER_SIZE)

    def _Fx3A(self):  # XPR Vx
        if self.live_debug:
            self.debug("XPR V{:01x}".format(self.vx))

        machine = self.machine
        machine.pitch = machine.v[self.vx]
