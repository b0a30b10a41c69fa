#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and read back by the host once per frame.  Programs
for this system cannot write directly into video RAM.  Instead, sprites are
drawn to the screen using an XOR method against one or more planes.

Two planes are always allocated at the full size of the screen.  CHIP-8 and
Super-CHIP only ever draw to the first one, while XO-CHIP can select either
or both with a plane mask.  The host merges the planes into a colour index per
pixel: 0 when neither is set, 1 for the first plane, 2 for the second, and 3
for both.

In low resolution mode on Super-CHIP and XO-CHIP, coordinates are halved and
every logical pixel covers a 2x2 block of the real screen.  The plane size
itself never changes after construction.

Collisions (where any pixel was set, but was unset by an XOR), are reported
back to the CPU, which decides how they end up in Vf.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import PLANE_1
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width, vid_height, num_planes=2, allow_wrapping=True):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.num_planes = num_planes
        self.allow_wrapping = allow_wrapping
        self.ram_banks = []

        for _ in range(num_planes):
            ram_bank = RAM()
            ram_bank.resize(self.vid_size)
            self.ram_banks.append(ram_bank)

        # Map all the masks into matching planes for fast lookup
        self.mask_to_planes = {}

        for mask in range(2 ** num_planes):
            self.mask_to_planes[mask] = []

            for plane_num in range(num_planes):
                if mask & 2 ** plane_num:
                    self.mask_to_planes[mask].append(self.ram_banks[plane_num])

        self.plane_mask = PLANE_1
        self.affect_planes = self.mask_to_planes[PLANE_1]
        self.set_lo_res(False)

    def set_lo_res(self, lo_res):
        # Switch the logical resolution.  Nothing is reallocated.
        self.pixel_scale = 2 if lo_res else 1
        self.logical_width = self.vid_width // self.pixel_scale
        self.logical_height = self.vid_height // self.pixel_scale

    def reset(self):
        self.clear_all()
        self.switch_planes(PLANE_1)
        self.set_lo_res(False)

    def clear(self):
        for plane in self.affect_planes:
            plane.clear()

    def clear_all(self):
        for plane in self.ram_banks:
            plane.clear()

    def get_affected_planes(self):
        return self.affect_planes

    def switch_planes(self, mask):
        affect_planes = self.mask_to_planes.get(mask)

        if affect_planes is None:
            raise FramebufferError("Selected display plane is out of range for this architecture")

        self.plane_mask = mask
        self.affect_planes = affect_planes

    def get_vid_size(self):
        # Logical size, as seen by the running program
        return self.logical_width, self.logical_height

    def xor_pixel(self, x, y, plane):
        # Flips one logical pixel.  Returns True on collision, False if not, or None if the pixel was clipped.

        if self.allow_wrapping:
            x %= self.logical_width
            y %= self.logical_height
        elif x >= self.logical_width or y >= self.logical_height:
            return None

        scale = self.pixel_scale
        vid_width = self.vid_width
        mem = plane.mem
        collision = False

        for block_y in range(y * scale, (y + 1) * scale):
            row_loc = block_y * vid_width

            for block_x in range(x * scale, (x + 1) * scale):
                vram_loc = row_loc + block_x
                pixel = mem[vram_loc]

                if pixel:
                    collision = True

                mem[vram_loc] = pixel ^ 1

        return collision

    # Scroll distances are in real screen pixels.  The CPU works out how far a logical scroll moves.

    def scroll_up(self, rows):
        mem_offset = min(rows, self.vid_height) * self.vid_width
        vid_size = self.vid_size

        for plane in self.affect_planes:
            plane.move_mem(-mem_offset)
            plane.zero_block(vid_size - mem_offset, mem_offset)  # Erase the bottom strips

    def scroll_down(self, rows):
        mem_offset = min(rows, self.vid_height) * self.vid_width

        for plane in self.affect_planes:
            plane.move_mem(mem_offset)
            plane.zero_block(0, mem_offset)  # Erase the top strips

    def scroll_left(self, cols):
        vid_width = self.vid_width
        cols = min(cols, vid_width)

        for plane in self.affect_planes:
            # Each row's leftmost pixels spill onto the end of the row above, and are erased straight after
            plane.move_mem(-cols)

            for y in range(1, self.vid_height + 1):
                plane.zero_block(vid_width * y - cols, cols)

    def scroll_right(self, cols):
        vid_width = self.vid_width
        cols = min(cols, vid_width)

        for plane in self.affect_planes:
            plane.move_mem(cols)

            for y in range(self.vid_height):
                plane.zero_block(vid_width * y, cols)

    def get_display(self, plane_num=0):
        # Row-major copy of a single plane
        return [pixel != 0 for pixel in self.ram_banks[plane_num].mem]

    def get_colours(self):
        # Merge all planes into one colour index per pixel
        colours = bytearray(self.ram_banks[0].mem)

        for plane_num in range(1, self.num_planes):
            plane_mem = self.ram_banks[plane_num].mem

            for vram_loc in range(self.vid_size):
                if plane_mem[vram_loc]:
                    colours[vram_loc] |= 1 << plane_num

        return colours
