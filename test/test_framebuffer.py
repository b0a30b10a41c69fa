#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from tchip.constants import PLANE_NONE, PLANE_1, PLANE_2, PLANE_BOTH
from tchip.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer_wrap = Framebuffer(4, 2, num_planes=2, allow_wrapping=True)
        self.framebuffer_clip = Framebuffer(4, 4, num_planes=2, allow_wrapping=False)

    def test_framebuffer_init(self):
        fb = self.framebuffer_wrap
        self.assertEqual(2, len(fb.ram_banks))
        self.assertEqual(8, len(fb.ram_banks[0].mem))
        self.assertEqual((4, 2), fb.get_vid_size())
        self.assertEqual(PLANE_1, fb.plane_mask)

    def test_framebuffer_plane_control(self):
        fb = self.framebuffer_wrap
        fb.switch_planes(PLANE_NONE)
        self.assertEqual(0, len(fb.get_affected_planes()))
        fb.switch_planes(PLANE_1)
        self.assertEqual([fb.ram_banks[0]], fb.get_affected_planes())
        fb.switch_planes(PLANE_2)
        self.assertEqual([fb.ram_banks[1]], fb.get_affected_planes())
        fb.switch_planes(PLANE_BOTH)
        self.assertEqual(2, len(fb.get_affected_planes()))
        self.assertRaises(FramebufferError, fb.switch_planes, 0b100)

    def test_framebuffer_writes_wrap(self):
        fb = self.framebuffer_wrap
        plane = fb.get_affected_planes()[0]
        self.assertFalse(fb.xor_pixel(0, 0, plane))
        self.assertEqual("0100000000000000", plane.mem.hex())
        self.assertFalse(fb.xor_pixel(1, 1, plane))
        self.assertEqual("0100000000010000", plane.mem.hex())
        self.assertTrue(fb.xor_pixel(4, 2, plane))  # Wraps back onto the first pixel
        self.assertEqual("0000000000010000", plane.mem.hex())

        fb.clear()
        self.assertEqual("0000000000000000", plane.mem.hex())

    def test_framebuffer_writes_clip(self):
        fb = self.framebuffer_clip
        plane = fb.get_affected_planes()[0]
        self.assertIsNone(fb.xor_pixel(4, 0, plane))
        self.assertIsNone(fb.xor_pixel(0, 4, plane))
        self.assertEqual("00" * 16, plane.mem.hex())

    def test_framebuffer_lo_res(self):
        fb = self.framebuffer_clip
        fb.set_lo_res(True)
        self.assertEqual((2, 2), fb.get_vid_size())
        plane = fb.get_affected_planes()[0]
        self.assertFalse(fb.xor_pixel(1, 1, plane))
        self.assertEqual("00000000000000000000010100000101", plane.mem.hex())
        self.assertIsNone(fb.xor_pixel(2, 0, plane))
        self.assertTrue(fb.xor_pixel(1, 1, plane))
        self.assertEqual("00" * 16, plane.mem.hex())

    def test_framebuffer_scrolling(self):
        fb = self.framebuffer_wrap
        plane = fb.get_affected_planes()[0]
        fb.xor_pixel(0, 0, plane)
        fb.scroll_right(1)
        self.assertEqual("0001000000000000", plane.mem.hex())
        fb.scroll_down(1)
        self.assertEqual("0000000000010000", plane.mem.hex())
        fb.scroll_left(1)
        self.assertEqual("0000000001000000", plane.mem.hex())
        fb.scroll_left(1)  # Falls off the left edge rather than onto the row above
        self.assertEqual("0000000000000000", plane.mem.hex())

    def test_framebuffer_scroll_up(self):
        fb = self.framebuffer_wrap
        plane = fb.get_affected_planes()[0]
        fb.xor_pixel(1, 1, plane)
        fb.scroll_up(1)
        self.assertEqual("0001000000000000", plane.mem.hex())
        fb.scroll_up(5)
        self.assertEqual("0000000000000000", plane.mem.hex())

    def test_framebuffer_scroll_selected_plane_only(self):
        fb = self.framebuffer_wrap
        fb.xor_pixel(0, 0, fb.ram_banks[0])
        fb.xor_pixel(0, 0, fb.ram_banks[1])
        fb.switch_planes(PLANE_2)
        fb.scroll_right(1)
        self.assertEqual("0100000000000000", fb.ram_banks[0].mem.hex())
        self.assertEqual("0001000000000000", fb.ram_banks[1].mem.hex())

    def test_framebuffer_get_colours(self):
        fb = self.framebuffer_wrap
        fb.xor_pixel(0, 0, fb.ram_banks[0])
        fb.xor_pixel(0, 0, fb.ram_banks[1])
        fb.xor_pixel(1, 0, fb.ram_banks[1])
        fb.xor_pixel(2, 0, fb.ram_banks[0])
        self.assertEqual("0302010000000000", fb.get_colours().hex())
        self.assertEqual([True, True, False, False, False, False, False, False], fb.get_display(1))

    def test_framebuffer_reset(self):
        fb = self.framebuffer_clip
        fb.switch_planes(PLANE_BOTH)
        fb.set_lo_res(True)
        fb.xor_pixel(0, 0, fb.ram_banks[1])
        fb.reset()
        self.assertEqual(PLANE_1, fb.plane_mask)
        self.assertEqual((4, 4), fb.get_vid_size())
        self.assertEqual("00" * 16, fb.get_colours().hex())


if __name__ == "__main__":
    unittest.main()
