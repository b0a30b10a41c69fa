#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws each frame onto an SDL window surface via PyGame.  The frame is written
into an RGB buffer at the emulated screen size, then stretched (using 'Nearest
Neighbour' translation) to fit the window itself.  This means we don't have to
draw the same pixel multiple times.

Palettes can be cycled while running, and the current one is looked up every
frame, so a change is visible straight away.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import Renderer as RendererBase
from ..constants import APP_NAME


class Renderer(RendererBase):
    def __init__(self, scale=None, palette=None, **kwargs):
        if scale is None:
            scale = 8  # Window pixels per screen pixel on a 128x64 display

        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.display_surface = None
        self.scaled_size = None
        super().__init__(scale, palette, **kwargs)

    def set_resolution(self, width, height):
        super().set_resolution(width, height)

        if width == 0 or height == 0:
            return

        # Low resolution screens get twice the scale, so every variant opens a similarly sized window
        scale = self.scale * (2 if width <= 64 else 1)
        self.scaled_size = (width * scale, height * scale)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_buffer = bytearray(width * height * 3)  # 24-bit

    def set_frame(self, colours):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        super().set_frame(colours)

        # Split compound RGB values for faster byte-based lookup
        rgb_map = [bytes((i >> 16, (i >> 8) & 0xFF, i & 0xFF)) for i in self.get_palette()]
        rgb_buffer = self.rgb_buffer

        for location, colour in enumerate(colours):
            rgb_location = location * 3
            rgb_buffer[rgb_location:rgb_location + 3] = rgb_map[colour & 3]

    def refresh_display(self):
        if self.frame is None or self.display_surface is None:
            return

        # Blit the bytearray straight to the surface
        render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
