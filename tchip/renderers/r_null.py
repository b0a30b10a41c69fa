#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or are running the interpreter headless.  It keeps track of the
selected palette and the last frame it was given, but draws nothing.

Each pixel of a frame is a colour index: 0 for an unlit pixel, 1 for the first
plane, 2 for the second plane and 3 where both planes are lit.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import sys

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class RendererError(Exception):
    pass


# Background, plane 1, plane 2, both planes
DEFAULT_PALETTES = [
    [0x222222, 0xDDDDDD, 0x00DD88, 0xDD5555],  # Grey
    [0x000000, 0xFFFFFF, 0xAAAAAA, 0x555555],  # Black and white
    [0x0F380F, 0x9BBC0F, 0x8BAC0F, 0x306230],  # Handheld green
    [0x1D1D3B, 0xF5A623, 0x4A90E2, 0xD0021B]   # Amber
]


def parse_palette(palette):
    # Comma-separated 6-digit hex colours, e.g. "000000,FFFFFF,AAAAAA,555555"
    palette_split = palette.split(",")

    if len(palette_split) > 4:
        raise RendererError("Too many palette colours defined.")

    colours = list(DEFAULT_PALETTES[0])

    for colour_num, colour in enumerate(palette_split):
        if len(colour) != 6:
            raise RendererError("Palette colours must all be 6 hex digits long.")

        try:
            colours[colour_num] = int(colour, 16)
        except ValueError:
            raise RendererError("Invalid palette colour defined.") from None

    return colours


def load_palette_file(filename):
    """
    Read named palettes from the [frontend] table of a TOML file:

        [frontend]
        palettes_available = ["mono", "amber"]
        palette = "amber"
        mono = ["#000000", "#FFFFFF"]
        amber = ["#1D1D3B", "#F5A623", "#4A90E2", "#D0021B"]

    The palettes are returned in the listed order, rotated so the selected one
    comes first.  Only the first 4 colours of each palette are used.
    """
    try:
        with open(filename, "rb") as f:
            frontend = tomllib.load(f)["frontend"]

        palette_names = frontend["palettes_available"]
        selected_name = frontend.get("palette")
        palettes = [
            parse_palette(",".join(colour.lstrip("#") for colour in frontend[name][:4])) for name in palette_names
        ]
    except OSError as error:
        raise RendererError("Cannot read palette file: {}".format(error)) from None
    except tomllib.TOMLDecodeError as error:
        raise RendererError("Invalid palette file: {}".format(error)) from None
    except KeyError as error:
        raise RendererError("Palette file has no {} entry.".format(error)) from None

    if not palettes:
        raise RendererError("Palette file lists no palettes.")

    if selected_name in palette_names:
        selected_num = palette_names.index(selected_name)
        palettes = palettes[selected_num:] + palettes[:selected_num]

    return palettes


class Renderer:
    def __init__(self, scale=None, palette=None, palette_file=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale

        if palette_file is None:
            self.palettes = [list(colours) for colours in DEFAULT_PALETTES]
        else:
            # Palettes from a file replace the built-in ones
            self.palettes = load_palette_file(palette_file)

        if palette is not None:
            # A user-defined palette goes first, so it is selected by default
            self.palettes.insert(0, parse_palette(palette))

        self.palette_num = 0
        self.frame = None
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def get_palette(self):
        return self.palettes[self.palette_num]

    def next_palette(self):
        self.palette_num = (self.palette_num + 1) % len(self.palettes)

    def previous_palette(self):
        self.palette_num = (self.palette_num - 1) % len(self.palettes)

    def set_frame(self, colours):
        self.frame = colours

    def refresh_display(self):
        pass

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
