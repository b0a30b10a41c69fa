#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from tchip import main
from tchip.constants import DEFAULT_KEYMAP, SUPPORTED_CPUS, CPU_QUIRKS


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8, .sc8 or .xo8)")
    parser.add_argument(
        "-a", "--arch", choices=list(SUPPORTED_CPUS.keys()), default="chip8",
        help="set CPU instructions, screen size, speed, and quirks automatically for CHIP-8, Super-CHIP, or XO-CHIP"
    )
    parser.add_argument(
        "-t", "--ticks_per_frame", type=int,
        help="override the number of instructions executed every 60Hz frame (default 15, 20 or 500 by architecture)"
    )
    parser.add_argument(
        "-u", "--uncapped", action="store_true", default=False,
        help="run frames as fast as possible instead of at 60Hz"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering, input, and audio systems (pygame by default)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the number of window pixels per screen pixel in PyGame mode (default 8, doubled for CHIP-8)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1], default=0,
        help="mute the emulated audio.  0 = unmuted (default), 1 = muted"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes.  Separate each decimal with a comma"
    )
    parser.add_argument(
        "-p", "--palette",
        help="add a palette of up to 4 colours in comma-separated hex, e.g. 000000,FFFFFF,AAAAAA,555555"
    )
    parser.add_argument(
        "-c", "--config",
        help="load the palettes named in the [frontend] table of a TOML file, e.g. config.toml"
    )

    for cpu_quirk in CPU_QUIRKS:
        parser.add_argument(
            "--{}_quirks".format(cpu_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(cpu_quirk.replace("_", " "))
        )

    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output of every instruction.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def run():
    # It is possible to start the interpreter from a GUI by calling main with a dictionary
    main(vars(parse_args()))


if __name__ == "__main__":
    run()
