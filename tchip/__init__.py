#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the interpreter, replacing args with a
dictionary of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .config import make_config
from .constants import APP_INTRO, APP_COPYRIGHT, SUPPORTED_CPUS, CPU_QUIRKS, DEFAULT_TICKS_PER_FRAME
from .cpu import CPU, CPUError, DecodeError
from .debugger import Debugger
from .framebuffer import FramebufferError
from .hostio import Loader
from .ram import RAMError
from .runner import Runner
from .stack import StackError


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_setting = args["{}_quirks".format(cpu_quirk)]
        quirk_settings[cpu_quirk] = None if quirk_setting is None else bool(quirk_setting)

    opt_renderer = args["renderer"] or "pygame"
    mute_audio = args["mute"]

    # flake8: noqa: F401
    if opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            raise StartupError(
                "PyGame does not appear to be installed.  Install it, or use the 'null' renderer."
            )

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer

        if mute_audio:
            from .audio.a_null import Audio
        else:
            from .audio.a_pygame import Audio
    else:
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    arch = SUPPORTED_CPUS[args["arch"]]
    config = make_config(arch, **quirk_settings)

    # Read ROM binary.  The CPU writes it into RAM.
    rom = Loader().load_binary(args["filename"])

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    cpu = CPU(config, debugger)

    ticks_per_frame = args["ticks_per_frame"]

    if ticks_per_frame is None:
        ticks_per_frame = DEFAULT_TICKS_PER_FRAME[arch]

    renderer = Renderer(scale=args["scale"], palette=args["palette"], palette_file=args["config"])
    inputs = Inputs(args["keymap"], renderer)
    audio = Audio()

    try:
        runner = Runner(cpu, rom, renderer, inputs, audio, ticks_per_frame, cap_frame_rate=not args["uncapped"])
        runner.run()
    except DecodeError as error:
        # The message already holds a full crash report
        print(error)
    except (CPUError, RAMError, StackError, FramebufferError) as error:
        print("Emulation halted: {}\n\n{}".format(error, debugger.debug(cpu, "???", verbose=True)))
    finally:
        # The CPU has stopped, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()
