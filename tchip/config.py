#!/usr/bin/env python3

"""
Architecture and Quirk Configuration

A Config is fixed for the life of a CPU.  The architecture decides which
instructions exist and how large memory and the screen are, while each quirk
flag toggles one documented behavioural difference between interpreters.

Quirks
------

- vf_reset                : 8xy1/8xy2/8xy3 clear Vf afterwards.  CHIP-8 only.
- memory_increment        : Fx55/Fx65 leave I pointing past the last register.
                            CHIP-8 and XO-CHIP.
- display_wait            : Dxyn only draws on the first instruction of a
                            frame.  CHIP-8 only.
- clipping                : Sprites are cut off at the screen edges instead of
                            wrapping.  CHIP-8 and Super-CHIP.
- shifting_ignores_source : 8xy6/8xyE shift Vx in place, ignoring Vy.
                            Super-CHIP only.
- jump_uses_vx            : Bnnn adds Vx (x being the top nibble of nnn)
                            rather than V0.  Super-CHIP only.
- clip_counts_as_collision: Set pixels lost to clipping still collide.
                            Super-CHIP only.
- legacy_scroll           : Low resolution scrolls move half the distance.
                            Super-CHIP only.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from .constants import ARCH_CHIP8, ARCH_SCHIP, ARCH_XO_CHIP, CPU_QUIRKS


class ConfigError(Exception):
    pass


Config = namedtuple("Config", ["arch"] + CPU_QUIRKS)

DEFAULT_QUIRKS = {
    #                     vf_rst mem_inc disp_w clip   shift  jump   clip_co legacy
    ARCH_CHIP8:   dict(zip(CPU_QUIRKS, (True, True, True, True, False, False, False, False))),
    ARCH_SCHIP:   dict(zip(CPU_QUIRKS, (False, False, False, True, True, True, True, True))),
    ARCH_XO_CHIP: dict(zip(CPU_QUIRKS, (False, True, False, False, False, False, False, False)))
}


def make_config(arch, **quirks):
    # Any quirk left out (or set to None) takes the architecture's default
    defaults = DEFAULT_QUIRKS.get(arch)

    if defaults is None:
        raise ConfigError("Unsupported architecture: {}".format(arch))

    unknown = set(quirks) - set(CPU_QUIRKS)

    if unknown:
        raise ConfigError("Unknown quirks: {}".format(", ".join(sorted(unknown))))

    settings = {}

    for quirk in CPU_QUIRKS:
        setting = quirks.get(quirk)
        settings[quirk] = defaults[quirk] if setting is None else bool(setting)

    return Config(arch=arch, **settings)
