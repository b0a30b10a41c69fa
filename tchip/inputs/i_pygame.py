#!/usr/bin/env python3

"""
PyGame Input Plugin

Scans the keyboard and properly detects key 'press' and 'release' events.  Note
that the check should not be called more often than 60Hz, as constantly
checking the queue is time consuming.

Besides the mapped keypad, a few fixed keys control the host:
    * Escape     - Quit
    * Backspace  - Reset and reload the ROM
    * F5 / F9    - Take / restore an in-memory save state
    * Up / Down  - Run more / fewer instructions per frame
    * Left/Right - Cycle palettes
    * M          - Mute or unmute

If the application is quit, then this will control shutting PyGame down too, so
any linked Renderer must be able to handle that.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase
from ..constants import (
    ACTION_QUIT, ACTION_RESET, ACTION_SAVE_STATE, ACTION_LOAD_STATE, ACTION_FASTER, ACTION_SLOWER, ACTION_NEXT_PALETTE,
    ACTION_PREVIOUS_PALETTE, ACTION_TOGGLE_MUTE
)

HOST_KEYS = {
    pygame.K_ESCAPE:    ACTION_QUIT,
    pygame.K_BACKSPACE: ACTION_RESET,
    pygame.K_F5:        ACTION_SAVE_STATE,
    pygame.K_F9:        ACTION_LOAD_STATE,
    pygame.K_UP:        ACTION_FASTER,
    pygame.K_DOWN:      ACTION_SLOWER,
    pygame.K_RIGHT:     ACTION_NEXT_PALETTE,
    pygame.K_LEFT:      ACTION_PREVIOUS_PALETTE,
    pygame.K_m:         ACTION_TOGGLE_MUTE
}


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        self.pygame_methods = {
            pygame.QUIT:    self._pygame_quit,
            pygame.KEYDOWN: self._pygame_keydown,
            pygame.KEYUP:   self._pygame_keyup
        }

        super().__init__(keymap, renderer)

    def process_messages(self):
        # Call PyGame method based on fast dictionary lookup of event
        actions = []

        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method:
                action = pygame_method(event)

                if action is not None:
                    actions.append(action)  # Process more events, even if planning to quit

        return actions

    def _pygame_quit(self, _):
        return ACTION_QUIT

    def _pygame_keydown(self, event):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.key_down[hex_key] = True
            return None

        return HOST_KEYS.get(event.key)

    def _pygame_keyup(self, event):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.key_down[hex_key] = False

        return None
