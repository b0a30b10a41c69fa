#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the XO-CHIP audio pattern within PyGame / SDL.  CHIP-8 and Super-CHIP
programs never change the pattern, so they get the default square wave.

The pattern is 16 bytes, i.e. 128 samples at 1-bit resolution, played at the
rate set by the pitch register.  SDL cannot play at arbitrary rates, so the
pattern is stretched to the mixer's rate instead, with each 1-bit sample
becoming a run of silent or full-volume 8-bit samples.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

MIXER_RATE = 44100
MIXER_BUFFER = 512
VOLUME = 0.1


def stretch_pattern(pattern, rate):
    # One output byte per mixer sample, each either silent (0x00) or full (0xFF)
    step = rate / MIXER_RATE
    num_bits = len(pattern) * 8
    stretched = bytearray(int(num_bits / step))

    for sample_num in range(len(stretched)):
        bit_pos = int(sample_num * step)

        if (pattern[bit_pos >> 3] << (bit_pos & 7)) & 0x80:
            stretched[sample_num] = 0xFF

    return bytes(stretched)


class Audio(AudioBase):
    def __init__(self):
        self.pattern = None
        self.rate = None
        self.sound = None
        self.playing = False
        pygame.mixer.pre_init(MIXER_RATE, size=8, channels=1, buffer=MIXER_BUFFER, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()

    def set_frequency(self, frequency):
        if frequency == self.rate:
            return

        self.rate = frequency

        if self.pattern is not None:
            self._rebuild_sound()

    def set_buffer(self, buffer):
        self.pattern = bytes(buffer)

        if self.rate is not None:
            self._rebuild_sound()

    def enable_buzzer(self, enabled):
        # A sound that is already looping is left alone, so the waveform doesn't restart every frame
        enabled = enabled and not self.muted and self.sound is not None

        if enabled and not self.playing:
            self.sound.play(-1)
        elif self.playing and not enabled:
            self.sound.stop()

        self.playing = enabled

    def _rebuild_sound(self):
        if self.playing:
            self.sound.stop()

        self.sound = pygame.mixer.Sound(buffer=stretch_pattern(self.pattern, self.rate))
        self.sound.set_volume(VOLUME)

        if self.playing:
            # Swap straight over to the new waveform if it was already sounding
            self.sound.play(-1)

    def shutdown(self):
        if self.sound is not None:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
