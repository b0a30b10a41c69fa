#!/usr/bin/env python3

"""
Frame Runner

The CPU never loops or waits by itself, so this drives it from the host side,
one 60Hz frame at a time:

    1. Process host input and copy the keypad state into the CPU.
    2. Execute a fixed number of instructions.  The first one of each frame is
       the key frame, which is when sprites may be drawn if the display wait
       quirk is on.
    3. Tick the delay and sound timers once.
    4. Hand the beeper state, pitch and audio pattern to the audio plugin.
    5. Hand the merged display planes to the renderer.
    6. Wait for the rest of the frame, unless the frame rate is uncapped.

Performance (frames and instructions per second) is shown in the window title
once a second.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import (
    APP_NAME, NUM_KEYS, ACTION_QUIT, ACTION_RESET, ACTION_SAVE_STATE, ACTION_LOAD_STATE, ACTION_FASTER, ACTION_SLOWER,
    ACTION_NEXT_PALETTE, ACTION_PREVIOUS_PALETTE, ACTION_TOGGLE_MUTE
)

DISPLAY_FREQ = 60.0  # 60Hz emulated display refresh, which also drives the timers
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ
TICKS_PER_FRAME_STEP = 5


class Runner:
    def __init__(self, cpu, rom, renderer, inputs, audio, ticks_per_frame, cap_frame_rate=True):
        self.cpu = cpu
        self.rom = rom
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.ticks_per_frame = ticks_per_frame
        self.cap_frame_rate = cap_frame_rate
        self.save_state = None

        # Audio settings last handed to the plugin, so it is only updated on a change
        self.frequency = None
        self.pattern = None

        # Performance-related vars
        self.next_frame_time = 0
        self.next_perf_report_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0

        self.actions = {
            ACTION_RESET:            self._reset,
            ACTION_SAVE_STATE:       self._save_state,
            ACTION_LOAD_STATE:       self._load_state,
            ACTION_FASTER:           self._faster,
            ACTION_SLOWER:           self._slower,
            ACTION_NEXT_PALETTE:     self.renderer.next_palette,
            ACTION_PREVIOUS_PALETTE: self.renderer.previous_palette,
            ACTION_TOGGLE_MUTE:      self.audio.toggle_mute
        }

        self.cpu.load(rom)
        self.renderer.set_resolution(*self.cpu.get_screen_size())

    def run(self):
        while self.run_frame():
            if self.cap_frame_rate:
                self.wait_for_frame()

    def run_frame(self):
        # Returns False once the user has asked to quit
        this_time = perf_counter()

        if this_time >= self.next_perf_report_time:
            self.next_perf_report_time = int(this_time) + 1.0
            self.renderer.set_title(
                "{} - {} FPS, {} OPS".format(APP_NAME, self.perf_counter_fps, self.perf_counter_ops)
            )
            self.perf_counter_fps = 0
            self.perf_counter_ops = 0

        if not self.process_inputs():
            return False

        cpu = self.cpu

        for tick in range(self.ticks_per_frame):
            cpu.step(tick == 0)

        cpu.tick_timers()
        self.update_audio()
        self.renderer.set_frame(cpu.get_colours())
        self.renderer.refresh_display()

        self.perf_counter_ops += self.ticks_per_frame
        self.perf_counter_fps += 1
        return True

    def process_inputs(self):
        for action in self.inputs.process_messages():
            if action == ACTION_QUIT:
                return False

            self.actions[action]()

        for key in range(NUM_KEYS):
            self.cpu.set_key(key, self.inputs.is_key_down(key))

        return True

    def update_audio(self):
        cpu = self.cpu
        audio = self.audio
        frequency = cpu.get_sound_frequency()
        pattern = cpu.get_pattern_buffer()

        # The frequency must be known before the pattern can be resampled
        if frequency != self.frequency:
            self.frequency = frequency
            audio.set_frequency(frequency)

        if pattern != self.pattern:
            self.pattern = pattern
            audio.set_buffer(pattern)

        audio.enable_buzzer(cpu.is_beeping())

    def wait_for_frame(self):
        # Unfortunately we have to spin to get the timing right
        next_time = self.next_frame_time

        while perf_counter() < next_time:
            pass

        self.next_frame_time = max(next_time, perf_counter() - DISPLAY_INTERVAL) + DISPLAY_INTERVAL

    def _reset(self):
        self.cpu.reset()
        self.cpu.load(self.rom)

    def _save_state(self):
        self.save_state = self.cpu.snapshot()

    def _load_state(self):
        if self.save_state is not None:
            self.cpu.restore(self.save_state)

    def _faster(self):
        self.ticks_per_frame += TICKS_PER_FRAME_STEP

    def _slower(self):
        self.ticks_per_frame = max(TICKS_PER_FRAME_STEP, self.ticks_per_frame - TICKS_PER_FRAME_STEP)
