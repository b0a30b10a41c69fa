#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from tchip.audio.a_null import Audio
from tchip.config import make_config
from tchip.constants import (
    ARCH_CHIP8, ARCH_XO_CHIP, DEFAULT_KEYMAP, ACTION_QUIT, ACTION_RESET, ACTION_SAVE_STATE, ACTION_LOAD_STATE,
    ACTION_FASTER, ACTION_SLOWER, ACTION_NEXT_PALETTE, ACTION_TOGGLE_MUTE
)
from tchip.cpu import CPU
from tchip.inputs.i_null import Inputs
from tchip.renderers.r_null import Renderer
from tchip.runner import Runner


class ScriptedInputs(Inputs):
    # Hands back one list of host actions per frame
    def __init__(self, renderer, script=()):
        super().__init__(DEFAULT_KEYMAP, renderer)
        self.script = list(script)

    def process_messages(self):
        return self.script.pop(0) if self.script else []


class RecordingAudio(Audio):
    def __init__(self):
        self.calls = []
        super().__init__()

    def set_frequency(self, frequency):
        self.calls.append(("frequency", frequency))

    def set_buffer(self, buffer):
        self.calls.append(("buffer", buffer))

    def enable_buzzer(self, enabled):
        self.calls.append(("buzzer", enabled))


# 7001: ADD V0, 1; 1200: JP 0x200
COUNTER_ROM = b"\x70\x01\x12\x00"


class TestRunner(unittest.TestCase):
    def _make_runner(self, rom=COUNTER_ROM, script=(), arch=ARCH_CHIP8, ticks_per_frame=4):
        self.cpu = CPU(make_config(arch))
        self.renderer = Renderer()
        self.inputs = ScriptedInputs(self.renderer, script)
        self.audio = RecordingAudio()
        return Runner(self.cpu, rom, self.renderer, self.inputs, self.audio, ticks_per_frame, cap_frame_rate=False)

    def test_runner_init(self):
        self._make_runner()
        self.assertEqual((64, 32), (self.renderer.width, self.renderer.height))
        self.assertEqual(0x7001, int.from_bytes(self.cpu.machine.ram.read_block(0x200, 2), "big"))

    def test_runner_frame(self):
        runner = self._make_runner()
        self.assertTrue(runner.run_frame())
        self.assertEqual(2, self.cpu.machine.v[0])
        self.assertEqual(64 * 32, len(self.renderer.frame))
        self.assertEqual(4, runner.perf_counter_ops)

    def test_runner_ticks_timers_once_per_frame(self):
        # 6005: LD V0, 5; F015: LD DT, V0; 1204: JP 0x204
        runner = self._make_runner(rom=b"\x60\x05\xF0\x15\x12\x04", ticks_per_frame=10)
        runner.run_frame()
        self.assertEqual(4, self.cpu.machine.dt)
        runner.run_frame()
        self.assertEqual(3, self.cpu.machine.dt)

    def test_runner_display_wait(self):
        # D011 waits for the start of a frame, so a frame only gets one draw
        runner = self._make_runner(rom=b"\xD0\x11\x12\x00", ticks_per_frame=10)
        runner.run_frame()
        self.assertEqual(0x200, self.cpu.machine.pc)
        self.assertEqual(0, self.cpu.machine.v[0xF])
        self.assertIn(1, self.renderer.frame)
        runner.run_frame()
        self.assertEqual(0x200, self.cpu.machine.pc)
        self.assertEqual(1, self.cpu.machine.v[0xF])
        self.assertNotIn(1, self.renderer.frame)

    def test_runner_copies_keys(self):
        runner = self._make_runner()
        self.inputs.key_down[0x3] = True
        runner.run_frame()
        self.assertTrue(self.cpu.machine.keys[0x3])
        self.assertFalse(self.cpu.machine.keys[0x4])

    def test_runner_quit(self):
        runner = self._make_runner(script=[[], [ACTION_QUIT]])
        runner.run()
        self.assertEqual(2, self.cpu.machine.v[0])  # Only the first frame ran

    def test_runner_reset(self):
        runner = self._make_runner(script=[[], [ACTION_RESET]])
        runner.run_frame()
        self.cpu.machine.rpl[0] = 5
        runner.run_frame()
        self.assertEqual(2, self.cpu.machine.v[0])  # Reset and reloaded, then run for one frame
        self.assertEqual(5, self.cpu.machine.rpl[0])

    def test_runner_save_load_state(self):
        runner = self._make_runner(script=[[ACTION_LOAD_STATE], [ACTION_SAVE_STATE], [], [ACTION_LOAD_STATE]])
        runner.run_frame()  # Nothing saved yet
        self.assertEqual(2, self.cpu.machine.v[0])
        runner.run_frame()
        runner.run_frame()
        self.assertEqual(6, self.cpu.machine.v[0])
        runner.run_frame()
        self.assertEqual(4, self.cpu.machine.v[0])

    def test_runner_speed(self):
        runner = self._make_runner(script=[[ACTION_FASTER], [ACTION_SLOWER, ACTION_SLOWER, ACTION_SLOWER]])
        runner.run_frame()
        self.assertEqual(9, runner.ticks_per_frame)
        runner.run_frame()
        self.assertEqual(5, runner.ticks_per_frame)

    def test_runner_palette_and_mute(self):
        runner = self._make_runner(script=[[ACTION_NEXT_PALETTE, ACTION_TOGGLE_MUTE]])
        runner.run_frame()
        self.assertEqual(1, self.renderer.palette_num)
        self.assertTrue(self.audio.muted)

    def test_runner_audio(self):
        # 6002: LD V0, 2; F018: LD ST, V0; 1204: JP 0x204
        runner = self._make_runner(rom=b"\x60\x02\xF0\x18\x12\x04", arch=ARCH_XO_CHIP)
        runner.run_frame()
        self.assertEqual(
            [("frequency", 4000), ("buffer", b"\x00\xFF" * 8), ("buzzer", True)], self.audio.calls
        )
        runner.run_frame()
        self.assertEqual(("buzzer", False), self.audio.calls[-1])
        self.assertEqual(4, len(self.audio.calls))


if __name__ == "__main__":
    unittest.main()
