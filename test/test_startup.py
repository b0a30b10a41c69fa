#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from tchip import main
from tchip.inputs.i_null import InputsError
from trichip import parse_args


class TestStartup(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.temp_dir.name, "test.ch8")

    def tearDown(self):
        self.temp_dir.cleanup()

    def _run_rom(self, rom, **overrides):
        with open(self.filename, "wb") as f:
            f.write(rom)

        args = vars(parse_args([self.filename, "-r", "null", "-u"]))
        args.update(overrides)
        output = io.StringIO()

        with redirect_stdout(output):
            main(args)

        return output.getvalue()

    def test_startup_parse_args(self):
        args = vars(parse_args(["rom.sc8", "-a", "schip", "-t", "30", "--vf_reset_quirks", "1", "-d"]))
        self.assertEqual("rom.sc8", args["filename"])
        self.assertEqual("schip", args["arch"])
        self.assertEqual(30, args["ticks_per_frame"])
        self.assertEqual(1, args["vf_reset_quirks"])
        self.assertIsNone(args["clipping_quirks"])
        self.assertTrue(args["debug"])
        self.assertFalse(args["uncapped"])
        self.assertIsNone(args["config"])
        self.assertEqual("config.toml", vars(parse_args(["rom.ch8", "-c", "config.toml"]))["config"])

    def test_startup_decode_error_halts(self):
        output = self._run_rom(b"\xFF\xFF")
        self.assertIn("Opcode 0xffff at address 0x200 is not emulated", output)

    def test_startup_stack_error_halts(self):
        output = self._run_rom(b"\x00\xEE")
        self.assertIn("Emulation halted: Stack underflow", output)
        self.assertIn("Stack: (Empty)", output)

    def test_startup_bad_keymap(self):
        self.assertRaises(InputsError, self._run_rom, b"\x00\xEE", keymap="1,2,3")


if __name__ == "__main__":
    unittest.main()
